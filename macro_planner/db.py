"""Database setup and access layer using SQLite."""

import os
import sqlite3
from contextlib import contextmanager

from macro_planner.config import DB_PATH

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS plans (
    id INTEGER PRIMARY KEY CHECK(id = 1),
    name TEXT NOT NULL,
    age INTEGER NOT NULL,
    sex TEXT NOT NULL CHECK(sex IN ('male', 'female', 'other')),
    height_cm REAL NOT NULL,
    weight_kg REAL NOT NULL,
    activity TEXT NOT NULL,
    goal TEXT NOT NULL,
    pace TEXT NOT NULL,
    bmi REAL NOT NULL DEFAULT 0,
    bmr REAL NOT NULL DEFAULT 0,
    tdee REAL NOT NULL DEFAULT 0,
    target_calories INTEGER NOT NULL CHECK(target_calories >= 1200),
    protein_g INTEGER NOT NULL,
    carbs_g INTEGER NOT NULL,
    fat_g INTEGER NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def init_db(db_path: str = DB_PATH) -> None:
    """Initialize the database, creating tables if they don't exist."""
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    with get_connection(db_path) as conn:
        conn.executescript(SCHEMA_SQL)


@contextmanager
def get_connection(db_path: str = DB_PATH):
    """Context manager for database connections."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
