"""Plan persistence layer.

The local store holds a single plan, the one the user is currently
following. JSON export/import uses the flat record format of Plan.to_record().
"""

import json
import logging
from typing import Optional

from macro_planner.db import DB_PATH, get_connection
from macro_planner.models import PLAN_RECORD_KEYS, Plan

_logger = logging.getLogger(__name__)

_COLUMNS = list(PLAN_RECORD_KEYS)


def _row_to_plan(row) -> Plan:
    """Convert a database row to a Plan object."""
    record = {key: row[column] for column, key in PLAN_RECORD_KEYS.items()}
    return Plan.from_record(record)


def save_plan(plan: Plan, db_path: str = DB_PATH) -> None:
    """Save the plan, replacing any previously stored one."""
    record = plan.to_record()
    values = [record[PLAN_RECORD_KEYS[column]] for column in _COLUMNS]
    placeholders = ", ".join("?" for _ in _COLUMNS)
    with get_connection(db_path) as conn:
        conn.execute(
            f"""INSERT OR REPLACE INTO plans (id, {", ".join(_COLUMNS)}, updated_at)
                VALUES (1, {placeholders}, CURRENT_TIMESTAMP)""",
            values,
        )
    _logger.info("Plan saved: name=%s target=%s kcal", plan.name, plan.target_calories)


def load_plan(db_path: str = DB_PATH) -> Optional[Plan]:
    """Load the stored plan, or None if there isn't one."""
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT * FROM plans WHERE id = 1").fetchone()
    if not row:
        return None
    return _row_to_plan(row)


def clear_plan(db_path: str = DB_PATH) -> bool:
    """Delete the stored plan. Returns True if one existed."""
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM plans WHERE id = 1")
        deleted = cursor.rowcount > 0
    if deleted:
        _logger.info("Stored plan cleared")
    return deleted


def export_plan_json(plan: Plan, path: str) -> None:
    """Write the plan's record to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(plan.to_record(), f, indent=2)


def import_plan_json(path: str) -> Plan:
    """Read a plan record from a JSON file.

    Raises KeyError or ValueError when the record is incomplete or holds an
    unknown category value.
    """
    with open(path, encoding="utf-8") as f:
        record = json.load(f)
    return Plan.from_record(record)
