"""Application configuration and constants."""

import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".macro_planner")
DB_PATH = os.getenv("MACRO_PLANNER_DB", os.path.join(DB_DIR, "macro_planner.db"))

# Logging
LOG_LEVEL = os.getenv("MACRO_PLANNER_LOG_LEVEL", "INFO")

# Unit conversion factors
LBS_PER_KG = 2.205
CM_PER_INCH = 2.54
INCHES_PER_FOOT = 12

# Activity level multipliers for TDEE calculation
ACTIVITY_MULTIPLIERS = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "veryActive": 1.9,
}

# Daily calorie offset by pace (kcal/day), signed by goal
PACE_OFFSETS = {
    "slow": 250,
    "moderate": 425,
    "fast": 650,
}

# Absolute floor for any daily calorie target
MIN_DAILY_CALORIES = 1200

# Ceiling for a manually edited daily goal
MAX_DAILY_CALORIES = 6000

# Default daily goal before a plan exists
DEFAULT_DAILY_GOAL = 2200

# Fixed macro split (fraction of calories)
MACRO_SPLIT = {
    "protein": 0.30,
    "carbs": 0.40,
    "fat": 0.30,
}

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

# BMI category lower bounds, checked highest first
BMI_CATEGORIES = [
    (30.0, "Obese"),
    (25.0, "Overweight"),
    (18.5, "Normal"),
]
BMI_DEFAULT_CATEGORY = "Underweight"

# Onboarding validation limits
MIN_AGE = 13
MAX_AGE = 90
MIN_HEIGHT_CM = 120
MAX_HEIGHT_CM = 250
MIN_WEIGHT_KG = 30
MAX_WEIGHT_KG = 300
