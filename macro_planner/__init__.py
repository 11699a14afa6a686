"""Daily calorie and macro planning engine."""

__version__ = "0.1.0"
