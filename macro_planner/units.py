"""Unit conversion utilities for imperial/metric conversion.

Inputs may arrive in either system; the engine works in metric (kg, cm)
and converts back to imperial only for display.
"""

import math

from macro_planner.config import CM_PER_INCH, INCHES_PER_FOOT, LBS_PER_KG
from macro_planner.models import HeightUnit, WeightUnit


def height_to_centimeters(height_cm: float, feet: float, inches: float, unit: HeightUnit) -> float:
    """Normalize a height entry to centimeters.

    Metric heights below zero clamp to 0. Imperial feet/inches are not
    validated here.
    """
    if unit is HeightUnit.METRIC:
        return max(height_cm, 0)
    return (feet * INCHES_PER_FOOT + inches) * CM_PER_INCH


def weight_to_kilograms(weight_kg: float, weight_lbs: float, unit: WeightUnit) -> float:
    """Normalize a weight entry to kilograms."""
    if unit is WeightUnit.METRIC:
        return max(weight_kg, 0)
    return weight_lbs / LBS_PER_KG


def kilograms_to_pounds(kg: float) -> float:
    return kg * LBS_PER_KG


def centimeters_to_feet_inches(cm: float) -> tuple:
    """Convert centimeters to (feet, inches) for display."""
    if cm <= 0:
        return 0, 0
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / INCHES_PER_FOOT)
    inches = round(total_inches - feet * INCHES_PER_FOOT)
    if inches == INCHES_PER_FOOT:
        feet += 1
        inches = 0
    return feet, inches
