"""Plan calculation engine using evidence-based formulas.

Uses:
- Body Mass Index with WHO adult categories
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR)
- Activity multipliers for Total Daily Energy Expenditure (TDEE)
- Pace-based calorie offsets with a 1200 kcal/day floor
- A fixed 30/40/30 protein/carbs/fat split

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
"""

from dataclasses import replace

from macro_planner.config import (
    ACTIVITY_MULTIPLIERS,
    BMI_CATEGORIES,
    BMI_DEFAULT_CATEGORY,
    CALORIES_PER_GRAM,
    MACRO_SPLIT,
    MAX_DAILY_CALORIES,
    MIN_DAILY_CALORIES,
    PACE_OFFSETS,
)
from macro_planner.models import ActivityLevel, BiometricProfile, Goal, Pace, Plan, Sex


def bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate Body Mass Index: weight(kg) / height(m)².

    Returns 0 when height is not positive.
    """
    height_m = height_cm / 100
    if height_m <= 0:
        return 0.0
    return weight_kg / (height_m * height_m)


def bmi_category(value: float) -> str:
    for lower_bound, category in BMI_CATEGORIES:
        if value >= lower_bound:
            return category
    return BMI_DEFAULT_CATEGORY


def bmr(weight_kg: float, height_cm: float, age: int, sex: Sex) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    Male:   BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    Female: BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) − 161
    Other:  mean of the male and female results
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    male = base + 5
    female = base - 161
    if sex is Sex.MALE:
        result = male
    elif sex is Sex.FEMALE:
        result = female
    else:
        result = (male + female) / 2
    return round(result, 2)


def tdee(bmr_value: float, activity: ActivityLevel) -> float:
    """Calculate Total Daily Energy Expenditure.

    TDEE = BMR × activity multiplier, never negative
    """
    return max(bmr_value * ACTIVITY_MULTIPLIERS[activity.value], 0)


def pace_offset(goal: Goal, pace: Pace) -> float:
    """Daily calorie offset for a goal: deficit to lose, surplus to gain."""
    offset = PACE_OFFSETS[pace.value]
    if goal is Goal.LOSE_WEIGHT:
        return -offset
    if goal is Goal.GAIN_MUSCLE:
        return offset
    return 0


def adjusted_calories(tdee_value: float, goal: Goal, pace: Pace) -> float:
    return max(tdee_value + pace_offset(goal, pace), MIN_DAILY_CALORIES)


def macro_split(calories: float) -> tuple:
    """Split calories into (protein_g, carbs_g, fat_g) whole grams."""
    return tuple(
        int(round(calories * MACRO_SPLIT[macro] / CALORIES_PER_GRAM[macro]))
        for macro in ("protein", "carbs", "fat")
    )


def calculate_plan(profile: BiometricProfile) -> Plan:
    """Calculate a personalized daily plan for a validated profile.

    Steps:
    1. BMI from weight and height
    2. BMR via Mifflin-St Jeor
    3. Multiply by activity factor to get TDEE
    4. Apply the goal/pace calorie offset (floored at 1200 kcal)
    5. Split the target into protein/carbs/fat grams
    """
    bmi_value = round(bmi(profile.weight_kg, profile.height_cm), 2)
    bmr_value = bmr(profile.weight_kg, profile.height_cm, profile.age, profile.sex)
    tdee_value = tdee(bmr_value, profile.activity)
    target = int(round(adjusted_calories(tdee_value, profile.goal, profile.pace)))
    protein_g, carbs_g, fat_g = macro_split(target)

    return Plan(
        name=profile.name,
        age=profile.age,
        sex=profile.sex,
        height_cm=profile.height_cm,
        weight_kg=profile.weight_kg,
        activity=profile.activity,
        goal=profile.goal,
        pace=profile.pace,
        bmi=bmi_value,
        bmr=bmr_value,
        tdee=tdee_value,
        target_calories=target,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )


def bounded_daily_goal(calories: float) -> float:
    return min(max(calories, MIN_DAILY_CALORIES), MAX_DAILY_CALORIES)


def with_target_calories(plan: Plan, calories: float) -> Plan:
    """Override a plan's daily calories and regenerate its macros.

    BMI, BMR and TDEE keep their profile-derived values;
    has_manual_target() tells the two apart afterwards.
    """
    target = int(round(bounded_daily_goal(calories)))
    protein_g, carbs_g, fat_g = macro_split(target)
    return replace(
        plan,
        target_calories=target,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
    )


def has_manual_target(plan: Plan) -> bool:
    """Whether the plan's calories differ from what its TDEE, goal and pace give."""
    derived = int(round(adjusted_calories(plan.tdee, plan.goal, plan.pace)))
    return plan.target_calories != derived


def format_plan(plan: Plan) -> str:
    """Format a plan for display."""
    lines = [
        f"BMI:      {plan.bmi:.2f} ({bmi_category(plan.bmi)})",
        f"BMR:      {plan.bmr:.0f} kcal",
        f"TDEE:     {plan.tdee:.0f} kcal",
        f"Target:   {plan.target_calories} kcal/day",
        f"Protein:  {plan.protein_g}g ({plan.protein_g * 4} kcal)",
        f"Carbs:    {plan.carbs_g}g ({plan.carbs_g * 4} kcal)",
        f"Fat:      {plan.fat_g}g ({plan.fat_g * 9} kcal)",
    ]
    if has_manual_target(plan):
        lines.append("(daily target set manually; BMR/TDEE reflect the saved profile)")
    return "\n".join(lines)
