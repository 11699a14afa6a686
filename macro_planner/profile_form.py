"""Onboarding profile form.

Holds raw text inputs as entered, validates them, previews the derived
metrics live and builds a Plan once every required field is valid. Anything
not yet computable reads as 0 (or None) instead of raising.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from macro_planner.config import (
    MAX_AGE,
    MAX_HEIGHT_CM,
    MAX_WEIGHT_KG,
    MIN_AGE,
    MIN_HEIGHT_CM,
    MIN_WEIGHT_KG,
)
from macro_planner.macro_calculator import (
    adjusted_calories,
    bmi,
    bmi_category,
    bmr,
    calculate_plan,
    macro_split,
    tdee,
)
from macro_planner.models import (
    ActivityLevel,
    BiometricProfile,
    Goal,
    HeightUnit,
    Pace,
    Plan,
    Sex,
    WeightUnit,
)
from macro_planner.units import (
    centimeters_to_feet_inches,
    height_to_centimeters,
    kilograms_to_pounds,
    weight_to_kilograms,
)


class OnboardingStep(Enum):
    WELCOME = "Welcome"
    PROFILE = "Profile"
    ACTIVITY = "Activity Level"
    GOAL = "Your Goal"
    PACE = "Preferred Pace"
    REVIEW = "Review Plan"
    PERMISSIONS = "Stay Synced"
    DONE = "Ready to Snap"

    @property
    def title(self) -> str:
        return self.value

    @property
    def position(self) -> int:
        """1-based position in the onboarding sequence."""
        return list(OnboardingStep).index(self) + 1

    @property
    def next(self) -> Optional["OnboardingStep"]:
        steps = list(OnboardingStep)
        index = steps.index(self)
        if index + 1 < len(steps):
            return steps[index + 1]
        return None

    @staticmethod
    def total_steps() -> int:
        return len(OnboardingStep)


def _parse_float(text: str) -> Optional[float]:
    """Parse a decimal entry, accepting a comma as the separator."""
    try:
        return float(text.strip().replace(",", "."))
    except ValueError:
        return None


@dataclass
class ProfileForm:
    """Raw onboarding inputs plus their validation and live plan preview."""
    name: str = ""
    age: str = ""
    sex: Sex = Sex.FEMALE
    height_unit: HeightUnit = HeightUnit.METRIC
    height_cm: str = ""
    height_feet: str = ""
    height_inches: str = ""
    weight_unit: WeightUnit = WeightUnit.METRIC
    weight_kg: str = ""
    weight_lbs: str = ""
    activity: ActivityLevel = ActivityLevel.MODERATE
    goal: Goal = Goal.MAINTAIN
    pace: Pace = Pace.MODERATE

    @classmethod
    def from_plan(cls, plan: Plan) -> "ProfileForm":
        form = cls()
        form.apply_plan(plan)
        return form

    def apply_plan(self, plan: Plan) -> None:
        """Prefill every field from an existing plan, in both unit systems."""
        self.name = plan.name
        self.age = str(plan.age)
        self.sex = plan.sex
        self.activity = plan.activity
        self.goal = plan.goal
        self.pace = plan.pace
        self.height_unit = HeightUnit.METRIC
        self.weight_unit = WeightUnit.METRIC
        self.height_cm = f"{plan.height_cm:.0f}"
        self.weight_kg = f"{plan.weight_kg:.1f}"
        feet, inches = centimeters_to_feet_inches(plan.height_cm)
        self.height_feet = str(feet)
        self.height_inches = str(inches)
        self.weight_lbs = f"{kilograms_to_pounds(plan.weight_kg):.1f}"

    # --- Parsed values ---

    @property
    def trimmed_name(self) -> str:
        return self.name.strip()

    @property
    def age_value(self) -> Optional[int]:
        try:
            value = int(self.age.strip())
        except ValueError:
            return None
        if value < MIN_AGE or value > MAX_AGE:
            return None
        return value

    @property
    def height_value_cm(self) -> Optional[float]:
        cm = _parse_float(self.height_cm)
        feet = _parse_float(self.height_feet) or 0
        inches = _parse_float(self.height_inches) or 0
        total = height_to_centimeters(-1 if cm is None else cm, feet, inches, self.height_unit)
        return total if total > 0 else None

    @property
    def weight_value_kg(self) -> Optional[float]:
        kg = _parse_float(self.weight_kg)
        lbs = _parse_float(self.weight_lbs) or 0
        total = weight_to_kilograms(-1 if kg is None else kg, lbs, self.weight_unit)
        return total if total > 0 else None

    # --- Live preview ---

    @property
    def bmi(self) -> float:
        weight, height = self.weight_value_kg, self.height_value_cm
        if weight is None or height is None:
            return 0.0
        return round(bmi(weight, height), 2)

    @property
    def bmi_category(self) -> str:
        return bmi_category(self.bmi)

    @property
    def bmr(self) -> float:
        weight, height, age = self.weight_value_kg, self.height_value_cm, self.age_value
        if weight is None or height is None or age is None:
            return 0.0
        return bmr(weight, height, age, self.sex)

    @property
    def tdee(self) -> float:
        return tdee(self.bmr, self.activity)

    @property
    def target_calories(self) -> float:
        """Adjusted daily calories, or 0 until the profile is complete."""
        if self.bmr == 0:
            return 0.0
        return adjusted_calories(self.tdee, self.goal, self.pace)

    @property
    def macro_targets(self) -> tuple:
        return macro_split(self.target_calories)

    # --- Validation ---

    @property
    def name_error(self) -> Optional[str]:
        return "Enter your name." if not self.trimmed_name else None

    @property
    def age_error(self) -> Optional[str]:
        if not self.age.strip():
            return "Age is required."
        if self.age_value is None:
            return f"Enter an age {MIN_AGE}-{MAX_AGE}."
        return None

    @property
    def height_error(self) -> Optional[str]:
        height = self.height_value_cm
        if height is None or height <= MIN_HEIGHT_CM:
            return "Add your height."
        if height > MAX_HEIGHT_CM:
            return "Height looks too high."
        return None

    @property
    def weight_error(self) -> Optional[str]:
        weight = self.weight_value_kg
        if weight is None or weight <= MIN_WEIGHT_KG:
            return "Add your weight."
        if weight > MAX_WEIGHT_KG:
            return "Weight looks too high."
        return None

    @property
    def errors(self) -> list:
        return [
            error
            for error in (self.name_error, self.age_error, self.height_error, self.weight_error)
            if error
        ]

    def is_step_valid(self, step: OnboardingStep) -> bool:
        if step is OnboardingStep.PROFILE:
            return not self.errors
        return True

    def build_profile(self) -> Optional[BiometricProfile]:
        if not self.is_step_valid(OnboardingStep.PROFILE):
            return None
        return BiometricProfile(
            name=self.trimmed_name,
            age=self.age_value,
            sex=self.sex,
            height_cm=self.height_value_cm,
            weight_kg=self.weight_value_kg,
            activity=self.activity,
            goal=self.goal,
            pace=self.pace,
        )

    def build_plan(self) -> Optional[Plan]:
        """Run the plan pipeline, or return None while any field is invalid."""
        profile = self.build_profile()
        if profile is None:
            return None
        return calculate_plan(profile)
