"""Data models for the nutrition planning engine."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import uuid4

from macro_planner.config import MIN_DAILY_CALORIES


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _SEX_LABELS[self]


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "veryActive"

    @property
    def label(self) -> str:
        return _ACTIVITY_LABELS[self][0]

    @property
    def description(self) -> str:
        return _ACTIVITY_LABELS[self][1]


class Goal(str, Enum):
    LOSE_WEIGHT = "loseWeight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gainMuscle"

    @property
    def label(self) -> str:
        return _GOAL_LABELS[self]


class Pace(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class HeightUnit(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def label(self) -> str:
        return "cm" if self is HeightUnit.METRIC else "ft / in"


class WeightUnit(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def label(self) -> str:
        return "kg" if self is WeightUnit.METRIC else "lb"


_SEX_LABELS = {
    Sex.MALE: "Male",
    Sex.FEMALE: "Female",
    Sex.OTHER: "Other",
}

_ACTIVITY_LABELS = {
    ActivityLevel.SEDENTARY: ("Sedentary", "Little or no exercise, mostly sitting or desk work."),
    ActivityLevel.LIGHT: ("Lightly Active", "Light exercise or activity 1-3 days per week."),
    ActivityLevel.MODERATE: ("Moderately Active", "Moderate exercise 3-5 days per week."),
    ActivityLevel.ACTIVE: ("Active", "Hard exercise 6-7 days per week."),
    ActivityLevel.VERY_ACTIVE: ("Very Active", "Very hard exercise and a physical job."),
}

_GOAL_LABELS = {
    Goal.LOSE_WEIGHT: "Lose Weight",
    Goal.MAINTAIN: "Maintain",
    Goal.GAIN_MUSCLE: "Gain Muscle",
}


@dataclass(frozen=True)
class BiometricProfile:
    """Validated user inputs for the plan pipeline (metric units)."""
    name: str
    age: int
    sex: Sex
    height_cm: float
    weight_kg: float
    activity: ActivityLevel
    goal: Goal
    pace: Pace


# Persisted key for each Plan field, in record order
PLAN_RECORD_KEYS = {
    "name": "name",
    "age": "age",
    "sex": "sex",
    "height_cm": "heightCM",
    "weight_kg": "weightKG",
    "activity": "activity",
    "goal": "goal",
    "pace": "pace",
    "bmi": "bmi",
    "bmr": "bmr",
    "tdee": "tdee",
    "target_calories": "targetCalories",
    "protein_g": "proteinG",
    "carbs_g": "carbsG",
    "fat_g": "fatG",
}


@dataclass(frozen=True)
class Plan:
    """A user's daily calorie and macro plan with the profile it came from."""
    name: str
    age: int
    sex: Sex
    height_cm: float
    weight_kg: float
    activity: ActivityLevel
    goal: Goal
    pace: Pace
    bmi: float = 0.0
    bmr: float = 0.0
    tdee: float = 0.0
    target_calories: int = 0
    protein_g: int = 0
    carbs_g: int = 0
    fat_g: int = 0

    @property
    def profile(self) -> BiometricProfile:
        return BiometricProfile(
            name=self.name,
            age=self.age,
            sex=self.sex,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity=self.activity,
            goal=self.goal,
            pace=self.pace,
        )

    @property
    def macro_calories(self) -> int:
        """Calories implied by the gram targets (4/4/9 kcal per gram)."""
        return self.protein_g * 4 + self.carbs_g * 4 + self.fat_g * 9

    def to_record(self) -> dict:
        """Flatten to the persisted key-value record."""
        record = {}
        for attr, key in PLAN_RECORD_KEYS.items():
            value = getattr(self, attr)
            record[key] = value.value if isinstance(value, Enum) else value
        return record

    @classmethod
    def from_record(cls, record: dict) -> "Plan":
        """Rebuild a plan from a persisted record.

        Raises KeyError for a missing field and ValueError for an unknown
        category value, a malformed record or a target below the calorie
        floor.
        """
        if not isinstance(record, dict):
            raise ValueError(f"Plan record must be an object, not {type(record).__name__}")
        try:
            plan = cls(
                name=str(record["name"]),
                age=int(record["age"]),
                sex=Sex(record["sex"]),
                height_cm=float(record["heightCM"]),
                weight_kg=float(record["weightKG"]),
                activity=ActivityLevel(record["activity"]),
                goal=Goal(record["goal"]),
                pace=Pace(record["pace"]),
                bmi=float(record["bmi"]),
                bmr=float(record["bmr"]),
                tdee=float(record["tdee"]),
                target_calories=int(record["targetCalories"]),
                protein_g=int(record["proteinG"]),
                carbs_g=int(record["carbsG"]),
                fat_g=int(record["fatG"]),
            )
        except TypeError as e:
            raise ValueError(f"Invalid plan record: {e}") from e
        if plan.target_calories < MIN_DAILY_CALORIES:
            raise ValueError(
                f"targetCalories {plan.target_calories} is below {MIN_DAILY_CALORIES} kcal"
            )
        return plan


@dataclass(frozen=True)
class FoodItem:
    """A detected or logged food with nutrition for its serving size."""
    name: str
    grams: float
    calories: float
    protein: float
    carbs: float
    fat: float
    confidence: float = 1.0  # Classifier provenance, unused in calculations
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def calories_per_gram(self) -> float:
        if self.grams == 0:
            return 0.0
        return self.calories / self.grams

    def adjusted(self, grams: float) -> "FoodItem":
        """Return a copy rescaled to a new serving size.

        Nutrients scale linearly with grams. An item with zero grams has no
        ratio to scale by, so only its grams change.
        """
        multiplier = 1 if self.grams == 0 else grams / self.grams
        return replace(
            self,
            grams=grams,
            calories=self.calories * multiplier,
            protein=self.protein * multiplier,
            carbs=self.carbs * multiplier,
            fat=self.fat * multiplier,
        )


@dataclass
class MealEntry:
    """A logged meal made of food items."""
    date: datetime
    items: list = field(default_factory=list)  # List[FoodItem]
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def total_calories(self) -> float:
        return sum(item.calories for item in self.items)

    @property
    def total_protein(self) -> float:
        return sum(item.protein for item in self.items)

    @property
    def total_carbs(self) -> float:
        return sum(item.carbs for item in self.items)

    @property
    def total_fat(self) -> float:
        return sum(item.fat for item in self.items)
