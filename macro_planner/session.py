"""Session state for the front ends.

PlanSession owns everything mutable a user touches: the active plan, the
daily calorie goal, items detected for the meal being logged and the meals
already logged. The calculation engine stays pure; the session only calls
into it and into the plan store.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from macro_planner.config import DEFAULT_DAILY_GOAL
from macro_planner.db import DB_PATH
from macro_planner.macro_calculator import bounded_daily_goal, with_target_calories
from macro_planner.models import FoodItem, MealEntry, Plan
from macro_planner.plan_store import load_plan, save_plan

_logger = logging.getLogger(__name__)


@dataclass
class PlanSession:
    """Mutable UI-facing state around one user's plan."""
    plan: Optional[Plan] = None
    daily_goal: float = DEFAULT_DAILY_GOAL
    detected_items: list = field(default_factory=list)  # List[FoodItem]
    meals: list = field(default_factory=list)  # List[MealEntry]
    db_path: Optional[str] = DB_PATH
    error_message: Optional[str] = None

    def __post_init__(self):
        if self.plan is not None:
            self.daily_goal = float(self.plan.target_calories)

    @classmethod
    def restore(cls, db_path: str = DB_PATH) -> "PlanSession":
        """Start a session from the stored plan, if there is one."""
        return cls(plan=load_plan(db_path), db_path=db_path)

    @property
    def needs_onboarding(self) -> bool:
        return self.plan is None

    # --- Plan ---

    def update_plan(self, plan: Plan) -> None:
        """Store a new plan and adopt its target as the daily goal.

        The plan is saved before the session changes, so a failed save
        leaves the previous plan in place.
        """
        self._persist(plan)
        self.plan = plan
        self.daily_goal = float(plan.target_calories)

    def update_daily_goal(self, calories: float) -> None:
        """Set the daily goal directly, regenerating the plan's macros."""
        if not math.isfinite(calories):
            _logger.warning("Ignoring non-finite daily goal: %s", calories)
            self.error_message = "Enter a valid calorie goal."
            return
        goal = int(round(bounded_daily_goal(calories)))
        if self.plan is None:
            self.daily_goal = float(goal)
            return
        plan = with_target_calories(self.plan, goal)
        self._persist(plan)
        self.plan = plan
        self.daily_goal = float(plan.target_calories)

    @property
    def macro_targets(self) -> Optional[tuple]:
        if self.plan is None:
            return None
        return self.plan.protein_g, self.plan.carbs_g, self.plan.fat_g

    def _persist(self, plan: Plan) -> None:
        if self.db_path is None:
            return
        save_plan(plan, self.db_path)

    # --- Food items ---

    def update_detected_item(self, item: FoodItem, grams: float) -> Optional[FoodItem]:
        """Rescale one detected item to a new serving size."""
        for index, existing in enumerate(self.detected_items):
            if existing.id == item.id:
                updated = existing.adjusted(grams)
                self.detected_items[index] = updated
                return updated
        _logger.warning("Detected item not found: %s", item.name)
        return None

    def update_item(self, item: FoodItem, meal: MealEntry, grams: float) -> Optional[FoodItem]:
        """Rescale one item inside a logged meal."""
        for stored_meal in self.meals:
            if stored_meal.id != meal.id:
                continue
            for index, existing in enumerate(stored_meal.items):
                if existing.id == item.id:
                    updated = existing.adjusted(grams)
                    stored_meal.items[index] = updated
                    return updated
        _logger.warning("Meal item not found: %s", item.name)
        return None

    def save_detected_items(self, logged_at: Optional[datetime] = None) -> Optional[MealEntry]:
        """Move the detected items into a new logged meal."""
        if not self.detected_items:
            self.error_message = "No items detected yet."
            return None
        meal = MealEntry(date=logged_at or datetime.now(), items=list(self.detected_items))
        self.meals.append(meal)
        self.detected_items = []
        self.error_message = None
        return meal

    def delete_meal(self, meal: MealEntry) -> bool:
        """Remove a logged meal. Returns False if it isn't logged."""
        for index, stored_meal in enumerate(self.meals):
            if stored_meal.id == meal.id:
                del self.meals[index]
                return True
        _logger.warning("Meal not found: %s", meal.id)
        return False

    def clear_error(self) -> None:
        self.error_message = None

    # --- Progress ---

    def meals_on(self, day: date) -> list:
        """Meals logged on a given day, newest first."""
        return sorted(
            (meal for meal in self.meals if meal.date.date() == day),
            key=lambda meal: meal.date,
            reverse=True,
        )

    @property
    def consumed_calories_today(self) -> float:
        return sum(meal.total_calories for meal in self.meals_on(date.today()))

    @property
    def calorie_progress(self) -> float:
        """Fraction of today's goal consumed, capped at 1."""
        if self.daily_goal <= 0:
            return 0.0
        return min(self.consumed_calories_today / self.daily_goal, 1.0)

    @property
    def macro_totals_today(self) -> tuple:
        """(protein, carbs, fat) grams logged today."""
        meals = self.meals_on(date.today())
        return (
            sum(meal.total_protein for meal in meals),
            sum(meal.total_carbs for meal in meals),
            sum(meal.total_fat for meal in meals),
        )
