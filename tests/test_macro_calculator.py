"""Tests for the plan calculation engine."""

import unittest

from macro_planner.macro_calculator import (
    adjusted_calories,
    bmi,
    bmi_category,
    bmr,
    calculate_plan,
    format_plan,
    has_manual_target,
    macro_split,
    pace_offset,
    tdee,
    with_target_calories,
)
from macro_planner.models import ActivityLevel, BiometricProfile, Goal, Pace, Sex


def _profile(**overrides):
    fields = dict(
        name="Test", age=30, sex=Sex.MALE, height_cm=180, weight_kg=80,
        activity=ActivityLevel.MODERATE, goal=Goal.LOSE_WEIGHT, pace=Pace.MODERATE,
    )
    fields.update(overrides)
    return BiometricProfile(**fields)


class TestBMI(unittest.TestCase):
    def test_bmi(self):
        value = bmi(72, 178)
        self.assertAlmostEqual(value, 22.72, delta=0.01)
        self.assertEqual(bmi_category(value), "Normal")

    def test_zero_height_returns_zero(self):
        self.assertEqual(bmi(70, 0), 0)
        self.assertEqual(bmi(70, -160), 0)

    def test_category_boundaries(self):
        self.assertEqual(bmi_category(18.49), "Underweight")
        self.assertEqual(bmi_category(18.5), "Normal")
        self.assertEqual(bmi_category(24.999), "Normal")
        self.assertEqual(bmi_category(25.0), "Overweight")
        self.assertEqual(bmi_category(29.999), "Overweight")
        self.assertEqual(bmi_category(30.0), "Obese")

    def test_not_computed_is_underweight(self):
        self.assertEqual(bmi_category(0), "Underweight")


class TestBMR(unittest.TestCase):
    def test_bmr_male(self):
        # 10*82 + 6.25*188 - 5*32 + 5 = 820 + 1175 - 160 + 5 = 1840
        self.assertAlmostEqual(bmr(82, 188, 32, Sex.MALE), 1840, delta=1.0)

    def test_bmr_female(self):
        # 10*60 + 6.25*165 - 5*25 - 161 = 600 + 1031.25 - 125 - 161 = 1345.25
        self.assertAlmostEqual(bmr(60, 165, 25, Sex.FEMALE), 1345.25)

    def test_bmr_other_averages_both_equations(self):
        male = bmr(82, 188, 32, Sex.MALE)
        female = bmr(82, 188, 32, Sex.FEMALE)
        self.assertAlmostEqual(bmr(82, 188, 32, Sex.OTHER), (male + female) / 2)
        self.assertAlmostEqual(bmr(82, 188, 32, Sex.OTHER), 1757)

    def test_rounded_to_two_places(self):
        # 701.23 + 1062.5 - 150 + 5
        self.assertAlmostEqual(bmr(70.123, 170, 30, Sex.MALE), 1618.73, places=2)
        value = bmr(70.1234, 170, 30, Sex.MALE)
        self.assertEqual(value, round(value, 2))

    def test_bmr_increases_with_weight(self):
        self.assertGreater(bmr(90, 175, 30, Sex.MALE), bmr(70, 175, 30, Sex.MALE))


class TestTDEE(unittest.TestCase):
    def test_multipliers(self):
        expected = {
            ActivityLevel.SEDENTARY: 1.2,
            ActivityLevel.LIGHT: 1.375,
            ActivityLevel.MODERATE: 1.55,
            ActivityLevel.ACTIVE: 1.725,
            ActivityLevel.VERY_ACTIVE: 1.9,
        }
        for level, multiplier in expected.items():
            self.assertAlmostEqual(tdee(1780, level), 1780 * multiplier)

    def test_never_negative(self):
        self.assertEqual(tdee(-100, ActivityLevel.SEDENTARY), 0)


class TestGoalAdjustment(unittest.TestCase):
    def test_pace_offsets(self):
        self.assertEqual(pace_offset(Goal.LOSE_WEIGHT, Pace.SLOW), -250)
        self.assertEqual(pace_offset(Goal.LOSE_WEIGHT, Pace.MODERATE), -425)
        self.assertEqual(pace_offset(Goal.LOSE_WEIGHT, Pace.FAST), -650)
        self.assertEqual(pace_offset(Goal.GAIN_MUSCLE, Pace.FAST), 650)

    def test_maintain_ignores_pace(self):
        for pace in Pace:
            self.assertEqual(pace_offset(Goal.MAINTAIN, pace), 0)

    def test_adjusted_calories(self):
        self.assertEqual(adjusted_calories(2500, Goal.LOSE_WEIGHT, Pace.MODERATE), 2075)
        self.assertEqual(adjusted_calories(2500, Goal.MAINTAIN, Pace.FAST), 2500)
        self.assertEqual(adjusted_calories(2500, Goal.GAIN_MUSCLE, Pace.SLOW), 2750)

    def test_never_below_floor(self):
        for tdee_value in (-500, 0, 1000, 1300, 1849):
            for goal in Goal:
                for pace in Pace:
                    self.assertGreaterEqual(adjusted_calories(tdee_value, goal, pace), 1200)

    def test_floor_value(self):
        self.assertEqual(adjusted_calories(0, Goal.MAINTAIN, Pace.SLOW), 1200)


class TestMacroSplit(unittest.TestCase):
    def test_split(self):
        self.assertEqual(macro_split(2200), (165, 220, 73))

    def test_zero_calories(self):
        self.assertEqual(macro_split(0), (0, 0, 0))

    def test_grams_are_non_negative_ints_close_to_total(self):
        # Each gram count is off by at most 0.5g: 0.5*4 + 0.5*4 + 0.5*9 = 8.5 kcal
        for calories in range(1200, 5001):
            protein, carbs, fat = macro_split(calories)
            for grams in (protein, carbs, fat):
                self.assertIsInstance(grams, int)
                self.assertGreaterEqual(grams, 0)
            total = protein * 4 + carbs * 4 + fat * 9
            self.assertLessEqual(abs(total - calories), 8.5, f"Failed for calories={calories}")


class TestCalculatePlan(unittest.TestCase):
    def test_lose_weight_plan(self):
        plan = calculate_plan(_profile())
        # BMR = 1780, TDEE = 1780 * 1.55 = 2759, target = 2759 - 425 = 2334
        self.assertAlmostEqual(plan.bmi, 24.69)
        self.assertAlmostEqual(plan.bmr, 1780)
        self.assertAlmostEqual(plan.tdee, 2759)
        self.assertEqual(plan.target_calories, 2334)
        self.assertEqual((plan.protein_g, plan.carbs_g, plan.fat_g), (175, 233, 78))

    def test_profile_fields_carried_over(self):
        profile = _profile(name="Alex", goal=Goal.GAIN_MUSCLE, pace=Pace.FAST)
        plan = calculate_plan(profile)
        self.assertEqual(plan.profile, profile)

    def test_floor_applies_to_plan(self):
        plan = calculate_plan(_profile(
            sex=Sex.FEMALE, age=60, weight_kg=40, height_cm=150,
            activity=ActivityLevel.SEDENTARY, goal=Goal.LOSE_WEIGHT, pace=Pace.FAST,
        ))
        self.assertEqual(plan.target_calories, 1200)
        self.assertEqual((plan.protein_g, plan.carbs_g, plan.fat_g), (90, 120, 40))

    def test_all_goals_produce_valid_plans(self):
        for goal in Goal:
            for pace in Pace:
                plan = calculate_plan(_profile(goal=goal, pace=pace))
                self.assertGreaterEqual(plan.target_calories, 1200, f"Failed for {goal}/{pace}")
                self.assertAlmostEqual(plan.macro_calories, plan.target_calories, delta=8.5)
                self.assertFalse(has_manual_target(plan))

    def test_format_plan(self):
        text = format_plan(calculate_plan(_profile()))
        self.assertIn("Target:   2334 kcal/day", text)
        self.assertIn("Protein:  175g (700 kcal)", text)
        self.assertNotIn("manually", text)


class TestManualTarget(unittest.TestCase):
    def setUp(self):
        self.plan = calculate_plan(_profile())

    def test_regenerates_macros_only(self):
        edited = with_target_calories(self.plan, 1800)
        self.assertEqual(edited.target_calories, 1800)
        self.assertEqual((edited.protein_g, edited.carbs_g, edited.fat_g), (135, 180, 60))
        self.assertEqual(edited.bmr, self.plan.bmr)
        self.assertEqual(edited.tdee, self.plan.tdee)
        self.assertEqual(edited.bmi, self.plan.bmi)
        self.assertEqual(self.plan.target_calories, 2334)

    def test_flags_override(self):
        self.assertTrue(has_manual_target(with_target_calories(self.plan, 1800)))
        self.assertIn("manually", format_plan(with_target_calories(self.plan, 1800)))

    def test_bounds(self):
        self.assertEqual(with_target_calories(self.plan, 500).target_calories, 1200)
        self.assertEqual(with_target_calories(self.plan, 9000).target_calories, 6000)


if __name__ == "__main__":
    unittest.main()
