"""Tests for the command-line interface."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from macro_planner.cli import main
from macro_planner.plan_store import load_plan

CREATE_ARGS = [
    "profile", "create", "--name", "Test", "--age", "30", "--sex", "male",
    "--height", "180", "--weight", "80", "--activity", "moderate",
    "--goal", "loseWeight", "--pace", "moderate",
]


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tmp_dir.name, "test.db")

    def tearDown(self):
        self.tmp_dir.cleanup()

    def run_cli(self, *args):
        out = io.StringIO()
        with redirect_stdout(out):
            main(["--db", self.db_path, *args])
        return out.getvalue()

    def test_profile_create(self):
        output = self.run_cli(*CREATE_ARGS)
        self.assertIn("Target:   2334 kcal/day", output)
        self.assertEqual(load_plan(self.db_path).target_calories, 2334)

    def test_profile_create_imperial(self):
        self.run_cli(
            "profile", "create", "--name", "Alex", "--age", "31", "--sex", "other",
            "--units", "imperial", "--feet", "5", "--inches", "9", "--weight", "170",
        )
        plan = load_plan(self.db_path)
        self.assertAlmostEqual(plan.height_cm, 175.26)
        self.assertAlmostEqual(plan.weight_kg, 77.11, delta=0.05)

    def test_profile_create_invalid(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            main(["--db", self.db_path, "profile", "create", "--name", "Kid",
                  "--age", "10", "--sex", "female", "--height", "150", "--weight", "45"])
        self.assertIn("Enter an age 13-90.", out.getvalue())
        self.assertIsNone(load_plan(self.db_path))

    def test_plan_show_requires_plan(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit):
            main(["--db", self.db_path, "plan", "show"])

    def test_plan_goal(self):
        self.run_cli(*CREATE_ARGS)
        output = self.run_cli("plan", "goal", "1800")
        self.assertIn("Daily goal set to 1800 kcal", output)
        self.assertEqual(load_plan(self.db_path).protein_g, 135)

    def test_plan_export_import(self):
        self.run_cli(*CREATE_ARGS)
        path = os.path.join(self.tmp_dir.name, "plan.json")
        self.run_cli("plan", "export", path)
        plan = load_plan(self.db_path)
        self.run_cli("plan", "clear")
        self.assertIsNone(load_plan(self.db_path))
        self.run_cli("plan", "import", path)
        self.assertEqual(load_plan(self.db_path), plan)

    def _write_record(self, path, record):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(record, f)

    def test_plan_import_below_floor(self):
        self.run_cli(*CREATE_ARGS)
        path = os.path.join(self.tmp_dir.name, "plan.json")
        self.run_cli("plan", "export", path)
        with open(path, encoding="utf-8") as f:
            record = json.load(f)
        record["targetCalories"] = 900
        self._write_record(path, record)

        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as cm:
            main(["--db", self.db_path, "plan", "import", path])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Invalid plan file:", out.getvalue())
        self.assertEqual(load_plan(self.db_path).target_calories, 2334)

    def test_plan_import_null_field(self):
        self.run_cli(*CREATE_ARGS)
        path = os.path.join(self.tmp_dir.name, "plan.json")
        self.run_cli("plan", "export", path)
        with open(path, encoding="utf-8") as f:
            record = json.load(f)
        record["age"] = None
        self._write_record(path, record)

        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as cm:
            main(["--db", self.db_path, "plan", "import", path])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Invalid plan file:", out.getvalue())

    def test_plan_goal_not_a_number(self):
        self.run_cli(*CREATE_ARGS)
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as cm:
            main(["--db", self.db_path, "plan", "goal", "nan"])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Invalid calorie goal", out.getvalue())
        self.assertEqual(load_plan(self.db_path).target_calories, 2334)

    def test_food_scale(self):
        output = self.run_cli(
            "food", "scale", "--name", "Rice", "--grams", "100",
            "--calories", "200", "--carbs", "44", "--to", "50",
        )
        self.assertIn("Rice: 100g -> 50g", output)
        self.assertIn("Calories: 100", output)
        self.assertIn("Carbs:    22.0g", output)

    def test_convert(self):
        self.assertIn("5'9\"", self.run_cli("convert", "height", "--cm", "175.26"))
        self.assertIn("220.5 lbs", self.run_cli("convert", "weight", "--kg", "100"))


if __name__ == "__main__":
    unittest.main()
