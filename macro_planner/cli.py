"""Command-line interface for the nutrition planner."""

import argparse
import math
import sys

from macro_planner.app_logging import configure_logging
from macro_planner.db import DB_PATH, init_db
from macro_planner.macro_calculator import format_plan
from macro_planner.models import (
    ActivityLevel,
    FoodItem,
    Goal,
    HeightUnit,
    Pace,
    Sex,
    WeightUnit,
)
from macro_planner.plan_store import (
    clear_plan,
    export_plan_json,
    import_plan_json,
)
from macro_planner.profile_form import ProfileForm
from macro_planner.session import PlanSession
from macro_planner.units import (
    centimeters_to_feet_inches,
    height_to_centimeters,
    kilograms_to_pounds,
    weight_to_kilograms,
)


def _choices(enum_cls) -> list:
    return [member.value for member in enum_cls]


def _get_active_session(db_path: str) -> PlanSession:
    session = PlanSession.restore(db_path)
    if session.needs_onboarding:
        print("No plan found. Create one first:")
        print("  python -m macro_planner profile create")
        sys.exit(1)
    return session


# --- Command handlers ---

def cmd_profile_create(args):
    form = ProfileForm(
        name=args.name,
        age=str(args.age),
        sex=Sex(args.sex),
        height_unit=HeightUnit(args.units),
        weight_unit=WeightUnit(args.units),
        activity=ActivityLevel(args.activity),
        goal=Goal(args.goal),
        pace=Pace(args.pace),
    )
    if form.height_unit is HeightUnit.METRIC:
        form.height_cm = str(args.height or "")
        form.weight_kg = str(args.weight or "")
    else:
        form.height_feet = str(args.feet or "")
        form.height_inches = str(args.inches or "")
        form.weight_lbs = str(args.weight or "")

    plan = form.build_plan()
    if plan is None:
        for error in form.errors:
            print(f"Invalid profile: {error}")
        sys.exit(1)

    session = PlanSession(db_path=args.db)
    session.update_plan(plan)
    print(f"Plan created for {plan.name}")
    print("\nYour daily targets:")
    print(format_plan(plan))


def cmd_profile_show(args):
    plan = _get_active_session(args.db).plan
    feet, inches = centimeters_to_feet_inches(plan.height_cm)
    print(f"Name:     {plan.name}")
    print(f"Age:      {plan.age}")
    print(f"Sex:      {plan.sex.label}")
    print(f"Height:   {plan.height_cm:.0f} cm ({feet}'{inches}\")")
    print(f"Weight:   {plan.weight_kg:.1f} kg ({kilograms_to_pounds(plan.weight_kg):.0f} lbs)")
    print(f"Activity: {plan.activity.label}")
    print(f"Goal:     {plan.goal.label} ({plan.pace.label})")


def cmd_plan_show(args):
    plan = _get_active_session(args.db).plan
    print(format_plan(plan))


def cmd_plan_goal(args):
    if not math.isfinite(args.calories):
        print(f"Invalid calorie goal: {args.calories}")
        sys.exit(1)
    session = _get_active_session(args.db)
    session.update_daily_goal(args.calories)
    print(f"Daily goal set to {session.plan.target_calories} kcal")
    print(format_plan(session.plan))


def cmd_plan_clear(args):
    if clear_plan(args.db):
        print("Plan cleared.")
    else:
        print("No plan to clear.")


def cmd_plan_export(args):
    plan = _get_active_session(args.db).plan
    export_plan_json(plan, args.file)
    print(f"Exported plan to {args.file}")


def cmd_plan_import(args):
    try:
        plan = import_plan_json(args.file)
    except FileNotFoundError:
        print(f"File not found: {args.file}")
        sys.exit(1)
    except (KeyError, ValueError) as e:
        print(f"Invalid plan file: {e}")
        sys.exit(1)

    PlanSession(db_path=args.db).update_plan(plan)
    print(f"Imported plan for {plan.name}")
    print(format_plan(plan))


def cmd_food_scale(args):
    item = FoodItem(
        name=args.name,
        grams=args.grams,
        calories=args.calories,
        protein=args.protein,
        carbs=args.carbs,
        fat=args.fat,
    )
    scaled = item.adjusted(args.to)
    print(f"{scaled.name}: {item.grams:g}g -> {scaled.grams:g}g")
    print(f"  Calories: {scaled.calories:.0f}")
    print(f"  Protein:  {scaled.protein:.1f}g")
    print(f"  Carbs:    {scaled.carbs:.1f}g")
    print(f"  Fat:      {scaled.fat:.1f}g")


def cmd_convert_height(args):
    if args.cm is not None:
        feet, inches = centimeters_to_feet_inches(args.cm)
        print(f"{args.cm:g} cm = {feet}'{inches}\"")
    else:
        cm = height_to_centimeters(0, args.feet or 0, args.inches or 0, HeightUnit.IMPERIAL)
        print(f"{args.feet or 0}'{args.inches or 0}\" = {cm:.2f} cm")


def cmd_convert_weight(args):
    if args.kg is not None:
        print(f"{args.kg:g} kg = {kilograms_to_pounds(args.kg):.1f} lbs")
    else:
        kg = weight_to_kilograms(0, args.lbs, WeightUnit.IMPERIAL)
        print(f"{args.lbs:g} lbs = {kg:.2f} kg")


# --- Argument parser ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="macro_planner",
        description="Daily calorie and macro planning",
    )
    parser.add_argument("--db", default=DB_PATH, help="SQLite database path")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- profile ---
    profile_parser = subparsers.add_parser("profile", help="Manage your profile")
    profile_sub = profile_parser.add_subparsers(dest="subcommand")

    create_p = profile_sub.add_parser("create", help="Create a profile and its plan")
    create_p.add_argument("--name", required=True)
    create_p.add_argument("--age", type=int, required=True)
    create_p.add_argument("--units", choices=_choices(HeightUnit), default="metric")
    create_p.add_argument("--height", type=float, help="Height in cm (metric)")
    create_p.add_argument("--feet", type=int, help="Height feet (imperial)")
    create_p.add_argument("--inches", type=int, help="Height inches (imperial)")
    create_p.add_argument("--weight", type=float, help="Weight in kg, or lbs with --units imperial")
    create_p.add_argument("--sex", choices=_choices(Sex), required=True)
    create_p.add_argument("--activity", choices=_choices(ActivityLevel), default="moderate")
    create_p.add_argument("--goal", choices=_choices(Goal), default="maintain")
    create_p.add_argument("--pace", choices=_choices(Pace), default="moderate")
    create_p.set_defaults(func=cmd_profile_create)

    show_p = profile_sub.add_parser("show", help="Show current profile")
    show_p.set_defaults(func=cmd_profile_show)

    # --- plan ---
    plan_parser = subparsers.add_parser("plan", help="Daily plan")
    plan_sub = plan_parser.add_subparsers(dest="subcommand")

    show_pp = plan_sub.add_parser("show", help="Show daily targets")
    show_pp.set_defaults(func=cmd_plan_show)

    goal_p = plan_sub.add_parser("goal", help="Set the daily calorie goal directly")
    goal_p.add_argument("calories", type=float)
    goal_p.set_defaults(func=cmd_plan_goal)

    clear_p = plan_sub.add_parser("clear", help="Delete the stored plan")
    clear_p.set_defaults(func=cmd_plan_clear)

    export_p = plan_sub.add_parser("export", help="Export the plan to a JSON file")
    export_p.add_argument("file")
    export_p.set_defaults(func=cmd_plan_export)

    import_p = plan_sub.add_parser("import", help="Import a plan from a JSON file")
    import_p.add_argument("file")
    import_p.set_defaults(func=cmd_plan_import)

    # --- food ---
    food_parser = subparsers.add_parser("food", help="Food item tools")
    food_sub = food_parser.add_subparsers(dest="subcommand")

    scale_p = food_sub.add_parser("scale", help="Rescale a food item to a new serving size")
    scale_p.add_argument("--name", default="Food")
    scale_p.add_argument("--grams", type=float, required=True, help="Current serving (g)")
    scale_p.add_argument("--calories", type=float, required=True)
    scale_p.add_argument("--protein", type=float, default=0.0)
    scale_p.add_argument("--carbs", type=float, default=0.0)
    scale_p.add_argument("--fat", type=float, default=0.0)
    scale_p.add_argument("--to", type=float, required=True, help="New serving (g)")
    scale_p.set_defaults(func=cmd_food_scale)

    # --- convert ---
    convert_parser = subparsers.add_parser("convert", help="Unit conversions")
    convert_sub = convert_parser.add_subparsers(dest="subcommand")

    height_p = convert_sub.add_parser("height", help="cm <-> feet/inches")
    height_p.add_argument("--cm", type=float)
    height_p.add_argument("--feet", type=int)
    height_p.add_argument("--inches", type=int)
    height_p.set_defaults(func=cmd_convert_height)

    weight_p = convert_sub.add_parser("weight", help="kg <-> lbs")
    weight_group = weight_p.add_mutually_exclusive_group(required=True)
    weight_group.add_argument("--kg", type=float)
    weight_group.add_argument("--lbs", type=float)
    weight_p.set_defaults(func=cmd_convert_weight)

    return parser


def main(argv=None):
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    init_db(args.db)

    if not args.command:
        parser.print_help()
        return

    if hasattr(args, "func"):
        args.func(args)
    else:
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
