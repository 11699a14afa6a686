"""Profile & Plan Page.

Onboarding form with a live plan preview, and direct editing of the daily goal.
"""

import streamlit as st

from macro_planner.config import MAX_DAILY_CALORIES, MIN_DAILY_CALORIES
from macro_planner.macro_calculator import has_manual_target
from macro_planner.models import ActivityLevel, Goal, HeightUnit, Pace, Sex, WeightUnit
from macro_planner.profile_form import OnboardingStep, ProfileForm
from macro_planner.session import PlanSession
from pages.components.charts import create_macro_pie_chart

st.set_page_config(page_title="Profile | Macro Planner", page_icon="📋", layout="wide")
st.title("📋 Profile & Plan")

if 'session' not in st.session_state:
    st.session_state.session = PlanSession.restore()
session = st.session_state.session
plan = session.plan

# Display current plan if exists
if plan:
    st.markdown("### Daily Targets")
    col1, col2, col3, col4, col5, col6 = st.columns(6)
    col1.metric("BMR", f"{plan.bmr:.0f} kcal")
    col2.metric("TDEE", f"{plan.tdee:.0f} kcal")
    col3.metric("Target", f"{plan.target_calories} kcal")
    col4.metric("Protein", f"{plan.protein_g}g")
    col5.metric("Carbs", f"{plan.carbs_g}g")
    col6.metric("Fat", f"{plan.fat_g}g")

    if has_manual_target(plan):
        st.caption("Daily target was set manually; BMR and TDEE reflect your saved profile.")

    fig = create_macro_pie_chart(plan)
    st.plotly_chart(fig, use_container_width=True)

    with st.form("daily_goal_form"):
        new_goal = st.number_input(
            "Daily calorie goal",
            min_value=MIN_DAILY_CALORIES,
            max_value=MAX_DAILY_CALORIES,
            value=plan.target_calories,
            step=50,
        )
        if st.form_submit_button("Update goal"):
            session.update_daily_goal(new_goal)
            st.rerun()

    st.divider()
    st.markdown("### Update Profile")
else:
    st.info("No plan found. Fill in your profile below to get started!")

form = ProfileForm.from_plan(plan) if plan else ProfileForm()
step = OnboardingStep.PROFILE
st.caption(f"Step {step.position} of {OnboardingStep.total_steps()}: {step.title}")

form.name = st.text_input("Name*", value=form.name)

col1, col2 = st.columns(2)
with col1:
    form.age = st.text_input("Age*", value=form.age, help="13 to 90")
with col2:
    sexes = list(Sex)
    form.sex = st.selectbox("Sex*", sexes, index=sexes.index(form.sex), format_func=lambda s: s.label)

st.markdown("#### Body Measurements")
col1, col2 = st.columns(2)
with col1:
    form.height_unit = st.radio(
        "Height unit", list(HeightUnit), horizontal=True, format_func=lambda u: u.label
    )
    if form.height_unit is HeightUnit.METRIC:
        form.height_cm = st.text_input("Height (cm)*", value=form.height_cm)
    else:
        ft_col, in_col = st.columns(2)
        form.height_feet = ft_col.text_input("Feet*", value=form.height_feet)
        form.height_inches = in_col.text_input("Inches*", value=form.height_inches)
with col2:
    form.weight_unit = st.radio(
        "Weight unit", list(WeightUnit), horizontal=True, format_func=lambda u: u.label
    )
    if form.weight_unit is WeightUnit.METRIC:
        form.weight_kg = st.text_input("Weight (kg)*", value=form.weight_kg)
    else:
        form.weight_lbs = st.text_input("Weight (lb)*", value=form.weight_lbs)

st.markdown("#### Activity & Goals")
col1, col2, col3 = st.columns(3)
with col1:
    levels = list(ActivityLevel)
    form.activity = st.selectbox(
        "Activity Level*", levels, index=levels.index(form.activity), format_func=lambda a: a.label
    )
    st.caption(form.activity.description)
with col2:
    goals = list(Goal)
    form.goal = st.selectbox("Goal*", goals, index=goals.index(form.goal), format_func=lambda g: g.label)
with col3:
    paces = list(Pace)
    form.pace = st.selectbox(
        "Pace*", paces, index=paces.index(form.pace), format_func=lambda p: p.label,
        disabled=form.goal is Goal.MAINTAIN,
    )

for error in form.errors:
    st.error(f"⚠️ {error}")

if form.is_step_valid(OnboardingStep.PROFILE):
    st.markdown("#### Preview")
    protein_g, carbs_g, fat_g = form.macro_targets
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("BMI", f"{form.bmi:.1f}", help=form.bmi_category)
    col2.metric("TDEE", f"{form.tdee:.0f} kcal")
    col3.metric("Target", f"{round(form.target_calories)} kcal")
    col4.metric("P / C / F", f"{protein_g} / {carbs_g} / {fat_g} g")

if st.button("💾 Save Plan", use_container_width=True, disabled=bool(form.errors)):
    new_plan = form.build_plan()
    if new_plan:
        try:
            session.update_plan(new_plan)
            st.success("✅ Plan saved!")
            st.rerun()
        except Exception as e:
            st.error(f"❌ Error saving plan: {e}")

st.markdown("---")
st.caption("💡 **Tip:** Your targets are calculated using the Mifflin-St Jeor equation, which is evidence-based and widely used in nutrition science.")
