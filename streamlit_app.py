"""Streamlit frontend for the nutrition planner.

Main entry point for the multi-page Streamlit application.
"""

import streamlit as st

from macro_planner.app_logging import configure_logging
from macro_planner.db import init_db
from macro_planner.macro_calculator import bmi_category
from macro_planner.session import PlanSession

st.set_page_config(
    page_title="Macro Planner",
    page_icon="🍽️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize logging and DB once per session
if 'session' not in st.session_state:
    configure_logging()
    init_db()
    st.session_state.session = PlanSession.restore()

session = st.session_state.session

# Sidebar: Show current plan
with st.sidebar:
    st.markdown("## 🍽️ Macro Planner")
    st.markdown("---")

    if session.plan:
        plan = session.plan
        st.success(f"👤 **{plan.name}**")
        st.caption(f"Goal: {plan.goal.label} ({plan.pace.label})")
        st.metric("Daily Target", f"{plan.target_calories} cal")
        col1, col2, col3 = st.columns(3)
        col1.metric("P", f"{plan.protein_g}g")
        col2.metric("C", f"{plan.carbs_g}g")
        col3.metric("F", f"{plan.fat_g}g")
    else:
        st.warning("⚠️ No plan yet")
        st.caption("Create one in the Profile page")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 📋 **Profile** - Build your plan")
    st.markdown("- 🥗 **Meal Editor** - Adjust portions & log meals")

# Main home page
st.title("🍽️ Macro Planner")

if session.needs_onboarding:
    st.info("No plan found. Go to the Profile page to create one!")
    st.stop()

plan = session.plan

col1, col2, col3, col4 = st.columns(4)
col1.metric("BMI", f"{plan.bmi:.1f}", help=bmi_category(plan.bmi))
col2.metric("BMR", f"{plan.bmr:.0f} kcal")
col3.metric("TDEE", f"{plan.tdee:.0f} kcal")
col4.metric("Target", f"{plan.target_calories} kcal")

st.markdown("### Today")
st.progress(session.calorie_progress)
st.caption(f"{session.consumed_calories_today:.0f} of {session.daily_goal:.0f} kcal")

st.markdown("---")
st.caption("💡 **Tip:** Targets use the Mifflin-St Jeor equation with a 30/40/30 protein/carbs/fat split and never drop below 1200 kcal/day.")
