"""Meal Editor Page.

Adjust portion sizes of detected food items and log them as a meal.
"""

from datetime import date

import pandas as pd
import streamlit as st

from macro_planner.models import FoodItem
from macro_planner.session import PlanSession
from pages.components.charts import create_calorie_gauge, create_meal_macro_bar

st.set_page_config(page_title="Meal Editor | Macro Planner", page_icon="🥗", layout="wide")
st.title("🥗 Meal Editor")

if 'session' not in st.session_state:
    st.session_state.session = PlanSession.restore()
session = st.session_state.session

# Add an item by hand (the camera/classifier feeds the same list)
with st.form("add_item_form", clear_on_submit=True):
    st.markdown("### Add Item")
    col1, col2, col3, col4, col5, col6 = st.columns([3, 1, 1, 1, 1, 1])
    name = col1.text_input("Name")
    grams = col2.number_input("Grams", min_value=0.0, value=100.0, step=5.0)
    calories = col3.number_input("Calories", min_value=0.0, value=0.0)
    protein = col4.number_input("Protein", min_value=0.0, value=0.0)
    carbs = col5.number_input("Carbs", min_value=0.0, value=0.0)
    fat = col6.number_input("Fat", min_value=0.0, value=0.0)
    if st.form_submit_button("➕ Add") and name.strip():
        session.detected_items.append(FoodItem(
            name=name.strip(), grams=grams, calories=calories,
            protein=protein, carbs=carbs, fat=fat,
        ))

st.markdown("### Detected Items")

if session.detected_items:
    df = pd.DataFrame([
        {
            "Name": item.name,
            "Grams": item.grams,
            "Calories": round(item.calories),
            "Protein": round(item.protein, 1),
            "Carbs": round(item.carbs, 1),
            "Fat": round(item.fat, 1),
        }
        for item in session.detected_items
    ])
    edited = st.data_editor(
        df,
        disabled=["Name", "Calories", "Protein", "Carbs", "Fat"],
        hide_index=True,
        use_container_width=True,
        key="detected_items_editor",
    )

    changed = False
    for item, new_grams in zip(list(session.detected_items), edited["Grams"]):
        if new_grams != item.grams and new_grams > 0:
            session.update_detected_item(item, float(new_grams))
            changed = True
    if changed:
        st.rerun()

    if st.button("💾 Save to Diary", use_container_width=True):
        meal = session.save_detected_items()
        if meal:
            st.success(f"✅ Logged {len(meal.items)} item(s), {meal.total_calories:.0f} kcal")
            st.rerun()
else:
    st.info("No items yet. Add one above.")

if session.error_message:
    st.error(session.error_message)
    session.clear_error()

st.markdown("### Logged Today")

todays_meals = session.meals_on(date.today())
if not todays_meals:
    st.info("No meals logged today.")

for meal in todays_meals:
    with st.expander(f"🍽️ {meal.date.strftime('%H:%M')} - {meal.total_calories:.0f} kcal"):
        meal_df = pd.DataFrame([
            {
                "Name": item.name,
                "Grams": item.grams,
                "Calories": round(item.calories),
                "Protein": round(item.protein, 1),
                "Carbs": round(item.carbs, 1),
                "Fat": round(item.fat, 1),
            }
            for item in meal.items
        ])
        edited_meal = st.data_editor(
            meal_df,
            disabled=["Name", "Calories", "Protein", "Carbs", "Fat"],
            hide_index=True,
            use_container_width=True,
            key=f"meal_editor_{meal.id}",
        )

        changed = False
        for item, new_grams in zip(list(meal.items), edited_meal["Grams"]):
            if new_grams != item.grams and new_grams > 0:
                session.update_item(item, meal, float(new_grams))
                changed = True
        if changed:
            st.rerun()

        if st.button("🗑️ Delete meal", key=f"delete_{meal.id}"):
            session.delete_meal(meal)
            st.rerun()

st.markdown("### Macros Today")
protein_eaten, carbs_eaten, fat_eaten = session.macro_totals_today
targets = session.macro_targets
col1, col2, col3 = st.columns(3)
for col, label, eaten, index in (
    (col1, "Protein", protein_eaten, 0),
    (col2, "Carbs", carbs_eaten, 1),
    (col3, "Fat", fat_eaten, 2),
):
    if targets:
        col.metric(label, f"{eaten:.0f} / {targets[index]} g")
        col.progress(min(eaten / targets[index], 1.0) if targets[index] else 0.0)
    else:
        col.metric(label, f"{eaten:.0f} g")

st.markdown("### Today")
col1, col2 = st.columns(2)
with col1:
    st.plotly_chart(
        create_calorie_gauge(session.consumed_calories_today, session.daily_goal),
        use_container_width=True,
    )
with col2:
    st.plotly_chart(create_meal_macro_bar(session.meals_on(date.today())), use_container_width=True)
