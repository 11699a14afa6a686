"""Chart components using Plotly for data visualization."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from macro_planner.models import Plan


def create_macro_pie_chart(plan: Plan):
    """Create pie chart of macro calorie distribution.

    Args:
        plan: Plan with protein, carbs, fat targets in grams

    Returns:
        Plotly figure
    """
    labels = ['Protein', 'Carbs', 'Fat']
    values = [
        plan.protein_g * 4,  # 4 cal/g
        plan.carbs_g * 4,    # 4 cal/g
        plan.fat_g * 9       # 9 cal/g
    ]

    fig = px.pie(
        names=labels,
        values=values,
        title="Macro Calorie Distribution",
        color_discrete_sequence=['#FF6B6B', '#4ECDC4', '#FFE66D']
    )

    fig.update_traces(textposition='inside', textinfo='percent+label')

    return fig


def create_calorie_gauge(consumed: float, goal: float):
    """Create gauge chart of calories consumed against the daily goal.

    Args:
        consumed: Calories logged today
        goal: Daily calorie goal

    Returns:
        Plotly figure
    """
    pct = min(consumed / goal * 100, 100) if goal > 0 else 0

    if pct < 90:
        color = "darkgreen"
    elif pct < 100:
        color = "orange"
    else:
        color = "red"

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=consumed,
        title={'text': "Calories Today"},
        gauge={
            'axis': {'range': [0, max(goal, consumed)]},
            'bar': {'color': color},
            'threshold': {
                'line': {'color': "black", 'width': 2},
                'value': goal,
            },
        },
    ))

    fig.update_layout(height=250, margin=dict(l=20, r=20, t=50, b=20))

    return fig


def create_meal_macro_bar(meals: list):
    """Create stacked bar chart of macro calories per logged meal.

    Args:
        meals: List of MealEntry objects

    Returns:
        Plotly figure
    """
    if not meals:
        fig = go.Figure()
        fig.add_annotation(
            text="No meals logged today",
            xref="paper", yref="paper",
            x=0.5, y=0.5, showarrow=False
        )
        return fig

    rows = []
    for meal in meals:
        label = meal.date.strftime("%H:%M")
        rows.append({'Meal': label, 'Macro': 'Protein', 'Calories': meal.total_protein * 4})
        rows.append({'Meal': label, 'Macro': 'Carbs', 'Calories': meal.total_carbs * 4})
        rows.append({'Meal': label, 'Macro': 'Fat', 'Calories': meal.total_fat * 9})

    df = pd.DataFrame(rows)

    fig = px.bar(
        df,
        x='Meal',
        y='Calories',
        color='Macro',
        title='Macro Calories by Meal',
        color_discrete_map={'Protein': '#FF6B6B', 'Carbs': '#4ECDC4', 'Fat': '#FFE66D'}
    )

    return fig
