"""
UI display helper functions for the AI Running Coach app.
All Streamlit-specific rendering logic lives here.
"""

import streamlit as st
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from models import DashboardStats, PaceResult, TrainingPlan
from utils.training_stats import format_duration, recent_activities_table
import config

ZONE_COLORS = {
    "easy": "#2ECC71",
    "steady": "#27AE60",
    "threshold": "#F39C12",
    "interval": "#E67E22",
    "speed": "#E74C3C",
    "long": "#3498DB",
}


def zones_table(result: PaceResult) -> pd.DataFrame:
    """Zone bands as a display table, fastest bound first in each range."""
    return pd.DataFrame({
        "Zone": [z.name.capitalize() for z in result.zones],
        "Pace (/km)": [f"{z.min.removesuffix('/km')} – {z.max}" for z in result.zones],
        "Pace (/mi)": [f"{z.min_mi.removesuffix('/mi')} – {z.max_mi}" for z in result.zones],
        "Purpose": [config.ZONE_DESCRIPTIONS.get(z.name, "") for z in result.zones],
    })


def plot_pace_zones(result: PaceResult):
    """
    Horizontal band chart of every zone in min/km.

    Faster paces are drawn on the right, so the x axis is inverted.

    Returns:
        matplotlib figure
    """
    names = [z.name for z in result.zones]
    lows = np.array([z.min_s_per_km for z in result.zones]) / config.SECONDS_PER_MINUTE
    highs = np.array([z.max_s_per_km for z in result.zones]) / config.SECONDS_PER_MINUTE
    y = np.arange(len(names))

    fig, ax = plt.subplots(figsize=(8, 3.5))
    ax.barh(y, highs - lows, left=lows, height=0.6,
            color=[ZONE_COLORS.get(n, "#95A5A6") for n in names], alpha=0.85)
    ax.axvline(result.threshold.s_per_km / config.SECONDS_PER_MINUTE,
               color="black", linestyle="--", linewidth=1, label=f"Threshold {result.threshold.per_km}")

    ax.set_yticks(y)
    ax.set_yticklabels([n.capitalize() for n in names])
    ax.invert_xaxis()
    ax.set_xlabel("Pace (min/km)")
    ax.grid(axis="x", alpha=0.3)
    ax.legend(loc="lower left", fontsize=8)
    fig.tight_layout()
    return fig


def display_pace_zones(result: PaceResult):
    """Renders threshold metrics, the zone table and chart for one result."""
    col1, col2, col3 = st.columns(3)
    col1.metric("Threshold pace", result.threshold.per_km)
    col2.metric("Threshold pace (mile)", result.threshold.per_mile)
    col3.metric("Reference", f"{result.input.event.upper()} in {format_duration(result.input.time_s)}")

    st.dataframe(zones_table(result), use_container_width=True, hide_index=True)

    fig = plot_pace_zones(result)
    st.pyplot(fig)
    plt.close(fig)

    st.caption(f"ℹ️ {result.notes}")


def display_stats_cards(stats: DashboardStats):
    """Four headline metrics for the dashboard."""
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total runs", stats.total_runs)
    col2.metric("Total distance", f"{stats.total_distance_km:.1f} km")
    avg = format_duration(stats.average_pace_s_per_km) if stats.average_pace_s_per_km else "--:--"
    col3.metric("Average pace", f"{avg} /km")
    col4.metric("Weekly goal", f"{stats.weekly_goal_km:.0f} km",
                delta=f"{stats.week_distance_km:.1f} km this week", delta_color="off")
    st.progress(min(1.0, stats.weekly_goal_progress))


def display_recent_activities(activities):
    st.subheader("Recent activities")
    table = recent_activities_table(activities)
    if table.empty:
        st.info("No runs yet. Connect Strava and sync to see your activities.")
        return
    st.dataframe(table, use_container_width=True, hide_index=True)


def display_training_plan(plan: TrainingPlan):
    """Renders a generated plan; missing fields are skipped."""
    if plan.message:
        st.success(plan.message)
    if plan.weekly_goal is not None:
        st.metric("Suggested weekly goal", f"{plan.weekly_goal:.0f} km")
    if plan.plan:
        st.markdown(plan.plan)
    else:
        st.warning("The coach did not return a plan. Try again.")
