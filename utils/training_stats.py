"""
Dashboard statistics over Strava activities.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd
from models import DashboardStats
from utils.strava import is_run
import config

ACTIVITY_COLUMNS = ["id", "name", "start_date", "distance_km", "moving_time_s", "pace_s_per_km"]


def format_duration(seconds: float) -> str:
    """Formats seconds as H:MM:SS, or M:SS under an hour."""
    sec = int(round(float(seconds)))
    h, rem = divmod(sec, config.SECONDS_PER_HOUR)
    m, s = divmod(rem, config.SECONDS_PER_MINUTE)
    if h:
        return f"{h:d}:{m:02d}:{s:02d}"
    return f"{m:d}:{s:02d}"


def activities_to_frame(activities: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Convert raw Strava activities to a tidy DataFrame of runs.

    Non-run activities and activities without distance are dropped.

    Returns:
        DataFrame with columns: id, name, start_date (UTC), distance_km,
        moving_time_s, pace_s_per_km; newest first
    """
    rows = []
    for a in activities:
        if not is_run(a):
            continue
        distance_m = float(a.get("distance") or 0.0)
        if distance_m <= 0:
            continue
        moving_time_s = float(a.get("moving_time") or a.get("elapsed_time") or 0.0)
        rows.append({
            "id": a.get("id"),
            "name": a.get("name") or "Run",
            "start_date": a.get("start_date"),
            "distance_km": distance_m / config.METERS_PER_KM,
            "moving_time_s": moving_time_s,
        })

    if not rows:
        return pd.DataFrame(columns=ACTIVITY_COLUMNS)

    df = pd.DataFrame(rows)
    df["start_date"] = pd.to_datetime(df["start_date"], utc=True, errors="coerce")
    df["pace_s_per_km"] = np.where(df["moving_time_s"] > 0, df["moving_time_s"] / df["distance_km"], np.nan)
    return df.sort_values("start_date", ascending=False, na_position="last").reset_index(drop=True)[ACTIVITY_COLUMNS]


def _week_start(day: date) -> datetime:
    # Monday = start of the week
    monday = day - timedelta(days=day.weekday())
    return datetime(monday.year, monday.month, monday.day, tzinfo=timezone.utc)


def compute_dashboard_stats(
        activities: List[Dict[str, Any]],
        weekly_goal_km: float,
        today: Optional[date] = None,
) -> DashboardStats:
    """
    Summarize runs for the dashboard cards.

    Average pace is the mean of per-run paces (not total time over total
    distance), so every run counts equally regardless of length.

    Args:
        activities: Raw Strava activities
        weekly_goal_km: Target weekly distance from the profile
        today: Reference day for the current week (defaults to today, UTC)

    Returns:
        DashboardStats
    """
    df = activities_to_frame(activities)
    if df.empty:
        return DashboardStats(weekly_goal_km=float(weekly_goal_km))

    today = today or datetime.now(timezone.utc).date()
    week_start = _week_start(today)
    week_end = week_start + timedelta(days=config.DAYS_PER_WEEK)
    in_week = (df["start_date"] >= week_start) & (df["start_date"] < week_end)
    week_km = float(df.loc[in_week, "distance_km"].sum())

    paces = df["pace_s_per_km"].dropna()
    avg_pace = float(paces.mean()) if not paces.empty else None
    progress = week_km / weekly_goal_km if weekly_goal_km > 0 else 0.0

    return DashboardStats(
        total_runs=int(len(df)),
        total_distance_km=float(df["distance_km"].sum()),
        average_pace_s_per_km=avg_pace,
        week_distance_km=week_km,
        weekly_goal_km=float(weekly_goal_km),
        weekly_goal_progress=progress,
    )


def recent_activities_table(activities: List[Dict[str, Any]], limit: int = 10) -> pd.DataFrame:
    """Latest runs formatted for display."""
    df = activities_to_frame(activities).head(limit)
    return pd.DataFrame({
        "Date": [d.strftime("%Y-%m-%d") if pd.notna(d) else "" for d in df["start_date"]],
        "Name": df["name"].tolist(),
        "Distance (km)": [round(x, 2) for x in df["distance_km"]],
        "Moving time": [format_duration(t) if t > 0 else "--:--" for t in df["moving_time_s"]],
        "Pace (/km)": [format_duration(p) if pd.notna(p) else "--:--" for p in df["pace_s_per_km"]],
    })
