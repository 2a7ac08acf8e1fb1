"""
Data persistence functions for credentials, the runner profile, synced activities and the last plan
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from loguru import logger
from models import Profile, TrainingPlan
import config


def load_saved_app_creds(app_creds_path: str = config.APP_CREDS_PATH) -> Dict[str, str]:
    try:
        with open(app_creds_path, "r") as f:
            return json.load(f)
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as e:
        logger.warning(f"[PERSISTENCE] Ignoring unreadable credentials file {app_creds_path}: {e}")
        return {}

def save_app_creds(client_id: str, client_secret: str, data_dir: str = config.DATA_DIR, app_creds_path: str = config.APP_CREDS_PATH):
    os.makedirs(data_dir, exist_ok=True)
    with open(app_creds_path, "w") as f:
        json.dump({"client_id": str(client_id), "client_secret": str(client_secret)}, f)

def forget_app_creds(app_creds_path: str = config.APP_CREDS_PATH):
    try:
        os.remove(app_creds_path)
    except FileNotFoundError:
        pass

def resolve_app_creds(app_creds_path: str = config.APP_CREDS_PATH) -> Tuple[str, str]:
    """
    Strava client id/secret: saved file first, then environment variables.
    """
    saved = load_saved_app_creds(app_creds_path)
    client_id = saved.get("client_id") or os.getenv(config.STRAVA_CLIENT_ID_ENV, "")
    client_secret = saved.get("client_secret") or os.getenv(config.STRAVA_CLIENT_SECRET_ENV, "")
    return client_id, client_secret


def load_profile(profile_path: str = config.PROFILE_PATH) -> Profile:
    """
    Load the runner profile from disk.

    Returns:
        The saved Profile, or a default beginner profile if none is stored
    """
    path = Path(profile_path)
    if not path.exists():
        return Profile()
    try:
        with open(path, "r") as f:
            return Profile.from_dict(json.load(f))
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"[PERSISTENCE] Could not read profile {profile_path}, using defaults: {e}")
        return Profile()


def save_profile(profile: Profile, profile_path: str = config.PROFILE_PATH):
    path = Path(profile_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(profile.to_dict(), f)
    logger.info(f"[PERSISTENCE] Saved profile to {profile_path}")


def load_activities(activities_path: str = config.ACTIVITIES_PATH) -> List[Dict[str, Any]]:
    """Last synced Strava activities, or an empty list if none are stored."""
    path = Path(activities_path)
    if not path.exists():
        return []
    try:
        with open(path, "r") as f:
            activities = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"[PERSISTENCE] Could not read activities {activities_path}: {e}")
        return []
    if not isinstance(activities, list):
        logger.warning(f"[PERSISTENCE] Ignoring malformed activities file {activities_path}")
        return []
    return [a for a in activities if isinstance(a, dict)]


def save_activities(activities: List[Dict[str, Any]], activities_path: str = config.ACTIVITIES_PATH):
    path = Path(activities_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(activities, f)
    logger.info(f"[PERSISTENCE] Saved {len(activities)} activities to {activities_path}")


def load_training_plan(plan_path: str = config.TRAINING_PLAN_PATH) -> Optional[TrainingPlan]:
    path = Path(plan_path)
    if not path.exists():
        return None
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"[PERSISTENCE] Could not read training plan {plan_path}: {e}")
        return None
    if not isinstance(data, dict):
        logger.warning(f"[PERSISTENCE] Ignoring malformed training plan file {plan_path}")
        return None
    return TrainingPlan.from_dict(data)


def save_training_plan(plan: TrainingPlan, plan_path: str = config.TRAINING_PLAN_PATH):
    path = Path(plan_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(plan.to_dict(), f)
    logger.info(f"[PERSISTENCE] Saved training plan to {plan_path}")
