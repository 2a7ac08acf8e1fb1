"""
Configuration file for AI Running Coach
All tunable parameters in one place with clear documentation
"""

import os
from types import MappingProxyType

# ========================================
# FILE PATHS & DIRECTORIES
# ========================================
DATA_DIR = "data"
APP_CREDS_PATH = f"{DATA_DIR}/strava_app.json"  # Strava app credentials
TOKENS_PATH = f"{DATA_DIR}/strava_tokens.json"  # OAuth tokens
PROFILE_PATH = f"{DATA_DIR}/profile.json"  # Runner profile
ACTIVITIES_PATH = f"{DATA_DIR}/activities.json"  # Last Strava sync
TRAINING_PLAN_PATH = f"{DATA_DIR}/training_plan.json"  # Last generated plan

# ========================================
# STRAVA API CONFIGURATION
# ========================================
STRAVA_AUTH_URL = "https://www.strava.com/oauth/authorize"
STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"
API_BASE = "https://www.strava.com/api/v3"
STRAVA_SCOPE = "read,activity:read_all"
REDIRECT_URI = "http://localhost:8501"  # Default Streamlit address
DEFAULT_TIMEOUT = 30  # API request timeout in seconds
TOKEN_EXPIRY_MARGIN_S = 60  # Refresh tokens this long before they expire
ACTIVITIES_PER_PAGE = 30  # Activities fetched per sync page
MAX_ACTIVITY_PAGES = 10  # Hard stop when paging through activities
RUN_SPORT_TYPES = ("Run", "TrailRun", "VirtualRun")

# Environment fallbacks for the app credentials
STRAVA_CLIENT_ID_ENV = "STRAVA_CLIENT_ID"
STRAVA_CLIENT_SECRET_ENV = "STRAVA_CLIENT_SECRET"

# ========================================
# LANGUAGE MODEL (TRAINING PLANS)
# ========================================
OPENAI_API_KEY_ENV = "OPENAI_API_KEY"
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_TEMPERATURE = 0.4
MAX_PROMPT_ACTIVITIES = 20  # Most recent activities included in the prompt

# ========================================
# PACE ZONE MODEL
# ========================================

# Canonical race distances (meters)
DISTANCES_METERS = MappingProxyType({
    "mile": 1609.34,
    "5k": 5000.0,
    "10k": 10000.0,
    "half": 21097.5,
    "marathon": 42195.0,
})

# Alternative spellings accepted for event tags
EVENT_ALIASES = MappingProxyType({
    "half-marathon": "half",
})

# Threshold anchor: every zone is derived from 10K race pace
THRESHOLD_EVENT = "10k"
THRESHOLD_DISTANCE_M = DISTANCES_METERS[THRESHOLD_EVENT]

# Riegel exponent (how time grows with distance)
# 1.06 is standard for road races
DEFAULT_RIEGEL_K = 1.06

# Zone bounds as multiples of threshold pace (seconds per km)
# Multipliers > 1.00 = slower than threshold, < 1.00 = faster
# Order matters: this is the order zones are displayed in
ZONE_MULTIPLIERS = MappingProxyType({
    "easy": (1.15, 1.30),
    "steady": (1.08, 1.15),
    "threshold": (0.98, 1.03),
    "interval": (0.90, 0.95),
    "speed": (0.80, 0.88),
    "long": (1.10, 1.25),
})

ZONE_DESCRIPTIONS = MappingProxyType({
    "easy": "Recovery and aerobic base runs",
    "steady": "Moderate aerobic running",
    "threshold": "Comfortably hard tempo efforts",
    "interval": "VO2max repeats",
    "speed": "Short, fast repetitions",
    "long": "Long run pace",
})

# ========================================
# PROFILE DEFAULTS
# ========================================
DEFAULT_FITNESS_LEVEL = "beginner"
FITNESS_LEVELS = ("beginner", "intermediate", "advanced")
DEFAULT_WEEKLY_GOAL_KM = 20.0

# ========================================
# UNIT CONVERSIONS
# ========================================
MILES_TO_KM = 1.60934
METERS_PER_KM = 1000.0
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
DAYS_PER_WEEK = 7
