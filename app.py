import streamlit as st
from datetime import date, timedelta
from loguru import logger

# Local imports
from utils.strava import (
    build_auth_url, connect_with_code, current_tokens, list_activities,
    athlete_id, disconnect, StravaError,
)
from utils.persistence import (
    load_saved_app_creds, save_app_creds, forget_app_creds, resolve_app_creds,
    load_profile, save_profile, load_activities, save_activities,
    load_training_plan, save_training_plan,
)
from utils.pace_zones import compute_training_paces, PaceInputError
from utils.plan_generator import generate_training_plan, PlanGenerationError
from utils.training_stats import compute_dashboard_stats
from utils.display import (
    display_stats_cards, display_recent_activities, display_pace_zones, display_training_plan,
)
from models import PlanRequest, Profile
import config

EVENT_LABELS = {
    "mile": "Mile",
    "5k": "5K",
    "10k": "10K",
    "half": "Half marathon",
    "marathon": "Marathon",
}

# -- UI helper functions --

def handle_oauth_callback():
    """Handle OAuth callback from Strava. The code is single-use, so it always leaves the URL."""
    qs = st.query_params
    if "code" not in qs:
        return

    try:
        code = qs["code"]
        client_id, client_secret = resolve_app_creds(config.APP_CREDS_PATH)
        if not (client_id and client_secret):
            st.error("Save your Strava client ID and secret before connecting.")
            return

        tokens, error = connect_with_code(client_id, client_secret, code)
        if error:
            st.error(f"OAuth error: {error}")
            return

        profile = st.session_state.profile
        st.session_state.profile = Profile(
            display_name=profile.display_name,
            fitness_level=profile.fitness_level,
            weekly_goal_km=profile.weekly_goal_km,
            strava_athlete_id=athlete_id(tokens),
        )
        save_profile(st.session_state.profile, config.PROFILE_PATH)
        st.success("Strava connected ✅")
    finally:
        st.query_params.clear()


def sync_activities_ui(tokens):
    try:
        st.session_state.activities = list_activities(tokens["access_token"])
        save_activities(st.session_state.activities, config.ACTIVITIES_PATH)
        st.success(f"Fetched {len(st.session_state.activities)} activities from Strava.")
    except StravaError as e:
        st.error(f"Failed to sync activities: {e}")
    except Exception as e:
        logger.exception("[APP] Activity sync failed")
        st.error(f"Failed to sync activities: {e}")


def pace_zones_ui():
    """Personal best form -> training paces."""
    with st.form("pace_form"):
        col1, col2 = st.columns(2)
        with col1:
            event = st.selectbox("Race distance", list(EVENT_LABELS), format_func=EVENT_LABELS.get, index=2)
        with col2:
            time_hms = st.text_input("Personal best (h:mm:ss or m:ss)", "50:00")
        submitted = st.form_submit_button("Calculate paces")

    if submitted:
        try:
            st.session_state.pace_result = compute_training_paces(event, time_hms)
        except PaceInputError as e:
            st.session_state.pace_result = None
            st.error(str(e))

    if st.session_state.pace_result is not None:
        display_pace_zones(st.session_state.pace_result)


def training_plan_ui():
    """Race goal form -> AI generated plan."""
    if not st.session_state.activities:
        st.info("Sync some Strava activities first so the coach has data to work with.")

    with st.form("plan_form"):
        col1, col2 = st.columns(2)
        with col1:
            race_type = st.selectbox("Race", list(EVENT_LABELS), format_func=EVENT_LABELS.get, index=3)
            goal_time = st.text_input("Goal time", "1:45:00")
        with col2:
            race_date = st.date_input("Race date", value=date.today() + timedelta(weeks=12))
            runs_per_week = st.slider("Runs per week", min_value=2, max_value=7, value=4)
        notes = st.text_area("Anything else the coach should know?", "")
        submitted = st.form_submit_button("Generate training plan")

    if submitted:
        request = PlanRequest(
            race_type=EVENT_LABELS[race_type],
            goal_time=goal_time,
            race_date=race_date.isoformat(),
            runs_per_week=runs_per_week,
            notes=notes,
        )
        with st.spinner("Asking your AI coach..."):
            try:
                st.session_state.training_plan = generate_training_plan(
                    request, st.session_state.activities, paces=st.session_state.pace_result
                )
                save_training_plan(st.session_state.training_plan, config.TRAINING_PLAN_PATH)
            except PlanGenerationError as e:
                st.error(str(e))
            except Exception as e:
                logger.exception("[APP] Plan generation failed")
                st.error(f"Could not generate a plan: {e}")

    if st.session_state.training_plan is not None:
        display_training_plan(st.session_state.training_plan)


# --- Main App ---
st.set_page_config(page_title="AI Running Coach", layout="wide")
st.title("🏃 AI Running Coach")

# Initialize session state
if 'profile' not in st.session_state:
    st.session_state.profile = load_profile(config.PROFILE_PATH)
if 'activities' not in st.session_state:
    st.session_state.activities = load_activities(config.ACTIVITIES_PATH)
if 'pace_result' not in st.session_state:
    st.session_state.pace_result = None
if 'training_plan' not in st.session_state:
    st.session_state.training_plan = load_training_plan(config.TRAINING_PLAN_PATH)

# Handle OAuth callback
handle_oauth_callback()

tab_dash, tab_paces, tab_plan = st.tabs(["📊 Dashboard", "⏱️ Pace zones", "🗓️ Training plan"])

# --- Sidebar ---
with st.sidebar:
    st.header("1. Strava Connection")
    saved = load_saved_app_creds(config.APP_CREDS_PATH)
    default_id, default_secret = resolve_app_creds(config.APP_CREDS_PATH)
    client_id = st.text_input("Client ID", value=default_id)
    client_secret = st.text_input("Client Secret", type="password", value=default_secret)

    tokens, token_error = current_tokens(client_id, client_secret)
    if token_error:
        st.warning(token_error)

    col1, col2, col3 = st.columns(3)
    with col1:
        if tokens:
            st.success("Connected ✅")
        elif client_id and client_secret:
            st.link_button("Connect", url=build_auth_url(client_id, config.REDIRECT_URI))

    with col2:
        if st.button("Save creds", disabled=not (client_id and client_secret)):
            save_app_creds(client_id, client_secret, config.DATA_DIR, config.APP_CREDS_PATH)
            st.success("Saved!")

    with col3:
        if st.button("Forget creds", disabled=not saved):
            forget_app_creds(config.APP_CREDS_PATH)
            disconnect()
            st.success("Forgotten!")
            st.rerun()

    if st.button("Sync latest activities", disabled=not tokens):
        with st.spinner("Fetching activities..."):
            sync_activities_ui(tokens)

    st.header("2. Profile")
    profile = st.session_state.profile
    display_name = st.text_input("Display name", value=profile.display_name or "")
    fitness_level = st.selectbox(
        "Fitness level", config.FITNESS_LEVELS,
        index=config.FITNESS_LEVELS.index(profile.fitness_level) if profile.fitness_level in config.FITNESS_LEVELS else 0,
    )
    weekly_goal_km = st.number_input("Weekly goal (km)", min_value=0.0, value=float(profile.weekly_goal_km), step=5.0)
    if st.button("Save profile"):
        st.session_state.profile = Profile(
            display_name=display_name or None,
            fitness_level=fitness_level,
            weekly_goal_km=weekly_goal_km,
            strava_athlete_id=profile.strava_athlete_id,
        )
        save_profile(st.session_state.profile, config.PROFILE_PATH)
        st.success("Profile saved!")

# --- Dashboard Tab ---
with tab_dash:
    name = st.session_state.profile.display_name
    if name:
        st.caption(f"Welcome, {name}")
    stats = compute_dashboard_stats(st.session_state.activities, st.session_state.profile.weekly_goal_km)
    display_stats_cards(stats)
    st.divider()
    display_recent_activities(st.session_state.activities)

# --- Pace Zones Tab ---
with tab_paces:
    st.subheader("Training paces from your personal best")
    pace_zones_ui()

# --- Training Plan Tab ---
with tab_plan:
    st.subheader("AI training plan")
    training_plan_ui()
