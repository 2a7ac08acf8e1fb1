import os
import time
import json
import requests
from typing import Dict, Any, List, Tuple
from urllib.parse import urlencode
from loguru import logger
import config


class StravaError(RuntimeError):
    pass


class StravaAuthError(StravaError):
    """Strava rejected an authorization code or refresh token."""


class StravaRateLimitError(StravaError):
    pass


def _save_tokens(tokens: Dict[str, Any], path: str = None):
    path = path or config.TOKENS_PATH
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w") as f:
        json.dump(tokens, f)

def _load_tokens(path: str = None) -> Dict[str, Any] | None:
    path = path or config.TOKENS_PATH
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r") as f:
            tokens = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning(f"[STRAVA] Ignoring unreadable token file {path}: {e}")
        return None
    if not isinstance(tokens, dict):
        logger.warning(f"[STRAVA] Ignoring malformed token file {path}")
        return None
    return tokens

def build_auth_url(client_id: str, redirect_uri: str, scope: str = config.STRAVA_SCOPE, approval_prompt: str = "auto") -> str:
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "approval_prompt": approval_prompt,
        "scope": scope,
    }
    return f"{config.STRAVA_AUTH_URL}?{urlencode(params)}"

def _token_request(payload: Dict[str, Any]) -> Dict[str, Any]:
    r = requests.post(config.STRAVA_TOKEN_URL, data=payload, timeout=config.DEFAULT_TIMEOUT)
    try:
        data = r.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    # Strava reports bad codes as {"message": ..., "errors": [...]}
    if data.get("errors") or r.status_code in (400, 401, 403):
        errors = data.get("errors") or []
        detail = (errors[0].get("message") or errors[0].get("code")) if errors else None
        message = detail or data.get("message") or f"HTTP {r.status_code}"
        raise StravaAuthError(f"Strava token request failed: {message}")
    r.raise_for_status()

    data["obtained_at"] = int(time.time())
    return data

def exchange_code_for_token(client_id: str, client_secret: str, code: str) -> Dict[str, Any]:
    """
    Trade the OAuth callback code for access/refresh tokens and store them.

    Raises:
        StravaAuthError: if the code is missing or Strava rejects it
    """
    if not code:
        raise StravaAuthError("No authorization code provided")
    payload = {"client_id": client_id, "client_secret": client_secret, "code": code, "grant_type": "authorization_code"}
    tokens = _token_request(payload)
    tokens["client_id_used"] = str(client_id)
    _save_tokens(tokens)
    logger.info(f"[STRAVA] Connected athlete_id={athlete_id(tokens)}")
    return tokens

def _refresh_access_token(client_id: str, client_secret: str, refresh_token: str) -> Dict[str, Any]:
    payload = {"client_id": client_id, "client_secret": client_secret, "grant_type": "refresh_token", "refresh_token": refresh_token}
    tokens = _token_request(payload)
    logger.info("[STRAVA] Refreshed access token")
    return tokens

def _get_headers(access_token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {access_token}"}

def athlete_id(tokens: Dict[str, Any]) -> int | None:
    athlete = tokens.get("athlete") or {}
    return athlete.get("id")

def disconnect():
    try:
        os.remove(config.TOKENS_PATH)
        logger.info("[STRAVA] Disconnected, tokens removed")
    except FileNotFoundError:
        pass

def ensure_token(client_id: str, client_secret: str) -> Dict[str, Any] | None:
    tokens = _load_tokens()
    if not tokens:
        return None
    # If current client_id doesn't match the one that created the tokens, force reconnect
    if str(tokens.get("client_id_used", "")) != str(client_id):
        return None

    expires_at = tokens.get("expires_at", 0)
    if int(time.time()) < int(expires_at) - config.TOKEN_EXPIRY_MARGIN_S:
        return tokens

    try:
        refreshed = _refresh_access_token(client_id, client_secret, tokens.get("refresh_token", ""))
    except StravaAuthError as e:
        # Refresh rejected: drop tokens so the UI shows "Connect Strava" again
        logger.warning(f"[STRAVA] Token refresh rejected, disconnecting: {e}")
        disconnect()
        return None

    refreshed["client_id_used"] = str(client_id)
    refreshed.setdefault("athlete", tokens.get("athlete"))
    _save_tokens(refreshed)
    return refreshed

def list_activities(access_token: str, per_page: int = config.ACTIVITIES_PER_PAGE, max_pages: int = config.MAX_ACTIVITY_PAGES) -> List[Dict[str, Any]]:
    activities = []
    headers = _get_headers(access_token)
    params = {"per_page": min(per_page, 200)}
    for page in range(1, max_pages + 1):
        params["page"] = page
        r = requests.get(f"{config.API_BASE}/athlete/activities", headers=headers, params=params, timeout=config.DEFAULT_TIMEOUT)
        if r.status_code == 429:
            reset = int(r.headers.get("X-RateLimit-Reset", "0") or 0)
            wait = max(0, reset - int(time.time()))
            raise StravaRateLimitError(f"Strava rate limit hit. Try again in ~{wait} seconds.")
        r.raise_for_status()
        batch = r.json()
        if not batch:
            break
        activities.extend(batch)
        if len(batch) < params["per_page"]:
            break

    # De-duplicate by activity id (pages can shift while syncing)
    seen = set()
    dedup = []
    for a in activities:
        aid = a.get("id")
        if aid in seen:
            continue
        seen.add(aid)
        dedup.append(a)
    logger.info(f"[STRAVA] Fetched {len(dedup)} activities")
    return dedup

def is_run(a: Dict[str, Any]) -> bool:
    stype = a.get("sport_type") or a.get("type")
    return stype in config.RUN_SPORT_TYPES

def connect_with_code(client_id: str, client_secret: str, code: str) -> Tuple[Dict[str, Any] | None, str | None]:
    """
    Complete the OAuth callback without raising.

    Returns:
        (tokens, None) on success, (None, error message) on any Strava or network failure
    """
    try:
        return exchange_code_for_token(client_id, client_secret, code), None
    except StravaError as e:
        return None, str(e)
    except requests.RequestException as e:
        logger.warning(f"[STRAVA] Code exchange failed: {e}")
        return None, f"Could not reach Strava: {e}"

def current_tokens(client_id: str, client_secret: str) -> Tuple[Dict[str, Any] | None, str | None]:
    """
    ensure_token for the UI: network and server failures become an error message.
    """
    if not client_id:
        return None, None
    try:
        return ensure_token(client_id, client_secret), None
    except requests.RequestException as e:
        logger.warning(f"[STRAVA] Token check failed: {e}")
        return None, f"Could not reach Strava: {e}"
