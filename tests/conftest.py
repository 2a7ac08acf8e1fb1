import matplotlib

matplotlib.use("Agg")

import pytest

import config


@pytest.fixture
def token_path(tmp_path, monkeypatch) -> str:
    """Point the Strava token store at a temporary file."""
    path = tmp_path / "data" / "strava_tokens.json"
    monkeypatch.setattr(config, "TOKENS_PATH", str(path))
    return str(path)


@pytest.fixture
def sample_activities() -> list[dict]:
    """Strava activities: two runs, a ride and a run without distance."""
    return [
        {
            "id": 1,
            "name": "Tempo Tuesday",
            "sport_type": "Run",
            "start_date": "2024-01-16T07:00:00Z",
            "distance": 10000.0,
            "moving_time": 3000,
        },
        {
            "id": 2,
            "name": "Easy shakeout",
            "type": "Run",
            "start_date": "2024-01-10T07:00:00Z",
            "distance": 5000.0,
            "moving_time": 1800,
        },
        {
            "id": 3,
            "name": "Commute",
            "sport_type": "Ride",
            "start_date": "2024-01-16T17:00:00Z",
            "distance": 20000.0,
            "moving_time": 2400,
        },
        {
            "id": 4,
            "name": "Treadmill (no distance)",
            "sport_type": "Run",
            "start_date": "2024-01-15T07:00:00Z",
            "distance": 0.0,
            "moving_time": 1200,
        },
    ]
