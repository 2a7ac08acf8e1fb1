"""Tests for the pace-zone calculator.

Covers parsing, Riegel projection, pace formatting (including the 60-second
carry) and zone derivation for direct and projected reference performances.
"""

import pytest

import config
from utils.pace_zones import (
    InvalidFormatError,
    PaceInputError,
    UnknownEventError,
    compute_training_paces,
    format_pace,
    km_pace_to_mile_pace,
    pace_str_per_km,
    pace_str_per_mile,
    parse_hms,
    resolve_event,
    riegel_project_time,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1:02:03", 3723),
        ("2:03", 123),
        ("45", 45),
        (" 40:00 ", 2400),
        ("0:00:07", 7),
    ],
)
def test_parse_hms_valid(text: str, expected: int) -> None:
    assert parse_hms(text) == expected


@pytest.mark.parametrize("text", ["1:2:3:4", "", "   ", "a:bc", "5:xx", "1.5", "-5", "1::3", "6:07:"])
def test_parse_hms_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidFormatError):
        parse_hms(text)


def test_invalid_format_is_value_error() -> None:
    """Callers catching ValueError still see bad input."""
    with pytest.raises(ValueError):
        parse_hms("1:2:3:4")


def test_riegel_identity_exponent() -> None:
    assert riegel_project_time(1000, 5000, 10000, exponent=1.0) == pytest.approx(2000)


def test_riegel_default_exponent() -> None:
    assert riegel_project_time(1000, 5000, 10000) == pytest.approx(1000 * 2 ** 1.06)


def test_riegel_same_distance_returns_same_time() -> None:
    assert riegel_project_time(1234, 10000, 10000) == pytest.approx(1234)


@pytest.mark.parametrize(("t1", "d1", "d2"), [(0, 5000, 10000), (1000, 0, 10000), (1000, 5000, -1)])
def test_riegel_requires_positive_inputs(t1: float, d1: float, d2: float) -> None:
    with pytest.raises(ValueError):
        riegel_project_time(t1, d1, d2)


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (240, "4:00/km"),
        (307.2, "5:07/km"),
        (359.4, "5:59/km"),
        (359.5, "6:00/km"),
        (359.6, "6:00/km"),
        (0, "0:00/km"),
        (65, "1:05/km"),
    ],
)
def test_format_pace_per_km(seconds: float, expected: str) -> None:
    assert pace_str_per_km(seconds) == expected


def test_format_pace_never_shows_sixty_seconds() -> None:
    for tenths in range(0, 6000):
        assert ":60/" not in format_pace(tenths / 10, "km")


def test_format_pace_rejects_negative() -> None:
    with pytest.raises(ValueError):
        format_pace(-1, "km")


def test_mile_pace_is_slower_number_than_km_pace() -> None:
    assert km_pace_to_mile_pace(240) == pytest.approx(240 * 1.60934)
    assert km_pace_to_mile_pace(240) > 240
    assert pace_str_per_mile(km_pace_to_mile_pace(240)) == "6:26/mi"


def test_resolve_event_aliases_and_case() -> None:
    assert resolve_event("half-marathon") == ("half", 21097.5)
    assert resolve_event(" 5K ") == ("5k", 5000.0)


def test_10k_is_used_directly() -> None:
    result = compute_training_paces("10k", "40:00")

    assert result.threshold.s_per_km == pytest.approx(240)
    assert result.threshold.per_km == "4:00/km"
    assert result.threshold.per_mile == "6:26/mi"
    assert result.notes == "10K PB used directly as threshold pace."
    assert not result.projected
    assert result.input.time_s == 2400
    assert result.input.distance_m == 10000.0


def test_10k_zone_bounds() -> None:
    result = compute_training_paces("10k", "40:00")

    easy = result.zone("easy")
    assert easy.min_s_per_km == pytest.approx(276)
    assert easy.max_s_per_km == pytest.approx(312)
    assert (easy.min, easy.max) == ("4:36/km", "5:12/km")

    speed = result.zone("speed")
    assert (speed.min, speed.max) == ("3:12/km", "3:31/km")

    threshold = result.zone("threshold")
    assert (threshold.min, threshold.max) == ("3:55/km", "4:07/km")


def test_mile_is_projected_to_10k() -> None:
    result = compute_training_paces("mile", "6:07")

    expected_10k = 367 * (10000 / 1609.34) ** 1.06
    raw_mile_pace = 367 / 1.60934

    assert result.threshold.s_per_km == pytest.approx(expected_10k / 10)
    assert result.threshold.s_per_km > raw_mile_pace
    assert result.projected
    assert result.notes == "PB projected to 10K using Riegel's formula (exponent 1.06)."


def test_marathon_projects_faster_threshold() -> None:
    result = compute_training_paces("marathon", "3:00:00")
    marathon_pace = 3 * 3600 / 42.195

    assert result.threshold.s_per_km < marathon_pace


def test_custom_exponent_is_used_and_noted() -> None:
    result = compute_training_paces("5k", "20:00", exponent=1.08)

    assert result.threshold.s_per_km == pytest.approx(1200 * 2 ** 1.08 / 10)
    assert "exponent 1.08" in result.notes


def test_zones_in_display_order() -> None:
    result = compute_training_paces("5k", "25:00")
    assert [z.name for z in result.zones] == list(config.ZONE_MULTIPLIERS)


@pytest.mark.parametrize(
    ("event", "time_hms"),
    [("mile", "6:07"), ("5k", "18:30"), ("10k", "55:12"), ("half", "1:45:00"), ("marathon", "4:30:00")],
)
def test_zone_ordering_holds_for_any_input(event: str, time_hms: str) -> None:
    result = compute_training_paces(event, time_hms)
    zones = {z.name: z for z in result.zones}

    for z in result.zones:
        assert z.min_s_per_km < z.max_s_per_km

    def mid(name: str) -> float:
        return (zones[name].min_s_per_km + zones[name].max_s_per_km) / 2

    assert mid("speed") < mid("interval") < mid("threshold") < mid("steady") < mid("long") < mid("easy")
    assert zones["speed"].max_s_per_km < zones["easy"].min_s_per_km


def test_unknown_event() -> None:
    with pytest.raises(UnknownEventError) as exc:
        compute_training_paces("marathon-ultra", "3:00:00")
    assert "marathon" in str(exc.value)


def test_malformed_time_propagates() -> None:
    with pytest.raises(InvalidFormatError):
        compute_training_paces("10k", "1:2:3:4")


def test_zero_time_rejected() -> None:
    with pytest.raises(InvalidFormatError):
        compute_training_paces("5k", "0:00")


def test_errors_share_base_class() -> None:
    assert issubclass(InvalidFormatError, PaceInputError)
    assert issubclass(UnknownEventError, PaceInputError)


def test_repeated_calls_are_identical() -> None:
    first = compute_training_paces("half", "1:32:10")
    second = compute_training_paces("half", "1:32:10")

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_to_dict_shape() -> None:
    data = compute_training_paces("half-marathon", "1:45:00").to_dict()

    assert set(data) == {"input", "threshold", "zones", "notes"}
    assert data["input"] == {"event": "half", "timeHMS": "1:45:00", "dist_m": 21097.5, "time_s": 6300}
    assert set(data["zones"]["easy"]) == {"min_s_per_km", "max_s_per_km", "min", "max", "min_mi", "max_mi"}


@pytest.mark.parametrize("event", ["10k", "5k"])
def test_absurdly_long_time_is_rejected(event: str) -> None:
    """Times too large for a float are input errors, not crashes."""
    with pytest.raises(InvalidFormatError):
        compute_training_paces(event, "9" * 400)


def test_projection_overflowing_to_infinity_is_rejected() -> None:
    with pytest.raises(InvalidFormatError):
        compute_training_paces("mile", "15" + "0" * 307)


@pytest.mark.parametrize("exponent", [float("nan"), float("inf"), 0.0, -1.06])
def test_invalid_exponent_rejected(exponent: float) -> None:
    with pytest.raises(PaceInputError):
        compute_training_paces("5k", "20:00", exponent=exponent)


def test_exponent_overflow_is_rejected() -> None:
    with pytest.raises(PaceInputError):
        compute_training_paces("mile", "6:07", exponent=1000.0)
