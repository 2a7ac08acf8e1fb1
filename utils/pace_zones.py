"""
Training pace zones from a personal best.
Pure functions: parsing, Riegel projection, pace formatting and zone banding.
"""

import math
from typing import Tuple
from models import PaceResult, PaceZone, ReferencePerformance, ThresholdPace
import config


class PaceInputError(ValueError):
    """Base class for rejected pace calculator input."""


class InvalidFormatError(PaceInputError):
    """Finish time is not 1-3 colon-separated non-negative integers."""


class UnknownEventError(PaceInputError):
    """Event tag is not one of the recognized race distances."""


def parse_hms(text: str) -> int:
    """
    Parse a finish time into total seconds.

    Args:
        text: "h:mm:ss", "m:ss" or a bare number of seconds

    Returns:
        Total seconds

    Raises:
        InvalidFormatError: wrong number of fields or a non-integer field

    Example:
        parse_hms("1:02:03") -> 3723
        parse_hms("2:03") -> 123
        parse_hms("45") -> 45
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidFormatError(f"Invalid time format: {text!r}")

    fields = [f.strip() for f in text.strip().split(":")]
    if len(fields) > 3:
        raise InvalidFormatError(f"Invalid time format: {text!r} (expected h:mm:ss, m:ss or seconds)")
    if not all(f.isascii() and f.isdigit() for f in fields):
        raise InvalidFormatError(f"Invalid time format: {text!r} (fields must be whole numbers)")

    total = 0
    for value in fields:
        total = total * config.SECONDS_PER_MINUTE + int(value)
    return total


def riegel_project_time(t1: float, d1: float, d2: float, exponent: float = config.DEFAULT_RIEGEL_K) -> float:
    """
    Project a race time to another distance with Riegel's formula.

        t2 = t1 * (d2 / d1) ** exponent

    Args:
        t1: Known time (seconds)
        d1: Known distance (meters)
        d2: Target distance (meters)
        exponent: Fatigue exponent (default 1.06)

    Returns:
        Projected time at d2 (seconds)
    """
    if t1 <= 0 or d1 <= 0 or d2 <= 0:
        raise ValueError("Riegel projection needs positive time and distances")
    return t1 * (d2 / d1) ** exponent


def km_pace_to_mile_pace(s_per_km: float) -> float:
    """Seconds per km -> seconds per mile (a mile is longer, so the number grows)."""
    return s_per_km * config.MILES_TO_KM


def format_pace(seconds: float, unit: str) -> str:
    """
    Format a pace as "M:SS/unit".

    Seconds are rounded half-up before splitting, so 359.6 becomes "6:00", never "5:60".
    """
    if seconds < 0:
        raise ValueError("Pace must be non-negative")
    total = int(math.floor(seconds + 0.5))
    minutes, secs = divmod(total, config.SECONDS_PER_MINUTE)
    return f"{minutes}:{secs:02d}/{unit}"


def pace_str_per_km(s_per_km: float) -> str:
    return format_pace(s_per_km, "km")


def pace_str_per_mile(s_per_mile: float) -> str:
    return format_pace(s_per_mile, "mi")


def resolve_event(event: str) -> Tuple[str, float]:
    """Normalize an event tag and look up its distance in meters."""
    tag = str(event).strip().lower()
    tag = config.EVENT_ALIASES.get(tag, tag)
    if tag not in config.DISTANCES_METERS:
        valid = ", ".join(config.DISTANCES_METERS)
        raise UnknownEventError(f"Unknown event: {event!r}. Valid events: {valid}")
    return tag, config.DISTANCES_METERS[tag]


def _build_zone(name: str, threshold_s_per_km: float, multipliers: Tuple[float, float]) -> PaceZone:
    min_mul, max_mul = multipliers
    min_s = threshold_s_per_km * min_mul
    max_s = threshold_s_per_km * max_mul
    return PaceZone(
        name=name,
        min_s_per_km=min_s,
        max_s_per_km=max_s,
        min=pace_str_per_km(min_s),
        max=pace_str_per_km(max_s),
        min_mi=pace_str_per_mile(km_pace_to_mile_pace(min_s)),
        max_mi=pace_str_per_mile(km_pace_to_mile_pace(max_s)),
    )


def compute_training_paces(event: str, time_hms: str, exponent: float = config.DEFAULT_RIEGEL_K) -> PaceResult:
    """
    Derive threshold pace and all training zones from a personal best.

    Non-10K performances are projected to 10K with Riegel's formula first;
    a 10K time is used as-is. Threshold pace is the 10K time over 10 km and
    every zone is a fixed multiple of it (see config.ZONE_MULTIPLIERS).

    Args:
        event: Race tag ("mile", "5k", "10k", "half", "marathon")
        time_hms: Finish time, e.g. "6:07" or "1:32:10"
        exponent: Riegel exponent used for the projection

    Returns:
        PaceResult with the input echo, threshold pace, zones and a provenance note

    Raises:
        InvalidFormatError: malformed, zero or out-of-range finish time
        UnknownEventError: unrecognized event tag
        PaceInputError: exponent is not a finite positive number

    Example:
        compute_training_paces("10k", "40:00").threshold.per_km -> "4:00/km"
    """
    if not math.isfinite(exponent) or exponent <= 0:
        raise PaceInputError(f"Riegel exponent must be a finite positive number, got {exponent!r}")
    time_s = parse_hms(time_hms)
    if time_s <= 0:
        raise InvalidFormatError(f"Finish time must be positive: {time_hms!r}")
    tag, dist_m = resolve_event(event)

    try:
        if tag == config.THRESHOLD_EVENT:
            threshold_time_s = float(time_s)
            notes = "10K PB used directly as threshold pace."
        else:
            threshold_time_s = riegel_project_time(float(time_s), dist_m, config.THRESHOLD_DISTANCE_M, exponent)
            notes = f"PB projected to 10K using Riegel's formula (exponent {exponent:.2f})."
    except OverflowError:
        raise InvalidFormatError(f"Finish time or exponent out of range: {time_hms!r}")

    threshold_s_per_km = threshold_time_s / (config.THRESHOLD_DISTANCE_M / config.METERS_PER_KM)

    # Slowest value formatted is the easy/long upper bound per mile
    slowest_mul = max(hi for _, hi in config.ZONE_MULTIPLIERS.values())
    if not math.isfinite(km_pace_to_mile_pace(threshold_s_per_km * slowest_mul)):
        raise InvalidFormatError(f"Finish time out of range: {time_hms!r}")

    zones = tuple(
        _build_zone(name, threshold_s_per_km, multipliers)
        for name, multipliers in config.ZONE_MULTIPLIERS.items()
    )

    return PaceResult(
        input=ReferencePerformance(event=tag, finish_time=time_hms, distance_m=dist_m, time_s=time_s),
        threshold=ThresholdPace(
            s_per_km=threshold_s_per_km,
            per_km=pace_str_per_km(threshold_s_per_km),
            per_mile=pace_str_per_mile(km_pace_to_mile_pace(threshold_s_per_km)),
        ),
        zones=zones,
        notes=notes,
    )
