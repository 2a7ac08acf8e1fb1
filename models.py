import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional, Tuple
import config


@dataclass(frozen=True)
class ReferencePerformance:
    """
    The runner's personal best used as the anchor for all training paces.
    """
    event: str
    finish_time: str
    distance_m: float
    time_s: int

    @property
    def pace_s_per_km(self) -> float:
        return self.time_s / (self.distance_m / config.METERS_PER_KM)


@dataclass(frozen=True)
class ThresholdPace:
    s_per_km: float
    per_km: str
    per_mile: str


@dataclass(frozen=True)
class PaceZone:
    """
    A named pace band. Bounds are seconds per km, so min is the faster end.
    """
    name: str
    min_s_per_km: float
    max_s_per_km: float
    min: str
    max: str
    min_mi: str
    max_mi: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("name")
        return data


@dataclass(frozen=True)
class PaceResult:
    """
    Everything derived from one reference performance.

    zones is a tuple in display order (easy, steady, threshold, interval, speed, long).
    """
    input: ReferencePerformance
    threshold: ThresholdPace
    zones: Tuple[PaceZone, ...]
    notes: str

    @property
    def projected(self) -> bool:
        return self.input.event != config.THRESHOLD_EVENT

    def zone(self, name: str) -> PaceZone:
        for z in self.zones:
            if z.name == name:
                return z
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input": {
                "event": self.input.event,
                "timeHMS": self.input.finish_time,
                "dist_m": self.input.distance_m,
                "time_s": self.input.time_s,
            },
            "threshold": asdict(self.threshold),
            "zones": {z.name: z.to_dict() for z in self.zones},
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Profile:
    display_name: Optional[str] = None
    fitness_level: str = config.DEFAULT_FITNESS_LEVEL
    weekly_goal_km: float = config.DEFAULT_WEEKLY_GOAL_KM
    strava_athlete_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        """Build a profile from stored JSON; unusable values fall back to the defaults."""
        if not isinstance(data, dict):
            return cls()

        display_name = data.get("display_name")
        if display_name is not None:
            display_name = str(display_name) or None

        fitness_level = data.get("fitness_level")
        if fitness_level not in config.FITNESS_LEVELS:
            fitness_level = config.DEFAULT_FITNESS_LEVEL

        try:
            weekly_goal_km = float(data.get("weekly_goal_km", config.DEFAULT_WEEKLY_GOAL_KM))
        except (TypeError, ValueError):
            weekly_goal_km = config.DEFAULT_WEEKLY_GOAL_KM
        if not math.isfinite(weekly_goal_km) or weekly_goal_km < 0:
            weekly_goal_km = config.DEFAULT_WEEKLY_GOAL_KM

        try:
            strava_athlete_id = int(data["strava_athlete_id"])
        except (KeyError, TypeError, ValueError):
            strava_athlete_id = None

        return cls(
            display_name=display_name,
            fitness_level=fitness_level,
            weekly_goal_km=weekly_goal_km,
            strava_athlete_id=strava_athlete_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DashboardStats:
    total_runs: int = 0
    total_distance_km: float = 0.0
    average_pace_s_per_km: Optional[float] = None
    week_distance_km: float = 0.0
    weekly_goal_km: float = 0.0
    weekly_goal_progress: float = 0.0


@dataclass(frozen=True)
class PlanRequest:
    race_type: str
    goal_time: str
    race_date: str
    runs_per_week: int
    notes: str = ""


@dataclass(frozen=True)
class TrainingPlan:
    weekly_goal: Optional[float]
    plan: Optional[str]
    message: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"weekly_goal": self.weekly_goal, "plan": self.plan, "message": self.message, "raw": self.raw}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingPlan":
        return cls(
            weekly_goal=data.get("weekly_goal"),
            plan=data.get("plan"),
            message=data.get("message"),
            raw=data.get("raw") or {},
        )
