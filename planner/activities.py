"""Activity suitability scoring.

Every activity profile starts from a base score of 50 which is then adjusted
for temperature, precipitation and wind.  The resulting integer score lies in
``[0, 100]`` and is accompanied by the comma separated list of factors that
moved it.
"""
from __future__ import annotations

import math
from typing import List, Sequence

from .entities import ActivityProfile, DailyForecastSummary, ScoredActivity

BASE_SCORE = 50
IDEAL_TEMPERATURE_BONUS = 30
MAX_TEMPERATURE_PENALTY = 30
TEMPERATURE_PENALTY_PER_DEGREE = 5
RAIN_THRESHOLD_MM = 1
RAIN_PENALTY = 20
RAIN_LOVER_BONUS = 10
DRY_BONUS = 10
WIND_THRESHOLD_KMH = 20
WIND_SCALE = 15
WIND_OFFSET = 7.5
INDOOR_EXTREME_BONUS = 15
INDOOR_COLD_LIMIT = 10
INDOOR_HOT_LIMIT = 30
DEFAULT_REASONING = "standard conditions"

DEFAULT_PROFILES: Sequence[ActivityProfile] = (
    ActivityProfile(name="skiing", ideal_temp_min=-10, ideal_temp_max=2, rain_tolerance=0.1, wind_preference=0.2),
    ActivityProfile(name="surfing", ideal_temp_min=18, ideal_temp_max=28, rain_tolerance=0.7, wind_preference=0.8),
    ActivityProfile(
        name="indoor_sightseeing", ideal_temp_min=10, ideal_temp_max=30, rain_tolerance=1.0, wind_preference=0.5
    ),
    ActivityProfile(
        name="outdoor_sightseeing", ideal_temp_min=15, ideal_temp_max=25, rain_tolerance=0.1, wind_preference=0.3
    ),
)


def score_activity(profile: ActivityProfile, summary: DailyForecastSummary) -> ScoredActivity:
    avg_temp = (summary.max_temp + summary.min_temp) / 2
    has_rain = summary.precipitation > RAIN_THRESHOLD_MM
    is_windy = summary.wind_speed > WIND_THRESHOLD_KMH

    score: float = BASE_SCORE
    reasons: List[str] = []

    if profile.ideal_temp_min <= avg_temp <= profile.ideal_temp_max:
        score += IDEAL_TEMPERATURE_BONUS
        reasons.append("ideal temperature")
    elif avg_temp < profile.ideal_temp_min:
        score -= min(MAX_TEMPERATURE_PENALTY, (profile.ideal_temp_min - avg_temp) * TEMPERATURE_PENALTY_PER_DEGREE)
        reasons.append("too cold")
    else:
        score -= min(MAX_TEMPERATURE_PENALTY, (avg_temp - profile.ideal_temp_max) * TEMPERATURE_PENALTY_PER_DEGREE)
        reasons.append("too warm")

    if has_rain:
        score -= (1 - profile.rain_tolerance) * RAIN_PENALTY
        if profile.rain_tolerance > 0.8:
            score += RAIN_LOVER_BONUS
            reasons.append("rain makes it more appealing")
        elif profile.rain_tolerance < 0.3:
            reasons.append("rain not ideal")
    elif profile.rain_tolerance < 0.3:
        score += DRY_BONUS
        reasons.append("no rain")

    if is_windy:
        score += profile.wind_preference * WIND_SCALE - WIND_OFFSET
        if profile.wind_preference > 0.6:
            reasons.append("good wind conditions")
        elif profile.wind_preference < 0.4:
            reasons.append("windy conditions")

    if "indoor" in profile.name and (avg_temp < INDOOR_COLD_LIMIT or avg_temp > INDOOR_HOT_LIMIT):
        score += INDOOR_EXTREME_BONUS
        reasons.append("extreme weather favors indoor activities")

    return ScoredActivity(
        name=profile.name,
        suitability_score=_clamp(_round_half_up(score)),
        reasoning=", ".join(reasons) or DEFAULT_REASONING,
    )


def rank_activities_for_day(
    summary: DailyForecastSummary,
    top: int = 1,
    profiles: Sequence[ActivityProfile] = DEFAULT_PROFILES,
) -> List[ScoredActivity]:
    """Score every profile for the day and return the ``top`` best.

    Ties keep the order of ``profiles``.
    """
    if top <= 0:
        return []
    scored = [score_activity(profile, summary) for profile in profiles]
    scored.sort(key=lambda activity: activity.suitability_score, reverse=True)
    return scored[:top]


class ActivityRanker:
    """Binds a profile table to :func:`rank_activities_for_day`."""

    def __init__(self, profiles: Sequence[ActivityProfile] = DEFAULT_PROFILES) -> None:
        self.profiles = tuple(profiles)

    def rank(self, summary: DailyForecastSummary, top: int = 1) -> List[ScoredActivity]:
        return rank_activities_for_day(summary, top=top, profiles=self.profiles)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: int) -> int:
    return max(0, min(100, value))


__all__ = [
    "ActivityRanker",
    "DEFAULT_PROFILES",
    "rank_activities_for_day",
    "score_activity",
]
