"""
Health Scoring - Maps a daily reflection to a 0-100 readiness score.

Higher score means better recovery. The weights are fixed:

- pain severity costs up to 40 points
- low energy costs up to 20 points (full energy costs nothing)
- soreness costs up to 25 points
- each reported pain location costs 3 points, capped at 15

Arithmetic is done in Decimal so that x.5 boundaries round the same way on
every platform (half away from zero).
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Sequence

from ..constants import (
    HEALTH_COLOR_HEX,
    HEALTH_SCORE_THRESHOLDS,
    HEALTH_STATUS_TEXT,
)

PAIN_WEIGHT = Decimal(40)
ENERGY_WEIGHT = Decimal(20)
SORENESS_WEIGHT = Decimal(25)
LOCATION_PENALTY = 3
MAX_LOCATION_PENALTY = 15


def round_half_up(value: Any) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _level(value: Any) -> Decimal:
    return Decimal(str(value)) / 10


def calculate_health_score(reflection: Any) -> int:
    """
    Calculate a health score (0-100) from a player's reflection.

    Args:
        reflection: DailyReflectionInput or any object exposing the level
            attributes and pain_location_tags

    Returns:
        int: Score clamped to [0, 100]
    """
    score = Decimal(100)
    score -= _level(reflection.pain_severity_level) * PAIN_WEIGHT
    score -= ENERGY_WEIGHT - _level(reflection.energy_level) * ENERGY_WEIGHT
    score -= _level(reflection.soreness_level) * SORENESS_WEIGHT
    score -= min(len(reflection.pain_location_tags) * LOCATION_PENALTY, MAX_LOCATION_PENALTY)

    return max(0, min(100, round_half_up(score)))


def _join_locations(tags: Sequence[str]) -> str:
    return " and ".join(tags[:2]).lower()


def get_health_summary(score: int, reflection: Any) -> str:
    """One-line summary shown to staff next to the score."""
    locations = _join_locations(reflection.pain_location_tags)
    if score >= HEALTH_SCORE_THRESHOLDS["green"]:
        return "Fully healthy and ready to play"
    if score >= HEALTH_SCORE_THRESHOLDS["yellow"]:
        if locations:
            return f"Minor {locations} discomfort reported"
        return "Slight soreness, monitor closely"
    if score >= HEALTH_SCORE_THRESHOLDS["orange"]:
        if locations:
            return f"Moderate {locations} pain, activity modification needed"
        return "Significant soreness, careful monitoring required"
    return "High pain/fatigue levels, medical evaluation recommended"


def get_health_color(score: int) -> str:
    """Traffic-light color for a score: green, yellow, orange or red."""
    if score >= HEALTH_SCORE_THRESHOLDS["green"]:
        return "green"
    if score >= HEALTH_SCORE_THRESHOLDS["yellow"]:
        return "yellow"
    if score >= HEALTH_SCORE_THRESHOLDS["orange"]:
        return "orange"
    return "red"


def get_health_color_hex(color: str) -> str:
    return HEALTH_COLOR_HEX.get(color, HEALTH_COLOR_HEX["red"])


def get_status_text(color: str) -> str:
    return HEALTH_STATUS_TEXT.get(color, "Unknown")
