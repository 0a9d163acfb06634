"""
Log Processor - Streaks, pain frequency and follow-up prompts derived from a player's logs.

Everything here is recomputed from the full log history on every read; nothing is cached.
Logs may be PlayerLog models or any objects with the same attributes.
"""

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Optional, Sequence

from ..constants import MOTIVATIONAL_MESSAGES
from ..models import StreakData, PainFrequencyData

SORENESS_FOLLOW_UP_LEVEL = 7
ENERGY_FOLLOW_UP_LEVEL = 4


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _check_in_day(log: Any) -> date:
    return as_utc(log.submitted_at).date()


def calculate_streak_data(logs: Sequence[Any]) -> StreakData:
    """
    Calculate current and longest check-in streaks.

    Two logs are consecutive when their UTC calendar days differ by exactly one.
    Two logs on the same day break the run.

    Args:
        logs: Player logs in any order

    Returns:
        StreakData for the given history
    """
    if not logs:
        return StreakData(current_streak=0, longest_streak=0, total_logs=0)

    days = sorted((_check_in_day(log) for log in logs), reverse=True)

    current_streak: Optional[int] = None
    longest_streak = 0
    run = 1
    for previous_day, day in zip(days, days[1:]):
        if (previous_day - day).days == 1:
            run += 1
            continue
        if current_streak is None:
            current_streak = run
        longest_streak = max(longest_streak, run)
        run = 1

    if current_streak is None:
        current_streak = run
    longest_streak = max(longest_streak, run)

    return StreakData(
        current_streak=current_streak,
        longest_streak=longest_streak,
        total_logs=len(logs),
    )


def calculate_pain_frequency(logs: Sequence[Any]) -> List[PainFrequencyData]:
    """
    Count how often each pain location was reported, most frequent first.

    Ties keep the order in which locations were first seen.
    """
    frequency: Counter = Counter()
    for log in logs:
        frequency.update(log.pain_location_tags)

    # sorted() is stable and Counter keeps insertion order
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [PainFrequencyData(location=location, count=count) for location, count in ranked]


def _relative_day(days_since: int) -> str:
    if days_since <= 0:
        return "earlier today"
    if days_since == 1:
        return "yesterday"
    return f"{days_since} days ago"


def generate_follow_up_prompt(logs: Sequence[Any], now: Optional[datetime] = None) -> str:
    """
    Pick the follow-up question for the next check-in from the most recent log.

    Rules are tried in priority order and only the first match is used:
    pain location, high soreness, low energy, then a generic question.

    Args:
        logs: Player logs in any order
        now: Reference time (defaults to the current UTC time)

    Returns:
        str: Prompt to show the player
    """
    if not logs:
        return "Tell me how you feel."

    recent_log = max(logs, key=lambda log: as_utc(log.submitted_at))
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    days_since = (now - as_utc(recent_log.submitted_at)) // timedelta(days=1)

    if recent_log.pain_location_tags:
        location = recent_log.pain_location_tags[0]
        return (
            f"You mentioned {location.lower()} discomfort {_relative_day(days_since)}. "
            f"How is it feeling now?"
        )

    if recent_log.soreness_level >= SORENESS_FOLLOW_UP_LEVEL:
        return "Your soreness level was high last time. Has it improved?"

    if recent_log.energy_level <= ENERGY_FOLLOW_UP_LEVEL:
        return "How is your energy level today compared to last time?"

    return "How are you feeling today? Any changes since your last check-in?"


def get_motivational_message(day: Optional[date] = None) -> str:
    """Message of the day; the same for every player on a given date."""
    day = day or datetime.now(timezone.utc).date()
    return MOTIVATIONAL_MESSAGES[day.toordinal() % len(MOTIVATIONAL_MESSAGES)]
