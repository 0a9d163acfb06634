"""
Team Overview - Per-player health status and team aggregates for coaches.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import PlayerHealthStatus, TeamStats, TeamOverview
from .health_scoring import (
    get_health_color,
    get_health_summary,
    get_status_text,
    round_half_up,
)
from .log_processor import calculate_streak_data, as_utc


def latest_log(logs: Sequence[Any]) -> Optional[Any]:
    """Most recently submitted log, or None."""
    if not logs:
        return None
    return max(logs, key=lambda log: as_utc(log.submitted_at))


def build_player_status(player_id: str, player_name: str, logs: Sequence[Any]) -> PlayerHealthStatus:
    """Health status row for one player based on their latest log."""
    recent = latest_log(logs)
    if recent is None:
        return PlayerHealthStatus(
            player_id=player_id,
            player_name=player_name,
            summary="No check-ins yet",
        )

    color = get_health_color(recent.health_score)
    return PlayerHealthStatus(
        player_id=player_id,
        player_name=player_name,
        health_score=recent.health_score,
        color=color,
        status=get_status_text(color),
        summary=get_health_summary(recent.health_score, recent),
        last_check_in=recent.submitted_at,
    )


def calculate_team_stats(logs_by_player: Mapping[str, Sequence[Any]], today: Optional[date] = None) -> TeamStats:
    """
    Aggregate team numbers.

    Args:
        logs_by_player: Player ID -> that player's logs (players without logs map to [])
        today: UTC day used for "active today" (defaults to the current day)

    Returns:
        TeamStats
    """
    today = today or datetime.now(timezone.utc).date()
    total_players = len(logs_by_player)
    if total_players == 0:
        return TeamStats()

    latest = [log for log in (latest_log(logs) for logs in logs_by_player.values()) if log is not None]
    active_today = sum(1 for log in latest if as_utc(log.submitted_at).date() == today)

    average_health = 0
    if latest:
        average_health = round_half_up(sum(log.health_score for log in latest) / len(latest))

    streaks = [calculate_streak_data(logs).current_streak for logs in logs_by_player.values()]

    return TeamStats(
        total_players=total_players,
        average_health=average_health,
        active_today=active_today,
        compliance_rate=round_half_up(active_today / total_players * 100),
        average_streak=round(sum(streaks) / total_players, 1),
    )


def build_team_overview(
    players: Sequence[Dict[str, Any]],
    logs_by_player: Mapping[str, Sequence[Any]],
    today: Optional[date] = None,
) -> TeamOverview:
    """
    Build the coach overview.

    Args:
        players: Player user records (dicts with 'id' and 'full_name')
        logs_by_player: Player ID -> logs
        today: Reference day for activity

    Returns:
        TeamOverview with one status row per player, lowest score first
    """
    statuses: List[PlayerHealthStatus] = [
        build_player_status(player["id"], player.get("full_name") or "Unknown", logs_by_player.get(player["id"], []))
        for player in players
    ]
    # Players who need attention first; players without check-ins last
    statuses.sort(key=lambda status: (status.health_score is None, status.health_score or 0))

    stats = calculate_team_stats(
        {player["id"]: logs_by_player.get(player["id"], []) for player in players},
        today=today,
    )
    return TeamOverview(stats=stats, players=statuses)
