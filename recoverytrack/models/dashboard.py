"""
Dashboard Models - Derived, non-persisted statistics.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from .base import CamelModel


class StreakData(CamelModel):
    """Check-in streak derived from a player's log history."""
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    total_logs: int = Field(0, ge=0)


class PainFrequencyData(BaseModel):
    """How often a pain location was reported."""
    location: str
    count: int


class PlayerAnalytics(CamelModel):
    """Everything the player dashboard derives from the log history."""
    streak: StreakData
    pain_frequency: List[PainFrequencyData]
    follow_up_prompt: str
    motivational_message: str


class PlayerHealthStatus(BaseModel):
    """Latest health status of one player, as seen by staff."""
    player_id: str
    player_name: str
    health_score: Optional[int] = None
    color: Optional[str] = None
    status: Optional[str] = None
    summary: str
    last_check_in: Optional[datetime] = None


class TeamStats(CamelModel):
    """Aggregate numbers for the coach overview."""
    total_players: int = 0
    average_health: int = 0
    active_today: int = 0
    compliance_rate: int = 0
    average_streak: float = 0.0


class TeamOverview(CamelModel):
    """Coach overview response."""
    stats: TeamStats
    players: List[PlayerHealthStatus]
