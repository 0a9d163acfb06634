"""
Player Log Models - Daily reflection input and the persisted player log.
"""

from datetime import datetime, timezone
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from ..constants import PAIN_LOCATION_LOOKUP, PAIN_LOCATIONS
from .ai import AIInsight


class DailyReflectionInput(BaseModel):
    """A player's daily self-report, as submitted."""
    reflection_text: str = Field(default="", max_length=5000)
    pain_location_tags: List[str] = Field(default_factory=list)
    pain_severity_level: int = Field(..., ge=1, le=10)
    energy_level: int = Field(..., ge=1, le=10)
    soreness_level: int = Field(..., ge=1, le=10)

    @field_validator("pain_location_tags")
    @classmethod
    def normalize_pain_locations(cls, tags: List[str]) -> List[str]:
        """Map tags onto the canonical vocabulary, dropping duplicates."""
        normalized: List[str] = []
        for tag in tags:
            canonical = PAIN_LOCATION_LOOKUP.get(tag.strip().lower())
            if canonical is None:
                raise ValueError(
                    f"Unknown pain location '{tag}'. Expected one of: {', '.join(PAIN_LOCATIONS)}"
                )
            if canonical not in normalized:
                normalized.append(canonical)
        return normalized


class PlayerLog(DailyReflectionInput):
    """Persisted daily log. Immutable once stored."""
    id: str
    player_id: str
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    health_score: int = Field(..., ge=0, le=100)
    ai_insight_id: Optional[str] = None


class PlayerLogWithInsight(PlayerLog):
    """Log as returned to readers; insight is None when no plan was generated."""
    insight: Optional[AIInsight] = None


class LogSubmissionResult(BaseModel):
    """Outcome of a reflection submission."""
    log: PlayerLog
    insight: Optional[AIInsight] = None
    plan_error: Optional[str] = None


class LogList(BaseModel):
    """A player's logs, newest first."""
    logs: List[PlayerLogWithInsight]
