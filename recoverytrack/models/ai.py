"""
AI Models - Recovery plan structures returned by the generative text service.
"""

from datetime import datetime, timezone
from typing import Optional, List, Any
from pydantic import BaseModel, Field, field_validator

from .base import CamelModel


class Exercise(BaseModel):
    """A single mobility exercise."""
    name: str
    duration: str
    intensity: str
    equipment: Optional[str] = None

    @field_validator("duration", "intensity", "equipment", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Any:
        # The model sometimes answers "duration": 10 instead of "10 minutes"
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class MobilityPlan(BaseModel):
    """Mobility part of a recovery plan."""
    exercises: List[Exercise] = Field(default_factory=list)


class NutritionRestPlan(BaseModel):
    """Nutrition, hydration and rest guidance."""
    hydration: str
    nutrition: List[str] = Field(default_factory=list)
    rest: str


class AIResponse(CamelModel):
    """Recovery plan merged with the locally computed health score."""
    mobility_plan: MobilityPlan
    nutrition_rest_plan: NutritionRestPlan
    health_score: int = Field(..., ge=0, le=100)


class AIInsight(BaseModel):
    """Stored recovery plan, one per player log."""
    id: str
    log_id: str
    mobility_plan: MobilityPlan
    nutrition_rest_plan: NutritionRestPlan
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
