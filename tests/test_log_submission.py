"""
Unit tests for reflection submission with best-effort plan generation.
"""

from datetime import datetime, timezone

import pytest
from unittest.mock import AsyncMock, MagicMock

from recoverytrack.models import AIResponse, DailyReflectionInput, MobilityPlan, NutritionRestPlan
from recoverytrack.services.log_submission import LogStorageError, submit_reflection
from recoverytrack.services.recovery_plan import (
    AIServiceError,
    InvalidAIResponseFormat,
    RecoveryPlanOrchestrator,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def reflection():
    return DailyReflectionInput(
        reflection_text="Shoulder tight after bullpen session",
        pain_location_tags=["shoulder"],
        pain_severity_level=3,
        energy_level=7,
        soreness_level=4,
    )


def orchestrator_returning(plan=None, error=None):
    orchestrator = MagicMock(spec=RecoveryPlanOrchestrator)
    orchestrator.generate_recovery_plan = AsyncMock(return_value=plan, side_effect=error)
    return orchestrator


@pytest.fixture
def plan():
    return AIResponse(
        mobility_plan=MobilityPlan(exercises=[{"name": "Band pull-aparts", "duration": "5 minutes", "intensity": "Low"}]),
        nutrition_rest_plan=NutritionRestPlan(hydration="2.5 liters", nutrition=["Salmon"], rest="8 hours"),
        health_score=69,
    )


class TestSubmitReflection:

    @pytest.mark.asyncio
    async def test_stores_log_and_insight(self, reflection, plan, record_store):
        result = await submit_reflection("player-1", reflection, orchestrator_returning(plan), record_store, now=NOW)

        assert result.plan_error is None
        assert result.insight is not None
        assert result.log.ai_insight_id == result.insight.id
        assert result.insight.log_id == result.log.id
        assert result.log.health_score == 69
        assert result.log.pain_location_tags == ["Shoulder"]
        assert result.log.submitted_at == NOW

        stored = await record_store.get_log(result.log.id)
        assert stored == result.log
        insight = await record_store.get_insight_for_log(result.log.id)
        assert insight.mobility_plan.exercises[0].name == "Band pull-aparts"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        AIServiceError("Generative text service timed out after 30s"),
        InvalidAIResponseFormat("Response is not valid JSON", raw_text="oops"),
    ])
    async def test_plan_failure_still_stores_log(self, reflection, record_store, error):
        result = await submit_reflection("player-1", reflection, orchestrator_returning(error=error), record_store)

        assert result.insight is None
        assert result.plan_error == str(error)
        assert result.log.ai_insight_id is None
        assert result.log.health_score == 69
        assert await record_store.list_logs("player-1") == [result.log]
        assert await record_store.get_insight_for_log(result.log.id) is None

    @pytest.mark.asyncio
    async def test_log_storage_failure_raises(self, reflection, plan):
        store = MagicMock()
        store.create_log = AsyncMock(return_value=False)
        store.create_insight = AsyncMock(return_value=True)

        with pytest.raises(LogStorageError):
            await submit_reflection("player-1", reflection, orchestrator_returning(plan), store)
        store.create_insight.assert_not_called()

    @pytest.mark.asyncio
    async def test_insight_storage_failure_keeps_log(self, reflection, plan):
        store = MagicMock()
        store.create_log = AsyncMock(return_value=True)
        store.create_insight = AsyncMock(return_value=False)

        result = await submit_reflection("player-1", reflection, orchestrator_returning(plan), store)

        assert result.insight is None
        assert result.plan_error == "Recovery plan could not be stored"
