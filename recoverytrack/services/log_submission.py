"""
Log Submission - Stores a player's reflection together with its recovery plan.

Plan generation is best effort: when the generative text service fails the
log is still stored, without an insight.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from ..models import AIInsight, DailyReflectionInput, LogSubmissionResult, PlayerLog
from ..storage.record_store import RecordStore
from .health_scoring import calculate_health_score
from .recovery_plan import RecoveryPlanError, RecoveryPlanOrchestrator

logger = logging.getLogger(__name__)


class LogStorageError(RuntimeError):
    """The player log could not be persisted."""


async def submit_reflection(
    player_id: str,
    reflection: DailyReflectionInput,
    orchestrator: RecoveryPlanOrchestrator,
    store: RecordStore,
    now: Optional[datetime] = None,
) -> LogSubmissionResult:
    """
    Score a reflection, try to generate its plan, and persist log and insight.

    Args:
        player_id: Submitting player
        reflection: Validated reflection input
        orchestrator: Recovery plan orchestrator
        store: Record store
        now: Submission time (defaults to the current UTC time)

    Returns:
        LogSubmissionResult; insight is None and plan_error is set when the plan failed

    Raises:
        LogStorageError: The log itself could not be stored
    """
    submitted_at = now or datetime.now(timezone.utc)
    log_id = str(uuid.uuid4())

    plan = None
    plan_error = None
    try:
        plan = await orchestrator.generate_recovery_plan(reflection)
    except RecoveryPlanError as e:
        plan_error = str(e)
        logger.warning(
            f"Recovery plan unavailable, storing log without insight: {e}",
            extra={"extra_fields": {
                "player_id": player_id,
                "log_id": log_id,
                "error_type": type(e).__name__,
            }}
        )

    insight = None
    if plan is not None:
        insight = AIInsight(
            id=str(uuid.uuid4()),
            log_id=log_id,
            mobility_plan=plan.mobility_plan,
            nutrition_rest_plan=plan.nutrition_rest_plan,
            generated_at=submitted_at,
        )

    log = PlayerLog(
        id=log_id,
        player_id=player_id,
        submitted_at=submitted_at,
        health_score=calculate_health_score(reflection),
        ai_insight_id=insight.id if insight else None,
        **reflection.model_dump(),
    )

    if not await store.create_log(log):
        raise LogStorageError(f"Failed to store player log {log_id}")

    if insight is not None and not await store.create_insight(insight):
        logger.error(f"Failed to store insight {insight.id} for log {log_id}")
        plan_error = "Recovery plan could not be stored"
        insight = None

    logger.info(
        "Reflection submitted",
        extra={"extra_fields": {
            "player_id": player_id,
            "log_id": log_id,
            "health_score": log.health_score,
            "has_insight": insight is not None,
        }}
    )
    return LogSubmissionResult(log=log, insight=insight, plan_error=plan_error)
