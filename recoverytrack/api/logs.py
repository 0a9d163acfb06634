"""
Player Log API endpoints - Submit reflections and read logs with derived analytics.
"""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query, status

from ..models import (
    DailyReflectionInput,
    LogList,
    LogSubmissionResult,
    PlayerAnalytics,
    PlayerLogWithInsight,
    TokenData,
    UserRole,
)
from ..services.log_processor import (
    calculate_pain_frequency,
    calculate_streak_data,
    generate_follow_up_prompt,
    get_motivational_message,
)
from ..services.log_submission import LogStorageError, submit_reflection
from ..services.recovery_plan import RecoveryPlanOrchestrator
from ..storage.record_store import RecordStore, get_record_store
from ..utils.auth import get_current_user, require_role
from .deps import ensure_can_view_player, get_recovery_plan_orchestrator, resolve_player_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["logs"])


@router.post("", response_model=LogSubmissionResult, status_code=status.HTTP_201_CREATED)
async def create_log(
    reflection: DailyReflectionInput,
    current_user: TokenData = Depends(require_role(UserRole.PLAYER)),
    orchestrator: RecoveryPlanOrchestrator = Depends(get_recovery_plan_orchestrator),
    store: RecordStore = Depends(get_record_store)
):
    """
    Submit today's reflection.

    The log is stored even when the recovery plan cannot be generated;
    in that case insight is null and plan_error explains why.
    """
    try:
        return await submit_reflection(current_user.user_id, reflection, orchestrator, store)
    except LogStorageError as e:
        logger.error(f"Log submission failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create log"
        )


@router.get("", response_model=LogList)
async def list_logs(
    player_id: Optional[str] = Query(None, description="Defaults to the caller"),
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """List a player's logs, newest first, each with its insight if one exists."""
    player_id = resolve_player_id(player_id, current_user)
    await ensure_can_view_player(current_user, player_id, store)

    logs = []
    for log in await store.list_logs(player_id):
        insight = await store.get_insight_for_log(log.id) if log.ai_insight_id else None
        logs.append(PlayerLogWithInsight(**log.model_dump(), insight=insight))
    return LogList(logs=logs)


@router.get("/analytics", response_model=PlayerAnalytics)
async def get_analytics(
    player_id: Optional[str] = Query(None, description="Defaults to the caller"),
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """Streaks, pain frequency and the next follow-up prompt, recomputed from the full history."""
    player_id = resolve_player_id(player_id, current_user)
    await ensure_can_view_player(current_user, player_id, store)

    logs = await store.list_logs(player_id)
    return PlayerAnalytics(
        streak=calculate_streak_data(logs),
        pain_frequency=calculate_pain_frequency(logs),
        follow_up_prompt=generate_follow_up_prompt(logs),
        motivational_message=get_motivational_message(),
    )


@router.get("/{log_id}", response_model=PlayerLogWithInsight)
async def get_log(
    log_id: str,
    current_user: TokenData = Depends(get_current_user),
    store: RecordStore = Depends(get_record_store)
):
    """Get one log with its insight."""
    log = await store.get_log(log_id)
    if log is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Log not found"
        )
    await ensure_can_view_player(current_user, log.player_id, store)

    insight = await store.get_insight_for_log(log.id) if log.ai_insight_id else None
    return PlayerLogWithInsight(**log.model_dump(), insight=insight)
