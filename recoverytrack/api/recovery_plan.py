"""
Recovery Plan API endpoint - Generate a plan without storing anything.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, status

from ..models import AIResponse, DailyReflectionInput, TokenData
from ..services.recovery_plan import RecoveryPlanError, RecoveryPlanOrchestrator
from ..utils.auth import get_current_user
from .deps import get_recovery_plan_orchestrator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recovery-plan", tags=["recovery-plan"])


@router.post("", response_model=AIResponse)
async def generate_recovery_plan(
    reflection: DailyReflectionInput,
    current_user: TokenData = Depends(get_current_user),
    orchestrator: RecoveryPlanOrchestrator = Depends(get_recovery_plan_orchestrator)
):
    """
    Generate a recovery plan (camelCase JSON) for a reflection.

    Raises:
        HTTPException: 502 when the generative text service fails or answers in an unexpected format
    """
    try:
        return await orchestrator.generate_recovery_plan(reflection)
    except RecoveryPlanError as e:
        logger.error(
            f"Recovery plan generation failed: {e}",
            extra={"extra_fields": {"user_id": current_user.user_id, "error_type": type(e).__name__}}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate recovery plan"
        )
