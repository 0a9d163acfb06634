"""
Shared API dependencies - recovery plan orchestrator and access rules.
"""

from typing import Optional
from fastapi import HTTPException, status

from ..config import settings
from ..llm.factory import create_llm_provider
from ..models import Conversation, TokenData, UserRole
from ..services.recovery_plan import RecoveryPlanOrchestrator
from ..storage.record_store import RecordStore, is_valid_record_id


def get_recovery_plan_orchestrator() -> RecoveryPlanOrchestrator:
    """Orchestrator for the configured provider (provider is None without an API key)."""
    llm_provider = create_llm_provider(
        provider=settings.llm_provider,
        api_key=settings.llm_api_key or settings.gemini_api_key or "",
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        timeout=settings.llm_timeout_seconds,
    )
    return RecoveryPlanOrchestrator(
        llm_provider,
        timeout=settings.llm_timeout_seconds,
        temperature=settings.plan_temperature,
        top_k=settings.plan_top_k,
        top_p=settings.plan_top_p,
        max_output_tokens=settings.plan_max_output_tokens,
    )


async def can_view_player(viewer: TokenData, player_id: str, store: RecordStore) -> bool:
    """
    Players see their own logs, coaches see every player,
    physicians see players they have a conversation with.
    """
    if viewer.role == UserRole.COACH:
        return True
    if viewer.role == UserRole.PLAYER:
        return viewer.user_id == player_id
    if viewer.role == UserRole.PHYSICIAN:
        return await store.find_conversation(player_id, viewer.user_id) is not None
    return False


def resolve_player_id(player_id: Optional[str], viewer: TokenData) -> str:
    """Requested player id, defaulting to the caller. Malformed ids are a 404."""
    player_id = player_id or viewer.user_id
    if not is_valid_record_id(player_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player not found"
        )
    return player_id


async def ensure_can_view_player(viewer: TokenData, player_id: str, store: RecordStore) -> None:
    if not await can_view_player(viewer, player_id, store):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to view this player's logs"
        )


async def get_participating_conversation(
    conversation_id: str, user: TokenData, store: RecordStore
) -> Conversation:
    """Load a conversation the caller takes part in, or raise 404."""
    conversation = await store.get_conversation(conversation_id)
    if conversation is None or user.user_id not in (conversation.player_id, conversation.physician_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Conversation not found"
        )
    return conversation
