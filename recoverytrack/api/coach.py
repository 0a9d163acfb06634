"""
Coach API endpoints - Team-wide health overview.
"""

from fastapi import APIRouter, Depends

from ..models import TeamOverview, TokenData, UserRole
from ..services.team_overview import build_team_overview
from ..storage.record_store import RecordStore, get_record_store
from ..storage.user_storage import UserStorage, get_user_storage
from ..utils.auth import require_role

router = APIRouter(prefix="/coach", tags=["coach"])


@router.get("/players", response_model=TeamOverview)
async def get_team_overview(
    current_user: TokenData = Depends(require_role(UserRole.COACH)),
    users: UserStorage = Depends(get_user_storage),
    store: RecordStore = Depends(get_record_store)
):
    """Latest health status of every player plus team aggregates."""
    players = await users.list_users(role=UserRole.PLAYER.value)
    logs_by_player = {player["id"]: await store.list_logs(player["id"]) for player in players}
    return build_team_overview(players, logs_by_player)
