"""API module."""

from .auth import router as auth_router
from .logs import router as logs_router
from .recovery_plan import router as recovery_plan_router
from .coach import router as coach_router
from .messages import router as messages_router

__all__ = ['auth_router', 'logs_router', 'recovery_plan_router', 'coach_router', 'messages_router']
