"""Models module."""

from .user import User, UserCreate, UserRole, Token, TokenData
from .log import DailyReflectionInput, PlayerLog, PlayerLogWithInsight, LogSubmissionResult, LogList
from .ai import Exercise, MobilityPlan, NutritionRestPlan, AIResponse, AIInsight
from .dashboard import (
    StreakData,
    PainFrequencyData,
    PlayerAnalytics,
    PlayerHealthStatus,
    TeamStats,
    TeamOverview,
)
from .message import (
    Conversation,
    ConversationCreate,
    ConversationSummary,
    Message,
    MessageCreate,
    MessageAttachment,
    MessageList,
)

__all__ = [
    'User', 'UserCreate', 'UserRole', 'Token', 'TokenData',
    'DailyReflectionInput', 'PlayerLog', 'PlayerLogWithInsight', 'LogSubmissionResult', 'LogList',
    'Exercise', 'MobilityPlan', 'NutritionRestPlan', 'AIResponse', 'AIInsight',
    'StreakData', 'PainFrequencyData', 'PlayerAnalytics', 'PlayerHealthStatus',
    'TeamStats', 'TeamOverview',
    'Conversation', 'ConversationCreate', 'ConversationSummary',
    'Message', 'MessageCreate', 'MessageAttachment', 'MessageList',
]
