"""Services module - health scoring, log analytics and recovery plan generation."""

from .health_scoring import calculate_health_score, get_health_summary, get_health_color
from .log_processor import (
    calculate_streak_data,
    calculate_pain_frequency,
    generate_follow_up_prompt,
    get_motivational_message,
)
from .recovery_plan import (
    RecoveryPlanOrchestrator,
    RecoveryPlanError,
    AIServiceError,
    InvalidAIResponseFormat,
)
from .log_submission import submit_reflection, LogStorageError
from .team_overview import build_team_overview, calculate_team_stats

__all__ = [
    'calculate_health_score', 'get_health_summary', 'get_health_color',
    'calculate_streak_data', 'calculate_pain_frequency', 'generate_follow_up_prompt',
    'get_motivational_message',
    'RecoveryPlanOrchestrator', 'RecoveryPlanError', 'AIServiceError', 'InvalidAIResponseFormat',
    'submit_reflection', 'LogStorageError',
    'build_team_overview', 'calculate_team_stats',
]
