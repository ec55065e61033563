# painpal/schemas/__init__.py

from .user import (
    UserCreate,
    User,
)
from .tracking import (
    PainLogCreate,
    PainLog,
    MoodLogCreate,
    MoodLog,
)
from .intervention import (
    InterventionCreate,
    Intervention,
    InterventionLogCreate,
    InterventionLog,
)
from .chat import (
    ChatMessageCreate,
    ChatMessage,
    DailySummaryResponse,
    PatternInsightsResponse,
    DashboardStatsResponse,
)


__all__ = [
    # Users
    "UserCreate", "User",

    # Tracking
    "PainLogCreate", "PainLog", "MoodLogCreate", "MoodLog",

    # Interventions
    "InterventionCreate", "Intervention", "InterventionLogCreate", "InterventionLog",

    # Chat & companion
    "ChatMessageCreate", "ChatMessage",
    "DailySummaryResponse", "PatternInsightsResponse", "DashboardStatsResponse",
]
