# painpal/models/__init__.py

from painpal.core.config import Base

# Import all models here so metadata.create_all sees every table
from .user import User
from .tracking import PainLog, MoodLog
from .intervention import Intervention, InterventionLog
from .chat_message import ChatMessage
from .id_counter import IdCounter

__all__ = [
    "Base",
    "User",
    "PainLog",
    "MoodLog",
    "Intervention",
    "InterventionLog",
    "ChatMessage",
    "IdCounter",
]
