# painpal/storage/__init__.py
import logging

from painpal.core.config import Settings, make_engine
from .base import Storage, DEFAULT_LIST_LIMIT, refresh_intervention_streak
from .memory import MemoryStorage
from .database import DatabaseStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Build the backend named by ``STORAGE_BACKEND``; called once at startup."""
    if settings.STORAGE_BACKEND == "database":
        storage = DatabaseStorage(
            make_engine(settings.DATABASE_URL),
            streak_history_limit=settings.STREAK_HISTORY_LIMIT,
        )
        storage.create_all()
        logger.info("Using database storage")
        return storage

    logger.info("Using in-memory storage; data is lost on restart")
    return MemoryStorage(streak_history_limit=settings.STREAK_HISTORY_LIMIT)


__all__ = [
    "Storage",
    "MemoryStorage",
    "DatabaseStorage",
    "DEFAULT_LIST_LIMIT",
    "build_storage",
    "refresh_intervention_streak",
]
