# storage/base.py
import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol

from painpal import schemas
from painpal.services.streak import compute_day_streak

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_LIST_LIMIT = 50
DEFAULT_STREAK_HISTORY_LIMIT = 1000


# =====================================================================
# STORAGE INTERFACE
# =====================================================================

class Storage(Protocol):
    """
    Capability set shared by every storage backend.

    All reads are scoped by owning user. Absence is reported as ``None``,
    never as an exception. Timestamps come from ``now()``.
    """

    streak_history_limit: int

    def now(self) -> datetime: ...

    # ---- Users ----
    def get_user(self, id: int) -> Optional[schemas.User]: ...
    def get_user_by_email(self, email: str) -> Optional[schemas.User]: ...
    def get_user_by_external_id(self, external_id: str) -> Optional[schemas.User]: ...
    def create_user(self, email: str, name: str, external_id: str) -> schemas.User: ...

    # ---- Pain logs ----
    def create_pain_log(
        self,
        user_id: int,
        pain_level: int,
        notes: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> schemas.PainLog: ...
    def list_pain_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.PainLog]: ...

    # ---- Mood logs ----
    def create_mood_log(
        self,
        user_id: int,
        mood: int,
        anxiety_level: int,
        triggers: Optional[List[str]] = None,
        helpers: Optional[List[str]] = None,
        notes: Optional[str] = None,
    ) -> schemas.MoodLog: ...
    def list_mood_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.MoodLog]: ...

    # ---- Interventions ----
    def create_intervention(self, user_id: int, name: str, frequency: str) -> schemas.Intervention: ...
    def get_intervention(self, user_id: int, intervention_id: int) -> Optional[schemas.Intervention]: ...
    def list_interventions(self, user_id: int) -> List[schemas.Intervention]: ...
    def update_intervention_streak(self, intervention_id: int, streak: int) -> Optional[schemas.Intervention]: ...

    # ---- Intervention logs ----
    def create_intervention_log(
        self,
        user_id: int,
        intervention_id: int,
        pain_level: int,
        notes: Optional[str] = None,
    ) -> schemas.InterventionLog: ...
    def list_intervention_logs(
        self, user_id: int, intervention_id: int, limit: int = DEFAULT_LIST_LIMIT
    ) -> List[schemas.InterventionLog]: ...

    # ---- Chat ----
    def create_chat_message(self, user_id: int, content: str, is_from_user: bool) -> schemas.ChatMessage: ...
    def list_chat_messages(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.ChatMessage]: ...


# =====================================================================
# SHARED BEHAVIOUR
# =====================================================================

def refresh_intervention_streak(
    storage: Storage, user_id: int, intervention_id: int
) -> Optional[schemas.Intervention]:
    """Recompute an intervention's streak from its full log history and persist it."""
    logs = storage.list_intervention_logs(
        user_id, intervention_id, limit=storage.streak_history_limit
    )
    streak = compute_day_streak((log.date for log in logs), storage.now().date())
    logger.debug(
        "Intervention %s streak recomputed from %d logs: %d",
        intervention_id, len(logs), streak,
    )
    return storage.update_intervention_streak(intervention_id, streak)
