# storage/memory.py
import threading
from datetime import datetime
from typing import Dict, List, Optional

from painpal import schemas
from painpal.storage.base import (
    Clock,
    DEFAULT_LIST_LIMIT,
    DEFAULT_STREAK_HISTORY_LIMIT,
    refresh_intervention_streak,
)


class MemoryStorage:
    """
    Process-lifetime storage backed by plain dicts.

    One id counter is shared by every entity kind, so ids are unique across
    the whole store. A re-entrant lock serialises writers.
    """

    def __init__(
        self,
        *,
        clock: Clock = datetime.now,
        streak_history_limit: int = DEFAULT_STREAK_HISTORY_LIMIT,
    ):
        self._clock = clock
        self.streak_history_limit = streak_history_limit
        self._lock = threading.RLock()
        self._current_id = 1

        self._users: Dict[int, schemas.User] = {}
        self._pain_logs: Dict[int, schemas.PainLog] = {}
        self._mood_logs: Dict[int, schemas.MoodLog] = {}
        self._interventions: Dict[int, schemas.Intervention] = {}
        self._intervention_logs: Dict[int, schemas.InterventionLog] = {}
        self._chat_messages: Dict[int, schemas.ChatMessage] = {}

    # =====================================================================
    # HELPERS
    # =====================================================================

    def now(self) -> datetime:
        return self._clock()

    def _next_id(self) -> int:
        with self._lock:
            id = self._current_id
            self._current_id += 1
            return id

    @staticmethod
    def _newest_first(records, key: str, limit: int) -> list:
        if limit <= 0:
            return []
        ordered = sorted(
            records, key=lambda r: (getattr(r, key), r.id), reverse=True
        )
        return [r.model_copy(deep=True) for r in ordered[:limit]]

    @staticmethod
    def _copy(record):
        """Detached copy, so callers never hold the stored object."""
        return record.model_copy(deep=True) if record is not None else None

    # =====================================================================
    # USERS
    # =====================================================================

    def get_user(self, id: int) -> Optional[schemas.User]:
        return self._copy(self._users.get(id))

    def get_user_by_email(self, email: str) -> Optional[schemas.User]:
        return self._copy(
            next((u for u in self._users.values() if u.email == email), None)
        )

    def get_user_by_external_id(self, external_id: str) -> Optional[schemas.User]:
        return self._copy(
            next((u for u in self._users.values() if u.external_id == external_id), None)
        )

    def create_user(self, email: str, name: str, external_id: str) -> schemas.User:
        """Create a user, or return the one already bound to ``external_id``."""
        with self._lock:
            existing = self.get_user_by_external_id(external_id)
            if existing:
                return existing

            user = schemas.User(
                id=self._next_id(),
                email=email,
                name=name,
                external_id=external_id,
                created_at=self.now(),
            )
            self._users[user.id] = user
            return self._copy(user)

    # =====================================================================
    # PAIN LOGS
    # =====================================================================

    def create_pain_log(
        self,
        user_id: int,
        pain_level: int,
        notes: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> schemas.PainLog:
        with self._lock:
            log = schemas.PainLog(
                id=self._next_id(),
                user_id=user_id,
                pain_level=pain_level,
                tags=list(tags or []),
                notes=notes,
                date=self.now(),
            )
            self._pain_logs[log.id] = log
            return self._copy(log)

    def list_pain_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.PainLog]:
        with self._lock:
            owned = [log for log in self._pain_logs.values() if log.user_id == user_id]
        return self._newest_first(owned, "date", limit)

    # =====================================================================
    # MOOD LOGS
    # =====================================================================

    def create_mood_log(
        self,
        user_id: int,
        mood: int,
        anxiety_level: int,
        triggers: Optional[List[str]] = None,
        helpers: Optional[List[str]] = None,
        notes: Optional[str] = None,
    ) -> schemas.MoodLog:
        with self._lock:
            log = schemas.MoodLog(
                id=self._next_id(),
                user_id=user_id,
                mood=mood,
                anxiety_level=anxiety_level,
                triggers=list(triggers or []),
                helpers=list(helpers or []),
                notes=notes,
                date=self.now(),
            )
            self._mood_logs[log.id] = log
            return self._copy(log)

    def list_mood_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.MoodLog]:
        with self._lock:
            owned = [log for log in self._mood_logs.values() if log.user_id == user_id]
        return self._newest_first(owned, "date", limit)

    # =====================================================================
    # INTERVENTIONS
    # =====================================================================

    def create_intervention(self, user_id: int, name: str, frequency: str) -> schemas.Intervention:
        with self._lock:
            intervention = schemas.Intervention(
                id=self._next_id(),
                user_id=user_id,
                name=name,
                frequency=frequency,
                current_streak=0,
                is_active=True,
                created_at=self.now(),
            )
            self._interventions[intervention.id] = intervention
            return self._copy(intervention)

    def get_intervention(self, user_id: int, intervention_id: int) -> Optional[schemas.Intervention]:
        intervention = self._interventions.get(intervention_id)
        if intervention is None or intervention.user_id != user_id:
            return None
        return self._copy(intervention)

    def list_interventions(self, user_id: int) -> List[schemas.Intervention]:
        """Active interventions only, newest first."""
        with self._lock:
            owned = [
                i for i in self._interventions.values()
                if i.user_id == user_id and i.is_active
            ]
        return self._newest_first(owned, "created_at", len(owned))

    def update_intervention_streak(self, intervention_id: int, streak: int) -> Optional[schemas.Intervention]:
        with self._lock:
            intervention = self._interventions.get(intervention_id)
            if intervention is None:
                return None
            # Replace rather than mutate so records handed out earlier stay unchanged
            updated = intervention.model_copy(update={"current_streak": streak})
            self._interventions[intervention_id] = updated
            return self._copy(updated)

    # =====================================================================
    # INTERVENTION LOGS
    # =====================================================================

    def create_intervention_log(
        self,
        user_id: int,
        intervention_id: int,
        pain_level: int,
        notes: Optional[str] = None,
    ) -> schemas.InterventionLog:
        """Append a log and recompute the parent intervention's streak."""
        with self._lock:
            log = schemas.InterventionLog(
                id=self._next_id(),
                user_id=user_id,
                intervention_id=intervention_id,
                pain_level=pain_level,
                notes=notes,
                date=self.now(),
            )
            self._intervention_logs[log.id] = log
            try:
                refresh_intervention_streak(self, user_id, intervention_id)
            except Exception:
                del self._intervention_logs[log.id]
                raise
            return self._copy(log)

    def list_intervention_logs(
        self, user_id: int, intervention_id: int, limit: int = DEFAULT_LIST_LIMIT
    ) -> List[schemas.InterventionLog]:
        with self._lock:
            owned = [
                log for log in self._intervention_logs.values()
                if log.user_id == user_id and log.intervention_id == intervention_id
            ]
        return self._newest_first(owned, "date", limit)

    # =====================================================================
    # CHAT MESSAGES
    # =====================================================================

    def create_chat_message(self, user_id: int, content: str, is_from_user: bool) -> schemas.ChatMessage:
        with self._lock:
            message = schemas.ChatMessage(
                id=self._next_id(),
                user_id=user_id,
                content=content,
                is_from_user=is_from_user,
                timestamp=self.now(),
            )
            self._chat_messages[message.id] = message
            return self._copy(message)

    def list_chat_messages(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.ChatMessage]:
        """The most recent ``limit`` messages, oldest first."""
        with self._lock:
            owned = [m for m in self._chat_messages.values() if m.user_id == user_id]
        return list(reversed(self._newest_first(owned, "timestamp", limit)))
