# storage/database.py
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional

from sqlalchemy import update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from painpal import models, schemas
from painpal.core.config import Base
from painpal.core.exceptions import DatabaseError
from painpal.storage.base import (
    Clock,
    DEFAULT_LIST_LIMIT,
    DEFAULT_STREAK_HISTORY_LIMIT,
)
from painpal.services.streak import compute_day_streak

logger = logging.getLogger(__name__)

# One id counter per collection
COLLECTIONS = (
    "users",
    "pain_logs",
    "mood_logs",
    "interventions",
    "intervention_logs",
    "chat_messages",
)


class DatabaseStorage:
    """
    Persistent storage on any SQLAlchemy engine.

    Every user owns its logs, interventions and messages through ``user_id``
    foreign keys. Ids come from the ``id_counters`` table, one counter per
    collection, bumped by one atomic UPDATE in the same transaction as the
    insert that consumes it.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        clock: Clock = datetime.now,
        streak_history_limit: int = DEFAULT_STREAK_HISTORY_LIMIT,
    ):
        self.engine = engine
        self._clock = clock
        self.streak_history_limit = streak_history_limit
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    # =====================================================================
    # SETUP & HELPERS
    # =====================================================================

    def create_all(self) -> None:
        """Create tables and seed one id counter per collection."""
        Base.metadata.create_all(bind=self.engine)
        with self._session() as db:
            existing = {c.name for c in db.query(models.IdCounter).all()}
            for name in COLLECTIONS:
                if name not in existing:
                    db.add(models.IdCounter(name=name, value=0))

    def now(self) -> datetime:
        return self._clock()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Session scoped to one operation; commits on success."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Database operation failed: {exc}")
            raise DatabaseError(str(exc)) from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _next_id(self, db: Session, collection: str) -> int:
        """
        Atomically bump and return the counter for ``collection``.

        A single UPDATE ... RETURNING both increments and reads the value, so
        the write lock is taken before anything is read, SQLite included.
        """
        value = db.execute(
            update(models.IdCounter)
            .where(models.IdCounter.name == collection)
            .values(value=models.IdCounter.value + 1)
            .returning(models.IdCounter.value)
            .execution_options(synchronize_session=False)
        ).scalar_one_or_none()
        if value is None:
            # Counters are seeded by create_all; this only covers unseeded tables
            db.add(models.IdCounter(name=collection, value=1))
            db.flush()
            return 1
        return value

    # =====================================================================
    # USERS
    # =====================================================================

    def get_user(self, id: int) -> Optional[schemas.User]:
        with self._session() as db:
            row = db.get(models.User, id)
            return schemas.User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[schemas.User]:
        with self._session() as db:
            row = db.query(models.User).filter(models.User.email == email).first()
            return schemas.User.model_validate(row) if row else None

    def get_user_by_external_id(self, external_id: str) -> Optional[schemas.User]:
        with self._session() as db:
            row = (
                db.query(models.User)
                .filter(models.User.external_id == external_id)
                .first()
            )
            return schemas.User.model_validate(row) if row else None

    def create_user(self, email: str, name: str, external_id: str) -> schemas.User:
        """Create a user, or return the one already bound to ``external_id``."""
        with self._session() as db:
            row = (
                db.query(models.User)
                .filter(models.User.external_id == external_id)
                .first()
            )
            if row is None:
                row = models.User(
                    id=self._next_id(db, "users"),
                    email=email,
                    name=name,
                    external_id=external_id,
                    created_at=self.now(),
                )
                db.add(row)
                db.flush()
            return schemas.User.model_validate(row)

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
        with self._session() as db:
            row = models.PainLog(
                id=self._next_id(db, "pain_logs"),
                user_id=user_id,
                pain_level=pain_level,
                tags=list(tags or []),
                notes=notes,
                date=self.now(),
            )
            db.add(row)
            db.flush()
            return schemas.PainLog.model_validate(row)

    def list_pain_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.PainLog]:
        if limit <= 0:
            return []
        with self._session() as db:
            rows = (
                db.query(models.PainLog)
                .filter(models.PainLog.user_id == user_id)
                .order_by(models.PainLog.date.desc(), models.PainLog.id.desc())
                .limit(limit)
                .all()
            )
            return [schemas.PainLog.model_validate(r) for r in rows]

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
        with self._session() as db:
            row = models.MoodLog(
                id=self._next_id(db, "mood_logs"),
                user_id=user_id,
                mood=mood,
                anxiety_level=anxiety_level,
                triggers=list(triggers or []),
                helpers=list(helpers or []),
                notes=notes,
                date=self.now(),
            )
            db.add(row)
            db.flush()
            return schemas.MoodLog.model_validate(row)

    def list_mood_logs(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.MoodLog]:
        if limit <= 0:
            return []
        with self._session() as db:
            rows = (
                db.query(models.MoodLog)
                .filter(models.MoodLog.user_id == user_id)
                .order_by(models.MoodLog.date.desc(), models.MoodLog.id.desc())
                .limit(limit)
                .all()
            )
            return [schemas.MoodLog.model_validate(r) for r in rows]

    # =====================================================================
    # INTERVENTIONS
    # =====================================================================

    def create_intervention(self, user_id: int, name: str, frequency: str) -> schemas.Intervention:
        with self._session() as db:
            row = models.Intervention(
                id=self._next_id(db, "interventions"),
                user_id=user_id,
                name=name,
                frequency=frequency,
                current_streak=0,
                is_active=True,
                created_at=self.now(),
            )
            db.add(row)
            db.flush()
            return schemas.Intervention.model_validate(row)

    def get_intervention(self, user_id: int, intervention_id: int) -> Optional[schemas.Intervention]:
        with self._session() as db:
            row = (
                db.query(models.Intervention)
                .filter(models.Intervention.id == intervention_id)
                .filter(models.Intervention.user_id == user_id)
                .first()
            )
            return schemas.Intervention.model_validate(row) if row else None

    def list_interventions(self, user_id: int) -> List[schemas.Intervention]:
        """Active interventions only, newest first."""
        with self._session() as db:
            rows = (
                db.query(models.Intervention)
                .filter(models.Intervention.user_id == user_id)
                .filter(models.Intervention.is_active.is_(True))
                .order_by(models.Intervention.created_at.desc(), models.Intervention.id.desc())
                .all()
            )
            return [schemas.Intervention.model_validate(r) for r in rows]

    def update_intervention_streak(self, intervention_id: int, streak: int) -> Optional[schemas.Intervention]:
        with self._session() as db:
            row = db.get(models.Intervention, intervention_id)
            if row is None:
                return None
            row.current_streak = streak
            db.flush()
            return schemas.Intervention.model_validate(row)

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
        """Append a log and recompute the parent intervention's streak in one transaction."""
        with self._session() as db:
            # Serialise appends to the same intervention so each recompute sees the others
            intervention = (
                db.query(models.Intervention)
                .filter(models.Intervention.id == intervention_id)
                .with_for_update()
                .first()
            )

            row = models.InterventionLog(
                id=self._next_id(db, "intervention_logs"),
                user_id=user_id,
                intervention_id=intervention_id,
                pain_level=pain_level,
                notes=notes,
                date=self.now(),
            )
            db.add(row)
            db.flush()
            log = schemas.InterventionLog.model_validate(row)

            history = (
                db.query(models.InterventionLog.date)
                .filter(models.InterventionLog.user_id == user_id)
                .filter(models.InterventionLog.intervention_id == intervention_id)
                .order_by(models.InterventionLog.date.desc(), models.InterventionLog.id.desc())
                .limit(self.streak_history_limit)
                .all()
            )
            streak = compute_day_streak((h.date for h in history), self.now().date())
            if intervention is not None:
                intervention.current_streak = streak
                db.flush()
            return log

    def list_intervention_logs(
        self, user_id: int, intervention_id: int, limit: int = DEFAULT_LIST_LIMIT
    ) -> List[schemas.InterventionLog]:
        if limit <= 0:
            return []
        with self._session() as db:
            rows = (
                db.query(models.InterventionLog)
                .filter(models.InterventionLog.user_id == user_id)
                .filter(models.InterventionLog.intervention_id == intervention_id)
                .order_by(models.InterventionLog.date.desc(), models.InterventionLog.id.desc())
                .limit(limit)
                .all()
            )
            return [schemas.InterventionLog.model_validate(r) for r in rows]

    # =====================================================================
    # CHAT MESSAGES
    # =====================================================================

    def create_chat_message(self, user_id: int, content: str, is_from_user: bool) -> schemas.ChatMessage:
        with self._session() as db:
            row = models.ChatMessage(
                id=self._next_id(db, "chat_messages"),
                user_id=user_id,
                content=content,
                is_from_user=is_from_user,
                timestamp=self.now(),
            )
            db.add(row)
            db.flush()
            return schemas.ChatMessage.model_validate(row)

    def list_chat_messages(self, user_id: int, limit: int = DEFAULT_LIST_LIMIT) -> List[schemas.ChatMessage]:
        """The most recent ``limit`` messages, oldest first."""
        if limit <= 0:
            return []
        with self._session() as db:
            rows = (
                db.query(models.ChatMessage)
                .filter(models.ChatMessage.user_id == user_id)
                .order_by(models.ChatMessage.timestamp.desc(), models.ChatMessage.id.desc())
                .limit(limit)
                .all()
            )
            return [schemas.ChatMessage.model_validate(r) for r in reversed(rows)]
