# painpal/api/routers/mood_logs.py
from typing import List
from fastapi import APIRouter, Depends, Query

from painpal import schemas
from painpal.api.deps import get_storage
from painpal.core.security import get_current_user
from painpal.storage import Storage, DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/api/mood-logs", tags=["Mood Logs"])


@router.get("", response_model=List[schemas.MoodLog])
def list_mood_logs(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000, description="Maximum entries to return"),
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Get the caller's mood logs, newest first."""
    return storage.list_mood_logs(current_user.id, limit=limit)


@router.post("", response_model=schemas.MoodLog)
def create_mood_log(
    log_in: schemas.MoodLogCreate,
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Record mood (1-5) and anxiety (1-10).

    - **triggers**: what made things worse
    - **helpers**: what helped
    """
    return storage.create_mood_log(
        current_user.id,
        log_in.mood,
        log_in.anxiety_level,
        triggers=log_in.triggers,
        helpers=log_in.helpers,
        notes=log_in.notes,
    )
