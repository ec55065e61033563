# painpal/api/routers/pain_logs.py
from typing import List
from fastapi import APIRouter, Depends, Query

from painpal import schemas
from painpal.api.deps import get_storage
from painpal.core.security import get_current_user
from painpal.storage import Storage, DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/api/pain-logs", tags=["Pain Logs"])


@router.get("", response_model=List[schemas.PainLog])
def list_pain_logs(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000, description="Maximum entries to return"),
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Get the caller's pain logs, newest first."""
    return storage.list_pain_logs(current_user.id, limit=limit)


@router.post("", response_model=schemas.PainLog)
def create_pain_log(
    log_in: schemas.PainLogCreate,
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Record a pain level (1-10) with optional tags and notes."""
    return storage.create_pain_log(
        current_user.id, log_in.pain_level, notes=log_in.notes, tags=log_in.tags
    )
