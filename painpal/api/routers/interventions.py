# painpal/api/routers/interventions.py
from typing import List
from fastapi import APIRouter, Depends, Path, Query

from painpal import schemas
from painpal.api.deps import get_storage
from painpal.core.security import get_current_user
from painpal.services.intervention import intervention_service
from painpal.storage import Storage, DEFAULT_LIST_LIMIT

router = APIRouter(prefix="/api/interventions", tags=["Interventions"])


# ====================================================
# INTERVENTION ENDPOINTS
# ====================================================


@router.get("", response_model=List[schemas.Intervention])
def list_interventions(
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Get the caller's active interventions, newest first."""
    return storage.list_interventions(current_user.id)


@router.post("", response_model=schemas.Intervention)
def create_intervention(
    intervention_in: schemas.InterventionCreate,
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Start tracking a new habit. The streak starts at 0."""
    return storage.create_intervention(
        current_user.id, intervention_in.name, intervention_in.frequency
    )


# ====================================================
# INTERVENTION LOG ENDPOINTS
# ====================================================


@router.get("/{intervention_id}/logs", response_model=List[schemas.InterventionLog])
def list_intervention_logs(
    intervention_id: int = Path(..., ge=1),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000),
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Get logs for one of the caller's interventions, newest first."""
    return intervention_service.list_logs(
        storage, user_id=current_user.id, intervention_id=intervention_id, limit=limit
    )


@router.post("/{intervention_id}/logs", response_model=schemas.InterventionLog)
def create_intervention_log(
    log_in: schemas.InterventionLogCreate,
    intervention_id: int = Path(..., ge=1),
    current_user: schemas.User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Log that the intervention was done today, with the pain level afterwards.

    The intervention's streak is recomputed from its full history.
    """
    return intervention_service.add_log(
        storage, user_id=current_user.id, intervention_id=intervention_id, log_in=log_in
    )
