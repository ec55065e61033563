# services/intervention.py
from typing import List

from painpal import schemas
from painpal.core.exceptions import NotFoundError
from painpal.storage import Storage, DEFAULT_LIST_LIMIT


class InterventionService:
    """
    Intervention logging on behalf of an authenticated user.

    The store trusts its callers about log ownership; this layer makes sure a
    log is only ever attached to one of the caller's own interventions.
    """

    def get_owned_intervention(
        self, storage: Storage, *, user_id: int, intervention_id: int
    ) -> schemas.Intervention:
        intervention = storage.get_intervention(user_id, intervention_id)
        if intervention is None:
            raise NotFoundError("Intervention not found")
        return intervention

    def add_log(
        self,
        storage: Storage,
        *,
        user_id: int,
        intervention_id: int,
        log_in: schemas.InterventionLogCreate,
    ) -> schemas.InterventionLog:
        """Append a log; the store refreshes the intervention's streak as it writes."""
        self.get_owned_intervention(storage, user_id=user_id, intervention_id=intervention_id)
        return storage.create_intervention_log(
            user_id, intervention_id, log_in.pain_level, notes=log_in.notes
        )

    def list_logs(
        self,
        storage: Storage,
        *,
        user_id: int,
        intervention_id: int,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[schemas.InterventionLog]:
        self.get_owned_intervention(storage, user_id=user_id, intervention_id=intervention_id)
        return storage.list_intervention_logs(user_id, intervention_id, limit=limit)


intervention_service = InterventionService()
