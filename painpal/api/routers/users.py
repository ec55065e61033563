# painpal/api/routers/users.py
from fastapi import APIRouter, Depends, status

from painpal import schemas
from painpal.api.deps import get_storage
from painpal.core.security import get_current_user
from painpal.services.user import user_service
from painpal.storage import Storage

router = APIRouter(prefix="/api/users", tags=["Users"])


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "",
    response_model=schemas.User,
    status_code=status.HTTP_200_OK,
    summary="Register or fetch the user for an external identity"
)
def register(
    user_in: schemas.UserCreate,
    storage: Storage = Depends(get_storage),
):
    """
    Create the user on first sign-in; later calls with the same
    **external_id** return the same user.

    Returns 409 if the email is already bound to a different identity.
    """
    return user_service.register_user(storage, user_in)


# =====================================================================
# AUTHENTICATED ENDPOINTS
# =====================================================================

@router.get("/me", response_model=schemas.User, summary="Get current user")
def get_me(current_user: schemas.User = Depends(get_current_user)):
    """Get the user resolved from the identity header."""
    return current_user
