# painpal/core/security.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from painpal import schemas
from painpal.api.deps import get_storage
from painpal.storage import Storage

logger = logging.getLogger(__name__)


# =====================================================================
# IDENTITY HEADER CONFIGURATION
# =====================================================================

# The identity provider's user id, forwarded by the client on every request
IDENTITY_HEADER = "x-firebase-uid"

identity_header = APIKeyHeader(name=IDENTITY_HEADER, auto_error=False)


# =====================================================================
# USER AUTHENTICATION DEPENDENCIES
# =====================================================================

def get_current_user(
    external_id: Optional[str] = Depends(identity_header),
    storage: Storage = Depends(get_storage),
) -> schemas.User:
    """
    Resolve the caller's external identity to a stored user.

    Args:
        external_id: Value of the identity header, if sent
        storage: Storage backend

    Returns:
        The user bound to the identity

    Raises:
        HTTPException: 401 if the header is missing or maps to no user; the
            response is identical in both cases
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
    )

    if not external_id:
        raise credentials_exception

    user = storage.get_user_by_external_id(external_id)
    if user is None:
        logger.info("Rejected request for unknown identity")
        raise credentials_exception

    return user
