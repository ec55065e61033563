# services/user.py
import logging

from painpal import schemas
from painpal.core.exceptions import ConflictError
from painpal.storage import Storage

logger = logging.getLogger(__name__)


class UserService:
    """Service layer for user registration."""

    def register_user(self, storage: Storage, user_in: schemas.UserCreate) -> schemas.User:
        """
        Return the user bound to ``external_id``, creating it on first sign-in.

        Args:
            storage: Storage backend
            user_in: Email, display name and external identity

        Returns:
            The existing or newly created user

        Raises:
            ConflictError: If the email already belongs to a different identity
        """
        existing = storage.get_user_by_external_id(user_in.external_id)
        if existing:
            return existing

        # The store does not enforce email uniqueness, so check it here
        owner = storage.get_user_by_email(user_in.email)
        if owner and owner.external_id != user_in.external_id:
            raise ConflictError("Email already registered")

        user = storage.create_user(
            email=user_in.email, name=user_in.name, external_id=user_in.external_id
        )
        logger.info(f"Registered user {user.id}")
        return user


user_service = UserService()
