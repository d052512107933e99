"""
Business logic for users.

The ``UserService`` stores users in the ``users`` collection.  The
database handle is passed into every call; the service keeps no state
of its own.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from booking_api.app.core.db import BOOKINGS_COLLECTION, USERS_COLLECTION, to_object_id
from booking_api.app.schemas.user import UserCreate, UserRead


logger = logging.getLogger(__name__)


def _to_read(doc: Dict[str, Any]) -> UserRead:
    return UserRead(
        id=str(doc["_id"]),
        name=doc["name"],
        email=doc["email"],
        phone=doc.get("phone"),
        created_at=doc["created_at"],
    )


class UserService:
    """Service for managing users."""

    @classmethod
    async def create_user(cls, db: Any, data: UserCreate) -> UserRead:
        """Insert a new user and return it.

        Raises ``ValueError`` when the e-mail address is already
        registered.
        """
        logger.info("Registering user %s", data.email)
        doc = data.model_dump()
        doc["created_at"] = datetime.now(timezone.utc)
        try:
            result = await db[USERS_COLLECTION].insert_one(doc)
        except DuplicateKeyError:
            raise ValueError(f"User with email {data.email} already exists") from None
        doc["_id"] = result.inserted_id
        return _to_read(doc)

    @classmethod
    async def list_users(cls, db: Any) -> List[UserRead]:
        """Return all users in insertion order."""
        docs = await db[USERS_COLLECTION].find({}).to_list(length=None)
        return [_to_read(doc) for doc in docs]

    @classmethod
    async def get_user(cls, db: Any, user_id: str) -> Optional[UserRead]:
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = await db[USERS_COLLECTION].find_one({"_id": oid})
        return _to_read(doc) if doc else None

    @classmethod
    async def delete_user(cls, db: Any, user_id: str) -> bool:
        """Delete a user together with their bookings.

        Returns ``False`` if no such user exists.
        """
        oid = to_object_id(user_id)
        if oid is None:
            return False
        result = await db[USERS_COLLECTION].delete_one({"_id": oid})
        if not result.deleted_count:
            return False
        removed = await db[BOOKINGS_COLLECTION].delete_many({"user_id": oid})
        logger.info("Deleted user %s and %d booking(s)", user_id, removed.deleted_count)
        return True
