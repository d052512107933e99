"""
Business logic for bookings.

The ``BookingService`` encapsulates creating, listing, updating and
removing bookings stored in the ``bookings`` collection.  A booking
must reference an existing user.  Overlapping bookings are accepted
as-is: the service does no conflict resolution.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from booking_api.app.core.db import BOOKINGS_COLLECTION, USERS_COLLECTION, to_object_id
from booking_api.app.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingStatus,
    BookingUpdate,
)


logger = logging.getLogger(__name__)


def _to_read(doc: Dict[str, Any]) -> BookingRead:
    return BookingRead(
        id=str(doc["_id"]),
        user_id=str(doc["user_id"]),
        title=doc["title"],
        start_time=doc["start_time"],
        end_time=doc["end_time"],
        guests=doc["guests"],
        notes=doc.get("notes"),
        status=doc["status"],
        created_at=doc["created_at"],
        updated_at=doc["updated_at"],
    )


class BookingService:
    """Service for managing bookings."""

    @classmethod
    async def create_booking(cls, db: Any, data: BookingCreate) -> BookingRead:
        """Create a booking with status ``pending``.

        Raises ``ValueError`` if ``data.user_id`` does not refer to an
        existing user.
        """
        user_oid = to_object_id(data.user_id)
        if user_oid is None or await db[USERS_COLLECTION].find_one({"_id": user_oid}) is None:
            raise ValueError(f"User {data.user_id} does not exist")

        now = datetime.now(timezone.utc)
        doc = data.model_dump()
        doc.update(
            user_id=user_oid,
            status=BookingStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        result = await db[BOOKINGS_COLLECTION].insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created booking %s for user %s", result.inserted_id, data.user_id)
        return _to_read(doc)

    @classmethod
    async def list_bookings(
        cls,
        db: Any,
        user_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[BookingRead]:
        """Return bookings, optionally filtered by user and status."""
        query: Dict[str, Any] = {}
        if user_id is not None:
            user_oid = to_object_id(user_id)
            if user_oid is None:
                return []
            query["user_id"] = user_oid
        if status is not None:
            query["status"] = status.value
        docs = await db[BOOKINGS_COLLECTION].find(query).to_list(length=None)
        return [_to_read(doc) for doc in docs]

    @classmethod
    async def get_booking(cls, db: Any, booking_id: str) -> Optional[BookingRead]:
        oid = to_object_id(booking_id)
        if oid is None:
            return None
        doc = await db[BOOKINGS_COLLECTION].find_one({"_id": oid})
        return _to_read(doc) if doc else None

    @classmethod
    async def update_booking(
        cls, db: Any, booking_id: str, update: BookingUpdate
    ) -> Optional[BookingRead]:
        """Apply the supplied fields of ``update`` to a booking.

        Returns the updated booking, or ``None`` if it does not exist.
        An empty update returns the booking unchanged.
        """
        oid = to_object_id(booking_id)
        if oid is None:
            return None
        # An explicit null clears ``notes``; for the other fields it means "keep".
        changes = {
            key: value
            for key, value in update.model_dump(exclude_unset=True, mode="json").items()
            if value is not None or key == "notes"
        }
        if not changes:
            return await cls.get_booking(db, booking_id)
        changes["updated_at"] = datetime.now(timezone.utc)
        doc = await db[BOOKINGS_COLLECTION].find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        logger.info("Updated booking %s: %s", booking_id, sorted(changes))
        return _to_read(doc)

    @classmethod
    async def delete_booking(cls, db: Any, booking_id: str) -> bool:
        oid = to_object_id(booking_id)
        if oid is None:
            return False
        result = await db[BOOKINGS_COLLECTION].delete_one({"_id": oid})
        return bool(result.deleted_count)
