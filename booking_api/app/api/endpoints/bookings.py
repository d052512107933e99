"""
Booking endpoints.

These routes create, list, update and cancel bookings.  They rely on
``BookingService`` for database access; this module only maps service
outcomes to HTTP status codes.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from booking_api.app.core.db import get_database
from booking_api.app.schemas.booking import (
    BookingCreate,
    BookingRead,
    BookingStatus,
    BookingUpdate,
)
from booking_api.app.services.booking_service import BookingService


router = APIRouter()


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(booking: BookingCreate, db: Any = Depends(get_database)) -> BookingRead:
    """Create a booking.

    The new booking starts in status ``pending``.  A 400 error is
    returned when the referenced user does not exist.
    """
    try:
        return await BookingService.create_booking(db, booking)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/", response_model=List[BookingRead])
async def list_bookings(
    user_id: Optional[str] = Query(None, description="Only bookings of this user"),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    db: Any = Depends(get_database),
) -> List[BookingRead]:
    return await BookingService.list_bookings(db, user_id=user_id, status=booking_status)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    db: Any = Depends(get_database),
) -> BookingRead:
    booking = await BookingService.get_booking(db, booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


@router.patch("/{booking_id}", response_model=BookingRead)
async def update_booking(
    update: BookingUpdate,
    booking_id: str = Path(..., description="ID of the booking"),
    db: Any = Depends(get_database),
) -> BookingRead:
    """Change the status, guest count or notes of a booking.

    Fields omitted from the body are left untouched.
    """
    booking = await BookingService.update_booking(db, booking_id, update)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: str = Path(..., description="ID of the booking"),
    db: Any = Depends(get_database),
) -> None:
    if not await BookingService.delete_booking(db, booking_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return None
