"""
Pydantic models for bookings.

A booking reserves ``title`` (a room, table, slot...) for a user
between ``start_time`` and ``end_time``.  Overlapping bookings are not
detected; only the shape of each booking is validated.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Conference room A"])
    start_time: datetime
    end_time: datetime
    guests: int = Field(1, ge=1, examples=[2])
    notes: Optional[str] = None


class BookingCreate(BookingBase):
    """Schema for creating a booking."""

    user_id: str = Field(..., description="ID of the user making the booking")

    @model_validator(mode="after")
    def check_time_range(self) -> "BookingCreate":
        if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
            raise ValueError("start_time and end_time must both include a timezone or both omit it")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingUpdate(BaseModel):
    """Schema for updating a booking.

    Only the status, the number of guests and the notes can be changed.
    Omitted fields keep their stored values.  Sending ``"notes": null``
    removes the notes.
    """

    status: Optional[BookingStatus] = None
    guests: Optional[int] = Field(default=None, ge=1)
    notes: Optional[str] = None


class BookingRead(BookingBase):
    id: str
    user_id: str
    status: BookingStatus
    created_at: datetime
    updated_at: datetime
