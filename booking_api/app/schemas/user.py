"""
Pydantic models for user data.

Defines schemas for creating users and reading user information.
Identifiers are MongoDB ObjectIds rendered as hex strings.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Jane Doe"])
    # Uniqueness is enforced by the unique index on ``users.email``.
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", examples=["jane@example.com"])
    phone: Optional[str] = Field(None, examples=["+1 555 0100"])


class UserCreate(UserBase):
    """Schema for registering a user."""


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: str
    created_at: datetime
