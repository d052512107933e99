"""
Top-level API router.

Aggregates the domain routers under their fixed prefixes.  The
application mounts this router under ``/api``, giving ``/api/users``
and ``/api/bookings``.
"""

from fastapi import APIRouter

from .endpoints import bookings, users


router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
