"""
User endpoints.

Provide registration, listing, lookup and removal of users.  All
routes depend on ``get_database`` and therefore answer 503 until the
database connection is ready.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from booking_api.app.core.db import get_database
from booking_api.app.schemas.user import UserCreate, UserRead
from booking_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate, db: Any = Depends(get_database)) -> UserRead:
    """Register a new user.

    Returns 409 if the e-mail address is already taken.
    """
    try:
        return await UserService.create_user(db, user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/", response_model=List[UserRead])
async def list_users(db: Any = Depends(get_database)) -> List[UserRead]:
    return await UserService.list_users(db)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: str = Path(..., description="ID of the user"),
    db: Any = Depends(get_database),
) -> UserRead:
    user = await UserService.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str = Path(..., description="ID of the user"),
    db: Any = Depends(get_database),
) -> None:
    """Delete a user and every booking that belongs to them."""
    if not await UserService.delete_user(db, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return None
