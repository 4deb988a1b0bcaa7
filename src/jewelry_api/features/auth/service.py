"""Business logic for user accounts."""
import logging
from typing import Optional

from fastapi import HTTPException, status

from . import models
from .schemas import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserListResponse,
    UserMutationResponse,
)

logger = logging.getLogger(__name__)


def _to_user_response(user: models.User) -> UserResponse:
    return UserResponse(
        uid=user.public_id,
        email=user.email,
        name=user.name,
        role=user.effective_role,
        phone=user.phone,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


async def get_user_by_public_id(public_id: str) -> Optional[models.User]:
    """Retrieves a user by the subject id carried in their token.

    Args:
        public_id: The KSUID of the user.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(public_id=public_id)


async def get_user_by_email(email: str) -> Optional[models.User]:
    """Retrieves a user by their email address.

    Args:
        email: The email address of the user to retrieve.

    Returns:
        The User object if found, otherwise None.
    """
    return await models.User.get_or_none(email=email)


async def get_current_user_profile(public_id: str) -> UserResponse:
    user = await get_user_by_public_id(public_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return _to_user_response(user)


async def list_users() -> UserListResponse:
    users = await models.User.all().order_by("email")
    return UserListResponse(users=[_to_user_response(user) for user in users])


async def create_user(user_in: UserCreate, hashed_password: str) -> UserMutationResponse:
    """Creates a new staff account.

    Args:
        user_in: Validated account data (the plain password is ignored here).
        hashed_password: The bcrypt hash of the password.

    Returns:
        The created user wrapped in the mutation envelope.
    """
    if await get_user_by_email(user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    try:
        user = await models.User.create(
            **user_in.model_dump(exclude={"password"}),
            hashed_password=hashed_password,
        )
    except Exception as e:
        logger.error(f"Create user failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )
    logger.info(f"Created user {user.public_id} with role {user.effective_role}")
    return UserMutationResponse(message="User created successfully", user=_to_user_response(user))


async def update_user(public_id: str, user_in: UserUpdate) -> UserMutationResponse:
    user = await get_user_by_public_id(public_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields for update")

    new_email = update_data.get("email")
    if new_email and new_email != user.email and await get_user_by_email(new_email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    for key, value in update_data.items():
        setattr(user, key, value)
    try:
        await user.save()
    except Exception as e:
        logger.error(f"Update user {public_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user",
        )
    return UserMutationResponse(message="User updated successfully", user=_to_user_response(user))


async def delete_user(public_id: str) -> UserMutationResponse:
    user = await get_user_by_public_id(public_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    await user.delete()
    logger.info(f"Deleted user {public_id}")
    return UserMutationResponse(message="User deleted successfully")
