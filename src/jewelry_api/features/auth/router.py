"""API routes for token issuance, the current user and admin user management."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from typing import Annotated

from . import schemas
from . import security as auth_security
from . import service as auth_service
from .models import User

logger = logging.getLogger(__name__)

# The /api/firebase prefix is part of the public client contract
router = APIRouter(
    tags=["Authentication"],
    prefix="/firebase"
)


@router.post("/token", response_model=schemas.Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    verifier: Annotated[auth_security.TokenVerifier, Depends(auth_security.get_token_verifier)],
):
    user = await auth_service.get_user_by_email(email=form_data.username)
    if not user or not auth_security.verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"access_token": verifier.issue(user), "token_type": "bearer"}


@router.get("/me", response_model=schemas.CurrentUserResponse)
async def read_current_user(
    identity: Annotated[schemas.Identity, Depends(auth_security.get_current_identity)],
):
    user = await auth_service.get_current_user_profile(identity.subject_id)
    return schemas.CurrentUserResponse(user=user)


@router.get("/users", response_model=schemas.UserListResponse)
async def list_users(
    current_admin: Annotated[User, Depends(auth_security.get_current_admin_user)],
):
    return await auth_service.list_users()


@router.post(
    "/users",
    response_model=schemas.UserMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_in: schemas.UserCreate,
    current_admin: Annotated[User, Depends(auth_security.get_current_admin_user)],
):
    hashed_password = auth_security.get_password_hash(user_in.password)
    return await auth_service.create_user(user_in, hashed_password)


@router.put("/users/{user_id}", response_model=schemas.UserMutationResponse)
async def update_user(
    user_id: str,
    user_in: schemas.UserUpdate,
    current_admin: Annotated[User, Depends(auth_security.get_current_admin_user)],
):
    return await auth_service.update_user(user_id, user_in)


@router.delete("/users/{user_id}", response_model=schemas.UserMutationResponse)
async def delete_user(
    user_id: str,
    current_admin: Annotated[User, Depends(auth_security.get_current_admin_user)],
):
    return await auth_service.delete_user(user_id)
