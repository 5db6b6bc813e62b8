"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from rank_tracker.api.dependencies import get_current_user
from rank_tracker.database import get_db
from rank_tracker.errors import InvalidCredentials
from rank_tracker.models.user import User
from rank_tracker.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from rank_tracker.services.auth import authenticate_user, create_access_token, register_user

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user. The response never includes the password."""
    return register_user(
        db,
        email=user_data.email,
        password=user_data.password,
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        company=user_data.company,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        raise InvalidCredentials()

    access_token = create_access_token(user.id, user.email)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.post("/logout")
async def logout(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Logout (client should discard token)."""
    return {"message": "Logged out successfully"}
