"""Pydantic schemas for API requests and responses."""

from rank_tracker.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from rank_tracker.schemas.tracked_url import (
    DeleteResponse,
    TrackedUrlCreate,
    TrackedUrlCreatedResponse,
    TrackedUrlResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "TrackedUrlCreate",
    "TrackedUrlResponse",
    "TrackedUrlCreatedResponse",
    "DeleteResponse",
]
