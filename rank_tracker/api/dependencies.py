"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rank_tracker.database import get_db
from rank_tracker.errors import Unauthenticated, UserNotFound
from rank_tracker.models.user import User
from rank_tracker.services.auth import Identity, get_user_by_id, resolve_identity
from rank_tracker.services.ranking import RankingService, get_ranking_service
from rank_tracker.services.tracked_urls import TrackedUrlService

security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity | None:
    """Resolve the bearer token, if any, into the caller's identity.

    Returns None for a missing or unusable token; services decide whether
    that is an error.
    """
    if credentials is None:
        return None
    return resolve_identity(credentials.credentials)


def get_current_user(
    identity: Annotated[Identity | None, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    if identity is None:
        raise Unauthenticated("Invalid authentication credentials")

    user = get_user_by_id(db, identity.user_id)
    if user is None:
        raise UserNotFound()
    return user


def get_tracked_url_service(
    db: Annotated[Session, Depends(get_db)],
    ranking_service: Annotated[RankingService, Depends(get_ranking_service)],
) -> TrackedUrlService:
    """Get tracked URL service with dependencies."""
    return TrackedUrlService(db, ranking_service)
