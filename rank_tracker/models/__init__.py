"""SQLAlchemy models."""

from rank_tracker.models.tracked_url import TrackedUrl
from rank_tracker.models.user import User

__all__ = [
    "User",
    "TrackedUrl",
]
