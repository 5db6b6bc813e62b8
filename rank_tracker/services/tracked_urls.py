"""Tracked URL lifecycle: validation, ownership and rank enrichment."""

import logging
from dataclasses import dataclass

from pydantic import HttpUrl, TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rank_tracker.errors import (
    InternalError,
    InvalidInput,
    NotFoundOrUnauthorized,
    Unauthenticated,
    UserNotFound,
)
from rank_tracker.models.tracked_url import TrackedUrl
from rank_tracker.models.user import User
from rank_tracker.services.auth import Identity, get_user_by_id
from rank_tracker.services.ranking import RankingService

logger = logging.getLogger(__name__)

# Offered by the entry form; the server accepts any non-empty location.
SUGGESTED_LOCATIONS = ["San Francisco", "New York", "Chicago"]

_http_url = TypeAdapter(HttpUrl)


@dataclass
class TrackedUrlInput:
    search_phrase: str
    location: str
    url: str


@dataclass
class CreatedTrackedUrl:
    """A freshly stored tracked URL and the rank found while creating it."""

    tracked_url: TrackedUrl
    rank_position: int | None


def validate_tracked_url_input(search_phrase: str, location: str, url: str) -> TrackedUrlInput:
    """Check and trim the user-supplied fields.

    Raises:
        InvalidInput: With one message per failing field.
    """
    values = {
        "search_phrase": (search_phrase or "").strip(),
        "location": (location or "").strip(),
        "url": (url or "").strip(),
    }

    errors: dict[str, str] = {}
    for name, value in values.items():
        if not value:
            label = name.replace("_", " ").capitalize()
            errors[name] = f"{label} is required"

    if "url" not in errors:
        try:
            _http_url.validate_python(values["url"])
        except ValidationError:
            errors["url"] = "Please enter a valid URL (e.g., https://example.com)"

    if errors:
        raise InvalidInput(errors)

    return TrackedUrlInput(**values)


class TrackedUrlService:
    """Service for creating, listing and deleting a user's tracked URLs."""

    def __init__(self, db: Session, ranking_service: RankingService | None = None):
        self.db = db
        self.ranking_service = ranking_service or RankingService()

    def _resolve_owner(self, identity: Identity | None) -> User:
        if identity is None:
            raise Unauthenticated()

        user = get_user_by_id(self.db, identity.user_id)
        if user is None:
            raise UserNotFound()
        return user

    async def create_tracked_url(
        self,
        identity: Identity | None,
        search_phrase: str,
        location: str,
        url: str,
    ) -> CreatedTrackedUrl:
        """Store a tracked URL and report its current rank.

        The rank lookup is best-effort: any provider failure leaves
        ``rank_position`` as None and the URL is stored regardless.
        """
        if identity is None:
            raise Unauthenticated()

        data = validate_tracked_url_input(search_phrase, location, url)
        owner = self._resolve_owner(identity)

        lookup = await self.ranking_service.lookup_rank(data.search_phrase, data.url)
        if not lookup.available:
            logger.warning("Failed to check ranking for %s: %s", data.url, lookup.error)

        tracked_url = TrackedUrl(
            search_phrase=data.search_phrase,
            location=data.location,
            url=data.url,
            user_id=owner.id,
        )
        self.db.add(tracked_url)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("Database error creating tracked URL", exc_info=True)
            raise InternalError() from None
        self.db.refresh(tracked_url)

        logger.info(
            "Tracked URL %s created for user %s (rank=%s)",
            tracked_url.id,
            owner.id,
            lookup.rank,
        )
        return CreatedTrackedUrl(tracked_url=tracked_url, rank_position=lookup.rank)

    def list_tracked_urls(self, identity: Identity | None) -> list[TrackedUrl]:
        """Get the caller's tracked URLs, newest first."""
        owner = self._resolve_owner(identity)
        return (
            self.db.query(TrackedUrl)
            .filter(TrackedUrl.user_id == owner.id)
            .order_by(TrackedUrl.created_at.desc(), TrackedUrl.id.desc())
            .all()
        )

    def delete_tracked_url(self, identity: Identity | None, tracked_url_id: int) -> None:
        """Permanently delete one of the caller's tracked URLs.

        Raises:
            NotFoundOrUnauthorized: No row with this id belongs to the caller.
        """
        owner = self._resolve_owner(identity)
        tracked_url = (
            self.db.query(TrackedUrl)
            .filter(TrackedUrl.id == tracked_url_id, TrackedUrl.user_id == owner.id)
            .first()
        )
        if tracked_url is None:
            raise NotFoundOrUnauthorized()

        self.db.delete(tracked_url)
        self.db.commit()
        logger.info("Tracked URL %s deleted by user %s", tracked_url_id, owner.id)
