"""Tracked URL schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TrackedUrlCreate(BaseModel):
    """Register a URL for ranking checks.

    Emptiness and URL shape are checked by the service so the same rules
    apply to every caller.
    """

    search_phrase: str = Field(..., max_length=255)
    location: str = Field(..., max_length=255)
    url: str = Field(..., max_length=2048)


class TrackedUrlResponse(BaseModel):
    """Tracked URL response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    search_phrase: str
    location: str
    url: str
    user_id: int
    created_at: datetime


class TrackedUrlCreatedResponse(TrackedUrlResponse):
    """Creation response; rank_position is only reported at creation time."""

    rank_position: int | None = None


class DeleteResponse(BaseModel):
    success: bool = True
