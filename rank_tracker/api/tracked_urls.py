"""Tracked URL API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from rank_tracker.api.dependencies import get_identity, get_tracked_url_service
from rank_tracker.schemas.tracked_url import (
    DeleteResponse,
    TrackedUrlCreate,
    TrackedUrlCreatedResponse,
    TrackedUrlResponse,
)
from rank_tracker.services.auth import Identity
from rank_tracker.services.tracked_urls import SUGGESTED_LOCATIONS, TrackedUrlService

router = APIRouter(prefix="/api/v1/tracked-urls", tags=["tracked-urls"])


@router.get("/locations", response_model=list[str])
async def get_locations():
    """Locations offered by the tracking form."""
    return SUGGESTED_LOCATIONS


@router.post("", response_model=TrackedUrlCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_tracked_url(
    data: TrackedUrlCreate,
    identity: Annotated[Identity | None, Depends(get_identity)],
    service: Annotated[TrackedUrlService, Depends(get_tracked_url_service)],
):
    """Track a URL and report where it currently ranks."""
    created = await service.create_tracked_url(
        identity,
        search_phrase=data.search_phrase,
        location=data.location,
        url=data.url,
    )

    response = TrackedUrlCreatedResponse.model_validate(created.tracked_url)
    response.rank_position = created.rank_position
    return response


@router.get("", response_model=list[TrackedUrlResponse])
async def get_tracked_urls(
    identity: Annotated[Identity | None, Depends(get_identity)],
    service: Annotated[TrackedUrlService, Depends(get_tracked_url_service)],
):
    """Get the current user's tracked URLs, newest first."""
    return service.list_tracked_urls(identity)


@router.delete("/{tracked_url_id}", response_model=DeleteResponse)
async def delete_tracked_url(
    tracked_url_id: int,
    identity: Annotated[Identity | None, Depends(get_identity)],
    service: Annotated[TrackedUrlService, Depends(get_tracked_url_service)],
):
    """Stop tracking a URL."""
    service.delete_tracked_url(identity, tracked_url_id)
    return DeleteResponse(success=True)
