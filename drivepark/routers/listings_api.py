from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from drivepark.core.utils import app_service
from drivepark.domain.listings import ListingType
from drivepark.services.listing_service import MAX_PAGE_SIZE, ListingNotFoundError, ListingService

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("")
def search_listings(
    request: Request,
    type: Optional[ListingType] = None,
    city: Optional[str] = None,
    limit: int = Query(20, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
):
    svc: ListingService = app_service(request, "listing_service")
    return svc.search(listing_type=type, city=city, limit=limit, offset=offset)


@router.get("/{id_or_slug}")
def get_listing(id_or_slug: str, request: Request):
    svc: ListingService = app_service(request, "listing_service")
    try:
        return svc.get_listing(id_or_slug)
    except ListingNotFoundError:
        raise HTTPException(404, "Listing not found")
