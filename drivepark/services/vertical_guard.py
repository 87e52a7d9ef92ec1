"""Check a fetched listing against the vertical a route serves."""
from __future__ import annotations

from drivepark.domain.listings import ListingType


class NotFoundSignal(Exception):
    """Stop rendering and show the standard not-found page instead."""


def assert_vertical(listing: dict | None, expected: ListingType | None) -> dict:
    if listing is None:
        raise NotFoundSignal("listing not found")
    if expected is not None and listing.get("type") != expected.value:
        # Same outcome as an absent listing
        raise NotFoundSignal("listing not found")
    return listing
