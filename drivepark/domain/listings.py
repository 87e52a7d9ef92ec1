"""Listing verticals and the route namespaces that serve them."""
from __future__ import annotations

from enum import Enum


class ListingType(str, Enum):
    CAR_RENTAL = "CAR_RENTAL"
    CHAUFFEUR = "CHAUFFEUR"
    MOTORIZED_EXPERIENCE = "MOTORIZED_EXPERIENCE"


class ListingStatus(str, Enum):
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    HOST = "HOST"
    CLIENT = "CLIENT"


# Route namespace -> vertical served under /{locale}/{namespace}/{slug}
VERTICAL_ROUTES: dict[str, ListingType] = {
    "location": ListingType.CAR_RENTAL,
    "ride": ListingType.CHAUFFEUR,
    "experience": ListingType.MOTORIZED_EXPERIENCE,
}


def namespace_for(listing_type: ListingType | str | None) -> str | None:
    """Route namespace for a listing type, or None for unknown types."""
    for namespace, vertical in VERTICAL_ROUTES.items():
        if vertical == listing_type:
            return namespace
    return None
