"""Backend listing lookups (detail by id or slug, filtered search)."""
from __future__ import annotations

from decimal import Decimal

from drivepark.db.models import Listing
from drivepark.domain.listings import ListingType
from drivepark.repositories.sql_repository import SQLRepository

MAX_PAGE_SIZE = 100


class ListingNotFoundError(Exception):
    """Raised when no listing matches the id or slug."""


def _price(value) -> float | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value


def listing_to_dict(entity: Listing) -> dict:
    return {
        "id": entity.id,
        "slug": entity.slug,
        "type": entity.type,
        "status": entity.status,
        "title": entity.title,
        "description": entity.description,
        "city": entity.city,
        "country": entity.country,
        "pricePerDay": _price(entity.price_per_day),
        "currency": entity.currency,
        "category": entity.category,
        "seats": entity.seats,
        "hostId": entity.host_id,
        "attributes": entity.attributes or {},
        "updatedAt": entity.updated_at.isoformat() if entity.updated_at else None,
    }


class ListingService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def get_listing(self, id_or_slug: str) -> dict:
        entity = self.repository.get_listing(id_or_slug)
        if not entity:
            raise ListingNotFoundError(f"Listing {id_or_slug} not found")
        return listing_to_dict(entity)

    def search(
        self,
        *,
        listing_type: ListingType | None = None,
        city: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> dict:
        limit = min(max(1, limit), MAX_PAGE_SIZE)
        offset = max(0, offset)
        items, total = self.repository.list_listings(
            listing_type=listing_type.value if listing_type else None,
            city=(city or "").strip() or None,
            limit=limit,
            offset=offset,
        )
        return {"items": [listing_to_dict(e) for e in items], "total": total}
