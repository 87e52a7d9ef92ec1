"""Category listing use case (public, no authentication)."""
from __future__ import annotations

from drivepark.db.models import Category
from drivepark.domain.listings import ListingType
from drivepark.repositories.sql_repository import SQLRepository


def category_to_dict(entity: Category) -> dict:
    return {
        "id": entity.id,
        "name": entity.name,
        "slug": entity.slug,
        "imageUrl": entity.image_url,
        "order": entity.sort_order,
    }


class CategoryService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_categories(self, vertical: ListingType | None = None) -> list[dict]:
        """Categories ordered by (order, name), optionally restricted to one vertical."""
        value = vertical.value if isinstance(vertical, ListingType) else vertical
        return [category_to_dict(c) for c in self.repository.list_categories(value)]
