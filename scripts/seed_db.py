#!/usr/bin/env python3
"""
Create the schema and upsert demo data (users, categories, one listing per vertical).

Usage:
  DATABASE_URL=sqlite:///drivepark.db python scripts/seed_db.py [--password demo]
"""
from __future__ import annotations

import argparse
import sys

from drivepark.core.security import hash_password
from drivepark.db.create_tables import create_all
from drivepark.domain.listings import ListingStatus, ListingType, UserRole
from drivepark.domain.slugs import is_valid_slug, slugify
from drivepark.repositories.sql_repository import SQLRepository

CATEGORIES = [
    ("Economy", 1, ListingType.CAR_RENTAL),
    ("SUVs", 2, ListingType.CAR_RENTAL),
    ("Sedans", 1, ListingType.CHAUFFEUR),
    ("Vans", 2, ListingType.CHAUFFEUR),
    ("Quad", 1, ListingType.MOTORIZED_EXPERIENCE),
    ("Jet ski", 2, ListingType.MOTORIZED_EXPERIENCE),
]

LISTINGS = [
    {
        "slug": "citadine-paris-1",
        "listing_type": ListingType.CAR_RENTAL,
        "title": "Citadine centre Paris",
        "description": "Economy car for the city. Air conditioning, Bluetooth.",
        "city": "Paris",
        "country": "France",
        "price_per_day": 45,
        "category": "economy",
        "seats": 5,
        "attributes": {"transmission": "manual", "fuelType": "petrol", "caution": 500},
    },
    {
        "title": "Berline avec chauffeur Lyon",
        "listing_type": ListingType.CHAUFFEUR,
        "description": "Airport transfers and business trips with a professional driver.",
        "city": "Lyon",
        "country": "France",
        "price_per_day": 320,
        "category": "sedans",
        "seats": 4,
    },
    {
        "title": "Balade en quad Annecy",
        "listing_type": ListingType.MOTORIZED_EXPERIENCE,
        "description": "Two-hour guided quad ride above the lake.",
        "city": "Annecy",
        "country": "France",
        "price_per_day": 150,
        "category": "quad",
        "seats": 2,
    },
]


def seed(password: str) -> None:
    create_all()
    repo = SQLRepository()
    password_hash = hash_password(password)

    admin = repo.upsert_user("admin@example.com", password_hash, role=UserRole.ADMIN.value)
    print("Admin:", admin.email)
    host = repo.upsert_user(
        "host@example.com", password_hash, first_name="Marie", last_name="Dupont", role=UserRole.HOST.value
    )
    print("Host:", host.email)
    client = repo.upsert_user(
        "client@example.com", password_hash, first_name="Jean", last_name="Martin", role=UserRole.CLIENT.value
    )
    print("Client:", client.email)

    for name, order, vertical in CATEGORIES:
        repo.upsert_category(name, f"{slugify(name)}-{vertical.value.lower()}", order=order, vertical=vertical.value)
    print(f"Categories: {len(CATEGORIES)}")

    for entry in LISTINGS:
        data = dict(entry)
        slug = data.pop("slug", None) or slugify(data["title"])
        if not is_valid_slug(slug):
            raise SystemExit(f"Invalid slug '{slug}'")
        listing_type = data.pop("listing_type")
        action = "updated" if repo.slug_exists(slug) else "created"
        listing = repo.upsert_listing(
            slug,
            listing_type=listing_type.value,
            status=ListingStatus.ACTIVE.value,
            host_id=host.id,
            **data,
        )
        print(f"Listing {action}: {listing.title} ({listing.slug}, {listing.type})")


def main() -> None:
    ap = argparse.ArgumentParser(description="Seed the DrivePark database with demo data")
    ap.add_argument("--password", default="demo", help="password for every demo account (default: demo)")
    args = ap.parse_args()
    seed(args.password)


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
