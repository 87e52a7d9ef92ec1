"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, or_, select

from drivepark.db.models import Category, Listing, User
from drivepark.db.session import get_session
from drivepark.domain.listings import ListingStatus, UserRole


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: str) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == (email or "").strip().lower())
            return session.execute(stmt).scalar_one_or_none()

    def upsert_user(
        self,
        email: str,
        password_hash: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str = UserRole.CLIENT.value,
        avatar_url: str | None = None,
    ) -> User:
        now = datetime.now(timezone.utc)
        email = (email or "").strip().lower()
        with get_session() as session:
            user = session.execute(select(User).where(User.email == email)).scalar_one_or_none()
            if not user:
                user = User(email=email, created_at=now)
                session.add(user)
            user.password_hash = password_hash or user.password_hash
            user.first_name = first_name if first_name is not None else user.first_name
            user.last_name = last_name if last_name is not None else user.last_name
            user.avatar_url = avatar_url if avatar_url is not None else user.avatar_url
            user.role = role
            user.updated_at = now
            session.commit()
            session.refresh(user)
            return user

    # ------------------------ categories -----------------------
    def list_categories(self, vertical: str | None = None) -> list[Category]:
        with get_session() as session:
            stmt = select(Category)
            if vertical:
                stmt = stmt.where(Category.vertical == vertical)
            stmt = stmt.order_by(Category.sort_order.asc(), Category.name.asc())
            return session.execute(stmt).scalars().all()

    def upsert_category(
        self,
        name: str,
        slug: str,
        *,
        order: int = 0,
        vertical: str | None = None,
        image_url: str | None = None,
    ) -> Category:
        with get_session() as session:
            entity = session.execute(select(Category).where(Category.slug == slug)).scalar_one_or_none()
            if not entity:
                entity = Category(slug=slug)
                session.add(entity)
            entity.name = name
            entity.sort_order = order
            entity.vertical = vertical
            entity.image_url = image_url
            session.commit()
            session.refresh(entity)
            return entity

    # ------------------------- listings ------------------------
    def get_listing(self, id_or_slug: str) -> Optional[Listing]:
        """Look a listing up by id first, then by slug."""
        key = (id_or_slug or "").strip()
        if not key:
            return None
        with get_session() as session:
            entity = session.get(Listing, key)
            if entity:
                return entity
            stmt = select(Listing).where(Listing.slug == key)
            return session.execute(stmt).scalar_one_or_none()

    def list_listings(
        self,
        *,
        listing_type: str | None = None,
        city: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Listing], int]:
        with get_session() as session:
            conditions = [Listing.status == ListingStatus.ACTIVE.value]
            if listing_type:
                conditions.append(Listing.type == listing_type)
            if city:
                conditions.append(Listing.city.ilike(f"%{city.strip()}%"))
            total = session.execute(select(func.count()).select_from(Listing).where(*conditions)).scalar_one()
            stmt = (
                select(Listing)
                .where(*conditions)
                .order_by(Listing.updated_at.desc(), Listing.slug.asc())
                .limit(limit)
                .offset(offset)
            )
            return session.execute(stmt).scalars().all(), int(total)

    def slug_exists(self, slug: str) -> bool:
        with get_session() as session:
            stmt = select(Listing.id).where(Listing.slug == slug)
            return session.execute(stmt).first() is not None

    def upsert_listing(
        self,
        slug: str,
        *,
        listing_type: str,
        title: str,
        status: str = ListingStatus.ACTIVE.value,
        host_id: str | None = None,
        description: str | None = None,
        city: str | None = None,
        country: str | None = None,
        price_per_day=None,
        currency: str = "EUR",
        category: str | None = None,
        seats: int | None = None,
        attributes: dict | None = None,
        updated_at: datetime | None = None,
    ) -> Listing:
        now = updated_at or datetime.now(timezone.utc)
        with get_session() as session:
            entity = session.execute(select(Listing).where(Listing.slug == slug)).scalar_one_or_none()
            if not entity:
                entity = Listing(slug=slug, created_at=now)
                session.add(entity)
            entity.type = listing_type
            entity.title = title
            entity.status = status
            entity.host_id = host_id
            entity.description = description
            entity.city = city
            entity.country = country
            entity.price_per_day = price_per_day
            entity.currency = currency
            entity.category = category
            entity.seats = seats
            entity.attributes = dict(attributes or {})
            entity.updated_at = now
            session.commit()
            session.refresh(entity)
            return entity
