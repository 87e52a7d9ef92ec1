"""SQLAlchemy models for users, categories and listings."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    JSON,
    func,
)
from sqlalchemy.orm import relationship

from drivepark.domain.listings import ListingStatus, UserRole
from .session import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    first_name = Column(String(120), nullable=True)
    last_name = Column(String(120), nullable=True)
    avatar_url = Column(Text, nullable=True)
    role = Column(String(16), default=UserRole.CLIENT.value, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    listings = relationship("Listing", back_populates="host", cascade="all,delete-orphan")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    slug = Column(String(120), unique=True, nullable=False)
    image_url = Column(Text, nullable=True)
    sort_order = Column("order", Integer, default=0, nullable=False)
    vertical = Column(String(32), nullable=True)


class Listing(Base):
    __tablename__ = "listings"

    id = Column(String(36), primary_key=True, default=_uuid)
    slug = Column(String(80), unique=True, nullable=False)
    type = Column(String(32), nullable=False)
    status = Column(String(16), default=ListingStatus.DRAFT.value, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    city = Column(String(120), nullable=True)
    country = Column(String(120), nullable=True)
    price_per_day = Column(Numeric(10, 2), nullable=True)
    currency = Column(String(3), default="EUR", nullable=False)
    category = Column(String(120), nullable=True)
    seats = Column(Integer, nullable=True)
    host_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    attributes = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    host = relationship("User", back_populates="listings")
