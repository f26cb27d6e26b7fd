"""ORM models for the catalog: products and gallery items."""

import uuid

from sqlalchemy import JSON, Boolean, CheckConstraint, Column, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class Product(Base):
    """Product card. price is in minor units (4990 = 49.90); images is a list of URLs."""

    __tablename__ = "products"
    __table_args__ = (CheckConstraint("price > 0", name="price_positive"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False)
    currency = Column(String(8), nullable=False, default="RUB")
    images = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    is_new = Column(Boolean, nullable=False, default=False, index=True)
    is_on_sale = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class GalleryItem(Base):
    """Gallery photo; category groups items (intro, tattoo, tokyo, ...)."""

    __tablename__ = "gallery_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    category = Column(String(64), nullable=False, index=True)
    title = Column(String(512), nullable=False, default="")
    image = Column(String(1024), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
