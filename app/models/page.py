"""ORM model for static info pages."""

from sqlalchemy import Column, String, Text

from app.models.base import Base

# Pages that exist on the storefront; rows are seeded by migration.
PAGE_SLUGS = ("payment", "delivery", "returns", "contacts")


class Page(Base):
    __tablename__ = "pages"

    slug = Column(String(64), primary_key=True)
    title = Column(String(512), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
