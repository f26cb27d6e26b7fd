"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.order import Order, OrderItem
from app.models.page import PAGE_SLUGS, Page
from app.models.product import GalleryItem, Product
from app.models.user import Role, User

__all__ = [
    "Base",
    "GalleryItem",
    "Order",
    "OrderItem",
    "PAGE_SLUGS",
    "Page",
    "Product",
    "Role",
    "User",
]
