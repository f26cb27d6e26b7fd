"""Repositories: the only layer that talks to the database."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.repositories.accounts import AccountRepository
from app.repositories.errors import StorageError, StorageErrorKind
from app.repositories.orders import OrderRepository
from app.repositories.pages import PageRepository
from app.repositories.partial import UNCHANGED, FieldUpdate, SetTo
from app.repositories.products import GalleryRepository, ProductRepository


@dataclass
class Store:
    """All repositories bound to one request-scoped session."""

    accounts: AccountRepository
    products: ProductRepository
    gallery: GalleryRepository
    pages: PageRepository
    orders: OrderRepository

    @classmethod
    def from_session(cls, session: Session) -> "Store":
        return cls(
            accounts=AccountRepository(session),
            products=ProductRepository(session),
            gallery=GalleryRepository(session),
            pages=PageRepository(session),
            orders=OrderRepository(session),
        )


__all__ = [
    "AccountRepository",
    "FieldUpdate",
    "GalleryRepository",
    "OrderRepository",
    "PageRepository",
    "ProductRepository",
    "SetTo",
    "StorageError",
    "StorageErrorKind",
    "Store",
    "UNCHANGED",
]
