"""Schemas for products, gallery items and info pages."""

import uuid

from pydantic import BaseModel, Field

from app.models import GalleryItem
from app.schemas.common import CamelModel


class ProductIn(CamelModel):
    """Product fields for create and full-replace update; omitted fields take these defaults."""

    slug: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=512)
    description: str = ""
    price: int = Field(..., gt=0, description="Price in minor units (4990 = 49.90)")
    currency: str = Field(default="RUB", min_length=1, max_length=8)
    images: list[str] = Field(default_factory=list)
    is_new: bool = False
    is_on_sale: bool = False


class ProductOut(ProductIn):
    id: uuid.UUID


class ProductResponse(BaseModel):
    item: ProductOut


class ProductListResponse(BaseModel):
    items: list[ProductOut]


class GalleryItemIn(CamelModel):
    category: str = Field(..., min_length=1, max_length=64)
    title: str = Field(default="", max_length=512)
    image: str = Field(..., min_length=1, max_length=1024)
    order: int = Field(default=0, description="Sort position within the gallery")

    def to_values(self) -> dict:
        return {
            "category": self.category,
            "title": self.title,
            "image": self.image,
            "sort_order": self.order,
        }


class GalleryItemOut(GalleryItemIn):
    id: uuid.UUID

    @classmethod
    def from_row(cls, row: GalleryItem) -> "GalleryItemOut":
        return cls(
            id=row.id,
            category=row.category,
            title=row.title,
            image=row.image,
            order=row.sort_order,
        )


class GalleryItemResponse(BaseModel):
    item: GalleryItemOut


class GalleryListResponse(BaseModel):
    items: list[GalleryItemOut]


class PageOut(CamelModel):
    slug: str
    title: str
    content: str


class PageUpdateRequest(CamelModel):
    """Full replace of a page's title and content."""

    title: str = Field(..., min_length=1, max_length=512)
    content: str


class PageResponse(BaseModel):
    item: PageOut


class PageListResponse(BaseModel):
    items: list[PageOut]
