"""Pydantic schemas for image upload responses."""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response body for admin image uploads."""

    url: str = Field(
        ...,
        description="Public URL of the stored image, relative to the site root (e.g. /uploads/products/...)",
    )
