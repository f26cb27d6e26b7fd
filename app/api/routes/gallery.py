"""Public gallery listing."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.repositories import Store
from app.schemas.catalog import GalleryItemOut, GalleryListResponse

router = APIRouter()


@router.get("", response_model=GalleryListResponse)
def list_gallery(
    store: Annotated[Store, Depends(get_store)],
    category: str | None = None,
) -> GalleryListResponse:
    """Gallery items ordered by position; without a category every item is returned."""
    rows = store.gallery.list_by_category((category or "").strip() or None)
    return GalleryListResponse(items=[GalleryItemOut.from_row(r) for r in rows])
