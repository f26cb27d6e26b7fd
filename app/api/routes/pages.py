"""Public info pages (payment, delivery, returns, contacts)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.errors import ValidationError
from app.models import PAGE_SLUGS
from app.repositories import Store
from app.schemas.catalog import PageOut

router = APIRouter()


def check_page_slug(slug: str) -> str:
    slug = slug.strip().lower()
    if slug not in PAGE_SLUGS:
        raise ValidationError(f"Unknown page. Expected one of: {', '.join(PAGE_SLUGS)}.")
    return slug


@router.get("/{slug}", response_model=PageOut)
def get_page(
    slug: str,
    store: Annotated[Store, Depends(get_store)],
) -> PageOut:
    page = store.pages.get_by_slug(check_page_slug(slug))
    return PageOut.model_validate(page)
