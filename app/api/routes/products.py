"""Public catalog: product listing, search and detail."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_store
from app.core.errors import NotFound, ValidationError
from app.repositories import Store
from app.schemas.catalog import ProductListResponse, ProductOut, ProductResponse

router = APIRouter()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_QUERY_LEN = 200

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _parse_positive_int(raw: str | None, default: int) -> int:
    """Parse a query value; anything missing, malformed or below 1 falls back to default."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def parse_pagination(page: str | None, limit: str | None) -> tuple[int, int]:
    page_num = _parse_positive_int(page, DEFAULT_PAGE)
    page_size = min(_parse_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)
    return page_num, page_size


def _flag(raw: str | None) -> bool:
    return raw is not None and raw.strip().lower() in _TRUE_VALUES


@router.get("", response_model=ProductListResponse)
def list_products(
    store: Annotated[Store, Depends(get_store)],
    new: Annotated[str | None, Query(description="Only new arrivals when true")] = None,
    sale: Annotated[str | None, Query(description="Only discounted products when true")] = None,
    page: Annotated[str | None, Query(description="Page number, from 1")] = None,
    limit: Annotated[str | None, Query(description="Page size, at most 100")] = None,
) -> ProductListResponse:
    """List products, newest first. Malformed page/limit values fall back to the defaults."""
    page_num, page_size = parse_pagination(page, limit)
    rows = store.products.list_page(
        new_only=_flag(new),
        sale_only=_flag(sale),
        page=page_num,
        limit=page_size,
    )
    return ProductListResponse(items=[ProductOut.model_validate(r) for r in rows])


@router.get("/search", response_model=ProductListResponse)
def search_products(
    store: Annotated[Store, Depends(get_store)],
    q: str | None = None,
    page: str | None = None,
    limit: str | None = None,
) -> ProductListResponse:
    """Case-insensitive search over title and description; title-prefix matches come first."""
    query = (q or "").strip()
    if not query:
        raise ValidationError("Query parameter 'q' is required.")
    if len(query) > MAX_QUERY_LEN:
        raise ValidationError(f"Query must not exceed {MAX_QUERY_LEN} characters.")
    page_num, page_size = parse_pagination(page, limit)
    rows = store.products.search(query, page=page_num, limit=page_size)
    return ProductListResponse(items=[ProductOut.model_validate(r) for r in rows])


@router.get("/{slug}", response_model=ProductResponse)
def get_product(
    slug: str,
    store: Annotated[Store, Depends(get_store)],
) -> ProductResponse:
    product = store.products.get_by_slug(slug)
    if product is None:
        raise NotFound("Product not found.")
    return ProductResponse(item=ProductOut.model_validate(product))
