"""Admin catalog management. Every route requires an access token with role 'admin'."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile, status
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_image_storage, get_store, require_admin
from app.api.routes.pages import check_page_slug
from app.models import GalleryItem, Product
from app.repositories import Store
from app.schemas.catalog import (
    GalleryItemIn,
    GalleryItemOut,
    GalleryItemResponse,
    GalleryListResponse,
    PageListResponse,
    PageOut,
    PageResponse,
    PageUpdateRequest,
    ProductIn,
    ProductListResponse,
    ProductOut,
    ProductResponse,
)
from app.schemas.common import MessageResponse
from app.schemas.upload import UploadResponse
from app.services.uploads import ImageStorage

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


def _product_values(body: ProductIn) -> dict:
    values = body.model_dump()
    values["slug"] = values["slug"].strip()
    return values


# Products


@router.get("/products", response_model=ProductListResponse)
def admin_list_products(store: Annotated[Store, Depends(get_store)]) -> ProductListResponse:
    rows = store.products.list_all(Product.created_at.desc(), Product.id.desc())
    return ProductListResponse(items=[ProductOut.model_validate(r) for r in rows])


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def admin_create_product(
    body: ProductIn,
    store: Annotated[Store, Depends(get_store)],
) -> ProductResponse:
    """Create a product. 409 if the slug is taken."""
    product = store.products.create(_product_values(body))
    logger.info("Product created", extra={"product_id": str(product.id), "slug": product.slug})
    return ProductResponse(item=ProductOut.model_validate(product))


@router.get("/products/{product_id}", response_model=ProductResponse)
def admin_get_product(
    product_id: str,
    store: Annotated[Store, Depends(get_store)],
) -> ProductResponse:
    return ProductResponse(item=ProductOut.model_validate(store.products.get(product_id)))


@router.patch("/products/{product_id}", response_model=ProductResponse)
def admin_update_product(
    product_id: str,
    body: ProductIn,
    store: Annotated[Store, Depends(get_store)],
) -> ProductResponse:
    """Full replace: fields missing from the body are reset to their defaults."""
    product = store.products.replace(product_id, _product_values(body))
    logger.info("Product updated", extra={"product_id": str(product.id)})
    return ProductResponse(item=ProductOut.model_validate(product))


@router.delete("/products/{product_id}", response_model=MessageResponse)
def admin_delete_product(
    product_id: str,
    store: Annotated[Store, Depends(get_store)],
) -> MessageResponse:
    store.products.delete(product_id)
    logger.info("Product deleted", extra={"product_id": product_id})
    return MessageResponse(message="ok")


# Gallery


@router.get("/gallery", response_model=GalleryListResponse)
def admin_list_gallery(store: Annotated[Store, Depends(get_store)]) -> GalleryListResponse:
    rows = store.gallery.list_all(GalleryItem.category.asc(), GalleryItem.sort_order.asc())
    return GalleryListResponse(items=[GalleryItemOut.from_row(r) for r in rows])


@router.post("/gallery", response_model=GalleryItemResponse, status_code=status.HTTP_201_CREATED)
def admin_create_gallery_item(
    body: GalleryItemIn,
    store: Annotated[Store, Depends(get_store)],
) -> GalleryItemResponse:
    row = store.gallery.create(body.to_values())
    logger.info("Gallery item created", extra={"item_id": str(row.id), "category": row.category})
    return GalleryItemResponse(item=GalleryItemOut.from_row(row))


@router.patch("/gallery/{item_id}", response_model=GalleryItemResponse)
def admin_update_gallery_item(
    item_id: str,
    body: GalleryItemIn,
    store: Annotated[Store, Depends(get_store)],
) -> GalleryItemResponse:
    row = store.gallery.replace(item_id, body.to_values())
    return GalleryItemResponse(item=GalleryItemOut.from_row(row))


@router.delete("/gallery/{item_id}", response_model=MessageResponse)
def admin_delete_gallery_item(
    item_id: str,
    store: Annotated[Store, Depends(get_store)],
) -> MessageResponse:
    store.gallery.delete(item_id)
    logger.info("Gallery item deleted", extra={"item_id": item_id})
    return MessageResponse(message="ok")


# Pages


@router.get("/pages", response_model=PageListResponse)
def admin_list_pages(store: Annotated[Store, Depends(get_store)]) -> PageListResponse:
    return PageListResponse(items=[PageOut.model_validate(p) for p in store.pages.list_pages()])


@router.patch("/pages/{slug}", response_model=PageResponse)
def admin_update_page(
    slug: str,
    body: PageUpdateRequest,
    store: Annotated[Store, Depends(get_store)],
) -> PageResponse:
    page = store.pages.replace(check_page_slug(slug), {"title": body.title, "content": body.content})
    logger.info("Page updated", extra={"slug": page.slug})
    return PageResponse(item=PageOut.model_validate(page))


# Uploads


@router.post("/upload/{kind}", response_model=UploadResponse)
async def admin_upload_image(
    kind: str,
    storage: Annotated[ImageStorage, Depends(get_image_storage)],
    file: Annotated[UploadFile, File(description="JPEG, PNG, WebP or GIF image")],
) -> UploadResponse:
    """
    Store an image for products or the gallery and return its public URL.
    The type is detected from the file content, not from the name or Content-Type.
    The file is written from the threadpool.
    """
    content = await file.read(storage.max_bytes + 1)
    url = await run_in_threadpool(storage.save, kind, file.filename, content)
    return UploadResponse(url=url)
