"""API routes, mounted under settings.API_PREFIX."""

from fastapi import APIRouter

from app.api.routes import account, admin, auth, gallery, health, orders, pages, products

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(account.router, prefix="/account", tags=["account"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(gallery.router, prefix="/gallery", tags=["gallery"])
router.include_router(pages.router, prefix="/pages", tags=["pages"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
