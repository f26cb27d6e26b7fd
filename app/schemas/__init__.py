"""Pydantic request/response schemas."""

from app.schemas.account import UpdateProfileRequest, UserPublic
from app.schemas.auth import (
    IsAdminResponse,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
)
from app.schemas.catalog import (
    GalleryItemIn,
    GalleryItemOut,
    PageOut,
    PageUpdateRequest,
    ProductIn,
    ProductOut,
)
from app.schemas.common import MessageResponse
from app.schemas.health import HealthResponse
from app.schemas.orders import CreateOrderRequest, OrderOut
from app.schemas.upload import UploadResponse

__all__ = [
    "CreateOrderRequest",
    "GalleryItemIn",
    "GalleryItemOut",
    "HealthResponse",
    "IsAdminResponse",
    "MessageResponse",
    "OrderOut",
    "PageOut",
    "PageUpdateRequest",
    "ProductIn",
    "ProductOut",
    "RefreshRequest",
    "SignInRequest",
    "SignUpRequest",
    "TokenResponse",
    "UpdateProfileRequest",
    "UploadResponse",
    "UserPublic",
]
