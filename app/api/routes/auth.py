"""Sign-up, sign-in, token refresh, logout and the admin probe."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.deps import Identity, get_auth_service, get_identity
from app.schemas.auth import (
    IsAdminResponse,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
)
from app.schemas.common import MessageResponse
from app.services.auth import AuthService

router = APIRouter()


@router.post("/sign-up", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    body: SignUpRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Register a new account with role 'user' and return its first token pair.
    Returns 409 if the email (compared case-insensitively) is already registered.
    """
    pair = auth.sign_up(body.email, body.password, body.name.strip())
    return TokenResponse(access=pair.access, refresh=pair.refresh)


@router.post("/sign-in", response_model=TokenResponse)
def sign_in(
    body: SignInRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """
    Authenticate with email and password.
    Include the access token in the Authorization header as: Bearer <access>
    """
    pair = auth.sign_in(body.email, body.password)
    return TokenResponse(access=pair.access, refresh=pair.refresh)


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    body: RefreshRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Exchange a refresh token for a new pair. The previous refresh token is not revoked."""
    pair = auth.refresh(body.refresh)
    return TokenResponse(access=pair.access, refresh=pair.refresh)


@router.post("/logout", response_model=MessageResponse)
def logout(_identity: Annotated[Identity, Depends(get_identity)]) -> MessageResponse:
    """Tokens are stateless; the client discards them. Kept for API compatibility."""
    return MessageResponse(message="ok")


@router.get("/is-admin", response_model=IsAdminResponse)
def is_admin(identity: Annotated[Identity, Depends(get_identity)]) -> IsAdminResponse:
    return IsAdminResponse(is_admin=identity.is_admin)
