"""Request-scoped dependencies: storage, services, and the auth/role gates."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import Forbidden, Unauthenticated
from app.core.security import PasswordHasher
from app.models.user import Role
from app.repositories import Store
from app.services.auth import AuthService
from app.services.notifications import OrderNotifier
from app.services.tokens import TokenError, TokenService
from app.services.uploads import ImageStorage

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity taken from a verified access token."""

    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def get_store(db: Annotated[Session, Depends(get_db)]) -> Store:
    return Store.from_session(db)


def get_token_service(settings: Annotated[Settings, Depends(get_settings)]) -> TokenService:
    return TokenService.from_settings(settings)


@lru_cache
def _password_hasher(rounds: int) -> PasswordHasher:
    return PasswordHasher(rounds=rounds)


def get_password_hasher(settings: Annotated[Settings, Depends(get_settings)]) -> PasswordHasher:
    return _password_hasher(settings.BCRYPT_ROUNDS)


def get_auth_service(
    store: Annotated[Store, Depends(get_store)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> AuthService:
    return AuthService(store.accounts, tokens, hasher)


def get_order_notifier(settings: Annotated[Settings, Depends(get_settings)]) -> OrderNotifier:
    return OrderNotifier(settings)


def get_image_storage(settings: Annotated[Settings, Depends(get_settings)]) -> ImageStorage:
    return ImageStorage(settings.UPLOAD_DIR, settings.UPLOAD_MAX_BYTES)


def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    tokens: TokenService,
) -> Identity:
    if credentials is None:
        if request.headers.get("authorization"):
            raise Unauthenticated("Malformed authorization header.")
        raise Unauthenticated("Not authenticated.")
    try:
        claims = tokens.validate_access(credentials.credentials)
    except TokenError as e:
        raise Unauthenticated("Invalid or expired token.") from e
    return Identity(user_id=claims.subject, role=claims.role)


def get_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity:
    """Dependency: require a valid Bearer access token. Raises 401 otherwise; never reads storage."""
    return _authenticate(request, credentials, tokens)


def get_optional_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Identity | None:
    """Like get_identity, but a request without an Authorization header is anonymous (None)."""
    if credentials is None and not request.headers.get("authorization"):
        return None
    return _authenticate(request, credentials, tokens)


def require_role(role: Role) -> Callable[..., Identity]:
    """Build a dependency that admits only callers holding the given role (403 otherwise)."""

    def dependency(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
        if identity.role is not role:
            raise Forbidden(f"{role.value.capitalize()} access required.")
        return identity

    return dependency


require_admin = require_role(Role.ADMIN)
