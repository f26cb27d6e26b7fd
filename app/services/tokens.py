"""
Access/refresh token issuance and validation.

Access tokens carry sub, role and type="access"; refresh tokens carry sub and
type="refresh" only, so the role is re-read from storage on refresh. The two
kinds are signed with different HMAC secrets. Nothing is stored server-side:
a refresh token stays valid until it expires, even after it has been used.
"""

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt
from jwt.exceptions import InvalidSubjectError

from app.core.config import HMAC_ALGORITHMS
from app.models.user import Role
from app.repositories.errors import StorageError, StorageErrorKind

if TYPE_CHECKING:
    from app.core.config import Settings
    from app.repositories.accounts import AccountRepository

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenError(Exception):
    """Base for token validation failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidSignature(TokenError):
    """Signature does not verify, the token cannot be parsed, or the algorithm is not the configured HMAC."""


class Expired(TokenError):
    pass


class MalformedClaims(TokenError):
    """Required claims are missing, have the wrong type, or the token is of the other kind."""


class UserNotFound(TokenError):
    """Refresh token subject no longer exists."""


@dataclass(frozen=True)
class TokenPair:
    access: str
    refresh: str


@dataclass(frozen=True)
class AccessClaims:
    subject: str
    role: Role
    expires_at: datetime


@dataclass(frozen=True)
class RefreshClaims:
    subject: str
    expires_at: datetime


class TokenService:
    """Signs and validates token pairs. Stateless apart from its configuration."""

    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        algorithm: str = "HS256",
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ) -> None:
        if not access_secret or not refresh_secret:
            raise ValueError("Token secrets must be non-empty")
        if access_secret == refresh_secret:
            raise ValueError("Access and refresh secrets must be different")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.algorithm = algorithm
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        return cls(
            access_secret=settings.JWT_SECRET.get_secret_value(),
            refresh_secret=settings.REFRESH_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def issue(self, user_id: Any, role: Role | str) -> TokenPair:
        """Create a fresh access + refresh pair for the user."""
        now = datetime.now(UTC)
        access_payload = {
            "sub": str(user_id),
            "role": Role(role).value,
            "type": ACCESS_TOKEN_TYPE,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self.access_ttl,
        }
        refresh_payload = {
            "sub": str(user_id),
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid.uuid4().hex,
            "iat": now,
            "exp": now + self.refresh_ttl,
        }
        return TokenPair(
            access=jwt.encode(access_payload, self._access_secret, algorithm=self.algorithm),
            refresh=jwt.encode(refresh_payload, self._refresh_secret, algorithm=self.algorithm),
        )

    def validate(self, token: str, secret: str, expected_type: str) -> dict[str, Any]:
        """
        Verify signature, expiry and claim shape; return the raw payload.
        Raises InvalidSignature, Expired or MalformedClaims.
        """
        if not token:
            raise InvalidSignature("Token is empty")
        try:
            header = jwt.get_unverified_header(token)
        except jwt.DecodeError as e:
            raise InvalidSignature("Token cannot be parsed") from e
        # Never trust the token's own alg: "none" and asymmetric algorithms are refused here.
        if header.get("alg") != self.algorithm:
            raise InvalidSignature("Unexpected signing algorithm")
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise Expired("Token has expired") from e
        except (jwt.MissingRequiredClaimError, InvalidSubjectError) as e:
            raise MalformedClaims(str(e)) from e
        except jwt.InvalidSignatureError as e:
            raise InvalidSignature("Signature verification failed") from e
        except jwt.DecodeError as e:
            # Signature was fine; the payload or a claim (e.g. non-integer exp) is not.
            raise MalformedClaims(str(e)) from e
        except jwt.InvalidAlgorithmError as e:
            raise InvalidSignature("Unexpected signing algorithm") from e
        except jwt.InvalidTokenError as e:
            raise MalformedClaims(str(e)) from e

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub.strip():
            raise MalformedClaims("Claim 'sub' must be a non-empty string")
        if payload.get("type") != expected_type:
            raise MalformedClaims(f"Expected a {expected_type} token")
        return payload

    def validate_access(self, token: str) -> AccessClaims:
        payload = self.validate(token, self._access_secret, ACCESS_TOKEN_TYPE)
        role = payload.get("role")
        if not isinstance(role, str):
            raise MalformedClaims("Claim 'role' must be a string")
        try:
            parsed_role = Role(role)
        except ValueError as e:
            raise MalformedClaims("Unknown role") from e
        return AccessClaims(
            subject=payload["sub"],
            role=parsed_role,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )

    def validate_refresh(self, token: str) -> RefreshClaims:
        payload = self.validate(token, self._refresh_secret, REFRESH_TOKEN_TYPE)
        return RefreshClaims(
            subject=payload["sub"],
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )

    def refresh(self, refresh_token: str, accounts: "AccountRepository") -> TokenPair:
        """
        Exchange a refresh token for a new pair. The user is re-loaded so a deleted
        account fails with UserNotFound and the new access token carries the current role.
        """
        claims = self.validate_refresh(refresh_token)
        try:
            user = accounts.get(claims.subject)
        except StorageError as e:
            if e.kind is StorageErrorKind.NOT_FOUND:
                raise UserNotFound("User no longer exists") from e
            raise
        return self.issue(user.id, user.role)
