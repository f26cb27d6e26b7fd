"""Sign-up, sign-in and refresh flows on top of the account repository and token service."""

import logging

from app.core.errors import Conflict, InternalError, Unauthenticated, to_app_error
from app.core.security import PasswordHasher, validate_password
from app.models.user import Role
from app.repositories import AccountRepository, StorageError, StorageErrorKind
from app.services.tokens import TokenError, TokenPair, TokenService

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password so accounts cannot be enumerated.
INVALID_CREDENTIALS = "Invalid email or password."
INVALID_REFRESH = "Invalid or expired refresh token."


class AuthService:
    """Credential checks and token issuance. Holds no per-request state beyond its collaborators."""

    def __init__(
        self,
        accounts: AccountRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
    ) -> None:
        self.accounts = accounts
        self.tokens = tokens
        self.hasher = hasher

    def sign_up(self, email: str, password: str, name: str) -> TokenPair:
        """
        Create a 'user' account and return its first token pair.

        Email uniqueness is left to the database constraint; a duplicate raises Conflict.
        """
        validate_password(password)
        password_hash = self.hasher.hash(password)
        try:
            user = self.accounts.create_user(email, name, password_hash, Role.USER)
        except StorageError as e:
            if e.kind is StorageErrorKind.CONFLICT:
                logger.info("Sign-up rejected: email already registered")
                raise Conflict("A user with this email already exists.") from e
            raise to_app_error(e) from e
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return self.tokens.issue(user.id, user.role)

    def sign_in(self, email: str, password: str) -> TokenPair:
        """Check credentials; any failure raises the same Unauthenticated error."""
        try:
            user = self.accounts.get_by_email(email)
        except StorageError as e:
            raise to_app_error(e) from e
        if user is None:
            self.hasher.burn(password)
            logger.info("Sign-in failed")
            raise Unauthenticated(INVALID_CREDENTIALS)
        if not self.hasher.verify(user.password_hash, password):
            logger.info("Sign-in failed")
            raise Unauthenticated(INVALID_CREDENTIALS)
        return self.tokens.issue(user.id, user.role)

    def refresh(self, refresh_token: str) -> TokenPair:
        try:
            return self.tokens.refresh(refresh_token, self.accounts)
        except TokenError as e:
            logger.info("Refresh rejected", extra={"reason": type(e).__name__})
            raise Unauthenticated(INVALID_REFRESH) from e
        except StorageError as e:
            logger.error("Refresh failed on storage", extra={"kind": e.kind.value})
            raise InternalError() from e
