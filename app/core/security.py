"""Password policy and bcrypt hashing. Plain passwords are never logged or stored."""

import bcrypt

from app.core.errors import ValidationError

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes; longer inputs are rejected rather than truncated.
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_BYTES = 72


def validate_password(plain_password: str) -> None:
    """Reject passwords bcrypt would weaken or that are too short. Call before hashing."""
    if len(plain_password) < PASSWORD_MIN_LEN:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters.")
    if len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes.")


class PasswordHasher:
    """Salted bcrypt hash/verify with a fixed cost."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds
        # Verified against when the account does not exist, so sign-in timing is uniform.
        self._dummy_hash = bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=rounds))

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Callers run validate_password first."""
        pw_bytes = plain_password.encode("utf-8")
        if len(pw_bytes) > PASSWORD_MAX_BYTES:
            raise ValidationError(f"Password must not exceed {PASSWORD_MAX_BYTES} bytes.")
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, hashed: str, plain_password: str) -> bool:
        """Verify a plain password against a stored hash using bcrypt's own comparison."""
        pw_bytes = plain_password.encode("utf-8")
        if len(pw_bytes) > PASSWORD_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def burn(self, plain_password: str) -> None:
        """Spend one verification's worth of time without a real hash."""
        self.verify(self._dummy_hash.decode("utf-8"), plain_password)
