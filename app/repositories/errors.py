"""Storage error kinds. Driver errors are translated here once, at the repository edge."""

import enum
import logging
import re

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation.
PG_UNIQUE_VIOLATION = "23505"

# Columns with unique constraints whose names are safe to show to clients.
KNOWN_UNIQUE_FIELDS = ("email", "slug")

_PG_KEY_RE = re.compile(r"Key \((?P<field>[a-z_]+)\)=")
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: \w+\.(?P<field>\w+)")


class StorageErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class StorageError(Exception):
    """Raised by repositories; kind is the only thing callers should branch on."""

    def __init__(
        self,
        kind: StorageErrorKind,
        entity: str = "record",
        field: str | None = None,
    ) -> None:
        self.kind = kind
        self.entity = entity
        self.field = field
        super().__init__(f"{entity}: {kind.value}" + (f" ({field})" if field else ""))


def is_unique_violation(err: IntegrityError) -> bool:
    orig = err.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    return "unique constraint" in str(orig).lower()


def duplicate_field(err: IntegrityError) -> str | None:
    """Best-effort column name for a unique violation, limited to KNOWN_UNIQUE_FIELDS."""
    text = str(err.orig)
    for pattern in (_PG_KEY_RE, _SQLITE_UNIQUE_RE):
        match = pattern.search(text)
        if match and match.group("field") in KNOWN_UNIQUE_FIELDS:
            return match.group("field")
    lowered = text.lower()
    for field in KNOWN_UNIQUE_FIELDS:
        if field in lowered:
            return field
    return None


def translate_db_error(err: SQLAlchemyError, entity: str) -> StorageError:
    """Convert a SQLAlchemy/driver error into a StorageError."""
    if isinstance(err, IntegrityError) and is_unique_violation(err):
        return StorageError(StorageErrorKind.CONFLICT, entity, duplicate_field(err))
    logger.exception("Storage error", extra={"entity": entity})
    return StorageError(StorageErrorKind.INTERNAL, entity)
