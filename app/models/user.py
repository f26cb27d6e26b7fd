"""ORM model for storefront accounts (auth and RBAC)."""

import enum
import uuid

from sqlalchemy import Column, DateTime, String, Uuid, func

from app.models.base import Base


class Role(str, enum.Enum):
    """Account role carried in access tokens."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    Storefront account used for JWT authentication and role-based access control.

    email is stored lower-cased so the unique index is case-insensitive in practice.
    role: 'admin' or 'user'; sign-up always creates 'user'.
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=Role.USER.value)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
