"""Schemas for the caller's own profile."""

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from app.repositories.partial import UNCHANGED, FieldUpdate, SetTo


class UserPublic(BaseModel):
    """Profile as returned to clients. The password hash is never part of it."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    name: str
    role: str


class UpdateProfileRequest(BaseModel):
    """
    PATCH body. A field that is absent stays unchanged; a present field (even "")
    is written. null is rejected because neither column is nullable.
    Unknown fields are ignored, so {} or {"foo": 1} is a no-op update.
    """

    name: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.strip().lower() if v is not None else v

    @model_validator(mode="after")
    def reject_explicit_null(self) -> "UpdateProfileRequest":
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self

    def to_changes(self) -> dict[str, FieldUpdate[str]]:
        """Column -> SetTo(value) for fields the client sent, UNCHANGED otherwise."""
        return {
            field: SetTo(getattr(self, field)) if field in self.model_fields_set else UNCHANGED
            for field in ("name", "email")
        }
