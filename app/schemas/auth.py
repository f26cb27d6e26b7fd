"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SignUpRequest(BaseModel):
    """Registration payload. Password length is checked by the password policy, not here."""

    email: EmailStr = Field(..., description="Login email (case-insensitive)")
    password: str = Field(..., description="Password (8 characters to 72 bytes)")
    name: str = Field(default="", max_length=255, description="Display name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class SignInRequest(BaseModel):
    """Credentials for sign-in."""

    email: str = Field(..., min_length=1, max_length=255, description="Login email")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class RefreshRequest(BaseModel):
    refresh: str = Field(..., min_length=1, description="Refresh token from sign-in or sign-up")


class TokenResponse(BaseModel):
    """Access/refresh token pair. Send the access token as: Authorization: Bearer <access>."""

    access: str = Field(..., description="Short-lived access token")
    refresh: str = Field(..., description="Long-lived refresh token")


class IsAdminResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_admin: bool = Field(..., alias="isAdmin")
