"""Authentication schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import EMAIL_PATTERN, User


class AuthPrincipal(BaseModel):
    """Authenticated identity decoded from a valid session token."""

    id: int
    display_name: str

    model_config = ConfigDict(frozen=True)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_at: datetime
    user: User
