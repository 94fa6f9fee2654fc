"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


class User(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime


class UpdateUserRequest(BaseModel):
    username: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
