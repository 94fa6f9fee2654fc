"""Task API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class Task(BaseModel):
    id: int
    title: str
    description: str
    completed: bool
    user_id: int
    created_at: datetime
    updated_at: datetime


class CreateTaskRequest(BaseModel):
    title: str = Field(min_length=1)
    description: str = ""


class UpdateTaskRequest(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    completed: bool | None = None
