from pydantic import BaseModel, field_validator
from typing import Literal, Optional
from datetime import datetime, timezone

Platform = Literal["social", "email", "blog"]
ContentStatus = Literal["draft", "scheduled", "posted"]


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert offset-aware datetimes to naive UTC; naive values are already UTC."""
    if value is not None and value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ContentItemCreate(BaseModel):
    title: str
    description: Optional[str] = None
    platform: Platform
    scheduled_date: datetime
    status: ContentStatus = "draft"
    template_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("scheduled_date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class ContentItemUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    platform: Optional[Platform] = None
    scheduled_date: Optional[datetime] = None
    status: Optional[ContentStatus] = None
    template_id: Optional[str] = None

    @field_validator("title", "platform", "scheduled_date", "status")
    @classmethod
    def not_null(cls, value):
        # Only runs for values the caller actually sent
        if value is None:
            raise ValueError("Field may not be null")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value

    @field_validator("scheduled_date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class ContentItemResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    platform: str
    scheduled_date: datetime
    status: str
    template_id: Optional[str] = None
    reminder_sent: bool
    created_at: datetime

    class Config:
        from_attributes = True
