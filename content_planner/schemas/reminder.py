from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime

from .content_item import to_naive_utc


class ReminderCreate(BaseModel):
    content_item_id: str
    # Defaults to the configured lead time before the item's scheduled date
    scheduled_for: Optional[datetime] = None

    @field_validator("scheduled_for")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class ReminderResponse(BaseModel):
    id: str
    content_item_id: str
    user_id: str
    scheduled_for: datetime
    sent: bool
    created_at: datetime

    class Config:
        from_attributes = True
