from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TemplateResponse(BaseModel):
    id: str
    title: str
    description: str
    content: str
    platform: str
    category: str
    is_premium: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TemplatePrefill(BaseModel):
    """Draft fields copied from a template into the content form."""
    title: str
    description: str
    platform: str
    template_id: str
    status: str = "draft"
