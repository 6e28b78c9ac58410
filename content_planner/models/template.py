"""
ContentTemplate model for shared, read-only content skeletons.
"""
import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean
from ..database import Base, utcnow


class ContentTemplate(Base):
    __tablename__ = "content_templates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)  # prefilled prompt / skeleton
    platform = Column(String(20), nullable=False)  # social, email, blog
    category = Column(String(50), nullable=False)  # marketing, educational, promotional, ...
    is_premium = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
