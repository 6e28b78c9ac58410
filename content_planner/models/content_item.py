"""
ContentItem model for planned content on the calendar.
"""
import uuid

from sqlalchemy import Column, String, DateTime, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base, utcnow

PLATFORMS = ("social", "email", "blog")
CONTENT_STATUSES = ("draft", "scheduled", "posted")


class ContentItem(Base):
    __tablename__ = "content_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    platform = Column(String(20), nullable=False)  # social, email, blog
    scheduled_date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="draft")  # draft, scheduled, posted
    template_id = Column(String(36), ForeignKey("content_templates.id", ondelete="SET NULL"), nullable=True)
    reminder_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="content_items")
    template = relationship("ContentTemplate")
    reminders = relationship("EmailReminder", back_populates="content_item", cascade="all, delete-orphan")
