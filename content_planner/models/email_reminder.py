"""
EmailReminder model for content publish reminders.
"""
import uuid

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base, utcnow


class EmailReminder(Base):
    __tablename__ = "email_reminders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    content_item_id = Column(String(36), ForeignKey("content_items.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    scheduled_for = Column(DateTime, nullable=False, index=True)
    # false -> true once, never back
    sent = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    content_item = relationship("ContentItem", back_populates="reminders")
    user = relationship("User", back_populates="reminders")
