"""
User model for identity, ownership and subscription state.
"""
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from ..database import Base, utcnow

SUBSCRIPTION_STATUSES = ("free", "active", "cancelled", "past_due")


class User(Base):
    __tablename__ = "users"

    # Issued by the identity provider
    id = Column(String(64), primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    profile_image_url = Column(String(500))
    payment_customer_id = Column(String(255), nullable=True)
    payment_subscription_id = Column(String(255), nullable=True)
    subscription_status = Column(String(20), nullable=False, default="free")  # free, active, cancelled, past_due
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    content_items = relationship("ContentItem", back_populates="user", cascade="all, delete-orphan")
    reminders = relationship("EmailReminder", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.id} {self.subscription_status}>"
