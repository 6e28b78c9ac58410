"""
Persistence gateway over users, content items, templates and reminders.

Every method issues its own statement(s) and commits. Lookups that miss return
``None`` (or ``False`` for deletes and state flips); callers decide what a miss
means. Database errors roll the session back and propagate.
"""
from contextlib import contextmanager
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .database import utcnow
from .logging_config import db_logger
from .models import ContentItem, ContentTemplate, EmailReminder, User

USER_FIELDS = ("email", "first_name", "last_name", "profile_image_url")


class Storage:
    """
    Data-access operations for the content planner.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _write(self, operation: str):
        try:
            yield
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"{operation} failed", error=e, operation=operation)
            raise

    # ------------------------------------------------------------
    # Users
    # ------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def upsert_user(self, id: str, **fields: Any) -> User:
        """Insert a user or refresh the profile fields of an existing one."""
        with self._write("upsert_user"):
            user = self.db.get(User, id)
            if user is None:
                user = User(id=id, subscription_status="free")
                self.db.add(user)
            for key in USER_FIELDS:
                if key in fields:
                    setattr(user, key, fields[key])
            user.updated_at = utcnow()
        self.db.refresh(user)
        return user

    def activate_subscription(
        self,
        user_id: str,
        customer_id: str,
        subscription_id: str,
    ) -> Optional[User]:
        user = self.db.get(User, user_id)
        if user is None:
            return None
        with self._write("activate_subscription"):
            user.payment_customer_id = customer_id
            user.payment_subscription_id = subscription_id
            user.subscription_status = "active"
            user.updated_at = utcnow()
        self.db.refresh(user)
        return user

    def set_subscription_status(self, user_id: str, status: str) -> Optional[User]:
        user = self.db.get(User, user_id)
        if user is None:
            return None
        with self._write("set_subscription_status"):
            user.subscription_status = status
            user.updated_at = utcnow()
        self.db.refresh(user)
        return user

    # ------------------------------------------------------------
    # Content items
    # ------------------------------------------------------------

    def list_content_items(self, owner_id: Optional[str] = None) -> List[ContentItem]:
        query = self.db.query(ContentItem)
        if owner_id is not None:
            query = query.filter(ContentItem.user_id == owner_id)
        return query.order_by(ContentItem.scheduled_date, ContentItem.created_at).all()

    def get_content_item(self, item_id: str) -> Optional[ContentItem]:
        return self.db.get(ContentItem, item_id)

    def create_content_item(self, user_id: str, **fields: Any) -> ContentItem:
        item = ContentItem(user_id=user_id, reminder_sent=False, **fields)
        with self._write("create_content_item"):
            self.db.add(item)
        self.db.refresh(item)
        return item

    def update_content_item(self, item_id: str, **fields: Any) -> Optional[ContentItem]:
        item = self.db.get(ContentItem, item_id)
        if item is None:
            return None
        with self._write("update_content_item"):
            for key, value in fields.items():
                setattr(item, key, value)
        self.db.refresh(item)
        return item

    def delete_content_item(self, item_id: str) -> bool:
        item = self.db.get(ContentItem, item_id)
        if item is None:
            return False
        with self._write("delete_content_item"):
            self.db.delete(item)
        return True

    def mark_content_reminder_sent(self, item_id: str) -> bool:
        with self._write("mark_content_reminder_sent"):
            result = self.db.execute(
                update(ContentItem)
                .where(ContentItem.id == item_id)
                .values(reminder_sent=True)
            )
        return result.rowcount > 0

    # ------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------

    def list_templates(
        self,
        platform: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[ContentTemplate]:
        query = self.db.query(ContentTemplate)
        if platform:
            query = query.filter(ContentTemplate.platform == platform)
        if category:
            query = query.filter(ContentTemplate.category == category)
        return query.order_by(ContentTemplate.is_premium, ContentTemplate.title).all()

    def get_template(self, template_id: str) -> Optional[ContentTemplate]:
        return self.db.get(ContentTemplate, template_id)

    def create_template(self, **fields: Any) -> ContentTemplate:
        template = ContentTemplate(**fields)
        with self._write("create_template"):
            self.db.add(template)
        self.db.refresh(template)
        return template

    def count_templates(self) -> int:
        return self.db.query(ContentTemplate).count()

    # ------------------------------------------------------------
    # Email reminders
    # ------------------------------------------------------------

    def create_reminder(
        self,
        content_item_id: str,
        user_id: str,
        scheduled_for: datetime,
    ) -> EmailReminder:
        reminder = EmailReminder(
            content_item_id=content_item_id,
            user_id=user_id,
            scheduled_for=scheduled_for,
            sent=False,
        )
        with self._write("create_reminder"):
            self.db.add(reminder)
        self.db.refresh(reminder)
        return reminder

    def get_reminder(self, reminder_id: str) -> Optional[EmailReminder]:
        return self.db.get(EmailReminder, reminder_id)

    def get_pending_reminders(self, now: Optional[datetime] = None) -> List[EmailReminder]:
        """Unsent reminders, limited to those due at ``now`` when given."""
        query = self.db.query(EmailReminder).filter(EmailReminder.sent == False)  # noqa: E712
        if now is not None:
            query = query.filter(EmailReminder.scheduled_for <= now)
        return query.order_by(EmailReminder.scheduled_for).all()

    def get_unsent_reminder_for_item(self, content_item_id: str) -> Optional[EmailReminder]:
        return self.db.query(EmailReminder).filter(
            EmailReminder.content_item_id == content_item_id,
            EmailReminder.sent == False,  # noqa: E712
        ).first()

    def mark_reminder_as_sent(self, reminder_id: str) -> bool:
        """Flip ``sent`` to true; False if already sent or unknown."""
        with self._write("mark_reminder_as_sent"):
            result = self.db.execute(
                update(EmailReminder)
                .where(EmailReminder.id == reminder_id, EmailReminder.sent == False)  # noqa: E712
                .values(sent=True)
            )
        return result.rowcount > 0

    def get_unsent_reminders_for_item(self, content_item_id: str) -> List[EmailReminder]:
        return self.db.query(EmailReminder).filter(
            EmailReminder.content_item_id == content_item_id,
            EmailReminder.sent == False,  # noqa: E712
        ).order_by(EmailReminder.scheduled_for).all()

    def reschedule_reminder(self, reminder_id: str, scheduled_for: datetime) -> bool:
        """Move an unsent reminder; sent reminders are left untouched."""
        with self._write("reschedule_reminder"):
            result = self.db.execute(
                update(EmailReminder)
                .where(EmailReminder.id == reminder_id, EmailReminder.sent == False)  # noqa: E712
                .values(scheduled_for=scheduled_for)
            )
        return result.rowcount > 0

    def delete_unsent_reminders(self, content_item_id: str) -> int:
        with self._write("delete_unsent_reminders"):
            removed = self.db.query(EmailReminder).filter(
                EmailReminder.content_item_id == content_item_id,
                EmailReminder.sent == False,  # noqa: E712
            ).delete(synchronize_session="fetch")
        return removed
