"""
Content item lifecycle: validated create/update/delete and template prefill.
"""
from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from ..errors import ContentValidationError
from ..logging_config import api_logger
from ..models import ContentItem, ContentTemplate, EmailReminder
from ..schemas.content_item import ContentItemCreate, ContentItemUpdate
from ..schemas.template import TemplatePrefill
from ..storage import Storage
from .policy import ensure_entitled


class ContentService:
    """
    Orchestrates content item changes on top of ``Storage``.

    Validation, including template checks, happens before any storage write,
    so a rejected payload never leaves a partial write behind. Status changes
    are not guarded: any of draft/scheduled/posted may be set from any other.
    Pending reminders follow the item: they move with its date and are dropped
    when it leaves "scheduled".
    """

    def __init__(
        self,
        storage: Storage,
        auto_schedule_reminders: bool = True,
        reminder_lead_hours: int = 24,
    ):
        self.storage = storage
        self.auto_schedule_reminders = auto_schedule_reminders
        self.reminder_lead = timedelta(hours=reminder_lead_hours)

    @staticmethod
    def _validate(schema, payload: Mapping[str, Any]):
        try:
            return schema.model_validate(dict(payload))
        except ValidationError as e:
            raise ContentValidationError.from_pydantic(e) from e

    def _owned(self, item: Optional[ContentItem], owner_id: Optional[str]) -> Optional[ContentItem]:
        if item is None:
            return None
        if owner_id is not None and item.user_id != owner_id:
            return None
        return item

    def list(self, owner_id: Optional[str] = None) -> List[ContentItem]:
        return self.storage.list_content_items(owner_id)

    def get(self, item_id: str, owner_id: Optional[str] = None) -> Optional[ContentItem]:
        return self._owned(self.storage.get_content_item(item_id), owner_id)

    def _check_template(self, user_id: str, template_id: Optional[str]) -> None:
        """Reject dangling template references and premium templates the owner cannot use."""
        if template_id is None:
            return
        template = self.storage.get_template(template_id)
        if template is None:
            raise ContentValidationError([{"field": "template_id", "message": "Template not found"}])
        ensure_entitled(self.storage.get_user(user_id), template)

    def create(self, user_id: str, payload: Mapping[str, Any]) -> ContentItem:
        data = self._validate(ContentItemCreate, payload)
        self._check_template(user_id, data.template_id)
        item = self.storage.create_content_item(user_id, **data.model_dump())
        api_logger.info("Content item created", item_id=item.id, user_id=user_id, status=item.status)

        if item.status == "scheduled" and self.auto_schedule_reminders:
            self.schedule_reminder(item)
        return item

    def update(
        self,
        item_id: str,
        payload: Mapping[str, Any],
        owner_id: Optional[str] = None,
    ) -> Optional[ContentItem]:
        data = self._validate(ContentItemUpdate, payload)
        changes = data.model_dump(exclude_unset=True)

        item = self.get(item_id, owner_id)
        if item is None:
            return None
        if changes.get("template_id") is not None:
            self._check_template(item.user_id, changes["template_id"])

        old_status = item.status
        old_date = item.scheduled_date

        item = self.storage.update_content_item(item_id, **changes)
        if item is None:
            return None
        api_logger.info("Content item updated", item_id=item_id, fields=sorted(changes))

        self._sync_reminders(item, old_status, old_date)
        return item

    def _sync_reminders(self, item: ContentItem, old_status: str, old_date: datetime) -> None:
        """Keep pending reminders in step with the item's status and date."""
        if old_status == "scheduled" and item.status != "scheduled":
            removed = self.storage.delete_unsent_reminders(item.id)
            if removed:
                api_logger.info("Pending reminders dropped", item_id=item.id, count=removed)
            return

        shift = item.scheduled_date - old_date
        pending = self.storage.get_unsent_reminders_for_item(item.id) if shift else []
        # Explicit reminder times keep their offset from the item's date
        for reminder in pending:
            self.storage.reschedule_reminder(reminder.id, reminder.scheduled_for + shift)
        if pending:
            api_logger.info("Pending reminders moved", item_id=item.id, count=len(pending), shift=str(shift))

        if item.status == "scheduled" and old_status != "scheduled" and self.auto_schedule_reminders:
            if self.storage.get_unsent_reminder_for_item(item.id) is None:
                self.schedule_reminder(item)

    def delete(self, item_id: str, owner_id: Optional[str] = None) -> bool:
        if self.get(item_id, owner_id) is None:
            return False
        removed = self.storage.delete_content_item(item_id)
        if removed:
            api_logger.info("Content item deleted", item_id=item_id)
        return removed

    def schedule_reminder(
        self,
        item: ContentItem,
        scheduled_for: Optional[datetime] = None,
    ) -> EmailReminder:
        if scheduled_for is None:
            scheduled_for = item.scheduled_date - self.reminder_lead
        reminder = self.storage.create_reminder(item.id, item.user_id, scheduled_for)
        api_logger.info(
            "Reminder scheduled",
            reminder_id=reminder.id,
            item_id=item.id,
            scheduled_for=scheduled_for.isoformat(),
        )
        return reminder

    def apply_template(self, user: Optional[Any], template: ContentTemplate) -> TemplatePrefill:
        """Prefill draft fields from a template; raises ``PolicyDenied`` when gated."""
        ensure_entitled(user, template)
        return TemplatePrefill(
            title=template.title,
            description=template.content,
            platform=template.platform,
            template_id=template.id,
        )
