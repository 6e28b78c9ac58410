"""
Reminder dispatch: send due reminders and record the outcome.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..database import utcnow
from ..logging_config import reminder_logger, timed
from ..models import EmailReminder
from ..storage import Storage
from .email import EmailMessage
from .policy import PremiumFeature, ensure_entitled


@dataclass
class DispatchReport:
    attempted: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    failed_ids: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "attempted": self.attempted,
            "sent": self.sent,
            "failed": self.failed,
            "skipped": self.skipped,
            "failed_ids": list(self.failed_ids),
        }


def render_reminder(
    to: str,
    sender: str,
    title: str,
    platform: str,
    scheduled_date: datetime,
) -> EmailMessage:
    """Build the reminder email for one content item."""
    when = scheduled_date.strftime("%B %d, %Y %H:%M")
    subject = f'Reminder: Content "{title}" scheduled for {platform}'
    text = (
        "Hi there!\n\n"
        "This is a friendly reminder that you have content scheduled:\n\n"
        f"Title: {title}\n"
        f"Platform: {platform}\n"
        f"Scheduled for: {when}\n\n"
        "Time to get publishing!\n\n"
        "Best regards,\n"
        "Your Content Planner"
    )
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h2 style="color: #2563eb;">Content Reminder</h2>
      <p>Hi there!</p>
      <p>This is a friendly reminder that you have content scheduled:</p>
      <div style="background-color: #f3f4f6; padding: 20px; border-radius: 8px; margin: 20px 0;">
        <h3 style="margin: 0 0 10px 0; color: #1f2937;">{title}</h3>
        <p style="margin: 5px 0;"><strong>Platform:</strong> {platform}</p>
        <p style="margin: 5px 0;"><strong>Scheduled for:</strong> {when}</p>
      </div>
      <p>Time to get publishing!</p>
      <p>Best regards,<br>Your Content Planner</p>
    </div>
    """
    return EmailMessage(to=to, sender=sender, subject=subject, text=text, html=html)


class ReminderDispatcher:
    """
    Sends due reminders through an injected email transport.

    A failed send, or a failure to record the send, leaves the reminder unsent
    so the next scan retries it.
    One reminder failing never stops the rest of the scan.
    """

    def __init__(self, storage: Storage, transport: Any, sender: str):
        self.storage = storage
        self.transport = transport
        self.sender = sender

    def _deliver(self, message: EmailMessage) -> bool:
        try:
            return bool(self.transport.send(message))
        except Exception as e:
            reminder_logger.error("Email transport raised", error=e, to=message.to)
            return False

    def _dispatch_one(self, reminder: EmailReminder, report: DispatchReport) -> None:
        reminder_id = reminder.id
        item = reminder.content_item
        user = reminder.user
        if item is None or user is None or not user.email:
            reminder_logger.warning(
                "Reminder has no deliverable recipient; leaving it pending",
                reminder_id=reminder_id,
                content_item_id=reminder.content_item_id,
            )
            report.skipped += 1
            return

        report.attempted += 1
        item_id = item.id
        message = render_reminder(user.email, self.sender, item.title, item.platform, item.scheduled_date)

        if not self._deliver(message):
            report.failed += 1
            report.failed_ids.append(reminder_id)
            reminder_logger.warning("Reminder delivery failed", reminder_id=reminder_id)
            return

        try:
            self.storage.mark_reminder_as_sent(reminder_id)
            self.storage.mark_content_reminder_sent(item_id)
        except SQLAlchemyError as e:
            # A reminder whose mark did not commit stays pending for the next scan
            report.failed += 1
            report.failed_ids.append(reminder_id)
            reminder_logger.error("Could not record sent reminder", error=e, reminder_id=reminder_id)
            return
        report.sent += 1
        reminder_logger.info("Reminder sent", reminder_id=reminder_id, content_item_id=item_id)

    @timed(reminder_logger)
    def dispatch_due(self, now: Optional[datetime] = None) -> DispatchReport:
        """Attempt every unsent reminder scheduled at or before ``now``."""
        now = now or utcnow()
        report = DispatchReport()
        due = self.storage.get_pending_reminders(now)
        reminder_logger.info("Reminder scan started", due=len(due), now=now.isoformat())

        for reminder in due:
            self._dispatch_one(reminder, report)

        reminder_logger.info("Reminder scan finished", **report.as_dict())
        return report

    def send_now(
        self,
        user: Any,
        title: str = "Test Content",
        platform: str = "social",
        scheduled_date: Optional[datetime] = None,
    ) -> bool:
        """One-off reminder for premium users; nothing is persisted."""
        ensure_entitled(user, PremiumFeature.TEST_REMINDER)
        if not user.email:
            reminder_logger.warning("Test reminder requested for user without email", user_id=user.id)
            return False
        message = render_reminder(user.email, self.sender, title, platform, scheduled_date or utcnow())
        sent = self._deliver(message)
        reminder_logger.info("Test reminder attempted", user_id=user.id, sent=sent)
        return sent
