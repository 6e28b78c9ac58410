"""
Periodic reminder scan.

Runs ``ReminderDispatcher.dispatch_due`` on an APScheduler interval job inside
the API process. Each run opens its own database session.
"""
from typing import Any, Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from ..logging_config import reminder_logger
from ..services.reminders import DispatchReport, ReminderDispatcher
from ..storage import Storage

JOB_ID = "content_planner_reminders"


def run_reminder_scan(
    session_factory: Callable[[], Session],
    transport: Any,
    sender: str,
) -> Optional[DispatchReport]:
    """Run one scan; errors are logged so the scheduler keeps going."""
    db = session_factory()
    try:
        dispatcher = ReminderDispatcher(Storage(db), transport, sender)
        return dispatcher.dispatch_due()
    except Exception as e:
        reminder_logger.error("Reminder scan aborted", error=e)
        return None
    finally:
        db.close()


class ReminderScheduler:
    """Owns the background scheduler that drives reminder scans."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        transport: Any,
        sender: str,
        interval_minutes: int = 15,
    ):
        self.session_factory = session_factory
        self.transport = transport
        self.sender = sender
        self.interval_minutes = interval_minutes
        self._scheduler: Optional[BackgroundScheduler] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self):
        if self.running:
            return
        self._scheduler = BackgroundScheduler(daemon=True)
        # One scan at a time; a late run is folded into the next one
        self._scheduler.add_job(
            run_reminder_scan,
            trigger="interval",
            minutes=self.interval_minutes,
            id=JOB_ID,
            args=[self.session_factory, self.transport, self.sender],
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        reminder_logger.info("Reminder scheduler started", interval_minutes=self.interval_minutes)

    def stop(self):
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        reminder_logger.info("Reminder scheduler stopped")
