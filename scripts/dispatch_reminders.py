#!/usr/bin/env python3
"""
Run one reminder scan
=====================
Sends every unsent reminder that is due, for cron jobs or manual runs.

Usage:
    python scripts/dispatch_reminders.py [--dry-run]
"""

import argparse
import sys

from content_planner import models  # noqa: F401
from content_planner.config import get_settings
from content_planner.database import Base, SessionLocal, engine, utcnow
from content_planner.services.email import SendGridTransport
from content_planner.storage import Storage
from content_planner.worker.reminder_scheduler import run_reminder_scan


def list_due(now) -> int:
    db = SessionLocal()
    try:
        due = Storage(db).get_pending_reminders(now)
        for reminder in due:
            print(f"{reminder.id}  item={reminder.content_item_id}  due={reminder.scheduled_for.isoformat()}")
        return len(due)
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Send due content reminders once")
    parser.add_argument("--dry-run", action="store_true", help="List due reminders without sending")
    args = parser.parse_args()

    settings = get_settings()
    Base.metadata.create_all(bind=engine)

    if args.dry_run:
        count = list_due(utcnow())
        print(f"{count} reminder(s) due")
        return 0

    transport = SendGridTransport(settings.sendgrid_api_key, timeout=settings.email_timeout_seconds)
    try:
        report = run_reminder_scan(SessionLocal, transport, settings.mail_from)
    finally:
        transport.close()

    if report is None:
        print("Reminder scan failed; see logs")
        return 1

    print(f"attempted={report.attempted} sent={report.sent} failed={report.failed} skipped={report.skipped}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
