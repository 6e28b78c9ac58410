"""
Tests for reminder dispatch.
"""
from datetime import datetime, timedelta

import pytest

from sqlalchemy.exc import OperationalError

from content_planner.errors import PolicyDenied
from content_planner.models import EmailReminder
from content_planner.services.reminders import ReminderDispatcher, render_reminder
from content_planner.worker.reminder_scheduler import ReminderScheduler, run_reminder_scan
from conftest import TestingSessionLocal, make_item, make_user

NOW = datetime(2024, 6, 1, 8, 0)


@pytest.fixture
def dispatcher(storage, transport):
    return ReminderDispatcher(storage, transport, "noreply@contentplanner.com")


def due_reminder(storage, db, user, title, minutes_ago=30):
    item = make_item(db, user, title=title, status="scheduled")
    return storage.create_reminder(item.id, user.id, NOW - timedelta(minutes=minutes_ago))


class TestDispatchDue:

    def test_failure_does_not_block_later_reminders(self, dispatcher, storage, db, free_user, transport):
        first = due_reminder(storage, db, free_user, "First post", minutes_ago=60)
        second = due_reminder(storage, db, free_user, "Second post", minutes_ago=30)
        transport.failing_titles.add("First post")

        report = dispatcher.dispatch_due(NOW)

        assert report.attempted == 2
        assert report.sent == 1
        assert report.failed == 1
        assert report.failed_ids == [first.id]
        assert storage.get_reminder(first.id).sent is False
        assert storage.get_reminder(second.id).sent is True
        assert storage.get_content_item(storage.get_reminder(second.id).content_item_id).reminder_sent is True

    def test_transport_exception_counts_as_failure(self, dispatcher, storage, db, free_user, transport):
        broken = due_reminder(storage, db, free_user, "Broken", minutes_ago=60)
        fine = due_reminder(storage, db, free_user, "Fine", minutes_ago=30)
        transport.raising_titles.add("Broken")

        report = dispatcher.dispatch_due(NOW)

        assert report.failed == 1
        assert report.sent == 1
        assert storage.get_reminder(broken.id).sent is False
        assert storage.get_reminder(fine.id).sent is True

    def test_failed_reminder_is_retried_next_scan(self, dispatcher, storage, db, free_user, transport):
        reminder = due_reminder(storage, db, free_user, "Flaky")
        transport.failing_titles.add("Flaky")
        dispatcher.dispatch_due(NOW)

        transport.failing_titles.clear()
        report = dispatcher.dispatch_due(NOW)
        assert report.sent == 1
        assert storage.get_reminder(reminder.id).sent is True

    def test_sent_reminders_stay_sent(self, dispatcher, storage, db, free_user, transport):
        reminder = due_reminder(storage, db, free_user, "Once")
        dispatcher.dispatch_due(NOW)
        assert len(transport.sent) == 1

        transport.failing_titles.add("Once")
        for _ in range(3):
            report = dispatcher.dispatch_due(NOW + timedelta(days=1))
            assert report.attempted == 0
            assert storage.get_reminder(reminder.id).sent is True
        assert len(transport.sent) == 1

    def test_storage_error_does_not_block_later_reminders(self, dispatcher, storage, db, free_user, transport, monkeypatch):
        first = due_reminder(storage, db, free_user, "Locked row", minutes_ago=60)
        second = due_reminder(storage, db, free_user, "Next in line", minutes_ago=30)
        mark = storage.mark_reminder_as_sent

        def flaky_mark(reminder_id):
            if reminder_id == first.id:
                raise OperationalError("UPDATE email_reminders", {}, Exception("database is locked"))
            return mark(reminder_id)

        monkeypatch.setattr(storage, "mark_reminder_as_sent", flaky_mark)

        report = dispatcher.dispatch_due(NOW)

        assert report.attempted == 2
        assert report.sent == 1
        assert report.failed_ids == [first.id]
        assert len(transport.sent) == 2
        assert storage.get_reminder(first.id).sent is False
        assert storage.get_reminder(second.id).sent is True

    def test_future_reminders_are_not_sent(self, dispatcher, storage, db, free_user, transport):
        item = make_item(db, free_user)
        reminder = storage.create_reminder(item.id, free_user.id, NOW + timedelta(hours=1))

        report = dispatcher.dispatch_due(NOW)
        assert report.attempted == 0
        assert transport.sent == []
        assert storage.get_reminder(reminder.id).sent is False

    def test_user_without_email_is_skipped(self, dispatcher, storage, db, transport):
        user = make_user(db, "no-mail", None)
        reminder = due_reminder(storage, db, user, "Silent")

        report = dispatcher.dispatch_due(NOW)
        assert report.skipped == 1
        assert report.attempted == 0
        assert storage.get_reminder(reminder.id).sent is False

    def test_message_contents(self, dispatcher, storage, db, free_user, transport):
        due_reminder(storage, db, free_user, "Launch post")
        dispatcher.dispatch_due(NOW)

        message = transport.sent[0]
        assert message.to == free_user.email
        assert message.sender == "noreply@contentplanner.com"
        assert message.subject == 'Reminder: Content "Launch post" scheduled for social'
        assert "Title: Launch post" in message.text
        assert "Platform: social" in message.text
        assert "June 01, 2024" in message.text
        assert "Launch post" in message.html


class TestSendNow:

    def test_free_user_is_denied(self, dispatcher, free_user, transport):
        with pytest.raises(PolicyDenied):
            dispatcher.send_now(free_user)
        assert transport.sent == []

    def test_active_user_gets_synthetic_reminder(self, dispatcher, db, active_user, transport):
        assert dispatcher.send_now(active_user) is True
        assert transport.sent[0].subject == 'Reminder: Content "Test Content" scheduled for social'
        assert db.query(EmailReminder).count() == 0

    def test_transport_failure_returns_false(self, dispatcher, active_user, transport):
        transport.raising_titles.add("Test Content")
        assert dispatcher.send_now(active_user) is False


class TestScheduler:

    def test_run_reminder_scan_uses_own_session(self, storage, db, free_user, transport):
        reminder = due_reminder(storage, db, free_user, "Scanned")

        report = run_reminder_scan(TestingSessionLocal, transport, "noreply@contentplanner.com")

        assert report.sent == 1
        db.expire_all()
        assert storage.get_reminder(reminder.id).sent is True

    def test_start_and_stop(self, transport):
        scheduler = ReminderScheduler(TestingSessionLocal, transport, "noreply@contentplanner.com", interval_minutes=60)
        scheduler.start()
        try:
            assert scheduler.running
        finally:
            scheduler.stop()
        assert not scheduler.running


def test_render_reminder_subject():
    message = render_reminder("a@example.com", "from@example.com", "Weekly tips", "email", datetime(2024, 1, 2, 3, 4))
    assert message.subject == 'Reminder: Content "Weekly tips" scheduled for email'
    assert "January 02, 2024 03:04" in message.text
