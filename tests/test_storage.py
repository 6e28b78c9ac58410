"""
Tests for the persistence gateway.
"""
from datetime import datetime, timedelta

from content_planner.models import ContentItem, EmailReminder
from conftest import make_item


class TestUsers:

    def test_upsert_creates_free_user(self, storage):
        user = storage.upsert_user("idp-1", email="new@example.com", first_name="Nia")
        assert user.id == "idp-1"
        assert user.subscription_status == "free"
        assert user.email == "new@example.com"

    def test_upsert_refreshes_existing_user(self, storage, db):
        user = storage.upsert_user("idp-1", email="old@example.com")
        created_at = user.created_at
        user.updated_at = datetime(2020, 1, 1)
        db.commit()

        user = storage.upsert_user("idp-1", email="new@example.com")
        assert user.email == "new@example.com"
        assert user.created_at == created_at
        assert user.updated_at > datetime(2020, 1, 1)

    def test_upsert_keeps_subscription(self, storage, active_user):
        user = storage.upsert_user(active_user.id, email=active_user.email)
        assert user.subscription_status == "active"

    def test_activate_subscription(self, storage, free_user):
        user = storage.activate_subscription(free_user.id, "ORDER-9", "ORDER-9")
        assert user.subscription_status == "active"
        assert user.payment_customer_id == "ORDER-9"
        assert user.payment_subscription_id == "ORDER-9"

    def test_activate_unknown_user(self, storage):
        assert storage.activate_subscription("nobody", "o", "o") is None


class TestContentItems:

    def test_owner_filter(self, storage, db, free_user, active_user):
        make_item(db, free_user, title="Mine")
        make_item(db, active_user, title="Theirs")

        mine = storage.list_content_items(owner_id=free_user.id)
        assert [i.title for i in mine] == ["Mine"]
        assert len(storage.list_content_items()) == 2

    def test_list_is_ordered_by_date(self, storage, db, free_user):
        make_item(db, free_user, title="Later", scheduled=datetime(2024, 7, 1))
        make_item(db, free_user, title="Sooner", scheduled=datetime(2024, 5, 1))
        assert [i.title for i in storage.list_content_items(free_user.id)] == ["Sooner", "Later"]

    def test_update_missing_returns_none(self, storage):
        assert storage.update_content_item("missing", title="x") is None

    def test_delete_is_idempotent(self, storage, db, free_user):
        item = make_item(db, free_user)
        assert storage.delete_content_item(item.id) is True
        assert storage.delete_content_item(item.id) is False
        assert db.query(ContentItem).count() == 0

    def test_delete_removes_reminders(self, storage, db, free_user):
        item = make_item(db, free_user)
        storage.create_reminder(item.id, free_user.id, datetime(2024, 5, 31))
        storage.delete_content_item(item.id)
        assert db.query(EmailReminder).count() == 0


class TestReminders:

    def test_pending_respects_due_time(self, storage, db, free_user):
        item = make_item(db, free_user)
        now = datetime(2024, 6, 1, 8, 0)
        due = storage.create_reminder(item.id, free_user.id, now - timedelta(hours=1))
        storage.create_reminder(item.id, free_user.id, now + timedelta(hours=1))

        assert [r.id for r in storage.get_pending_reminders(now)] == [due.id]
        assert len(storage.get_pending_reminders()) == 2

    def test_mark_sent_happens_once(self, storage, db, free_user):
        item = make_item(db, free_user)
        reminder = storage.create_reminder(item.id, free_user.id, datetime(2024, 5, 31))

        assert storage.mark_reminder_as_sent(reminder.id) is True
        assert storage.mark_reminder_as_sent(reminder.id) is False
        assert storage.get_reminder(reminder.id).sent is True
        assert storage.get_pending_reminders() == []

    def test_mark_unknown_reminder(self, storage):
        assert storage.mark_reminder_as_sent("missing") is False

    def test_unsent_reminder_for_item(self, storage, db, free_user):
        item = make_item(db, free_user)
        assert storage.get_unsent_reminder_for_item(item.id) is None
        reminder = storage.create_reminder(item.id, free_user.id, datetime(2024, 5, 31))
        assert storage.get_unsent_reminder_for_item(item.id).id == reminder.id


class TestTemplates:

    def test_filters(self, storage, free_template, premium_template):
        assert len(storage.list_templates()) == 2
        assert [t.id for t in storage.list_templates(platform="email")] == [premium_template.id]
        assert [t.id for t in storage.list_templates(category="marketing")] == [free_template.id]

    def test_get_missing_template(self, storage):
        assert storage.get_template("nope") is None

    def test_seed_is_idempotent(self, storage):
        from seed import TEMPLATES, seed_templates

        assert seed_templates(storage) == len(TEMPLATES)
        assert seed_templates(storage) == 0
        assert storage.count_templates() == len(TEMPLATES)
