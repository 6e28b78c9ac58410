"""
FastAPI dependencies for services and injected client handles.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .config import get_settings
from .database import get_db
from .services.content import ContentService
from .services.email import SendGridTransport
from .services.payments import PayPalClient
from .services.reminders import ReminderDispatcher
from .storage import Storage


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return Storage(db)


def get_content_service(storage: Storage = Depends(get_storage)) -> ContentService:
    settings = get_settings()
    return ContentService(
        storage,
        auto_schedule_reminders=settings.auto_schedule_reminders,
        reminder_lead_hours=settings.reminder_lead_hours,
    )


def get_email_transport(request: Request) -> SendGridTransport:
    """The transport built in the app lifespan."""
    return request.app.state.email_transport


def get_payment_client(request: Request) -> PayPalClient:
    return request.app.state.payment_client


def get_reminder_dispatcher(
    storage: Storage = Depends(get_storage),
    transport=Depends(get_email_transport),
) -> ReminderDispatcher:
    return ReminderDispatcher(storage, transport, get_settings().mail_from)
