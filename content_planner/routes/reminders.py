"""
Email reminder routes.
"""
from fastapi import APIRouter, Depends, Request

from ..auth import get_required_user
from ..config import get_settings
from ..dependencies import get_content_service, get_reminder_dispatcher
from ..limiter import limiter
from ..models.user import User
from ..responses import bad_request, not_found, server_error, success
from ..schemas.reminder import ReminderCreate, ReminderResponse
from ..services.content import ContentService
from ..services.policy import PremiumFeature, ensure_entitled
from ..services.reminders import ReminderDispatcher

settings = get_settings()

router = APIRouter(prefix="/api", tags=["reminders"])


@router.post("/reminders", response_model=ReminderResponse, status_code=201)
def create_reminder(
    reminder: ReminderCreate,
    service: ContentService = Depends(get_content_service),
    current_user: User = Depends(get_required_user),
):
    """Schedule a reminder for one of the caller's content items."""
    item = service.get(reminder.content_item_id, owner_id=current_user.id)
    if not item:
        not_found("Content item")
    return service.schedule_reminder(item, reminder.scheduled_for)


@router.post("/test-reminder")
@limiter.limit(settings.test_reminder_rate_limit)
def send_test_reminder(
    request: Request,
    dispatcher: ReminderDispatcher = Depends(get_reminder_dispatcher),
    current_user: User = Depends(get_required_user),
):
    """Send a one-off reminder to the caller (premium only)."""
    ensure_entitled(current_user, PremiumFeature.TEST_REMINDER)
    if not current_user.email:
        bad_request("User email not found", "MISSING_EMAIL")

    if not dispatcher.send_now(current_user):
        server_error("Failed to send test reminder")
    return success(message="Test reminder sent successfully")
