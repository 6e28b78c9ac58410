from .policy import (
    PremiumFeature,
    can_apply_template,
    is_premium_feature_allowed,
    is_entitled,
    ensure_entitled,
)
from .content import ContentService
from .reminders import ReminderDispatcher, DispatchReport, render_reminder
from .email import EmailMessage, SendGridTransport
from .payments import PayPalClient
from .export import export_csv

__all__ = [
    "PremiumFeature",
    "can_apply_template",
    "is_premium_feature_allowed",
    "is_entitled",
    "ensure_entitled",
    "ContentService",
    "ReminderDispatcher",
    "DispatchReport",
    "render_reminder",
    "EmailMessage",
    "SendGridTransport",
    "PayPalClient",
    "export_csv",
]
