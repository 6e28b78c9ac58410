"""
Entitlement rules derived from a user's subscription status.

Templates and premium features share one capability: a resource either
requires premium or it does not, and premium means an ``active`` subscription.
All functions here are pure and never raise except ``ensure_entitled``.
"""
from enum import Enum
from typing import Any, Optional

from ..errors import PolicyDenied

ACTIVE_STATUS = "active"


class PremiumFeature(str, Enum):
    """Features that are always premium-gated."""
    PDF_EXPORT = "pdf_export"
    TEST_REMINDER = "test_reminder"
    EMAIL_REMINDERS = "email_reminders"


FEATURE_LABELS = {
    PremiumFeature.PDF_EXPORT: "PDF export",
    PremiumFeature.TEST_REMINDER: "Test reminders",
    PremiumFeature.EMAIL_REMINDERS: "Email reminders",
}


def requires_premium(resource: Any) -> bool:
    if isinstance(resource, PremiumFeature):
        return True
    return getattr(resource, "is_premium", False) is True


def is_premium_feature_allowed(user: Optional[Any]) -> bool:
    """True only for users with an active subscription; ``None`` is anonymous."""
    if user is None:
        return False
    return getattr(user, "subscription_status", None) == ACTIVE_STATUS


def is_entitled(user: Optional[Any], resource: Any) -> bool:
    if not requires_premium(resource):
        return True
    return is_premium_feature_allowed(user)


def can_apply_template(user: Optional[Any], template: Any) -> bool:
    """Free templates apply for anyone; premium ones need an active subscription."""
    return is_entitled(user, template)


def denial_reason(resource: Any) -> str:
    if isinstance(resource, PremiumFeature):
        return f"{FEATURE_LABELS[resource]} requires a premium subscription"
    return "This template requires a premium subscription"


def ensure_entitled(user: Optional[Any], resource: Any) -> None:
    if not is_entitled(user, resource):
        raise PolicyDenied(denial_reason(resource))
