from .user import User
from .template import ContentTemplate
from .content_item import ContentItem
from .email_reminder import EmailReminder

__all__ = [
    "User",
    "ContentTemplate",
    "ContentItem",
    "EmailReminder",
]
