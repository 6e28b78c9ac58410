from .auth import IdentityLogin, IdentityClaims, UserResponse, TokenResponse, RefreshRequest
from .content_item import ContentItemCreate, ContentItemUpdate, ContentItemResponse
from .template import TemplateResponse, TemplatePrefill
from .reminder import ReminderCreate, ReminderResponse
from .subscription import SubscriptionActivate, OrderCreate

__all__ = [
    "IdentityLogin", "IdentityClaims", "UserResponse", "TokenResponse", "RefreshRequest",
    "ContentItemCreate", "ContentItemUpdate", "ContentItemResponse",
    "TemplateResponse", "TemplatePrefill",
    "ReminderCreate", "ReminderResponse",
    "SubscriptionActivate", "OrderCreate",
]
