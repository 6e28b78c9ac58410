from .auth import router as auth_router
from .content import router as content_router
from .templates import router as templates_router
from .reminders import router as reminders_router
from .export import router as export_router
from .subscription import router as subscription_router

__all__ = [
    "auth_router",
    "content_router",
    "templates_router",
    "reminders_router",
    "export_router",
    "subscription_router",
]
