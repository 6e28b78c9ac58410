"""
Content Planner API - FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import models  # noqa: F401  registers tables on Base
from .config import get_settings
from .database import engine, Base, SessionLocal
from .limiter import limiter
from .logging_config import api_logger
from .middleware import SecurityHeadersMiddleware, RequestLoggingMiddleware
from .responses import register_exception_handlers
from .routes import (
    auth_router,
    content_router,
    templates_router,
    reminders_router,
    export_router,
    subscription_router,
)
from .services.email import SendGridTransport
from .services.payments import PayPalClient
from .worker.reminder_scheduler import ReminderScheduler

settings = get_settings()

# Create tables (schema migrations are handled outside this service)
Base.metadata.create_all(bind=engine)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build client handles on startup and release them on shutdown."""
    transport = SendGridTransport(settings.sendgrid_api_key, timeout=settings.email_timeout_seconds)
    paypal = PayPalClient(
        settings.paypal_client_id,
        settings.paypal_client_secret,
        environment=settings.paypal_environment,
        timeout=settings.paypal_timeout_seconds,
    )
    app.state.email_transport = transport
    app.state.payment_client = paypal

    scheduler = ReminderScheduler(
        SessionLocal,
        transport,
        settings.mail_from,
        interval_minutes=settings.reminder_scan_interval_minutes,
    )
    if settings.reminder_scheduler_enabled:
        try:
            scheduler.start()
        except Exception as e:
            api_logger.error("Failed to start reminder scheduler", error=e)

    yield  # App is running

    scheduler.stop()
    transport.close()
    paypal.close()


app = FastAPI(
    title=settings.app_name,
    description="Backend API for the content planning calendar",
    version=VERSION,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(SecurityHeadersMiddleware)

if settings.debug:
    app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,
)

app.include_router(auth_router)
app.include_router(content_router)
app.include_router(templates_router)
app.include_router(reminders_router)
app.include_router(export_router)
app.include_router(subscription_router)


@app.get("/api/health")
def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": VERSION,
    }


@app.get("/")
def root():
    return {
        "message": settings.app_name,
        "docs": "/api/docs" if settings.debug else "Disabled in production",
    }
