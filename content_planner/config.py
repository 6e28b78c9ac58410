"""
Application configuration using environment variables.
"""
import os
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Content Planner API"
    debug: bool = False
    environment: str = "development"

    # Security
    secret_key: str = os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60  # 1 hour
    refresh_token_expire_days: int = 7

    # Identity provider (signs the id tokens exchanged at /api/auth/login)
    identity_token_secret: str = os.getenv("IDENTITY_TOKEN_SECRET", "")
    identity_token_algorithm: str = "HS256"
    identity_token_audience: Optional[str] = None

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./content_planner.db")

    # CORS
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Rate limiting
    login_rate_limit: str = "5/minute"
    test_reminder_rate_limit: str = "3/minute"

    # Email (SendGrid)
    sendgrid_api_key: Optional[str] = None
    mail_from: str = "noreply@contentplanner.com"
    email_timeout_seconds: int = 10

    # Reminders
    reminder_scheduler_enabled: bool = False
    reminder_scan_interval_minutes: int = 15
    auto_schedule_reminders: bool = True
    reminder_lead_hours: int = 24

    # Payments (PayPal)
    paypal_client_id: Optional[str] = None
    paypal_client_secret: Optional[str] = None
    paypal_environment: str = "sandbox"  # sandbox or live
    paypal_timeout_seconds: int = 15
    subscription_price: str = "9.99"
    subscription_currency: str = "USD"
    verify_payment_capture: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Validate secret key on startup
settings = get_settings()
if settings.environment == "production" and not os.getenv("SECRET_KEY"):
    raise ValueError(
        "SECRET_KEY must be set in production! "
        "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
    )
