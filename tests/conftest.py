"""
Pytest configuration and fixtures for Content Planner API tests.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("IDENTITY_TOKEN_SECRET", "test-identity-secret")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from content_planner.database import Base, get_db
from content_planner.dependencies import get_email_transport, get_payment_client
from content_planner.limiter import limiter
from content_planner.main import app
from content_planner.models import ContentItem, ContentTemplate, User
from content_planner.auth import create_access_token
from content_planner.storage import Storage

# Disable rate limiting for tests
limiter.enabled = False

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


class FakeTransport:
    """Records messages; fails or raises for subjects containing chosen titles."""

    def __init__(self):
        self.sent = []
        self.failing_titles = set()
        self.raising_titles = set()

    def send(self, message):
        if any(title in message.subject for title in self.raising_titles):
            raise ConnectionError("mail relay unreachable")
        if any(title in message.subject for title in self.failing_titles):
            return False
        self.sent.append(message)
        return True


class FakePayPal:
    """Stands in for the PayPal client."""

    def __init__(self):
        self.order_status = "COMPLETED"
        self.captured = []

    def get_client_token(self):
        return "client-token-123"

    def create_order(self, amount, currency, intent="CAPTURE"):
        return {"id": "ORDER-1", "status": "CREATED", "amount": amount, "currency": currency, "intent": intent}

    def capture_order(self, order_id):
        self.captured.append(order_id)
        return {"id": order_id, "status": "COMPLETED"}

    def get_order(self, order_id):
        return {"id": order_id, "status": self.order_status}


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def storage(db):
    return Storage(db)


@pytest.fixture(scope="function")
def transport():
    return FakeTransport()


@pytest.fixture(scope="function")
def paypal():
    return FakePayPal()


@pytest.fixture(scope="function")
def client(db, transport, paypal):
    """Create a test client with fake email and payment clients."""
    app.dependency_overrides[get_email_transport] = lambda: transport
    app.dependency_overrides[get_payment_client] = lambda: paypal
    with TestClient(app) as c:
        yield c


def make_user(db, user_id, email, status="free"):
    user = User(id=user_id, email=email, first_name="Test", subscription_status=status)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.id})}"}


@pytest.fixture(scope="function")
def free_user(db):
    return make_user(db, "user-free", "free@example.com")


@pytest.fixture(scope="function")
def active_user(db):
    return make_user(db, "user-active", "active@example.com", status="active")


@pytest.fixture(scope="function")
def free_headers(free_user):
    return headers_for(free_user)


@pytest.fixture(scope="function")
def active_headers(active_user):
    return headers_for(active_user)


@pytest.fixture(scope="function")
def free_template(db):
    template = ContentTemplate(
        title="Behind the Scenes",
        description="Show the reality of running your business",
        content="Currently working on [project/task]...",
        platform="social",
        category="marketing",
        is_premium=False,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


@pytest.fixture(scope="function")
def premium_template(db):
    template = ContentTemplate(
        title="Weekly Value Newsletter",
        description="Weekly newsletter providing value to subscribers",
        content="Subject: Your weekly dose of [topic] insights",
        platform="email",
        category="educational",
        is_premium=True,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


def make_item(db, user, title="Launch post", status="draft", scheduled=None, **extra):
    item = ContentItem(
        user_id=user.id,
        title=title,
        platform=extra.pop("platform", "social"),
        scheduled_date=scheduled or datetime(2024, 6, 1, 9, 0),
        status=status,
        **extra,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item
