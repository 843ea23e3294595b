"""Pytest configuration for DripTech API tests."""

import os

# Settings are read at import time; point them at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("RESEND_API_KEY", None)
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

import models  # noqa: F401
from auth.service import create_access_token, get_password_hash
from database import Base, SessionLocal, engine, get_db
from main import app
from models.user import User
from notifications import NotificationError, get_notifier


class FakeNotifier:
    """Records deliveries instead of calling Resend."""

    def __init__(self):
        self.sent = []
        self.received = []
        self.fail = False

    def send_quote(self, quote, document_html):
        if self.fail:
            raise NotificationError("Email delivery failed: provider down")
        self.sent.append((quote, document_html))

    def notify_quote_received(self, quote):
        self.received.append(quote)


# ─────────────────────────────── Fixtures ────────────────────────────────────


@pytest.fixture
def db():
    """Fresh schema per test on the shared in-memory connection."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def client(db, notifier):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _make_user(db, email: str, role: str, password: str = "secret123") -> User:
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        name=email.split("@")[0].title(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _headers(user: User) -> dict:
    token = create_access_token({"sub": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db) -> User:
    return _make_user(db, "admin@driptech.co.ke", "admin")


@pytest.fixture
def staff_user(db) -> User:
    return _make_user(db, "staff@driptech.co.ke", "user")


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return _headers(admin_user)


@pytest.fixture
def user_headers(staff_user) -> dict:
    return _headers(staff_user)


@pytest.fixture
def quote_payload() -> dict:
    return {
        "customer_name": "Jane Wanjiru",
        "customer_email": "jane@example.com",
        "customer_phone": "+254712345678",
        "project_type": "Greenhouse",
        "area_size": "2 acres",
        "location": "Nakuru",
        "crop_type": "Tomatoes",
        "requirements": "",
    }
