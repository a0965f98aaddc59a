import re
from datetime import timedelta

import pytest

from app import create_app
from config import TestingConfig
from models import db
from utils.errors import DeliveryError
from utils.mail import mail

CODE_RE = re.compile(r"\b(\d{6})\b")


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    """App context for tests that talk to the store directly (no client calls)."""
    with app.app_context():
        yield app


@pytest.fixture
def outbox(app):
    with mail.record_messages() as messages:
        yield messages


def code_from(message):
    """The six-digit code in a delivered OTP email."""
    match = CODE_RE.search(message.body)
    assert match, message.body
    return match.group(1)


def register_user(client, outbox, email="alice@example.com", password="secret123", username="alice"):
    resp = client.post("/api/auth/signup", json={"username": username, "email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    code = code_from(outbox[-1])
    resp = client.post("/api/auth/verify-otp-and-register", json={
        "username": username, "email": email, "password": password, "otp": code,
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["user"]


def login_headers(client, email="alice@example.com", password="secret123"):
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


class FakeNotifier:
    """Records codes instead of mailing them."""

    def __init__(self, ready=True, fail_on_send=False):
        self.ready = ready
        self.fail_on_send = fail_on_send
        self.sent = []

    def ensure_ready(self):
        if not self.ready:
            raise DeliveryError("Email service is not configured.")

    def send(self, email, otp, purpose, ttl_minutes):
        if self.fail_on_send:
            raise DeliveryError()
        self.sent.append((email, otp, purpose))

    @property
    def last_code(self):
        return self.sent[-1][1]


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)
