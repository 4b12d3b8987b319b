import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from marketplace.config.settings import Config
from marketplace.domain.entities.product import Product
from marketplace.domain.entities.user import User
from marketplace.domain.ports.realtime import Channel
from marketplace.domain.services.passwords import hash_password
from marketplace.domain.value_objects.user_email import UserEmail
from marketplace.domain.value_objects.user_id import UserId
from marketplace.fastapi_app import create_fastapi_app
from marketplace.infrastructure.persistence import InMemoryStore
from marketplace.presentation.dependencies.auth import issue_session_token
from marketplace.setup.ioc import InMemoryProvider, create_container

TEST_SESSION_SECRET = "test-session-secret-0123456789abcdef0123456789"
TEST_PASSWORD = "secret123"


class FakeChannel(Channel):
    """Records what it is sent; optionally fails like a dropped socket."""

    def __init__(self, user_id: UserId, fail: bool = False):
        self.user_id = user_id
        self.fail = fail
        self.received = []

    async def send(self, event, data):
        if self.fail:
            raise ConnectionError("socket closed")
        self.received.append((event, data))


@pytest.fixture(autouse=True)
def test_config(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "SESSION_SECRET", TEST_SESSION_SECRET)
    monkeypatch.setattr(Config, "UPLOAD_PATH", str(tmp_path / "uploads"))
    monkeypatch.setattr(Config, "REALTIME_ERROR_EVENTS", False)
    monkeypatch.setattr(Config, "REALTIME_JOIN_REQUIRES_PARTICIPANT", False)
    return Config


@pytest.fixture()
def store():
    return InMemoryStore()


@pytest.fixture()
def app(store):
    """Create and configure a new FastAPI app instance for each test."""
    return create_fastapi_app(create_container(InMemoryProvider(store)))


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app (lifespan included)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(store):
    def _make_user(name="Buyer", email="buyer@example.com", password=TEST_PASSWORD):
        user = User.create(
            name=name, email=UserEmail(email), password_hash=hash_password(password)
        )
        store.users[user.id.value] = user
        return user

    return _make_user


@pytest.fixture()
def make_product(store):
    def _make_product(owner, title="Used bike", **overrides):
        fields = dict(
            category="sports",
            location="Seoul",
            price=120.0,
            description="Barely used road bike, great condition",
        )
        fields.update(overrides)
        product = Product.create(owner_id=owner.id, title=title, **fields)
        store.products[product.id.value] = product
        return product

    return _make_product


@pytest.fixture()
def auth_headers():
    """Authentication headers with a valid session token for the given user."""

    def _auth_headers(user):
        return {"Authorization": f"Bearer {issue_session_token(user)}"}

    return _auth_headers


@pytest.fixture()
def seller(make_user):
    return make_user(name="Seller", email="seller@example.com")


@pytest.fixture()
def buyer(make_user):
    return make_user(name="Buyer", email="buyer@example.com")


@pytest.fixture()
def product(make_product, seller):
    return make_product(seller)


@pytest.fixture()
def fake_channel():
    return FakeChannel
