from datetime import date
from decimal import Decimal
import uuid

import pytest
import requests
from fastapi.testclient import TestClient

from auth_service.app.main import create_app as create_auth_app
from parking_service.app.crud.space_crud import create_space
from parking_service.app.main import create_app
from parking_service.app.schemas.space_schemas import SpaceCreate
from shared.core.auth import create_access_token
from shared.core.config import Settings
from shared.core.errors import AppError
from shared.models.users import Users
from shared.utils.enums import ErrorKind


class FakeCompletionClient:
    def __init__(self, reply="Try the Kennington driveway, it's £12.50 a day."):
        self.reply = reply
        self.calls = []
        self.fail = False

    def complete(self, messages):
        self.calls.append(messages)
        if self.fail:
            raise AppError(ErrorKind.UPSTREAM_FAILURE, "Failed to generate a reply")
        return self.reply


class FakePaymentClient:
    def __init__(self):
        self.intents = []
        self.customers = []

    def create_payment_intent(self, order_id, amount, currency, customer_email=None):
        self.intents.append((order_id, amount, currency, customer_email))
        return f"pi_{len(self.intents)}_secret_test"

    def create_customer(self, email):
        self.customers.append(email)
        return f"cus_test_{len(self.customers)}"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.text = text

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}", response=self)


@pytest.fixture
def settings():
    return Settings(
        AUTH_DATABASE_URL="sqlite://",
        PARKING_DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        OPENAI_API_KEY="sk-test",
        STRIPE_SECRET_KEY="sk_test_123",
        STRIPE_API_BASE="https://payments.test",
        OPENAI_BASE_URL="https://completions.test/v1",
        GOOGLE_USERINFO_URL="https://userinfo.test/v2/userinfo",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.state.completion_client = FakeCompletionClient()
    app.state.payment_client = FakePaymentClient()
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def parking_db(app):
    db = app.state.parking_db.SessionLocal()
    yield db
    db.close()


@pytest.fixture
def auth_db(app):
    db = app.state.auth_db.SessionLocal()
    yield db
    db.close()


def add_user(db, email="driver@example.com", name="Dana Driver", is_active=True):
    user = Users(full_name=name, email=email, role="driver", is_active=is_active)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(auth_db):
    return add_user(auth_db)


@pytest.fixture
def auth_headers(settings, user):
    return {"Authorization": f"Bearer {create_access_token(settings, user)}"}


def space_payload(**overrides):
    data = {
        "host_id": uuid.uuid4(),
        "title": "Driveway",
        "description": "Off-street driveway",
        "location": "Kennington, London",
        "postcode": "SE17 3RY",
        "address": "12 Penton Place",
        "latitude": "51.4886",
        "longitude": "-0.1004",
        "price_per_hour": Decimal("2.50"),
        "price_per_day": Decimal("12.50"),
        "price_per_week": Decimal("60"),
        "price_per_month": Decimal("210"),
        "total_spaces": 1,
        "available_from": date(2025, 1, 1),
        "available_to": date(2026, 12, 31),
        "is_available": True,
        "features": "gated, cctv",
        "image_url": "https://images.test/1.jpg",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_space(parking_db):
    def _make(**overrides):
        return create_space(parking_db, SpaceCreate(**space_payload(**overrides)))
    return _make


@pytest.fixture
def auth_app(settings):
    app = create_auth_app(settings)
    app.state.parking_db.create_all()
    return app


@pytest.fixture
def auth_client(auth_app):
    with TestClient(auth_app) as c:
        yield c
