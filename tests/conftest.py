import os
import pathlib
import sys
from datetime import date

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
os.environ.setdefault("APP_ENV", "test")

import pytest

from rental_booking import create_app
from rental_booking.models.store import Store
from rental_booking.services.user_service import UserService
from rental_booking.services.vehicle_service import VehicleService

FIXED_TODAY = date(2030, 6, 15)


@pytest.fixture
def app(tmp_path):
    """App bound to a throwaway store file."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test",
        "DATA_PATH": str(tmp_path / "data.pkl"),
        "LOG_LEVEL": "DEBUG",
    })
    yield app


@pytest.fixture
def store(app):
    return Store.instance()


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def fixed_today(monkeypatch):
    """Pin the service-layer 'today' so cancellation-window tests are stable."""
    from rental_booking.services import common as common_mod
    monkeypatch.setattr(common_mod, "_today", lambda: FIXED_TODAY)
    return FIXED_TODAY


def make_user(store, email, role="customer", password="secret123"):
    user = UserService.register({
        "name": email.split("@")[0],
        "email": email,
        "phone": "0211234567",
        "password": password,
        "role": role,
    }, store=store)
    return user


def make_vehicle(store, reg="ABC-1234", price=50, **extra):
    payload = {
        "vehicleName": "Toyota Camry 2024",
        "type": "car",
        "registrationNumber": reg,
        "dailyRentPrice": price,
    }
    payload.update(extra)
    return VehicleService.admin_create_vehicle(payload, store=store)


@pytest.fixture
def admin(store):
    return make_user(store, "admin@example.com", role="admin")


@pytest.fixture
def customer(store):
    return make_user(store, "alice@example.com")


@pytest.fixture
def other_customer(store):
    return make_user(store, "bob@example.com")


@pytest.fixture
def vehicle(store):
    return make_vehicle(store)


def login(client, email, password="secret123"):
    return client.post("/api/v1/auth/signin", json={"email": email, "password": password})
