"""
Booking creation and status-transition policy, exercised on plain value objects.
"""
from datetime import date

import pytest

from rental_booking.exceptions import (
    CancellationWindowClosedError,
    ForbiddenError,
    InvalidTransitionError,
    VehicleUnavailableError,
)
from rental_booking.models.booking import Booking
from rental_booking.models.user import User
from rental_booking.models.vehicle import Vehicle
from rental_booking.services import rules

TODAY = date(2030, 6, 15)
ADMIN = User(id=1, role="admin")
OWNER = User(id=2, role="customer")
STRANGER = User(id=3, role="customer")


def _vehicle(status="available"):
    return Vehicle(id=10, vehicle_name="Civic", type="car", registration_number="XYZ-5678",
                   daily_rent_price=45, availability_status=status)


def _booking(start=date(2030, 7, 1), status="active"):
    return Booking(id=100, customer_id=OWNER.id, vehicle_id=10, rent_start_date=start,
                   rent_end_date=date(2030, 7, 3), total_price=135, status=status)


# -------- guards --------
def test_guards():
    b = _booking()
    assert rules.is_admin(ADMIN)
    assert not rules.is_admin(OWNER)
    assert not rules.is_admin(None)
    assert rules.is_owner(OWNER, b)
    assert not rules.is_owner(STRANGER, b)
    assert not rules.is_owner(ADMIN, b)


# -------- creation --------
def test_create_on_available_vehicle():
    booking, change = rules.create_booking(_vehicle(), "2030-07-01", "2030-07-03", customer_id=OWNER.id)
    assert booking.status == "active"
    assert booking.total_price == 135
    assert booking.customer_id == OWNER.id
    assert booking.vehicle_id == 10
    assert change == rules.VehicleChange(10, "booked")


def test_create_on_booked_vehicle_rejected():
    with pytest.raises(VehicleUnavailableError):
        rules.create_booking(_vehicle("booked"), "2030-07-01", "2030-07-03", customer_id=OWNER.id)


def test_create_on_missing_vehicle():
    with pytest.raises(VehicleUnavailableError):
        rules.create_booking(None, "2030-07-01", "2030-07-03", customer_id=OWNER.id)


# -------- transitions --------
def test_admin_returns_active_booking():
    updated, change = rules.transition_booking(_booking(), _vehicle("booked"), "returned", ADMIN, TODAY)
    assert updated.status == "returned"
    assert change.availability_status == "available"


def test_admin_cancels_past_booking():
    past = _booking(start=date(2020, 1, 1))
    updated, change = rules.transition_booking(past, _vehicle("booked"), "cancelled", ADMIN, TODAY)
    assert updated.status == "cancelled"
    assert change.availability_status == "available"


def test_owner_cancels_before_start():
    updated, change = rules.transition_booking(_booking(), _vehicle("booked"), "cancelled", OWNER, TODAY)
    assert updated.status == "cancelled"
    assert change == rules.VehicleChange(10, "available")


def test_owner_cancel_on_start_day_rejected():
    b = _booking(start=TODAY)
    with pytest.raises(CancellationWindowClosedError):
        rules.transition_booking(b, _vehicle("booked"), "cancelled", OWNER, TODAY)


def test_owner_cancel_after_start_rejected():
    b = _booking(start=date(2030, 6, 1))
    with pytest.raises(CancellationWindowClosedError):
        rules.transition_booking(b, _vehicle("booked"), "cancelled", OWNER, TODAY)


def test_owner_cannot_mark_returned():
    with pytest.raises(ForbiddenError):
        rules.transition_booking(_booking(), _vehicle("booked"), "returned", OWNER, TODAY)


@pytest.mark.parametrize("target", ["cancelled", "returned", "active"])
def test_stranger_forbidden_before_status_logic(target):
    closed = _booking(status="returned")
    with pytest.raises(ForbiddenError):
        rules.transition_booking(closed, _vehicle(), target, STRANGER, TODAY)


@pytest.mark.parametrize("current", ["cancelled", "returned"])
def test_terminal_bookings_do_not_move(current):
    with pytest.raises(InvalidTransitionError):
        rules.transition_booking(_booking(status=current), _vehicle(), "cancelled", ADMIN, TODAY)


def test_active_is_not_a_target():
    with pytest.raises(InvalidTransitionError):
        rules.transition_booking(_booking(), _vehicle("booked"), "active", ADMIN, TODAY)


def test_missing_vehicle_yields_no_change():
    updated, change = rules.transition_booking(_booking(), None, "returned", ADMIN, TODAY)
    assert updated.status == "returned"
    assert change is None
