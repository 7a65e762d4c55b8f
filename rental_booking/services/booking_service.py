"""Booking-related service layer: create, list, and change status."""

import logging
from typing import Optional

from ..exceptions import BookingError, BookingNotFoundError, VehicleNotFoundError
from ..models.booking import Booking
from ..models.store import Store
from ..models.user import User
from ..models.vehicle import Vehicle
from . import common, rules

logger = logging.getLogger(__name__)


class BookingService:
    """
    Create bookings and move them through their lifecycle.

    Each operation fetches fresh rows, asks the rule engine for the outcome,
    then writes the booking and the vehicle inside one ``Store.unit_of_work()``.
    The two writes are separate; a concurrent request against the same
    vehicle can still slip in between the availability check and the writes.
    """

    @staticmethod
    def _resolve(store: Optional[Store]) -> Store:
        return store if store is not None else common._store()

    @staticmethod
    def price(vehicle_id: int, start, end, store: Optional[Store] = None) -> int:
        """Quote the total price for a date range without booking."""
        st = BookingService._resolve(store)
        vehicle = Vehicle.from_dict(st.get_vehicle(vehicle_id))
        if vehicle is None:
            raise VehicleNotFoundError()
        return rules.price_booking(vehicle, start, end)

    @staticmethod
    def create(customer_id: int, vehicle_id: int, start, end, store: Optional[Store] = None) -> Booking:
        """
        Book ``vehicle_id`` for ``customer_id`` over [start, end] (both days billed).

        Raises:
            VehicleUnavailableError (also when the vehicle does not exist)
        """
        st = BookingService._resolve(store)
        vehicle = Vehicle.from_dict(st.get_vehicle(vehicle_id))
        try:
            booking, change = rules.create_booking(vehicle, start, end, customer_id)
        except BookingError as e:
            logger.info("Booking rejected for vehicle %s by user %s: %s", vehicle_id, customer_id, e.kind)
            raise

        with st.unit_of_work():
            row = st.create_booking(booking.to_row())
            st.update_vehicle(change.vehicle_id, availability_status=change.availability_status)

        created = Booking.from_dict(row)
        logger.info("Booking %s created: vehicle=%s customer=%s days=%s total=%s",
                    created.id, vehicle_id, customer_id,
                    rules.rental_days(created.rent_start_date, created.rent_end_date),
                    created.total_price)
        return created

    @staticmethod
    def get(booking_id: int, store: Optional[Store] = None) -> Booking:
        st = BookingService._resolve(store)
        booking = Booking.from_dict(st.get_booking(booking_id))
        if booking is None:
            raise BookingNotFoundError()
        return booking

    @staticmethod
    def transition(booking_id: int, target_status: str, actor: User, store: Optional[Store] = None,
                   today=None) -> Booking:
        """
        Move a booking to 'returned' or 'cancelled' on behalf of ``actor``.

        Raises:
            BookingNotFoundError, ForbiddenError, InvalidTransitionError,
            CancellationWindowClosedError
        """
        st = BookingService._resolve(store)
        booking = BookingService.get(booking_id, store=st)
        vehicle = Vehicle.from_dict(st.get_vehicle(booking.vehicle_id))
        if vehicle is None:
            logger.warning("Booking %s references missing vehicle %s", booking.id, booking.vehicle_id)

        try:
            updated, change = rules.transition_booking(
                booking, vehicle, target_status, actor,
                today if today is not None else common._today(),
            )
        except BookingError as e:
            logger.info("Transition of booking %s to %s by user %s rejected: %s",
                        booking_id, target_status, getattr(actor, "id", None), e.kind)
            raise

        with st.unit_of_work():
            row = st.update_booking(booking.id, status=updated.status)
            if change is not None:
                st.update_vehicle(change.vehicle_id, availability_status=change.availability_status)

        logger.info("Booking %s %s -> %s by user %s", booking.id, booking.status, updated.status, actor.id)
        return Booking.from_dict(row)

    @staticmethod
    def list_for(actor: User, store: Optional[Store] = None) -> list[dict]:
        """
        Admins see every booking with customer and vehicle attached;
        customers see their own bookings with the vehicle attached.
        """
        st = BookingService._resolve(store)
        admin = rules.is_admin(actor)
        out = []
        for row in st.bookings.values():
            booking = Booking.from_dict(row)
            if not admin and booking.customer_id != actor.id:
                continue
            item = booking.to_dict()
            vehicle = Vehicle.from_dict(st.get_vehicle(booking.vehicle_id))
            item["vehicle"] = vehicle.to_dict() if vehicle else None
            if admin:
                customer = User.from_dict(st.get_user(booking.customer_id))
                item["customer"] = customer.to_dict() if customer else None
            out.append(item)
        out.sort(key=lambda x: x["id"])
        return out
