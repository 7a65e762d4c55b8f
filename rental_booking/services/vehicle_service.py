from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from ..exceptions import ConflictError, ValidationError, VehicleNotFoundError
from ..models.vehicle import Vehicle
from ..utils.constants import ALLOWED_TYPES, VehicleStatus
from . import common
from .common import _lc, require_positive_int, to_int_safe

if TYPE_CHECKING:
    # Only for type hints; won't execute at runtime
    from ..models.store import Store  # noqa: F401

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    "vehicleName": "vehicle_name",
    "type": "type",
    "registrationNumber": "registration_number",
    "imageUrl": "image_url",
    "dailyRentPrice": "daily_rent_price",
    "availabilityStatus": "availability_status",
}


class VehicleService:
    """Vehicle catalogue: filter, create, update, delete."""

    @staticmethod
    def _get_store(store=None):
        return store if store is not None else common._store()

    @staticmethod
    def list_vehicles(vtype=None, search=None, status=None, min_price=None, max_price=None,
                      *, store=None) -> list[Vehicle]:
        """
        Filter vehicles by type, name, availability, and daily price range.
        Invalid min/max values are ignored; swapped bounds are tolerated.
        """
        st = VehicleService._get_store(store)
        res = [Vehicle.from_dict(v) for v in st.vehicles.values()]

        # 1. Type filter (exact, types are case-sensitive: "SUV")
        if vtype:
            res = [v for v in res if v.type == vtype]

        # 2. Name search (case-insensitive, partial match)
        kw = _lc(search).strip()
        if kw:
            res = [v for v in res if kw in _lc(v.vehicle_name) or kw in _lc(v.registration_number)]

        # 3. Availability flag
        if status:
            res = [v for v in res if v.availability_status == status]

        # 4. Price range
        min_val = to_int_safe(min_price)
        max_val = to_int_safe(max_price)
        if (min_val is not None) and (max_val is not None) and (min_val > max_val):
            min_val, max_val = max_val, min_val
        if min_val is not None:
            res = [v for v in res if v.daily_rent_price >= min_val]
        if max_val is not None:
            res = [v for v in res if v.daily_rent_price <= max_val]

        res.sort(key=lambda v: v.id)
        return res

    @staticmethod
    def get_vehicle(vid: int, store=None) -> Vehicle:
        """Return a vehicle by ID or raise VehicleNotFoundError."""
        st = VehicleService._get_store(store)
        v = Vehicle.from_dict(st.get_vehicle(vid))
        if v is None:
            raise VehicleNotFoundError(f"Vehicle with ID '{vid}' not found")
        return v

    @staticmethod
    def _clean(payload: dict, partial: bool) -> dict:
        """Validate a camelCase payload and map it to store fields."""
        unknown = set(payload) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        data = {EDITABLE_FIELDS[k]: v for k, v in payload.items()}
        required = ("vehicle_name", "type", "registration_number", "daily_rent_price")
        if not partial:
            missing = [f for f in required if data.get(f) in (None, "")]
            if missing:
                raise ValidationError(f"Missing fields: {', '.join(missing)}")

        for f in ("vehicle_name", "registration_number"):
            if f in data:
                if not isinstance(data[f], str) or not data[f].strip():
                    raise ValidationError(f"{f} must be a non-empty string")
                data[f] = data[f].strip()
        if "type" in data and data["type"] not in ALLOWED_TYPES:
            raise ValidationError("Invalid vehicle type")
        if "daily_rent_price" in data:
            data["daily_rent_price"] = require_positive_int(data["daily_rent_price"], "dailyRentPrice")
        if "availability_status" in data and data["availability_status"] not in VehicleStatus.ALL:
            raise ValidationError("Invalid availability status")
        if "image_url" in data:
            url = data["image_url"]
            data["image_url"] = (url.strip() or None) if isinstance(url, str) else None
        return data

    @staticmethod
    def _ensure_unique_registration(st, registration_number: str, exclude_id=None):
        for v in st.vehicles.values():
            if v["id"] != exclude_id and v.get("registration_number") == registration_number:
                raise ConflictError("Vehicle with this registration number already exists")

    @staticmethod
    def admin_create_vehicle(payload: dict, store: Optional["Store"] = None) -> Vehicle:
        """Create a vehicle; new vehicles start 'available' unless told otherwise."""
        st = VehicleService._get_store(store)
        data = VehicleService._clean(payload, partial=False)
        data.setdefault("availability_status", VehicleStatus.AVAILABLE)
        data.setdefault("image_url", None)
        VehicleService._ensure_unique_registration(st, data["registration_number"])

        row = st.create_vehicle(data)
        logger.info("Vehicle %s created (%s)", row["id"], row["registration_number"])
        return Vehicle.from_dict(row)

    @staticmethod
    def admin_update_vehicle(vehicle_id: int, payload: dict, store: Optional["Store"] = None) -> Vehicle:
        """
        Partial update. Setting availabilityStatus here bypasses the booking rules,
        the same way a fleet admin can fix the flag by hand.
        """
        st = VehicleService._get_store(store)
        VehicleService.get_vehicle(vehicle_id, store=st)
        data = VehicleService._clean(payload, partial=True)
        if "registration_number" in data:
            VehicleService._ensure_unique_registration(st, data["registration_number"], exclude_id=vehicle_id)

        row = st.update_vehicle(vehicle_id, **data)
        logger.info("Vehicle %s updated: %s", vehicle_id, sorted(data))
        return Vehicle.from_dict(row)

    @staticmethod
    def delete_vehicle(vehicle_id: int, store: Optional["Store"] = None) -> None:
        """
        Delete a vehicle if and only if no active booking references it.
        The bookings are the source of truth here, not the vehicle's flag.
        """
        st = VehicleService._get_store(store)
        VehicleService.get_vehicle(vehicle_id, store=st)

        if st.active_bookings(vehicle_id=vehicle_id):
            raise ConflictError("Cannot delete vehicle with active bookings.")

        st.delete_vehicle(vehicle_id)
        logger.info("Vehicle %s deleted", vehicle_id)
