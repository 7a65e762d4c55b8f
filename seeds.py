import logging

from rental_booking import create_app
from rental_booking.models.store import Store
from rental_booking.services.user_service import UserService
from rental_booking.services.vehicle_service import VehicleService

logger = logging.getLogger("seeds")

ADMIN = {
    "name": "Admin User",
    "email": "admin@example.com",
    "password": "admin123",
    "phone": "0000000000",
    "role": "admin",
}

VEHICLES = [
    {"vehicleName": "Toyota Camry 2024", "type": "car", "registrationNumber": "ABC-1234",
     "dailyRentPrice": 50},
    {"vehicleName": "Honda Civic 2023", "type": "car", "registrationNumber": "XYZ-5678",
     "dailyRentPrice": 45},
]


def ensure_admin(store: Store) -> int:
    """
    Ensure the demo admin exists (idempotent).
    """
    row = store.find_user_by_email(ADMIN["email"])
    if row:
        return row["id"]
    return UserService.register(ADMIN, store=store).id


def main():
    app = create_app()
    with app.app_context():
        store = Store.instance()
        ensure_admin(store)

        # ---- Demo vehicles (create only if none exist) ----
        if not store.vehicles:
            for payload in VEHICLES:
                VehicleService.admin_create_vehicle(payload, store=store)

        store.save()

        logger.info("Seed complete.")
        logger.info("Admin login: %s / %s", ADMIN["email"], ADMIN["password"])


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
