"""
reset_data.py
-------------
Clear all stored data (users, vehicles, bookings) from the local data file.

Usage:
    $ python reset_data.py

Repopulate demo data afterwards with:
    $ python seeds.py
"""
import logging

from rental_booking.config import Config
from rental_booking.models.store import Store


def main():
    store = Store.instance(Config.DATA_PATH)
    store.clear()
    store.save()
    logging.getLogger("reset_data").info("%s has been cleared. Run `python seeds.py` for demo data.", store.path)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
