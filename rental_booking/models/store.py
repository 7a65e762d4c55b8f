import atexit
import logging
import os
import pickle
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from ..utils.constants import BookingStatus

logger = logging.getLogger(__name__)

# ---- Paths ----
BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_DATA_PATH = BASE_DIR / "data.pkl"

TABLES = ("users", "vehicles", "bookings")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class Store:
    """
    Pickle-backed table store. Rows are plain dicts keyed by integer serial ids.

    Writes mutate memory first and are flushed to disk afterwards; inside a
    ``unit_of_work()`` scope the flush is deferred to the end of the scope.
    """

    _inst = None
    _inst_lock = threading.Lock()
    _atexit_registered = False

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = str(path or DEFAULT_DATA_PATH)
        self.users: dict[int, dict] = {}
        self.vehicles: dict[int, dict] = {}
        self.bookings: dict[int, dict] = {}
        self._seq: dict[str, int] = {t: 0 for t in TABLES}
        self._rw = threading.RLock()
        self._uow_depth = 0

        logger.info("Using store file: %s", self.path)
        self._load()

        # Automatically save on exit (skipped in test environments)
        if not Store._atexit_registered and os.getenv("APP_ENV") != "test":
            atexit.register(self.save)
            Store._atexit_registered = True

    # ---------- Singleton ----------
    @classmethod
    def instance(cls, path: str | os.PathLike | None = None) -> "Store":
        """Return the global singleton instance of Store."""
        with cls._inst_lock:
            if cls._inst is None:
                cls._inst = Store(path or DEFAULT_DATA_PATH)
        return cls._inst

    @classmethod
    def configure(cls, path: str | os.PathLike | None = None) -> "Store":
        """Replace the singleton with a store bound to ``path``."""
        with cls._inst_lock:
            cls._inst = Store(path or DEFAULT_DATA_PATH)
        return cls._inst

    # ---------- Persistence ----------
    def _load(self):
        """Load data from the pickle file, or start empty if unavailable or invalid."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path, "rb") as f:
                data = pickle.load(f)
        except (OSError, pickle.UnpicklingError, EOFError) as e:
            logger.warning("Store load failed (%s); starting empty.", e)
            return

        if isinstance(data, dict) and "bookings" in data:
            for table in TABLES:
                setattr(self, table, data.get(table, {}) or {})
            seq = data.get("seq") or {}
            for table in TABLES:
                rows = getattr(self, table)
                self._seq[table] = max([seq.get(table, 0), *rows.keys()] or [0])
            logger.info(
                "Loaded: users=%d, vehicles=%d, bookings=%d",
                len(self.users), len(self.vehicles), len(self.bookings),
            )
        else:
            # Incompatible data format: back up the old file and start empty
            bak = self.path + ".bak"
            os.replace(self.path, bak)
            logger.warning("Incompatible store (%s); backed up to %s. Starting empty.",
                           type(data).__name__, bak)

    def _dump(self):
        """Write the in-memory data to the pickle file safely (atomic replace)."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        tmp = self.path + ".tmp"
        payload = {table: getattr(self, table) for table in TABLES}
        payload["seq"] = dict(self._seq)
        with open(tmp, "wb") as f:
            pickle.dump(payload, f, protocol=pickle.HIGHEST_PROTOCOL)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, self.path)

    def _flush(self):
        if self._uow_depth == 0:
            self._dump()

    def save(self):
        """Thread-safe save method."""
        with self._rw:
            logger.debug("Saving to %s", self.path)
            self._dump()

    def clear(self):
        with self._rw:
            for table in TABLES:
                getattr(self, table).clear()
                self._seq[table] = 0
            self._flush()

    @contextmanager
    def unit_of_work(self):
        """
        Group several writes into one logical unit.

        Each write is applied to memory as soon as it is issued and there is
        no rollback: if the block raises half way, the writes already made
        stay in place. Only the disk flush is deferred to the outermost exit.
        """
        with self._rw:
            self._uow_depth += 1
            try:
                yield self
            except Exception:
                logger.warning("Unit of work aborted; earlier writes are kept")
                raise
            finally:
                self._uow_depth -= 1
                if self._uow_depth == 0:
                    self._dump()

    def _insert(self, table: str, row: dict) -> dict:
        with self._rw:
            self._seq[table] += 1
            rid = self._seq[table]
            row = dict(row, id=rid, created_at=_now_iso())
            getattr(self, table)[rid] = row
            self._flush()
            return dict(row)

    def _update(self, table: str, rid: int, updates: dict) -> dict | None:
        with self._rw:
            rows = getattr(self, table)
            if rid not in rows:
                return None
            rows[rid].update(updates)
            self._flush()
            return dict(rows[rid])

    def _delete(self, table: str, rid: int) -> bool:
        with self._rw:
            rows = getattr(self, table)
            if rid not in rows:
                return False
            del rows[rid]
            self._flush()
            return True

    # ---------- Users ----------
    def find_user_by_email(self, email: str) -> dict | None:
        email = (email or "").lower()
        for u in self.users.values():
            if u["email"] == email:
                return dict(u)
        return None

    def get_user(self, user_id: int) -> dict | None:
        u = self.users.get(user_id)
        return dict(u) if u else None

    def create_user(self, data: dict) -> dict:
        return self._insert("users", data)

    def update_user(self, user_id: int, **updates) -> dict | None:
        return self._update("users", user_id, updates)

    def delete_user(self, user_id: int) -> bool:
        return self._delete("users", user_id)

    # ---------- Vehicles ----------
    def get_vehicle(self, vehicle_id: int) -> dict | None:
        v = self.vehicles.get(vehicle_id)
        return dict(v) if v else None

    def create_vehicle(self, data: dict) -> dict:
        return self._insert("vehicles", data)

    def update_vehicle(self, vehicle_id: int, **updates) -> dict | None:
        return self._update("vehicles", vehicle_id, updates)

    def delete_vehicle(self, vehicle_id: int) -> bool:
        return self._delete("vehicles", vehicle_id)

    # ---------- Bookings ----------
    def get_booking(self, booking_id: int) -> dict | None:
        b = self.bookings.get(booking_id)
        return dict(b) if b else None

    def create_booking(self, data: dict) -> dict:
        return self._insert("bookings", data)

    def update_booking(self, booking_id: int, **updates) -> dict | None:
        return self._update("bookings", booking_id, updates)

    def active_bookings(self, *, vehicle_id: int | None = None, customer_id: int | None = None) -> list[dict]:
        out = []
        for b in self.bookings.values():
            if b.get("status") != BookingStatus.ACTIVE:
                continue
            if vehicle_id is not None and b.get("vehicle_id") != vehicle_id:
                continue
            if customer_id is not None and b.get("customer_id") != customer_id:
                continue
            out.append(dict(b))
        return out
