import logging

import pytz
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config
from .controllers.auth import bp as auth_bp
from .controllers.bookings import bp as bookings_bp
from .controllers.users import bp as users_bp
from .controllers.vehicles import bp as vehicles_bp
from .exceptions import BookingError
from .models.store import Store

logger = logging.getLogger(__name__)


def _configure_logging(level: str):
    pkg_logger = logging.getLogger(__name__)
    pkg_logger.setLevel(level.upper())
    if not logging.getLogger().handlers and not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        pkg_logger.addHandler(handler)


def _register_error_handlers(app: Flask):
    @app.errorhandler(BookingError)
    def handle_booking_error(err: BookingError):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"success": False, "message": err.description, "error": err.name}), err.code


def _check_timezone(name: str):
    """Fail at startup rather than on the first request that needs "today"."""
    try:
        pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown TIMEZONE setting: {name!r}") from e


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app.config["LOG_LEVEL"])
    _check_timezone(app.config["TIMEZONE"])
    Store.configure(app.config.get("DATA_PATH"))  # load data.pkl or start empty

    app.json.sort_keys = app.config["JSON_SORT_KEYS"]
    app.register_blueprint(auth_bp)
    app.register_blueprint(vehicles_bp)
    app.register_blueprint(bookings_bp)
    app.register_blueprint(users_bp)
    _register_error_handlers(app)

    logger.info("App created (env=%s, timezone=%s)", app.config["APP_ENV"], app.config["TIMEZONE"])
    return app
