from functools import wraps

from flask import g, session

from ..exceptions import ForbiddenError, UnauthorizedError, UserNotFoundError
from ..services.rules import is_admin
from ..services.user_service import UserService


def login_required(fn):
    """Load the session user into ``g.actor`` or answer 401."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        uid = session.get("uid")
        if uid is None:
            raise UnauthorizedError()
        try:
            g.actor = UserService.get_user(uid)
        except UserNotFoundError:
            # account deleted while the session was alive
            session.clear()
            raise UnauthorizedError()
        return fn(*args, **kwargs)

    return wrapper


def admin_required(fn):
    @wraps(fn)
    @login_required
    def wrapper(*args, **kwargs):
        if not is_admin(g.actor):
            raise ForbiddenError("Admin access required")
        return fn(*args, **kwargs)

    return wrapper
