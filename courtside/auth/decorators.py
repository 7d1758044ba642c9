"""Decorators guarding the JSON entry points."""

from functools import wraps

from firebase_admin import firestore
from flask import g

from .utils import require_profile, require_role, require_user


def login_required(f):
    """Require an authenticated identity, with or without a profile."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        require_user(g.get("user_id"))
        return f(*args, **kwargs)

    return decorated_function


def profile_required(f):
    """Require an identity with a profile and expose it as ``g.profile``."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.profile = require_profile(firestore.client(), g.get("user_id"))
        return f(*args, **kwargs)

    return decorated_function


def role_required(*roles):
    """Require one of ``roles`` and expose the caller's profile as ``g.profile``.

    Usage:
    @role_required(Role.ADMIN, Role.ORGANIZER)
    def organizer_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            g.profile = require_role(firestore.client(), g.get("user_id"), roles)
            return func(*args, **kwargs)

        return decorated_function

    return decorator
