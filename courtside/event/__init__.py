"""Event blueprint."""

from flask import Blueprint

bp = Blueprint("event", __name__, url_prefix="/events")

from . import routes  # noqa: E402
from .models import Court, Event  # noqa: E402
from .services import EventService  # noqa: E402

__all__ = ["Court", "Event", "EventService", "routes"]
