"""Match blueprint."""

from flask import Blueprint

bp = Blueprint("match", __name__, url_prefix="/matches")

from . import routes  # noqa: E402
from .models import Match, SetScore  # noqa: E402
from .services import MatchService  # noqa: E402

__all__ = ["Match", "MatchService", "SetScore", "routes"]
