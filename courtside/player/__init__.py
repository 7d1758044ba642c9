"""Player directory blueprint."""

from flask import Blueprint

bp = Blueprint("player", __name__, url_prefix="/players")

from . import routes  # noqa: E402
from .services import PlayerService  # noqa: E402

__all__ = ["PlayerService", "routes"]
