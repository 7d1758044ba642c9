"""Report blueprint."""

from flask import Blueprint

bp = Blueprint("report", __name__, url_prefix="/reports")

from . import routes  # noqa: E402
from .services import ReportService  # noqa: E402

__all__ = ["ReportService", "routes"]
