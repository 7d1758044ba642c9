"""Invitation blueprint: players answering their event invitations."""

from flask import Blueprint

bp = Blueprint("invitation", __name__, url_prefix="/invitations")

from . import routes  # noqa: E402
from .models import Invitation  # noqa: E402
from .services import InvitationService  # noqa: E402

__all__ = ["Invitation", "InvitationService", "routes"]
