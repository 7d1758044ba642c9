"""Routes for the player blueprint."""

from firebase_admin import firestore
from flask import jsonify

from courtside.auth.decorators import role_required
from courtside.core.types import Role

from . import bp
from .forms import ToggleActiveForm
from .services import PlayerService


@bp.route("/active", methods=["GET"])
@role_required(Role.ADMIN, Role.ORGANIZER)
def list_active_players():
    """List every active profile that can be invited."""
    db = firestore.client()
    return jsonify(PlayerService.list_active_players(db))


@bp.route("/matchmakers", methods=["GET"])
@role_required(Role.ADMIN, Role.ORGANIZER)
def list_matchmakers():
    """List active matchmakers for event assignment."""
    db = firestore.client()
    return jsonify(PlayerService.list_matchmakers(db))


@bp.route("/toggle_active", methods=["POST"])
@role_required(Role.ADMIN, Role.ORGANIZER)
def toggle_active():
    """Activate or deactivate a non-admin user."""
    form = ToggleActiveForm().validate_or_raise()
    db = firestore.client()
    return jsonify(PlayerService.toggle_active(db, form.target_user_id.data))
