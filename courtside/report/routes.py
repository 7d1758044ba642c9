"""Routes for the report blueprint."""

from firebase_admin import firestore
from flask import jsonify

from courtside.auth.decorators import role_required
from courtside.core.types import Role

from . import bp
from .services import ReportService


@bp.route("/players", methods=["GET"])
@role_required(Role.ADMIN, Role.ORGANIZER)
def player_participation_report():
    """Match totals for every player who has played."""
    db = firestore.client()
    return jsonify(ReportService.player_participation_report(db))


@bp.route("/events/<string:event_id>", methods=["GET"])
@role_required(Role.ADMIN, Role.ORGANIZER, Role.MATCHMAKER)
def event_participation_report(event_id: str):
    """Match totals for every player invited to one event."""
    db = firestore.client()
    return jsonify(ReportService.event_participation_report(db, event_id))
