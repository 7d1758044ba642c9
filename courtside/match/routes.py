"""Routes for the match blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify

from courtside.auth.decorators import profile_required, role_required
from courtside.core.types import Role

from . import bp
from .forms import CreateMatchForm, RecordScoreForm
from .services import MatchService

MATCHMAKERS = (Role.ADMIN, Role.MATCHMAKER)


@bp.route("/", methods=["POST"])
@role_required(*MATCHMAKERS)
def create_match() -> Any:
    """Schedule a match on a court slot of a confirmed event."""
    form = CreateMatchForm().validate_or_raise()
    db = firestore.client()
    match = MatchService.create_match(
        db,
        form.event_id.data,
        form.court_id.data,
        form.match_number.data,
        form.player_ids.data,
    )
    return jsonify(match), 201


@bp.route("/event/<string:event_id>", methods=["GET"])
@role_required(Role.ADMIN, Role.MATCHMAKER, Role.ORGANIZER)
def list_matches_by_event(event_id: str) -> Any:
    """List an event's matches with players and courts."""
    db = firestore.client()
    return jsonify(MatchService.list_matches_by_event(db, event_id))


@bp.route("/<string:match_id>/score", methods=["POST"])
@role_required(*MATCHMAKERS)
def record_score(match_id: str) -> Any:
    """Record the result of a match."""
    form = RecordScoreForm().validate_or_raise()
    db = firestore.client()
    match = MatchService.record_score(
        db, match_id, form.scores.data, form.winner_id.data
    )
    return jsonify(match)


@bp.route("/mine", methods=["GET"])
@profile_required
def list_my_matches() -> Any:
    """List every match the caller plays in."""
    db = firestore.client()
    return jsonify(MatchService.list_player_matches(db, g.profile))
