"""Routes for the event blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify

from courtside.auth.decorators import role_required
from courtside.core.types import Role

from . import bp
from .forms import CourtForm, EventForm, InvitePlayerForm
from .services import EventService

ORGANIZERS = (Role.ADMIN, Role.ORGANIZER)


@bp.route("/", methods=["POST"])
@role_required(*ORGANIZERS)
def create_event() -> Any:
    """Create a new event in setup."""
    form = EventForm().validate_or_raise()
    data = {**form.data, "invite_deadline": form.invite_deadline.parsed}
    db = firestore.client()
    event = EventService.create_event(db, g.profile, data)
    return jsonify(event), 201


@bp.route("/organized", methods=["GET"])
@role_required(*ORGANIZERS)
def list_events_by_organizer() -> Any:
    """List the caller's events with invitation counts."""
    db = firestore.client()
    return jsonify(EventService.list_events_by_organizer(db, g.profile))


@bp.route("/assigned", methods=["GET"])
@role_required(Role.ADMIN, Role.MATCHMAKER)
def list_events_by_matchmaker() -> Any:
    """List the events the caller makes matches for."""
    db = firestore.client()
    return jsonify(EventService.list_events_by_matchmaker(db, g.profile))


@bp.route("/<string:event_id>", methods=["GET"])
@role_required(Role.ADMIN, Role.ORGANIZER, Role.MATCHMAKER)
def get_event_details(event_id: str) -> Any:
    """View a single event with its courts and invitations."""
    db = firestore.client()
    return jsonify(EventService.get_event_details(db, event_id))


@bp.route("/<string:event_id>/courts", methods=["POST"])
@role_required(*ORGANIZERS)
def add_court(event_id: str) -> Any:
    """Add a court to an event in setup."""
    form = CourtForm().validate_or_raise()
    db = firestore.client()
    court = EventService.add_court(db, event_id, form.data)
    return jsonify(court), 201


@bp.route("/<string:event_id>/invitations", methods=["POST"])
@role_required(*ORGANIZERS)
def invite_player(event_id: str) -> Any:
    """Invite a player to an event in setup."""
    form = InvitePlayerForm().validate_or_raise()
    db = firestore.client()
    invitation = EventService.invite_player(db, event_id, form.player_id.data)
    return jsonify(invitation), 201


@bp.route("/<string:event_id>/start_inviting", methods=["POST"])
@role_required(*ORGANIZERS)
def start_inviting(event_id: str) -> Any:
    """Open an event's invitations once all its courts are added."""
    db = firestore.client()
    return jsonify(EventService.start_inviting(db, event_id))
