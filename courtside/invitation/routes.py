"""Routes for the invitation blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify

from courtside.auth.decorators import profile_required
from courtside.core.types import InvitationStatus

from . import bp
from .forms import RespondForm
from .services import InvitationService


@bp.route("/mine", methods=["GET"])
@profile_required
def list_my_invitations() -> Any:
    """List the caller's invitations with their events."""
    db = firestore.client()
    return jsonify(InvitationService.list_player_invitations(db, g.profile))


@bp.route("/<string:invitation_id>/respond", methods=["POST"])
@profile_required
def respond_to_invitation(invitation_id: str) -> Any:
    """Accept or decline one of the caller's invitations."""
    form = RespondForm().validate_or_raise()
    db = firestore.client()
    invitation = InvitationService.respond_to_invitation(
        db, g.profile, invitation_id, InvitationStatus(form.response.data)
    )
    return jsonify(invitation)
