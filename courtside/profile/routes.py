"""Routes for the profile blueprint."""

from __future__ import annotations

from typing import Any

from firebase_admin import firestore
from flask import g, jsonify

from courtside.auth.decorators import login_required

from . import bp
from .forms import CreateProfileForm
from .services import ProfileService


@bp.route("/", methods=["GET"])
@login_required
def get_current_profile() -> Any:
    """Return the caller's profile, or null before it has been created."""
    db = firestore.client()
    return jsonify(ProfileService.get_profile_by_user_id(db, g.user_id))


@bp.route("/", methods=["POST"])
@login_required
def create_profile() -> Any:
    """Create the caller's profile on first login."""
    form = CreateProfileForm().validate_or_raise()
    db = firestore.client()
    profile = ProfileService.create_profile(
        db, g.user_id, form.data, email=g.get("user_email")
    )
    return jsonify(profile), 201
