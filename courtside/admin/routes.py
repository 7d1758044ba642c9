"""Admin routes: role management and data migrations."""

from firebase_admin import firestore
from flask import jsonify

from courtside.auth.decorators import role_required
from courtside.core.types import Role
from courtside.profile.services import ProfileService

from . import bp
from .forms import AssignRoleForm
from .services import AdminService


@bp.route("/profiles", methods=["GET"])
@role_required(Role.ADMIN)
def list_all_profiles():
    """List every profile."""
    db = firestore.client()
    return jsonify(ProfileService.list_profiles(db))


@bp.route("/assign_role", methods=["POST"])
@role_required(Role.ADMIN)
def assign_role():
    """Change another user's role."""
    form = AssignRoleForm().validate_or_raise()
    db = firestore.client()
    profile = AdminService.assign_role(
        db, form.target_user_id.data, Role(form.new_role.data)
    )
    return jsonify(profile)


@bp.route("/backfill_skill_level", methods=["POST"])
@role_required(Role.ADMIN)
def backfill_skill_level():
    """Set the default skill level on profiles that have none."""
    db = firestore.client()
    updated = AdminService.backfill_skill_level(db)
    return jsonify(
        {
            "updated": updated,
            "message": f"Updated {updated} user profiles with default skill level",
        }
    )
