"""Service layer for the player directory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from courtside.core.constants import PROFILES_COLLECTION
from courtside.core.types import Role
from courtside.errors import ForbiddenError, NotFoundError
from courtside.profile.services import ProfileService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


class PlayerService:
    """Service class for player listings and activation."""

    @staticmethod
    def list_active_players(db: Client) -> list[dict[str, Any]]:
        """Every active profile; all roles can play."""
        return ProfileService.list_active_profiles(db)

    @staticmethod
    def list_matchmakers(db: Client) -> list[dict[str, Any]]:
        return ProfileService.list_active_profiles(db, role=Role.MATCHMAKER)

    @staticmethod
    def toggle_active(db: Client, target_user_id: str) -> dict[str, Any]:
        """Flip the active flag of the profile owned by ``target_user_id``."""
        profile = ProfileService.get_profile_by_user_id(db, target_user_id)
        if profile is None:
            raise NotFoundError("Target user profile not found")
        if profile.get("role") == Role.ADMIN.value:
            raise ForbiddenError("Cannot deactivate admin users")

        is_active = not profile.get("isActive", False)
        db.collection(PROFILES_COLLECTION).document(profile["id"]).update(
            {"isActive": is_active}
        )
        status = "activated" if is_active else "deactivated"
        logger.info(f"Profile {profile['id']} {status}")
        return {"message": f"User {status} successfully", "isActive": is_active}
