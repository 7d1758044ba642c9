"""Service layer for admin-related operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from courtside.core.constants import (
    DEFAULT_SKILL_LEVEL,
    FIRESTORE_BATCH_LIMIT,
    PROFILES_COLLECTION,
)
from courtside.core.types import Role
from courtside.errors import NotFoundError
from courtside.profile.services import ProfileService

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)


class AdminService:
    """Service class for admin-related operations."""

    @staticmethod
    def assign_role(db: Client, target_user_id: str, new_role: Role) -> dict[str, Any]:
        """Set the role of the profile owned by ``target_user_id``."""
        profile = ProfileService.get_profile_by_user_id(db, target_user_id)
        if profile is None:
            raise NotFoundError("Target user profile not found")

        db.collection(PROFILES_COLLECTION).document(profile["id"]).update(
            {"role": new_role.value}
        )
        logger.info(
            f"Role of profile {profile['id']} changed from "
            f"{profile.get('role')} to {new_role.value}"
        )
        return {**profile, "role": new_role.value}

    @staticmethod
    def backfill_skill_level(db: Client) -> int:
        """Give every profile without a skill level the default one.

        Returns the number of profiles updated; a second run updates none.
        """
        updated = 0
        batch = db.batch()
        pending = 0
        for doc in db.collection(PROFILES_COLLECTION).stream():
            data = doc.to_dict() or {}
            if data.get("skillLevel"):
                continue
            batch.update(doc.reference, {"skillLevel": DEFAULT_SKILL_LEVEL})
            updated += 1
            pending += 1
            if pending >= FIRESTORE_BATCH_LIMIT:
                batch.commit()
                batch = db.batch()
                pending = 0
        if pending:
            batch.commit()
        return updated
