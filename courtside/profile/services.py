"""Service layer for profiles: lookup, creation and the first-admin rule."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from courtside.core.constants import PROFILES_COLLECTION
from courtside.core.types import Role
from courtside.errors import DuplicateResourceError, ForbiddenError
from courtside.utils import snapshot_to_dict, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction

logger = logging.getLogger(__name__)


class ProfileService:
    """Handles business logic and data access for profiles."""

    @staticmethod
    def get_profile(
        db: Client, profile_id: str, transaction: Transaction | None = None
    ) -> dict[str, Any] | None:
        """Fetch a profile by its document id."""
        doc = cast(
            "DocumentSnapshot",
            db.collection(PROFILES_COLLECTION)
            .document(profile_id)
            .get(transaction=transaction),
        )
        if not doc.exists:
            return None
        return snapshot_to_dict(doc)

    @staticmethod
    def get_profile_by_user_id(
        db: Client, user_id: str, transaction: Transaction | None = None
    ) -> dict[str, Any] | None:
        """Fetch the profile belonging to an auth provider uid."""
        query = (
            db.collection(PROFILES_COLLECTION)
            .where(filter=firestore.FieldFilter("externalUserId", "==", user_id))
            .limit(1)
        )
        for doc in query.stream(transaction=transaction):
            return snapshot_to_dict(doc)
        return None

    @staticmethod
    def get_profiles_map(db: Client, profile_ids: list[str]) -> dict[str, dict[str, Any]]:
        """Fetch several profiles in one round-trip, keyed by id."""
        if not profile_ids:
            return {}
        refs = [
            db.collection(PROFILES_COLLECTION).document(pid)
            for pid in dict.fromkeys(profile_ids)
        ]
        return {
            doc.id: snapshot_to_dict(doc)
            for doc in cast(list[Any], db.get_all(refs))
            if doc.exists
        }

    @staticmethod
    def _admin_exists(db: Client, transaction: Transaction | None = None) -> bool:
        query = (
            db.collection(PROFILES_COLLECTION)
            .where(filter=firestore.FieldFilter("role", "==", Role.ADMIN.value))
            .limit(1)
        )
        return any(True for _ in query.stream(transaction=transaction))

    @staticmethod
    def create_profile(
        db: Client,
        user_id: str,
        data: dict[str, Any],
        email: str | None = None,
    ) -> dict[str, Any]:
        """Create the caller's profile.

        Any role other than player is refused, except for an admin profile
        while no admin exists yet. The admin check and the insert share one
        transaction so two callers cannot both become the first admin.

        Raises:
            DuplicateResourceError: If the caller already has a profile.
            ForbiddenError: If the requested role is not allowed.
        """
        role = Role(data["role"])
        profile_ref = db.collection(PROFILES_COLLECTION).document()
        payload = {
            "externalUserId": user_id,
            "role": role.value,
            "firstName": data["first_name"],
            "lastName": data["last_name"],
            "phone": data.get("phone") or None,
            "skillLevel": data.get("skill_level") or None,
            "email": email,
            "isActive": True,
            "createdAt": utcnow(),
        }

        @firestore.transactional
        def insert_profile(transaction: Transaction) -> None:
            if ProfileService.get_profile_by_user_id(db, user_id, transaction):
                raise DuplicateResourceError("Profile already exists.")
            if role is not Role.PLAYER:
                is_bootstrap_admin = role is Role.ADMIN and not (
                    ProfileService._admin_exists(db, transaction)
                )
                if not is_bootstrap_admin:
                    raise ForbiddenError(
                        "Only admins can assign organizer and matchmaker roles"
                    )
            transaction.set(profile_ref, payload)

        insert_profile(db.transaction())
        if role is Role.ADMIN:
            logger.info(f"Bootstrap admin profile {profile_ref.id} created for {user_id}")
        return {**payload, "id": profile_ref.id}

    @staticmethod
    def list_profiles(db: Client) -> list[dict[str, Any]]:
        """Fetch every profile."""
        return [
            snapshot_to_dict(doc) for doc in db.collection(PROFILES_COLLECTION).stream()
        ]

    @staticmethod
    def list_active_profiles(
        db: Client, role: Role | None = None
    ) -> list[dict[str, Any]]:
        """Fetch active profiles, optionally narrowed to one role."""
        query = db.collection(PROFILES_COLLECTION).where(
            filter=firestore.FieldFilter("isActive", "==", True)
        )
        if role is not None:
            query = query.where(filter=firestore.FieldFilter("role", "==", role.value))
        return [snapshot_to_dict(doc) for doc in query.stream()]
