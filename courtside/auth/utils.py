"""Authorization guards shared by every role-gated entry point."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from courtside.core.types import Role
from courtside.errors import ForbiddenError, NotFoundError, UnauthenticatedError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def profile_role(profile: dict[str, Any]) -> Role | None:
    """Return the profile's role, or None when the stored value is unknown."""
    try:
        return Role(profile.get("role"))
    except ValueError:
        return None


def require_user(user_id: str | None) -> str:
    """Fail with Unauthenticated when there is no identity."""
    if not user_id:
        raise UnauthenticatedError()
    return user_id


def require_profile(db: Client, user_id: str | None) -> dict[str, Any]:
    """Resolve the caller's profile for self-service operations."""
    # Imported per call; the profile blueprint itself imports these guards.
    from courtside.profile.services import ProfileService

    user_id = require_user(user_id)
    profile = ProfileService.get_profile_by_user_id(db, user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def require_role(
    db: Client, user_id: str | None, allowed_roles: Iterable[Role]
) -> dict[str, Any]:
    """Resolve the caller's profile and check its role against allowed_roles.

    Raises:
        UnauthenticatedError: If there is no identity.
        ForbiddenError: If the caller has no profile or a role outside
            ``allowed_roles``.
    """
    from courtside.profile.services import ProfileService

    user_id = require_user(user_id)
    profile = ProfileService.get_profile_by_user_id(db, user_id)
    if profile is None or profile_role(profile) not in set(allowed_roles):
        raise ForbiddenError("Insufficient permissions")
    return profile
