"""Data models for the profile blueprint."""

from __future__ import annotations

from courtside.core.types import FirestoreDocument


class Profile(FirestoreDocument, total=False):
    """A profile document in Firestore.

    ``externalUserId`` is the uid issued by the auth provider; ``id`` is the
    profile's own document id, which events, invitations and matches refer to.
    """

    externalUserId: str
    role: str
    firstName: str
    lastName: str
    phone: str | None
    skillLevel: str | None
    email: str | None
    isActive: bool


def display_name(profile: dict | None) -> str:
    """Return ``First Last`` for a profile, or a placeholder."""
    if not profile:
        return "Unknown Player"
    name = f"{profile.get('firstName', '')} {profile.get('lastName', '')}".strip()
    return name or "Unknown Player"
