"""Core data types for the courtside application."""

from __future__ import annotations

import enum
from typing import Any, TypedDict


class _FirestoreDocumentBase(TypedDict):
    id: str


class FirestoreDocument(_FirestoreDocumentBase, total=False):
    """Generic Firestore document structure."""

    createdAt: Any
    updatedAt: Any


class Role(str, enum.Enum):
    """Roles a profile can hold."""

    ADMIN = "admin"
    ORGANIZER = "organizer"
    MATCHMAKER = "matchmaker"
    PLAYER = "player"


class SkillLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class EventStatus(str, enum.Enum):
    """Event lifecycle states. Transitions only ever move forward."""

    SETUP = "setup"
    INVITING = "inviting"
    CONFIRMED = "confirmed"
    # Nothing moves an event into this state yet.
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SurfaceType(str, enum.Enum):
    GRASS = "grass"
    CLAY = "clay"
    HARD = "hard"


class InvitationStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


class MatchStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def choices_for(enum_cls: type[enum.Enum]) -> list[tuple[str, str]]:
    """Build WTForms select choices from an enum."""
    return [(member.value, member.value.replace("_", " ").title()) for member in enum_cls]
