"""Data models for the event blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from courtside.core.types import FirestoreDocument


class Event(FirestoreDocument, total=False):
    """An event document in Firestore."""

    name: str
    date: str
    location: str
    startTime: str
    courtsReserved: int
    matchesPerCourt: int
    matchmakerId: str
    organizerId: str
    status: str
    inviteDeadline: Any
    # Sum of the capacities of the event's courts.
    totalCapacity: int
    acceptedCount: int


class Court(FirestoreDocument, total=False):
    """A court document in Firestore. Courts are never edited."""

    eventId: str
    courtNumber: int
    label: str
    surfaceType: str
    capacity: int


class InvitationStats(TypedDict):
    totalInvited: int
    accepted: int
    declined: int
    pending: int
