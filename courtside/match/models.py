"""Data models for the match blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from courtside.core.types import FirestoreDocument


class SetScore(TypedDict):
    """The score of one set."""

    set: int
    player1Score: int
    player2Score: int


class Match(FirestoreDocument, total=False):
    """A match document in Firestore."""

    eventId: str
    courtId: str
    matchNumber: int
    # One id per seat on the court: 2 for singles, 4 for doubles.
    playerIds: list[str]
    status: str
    scores: list[SetScore]
    winnerId: str
    completedAt: Any

    # UI and calculated fields
    players: list[dict[str, Any] | None]
    court: dict[str, Any] | None
    event: dict[str, Any] | None
