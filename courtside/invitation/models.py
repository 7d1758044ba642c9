"""Data models for the invitation blueprint."""

from __future__ import annotations

from typing import Any

from courtside.core.types import FirestoreDocument


class Invitation(FirestoreDocument, total=False):
    """An invitation document, one per (event, player) pair."""

    eventId: str
    playerId: str
    status: str
    invitedAt: Any
    respondedAt: Any

    # UI and calculated fields
    event: dict[str, Any]
    player: dict[str, Any]
