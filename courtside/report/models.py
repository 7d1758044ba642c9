"""Accumulators for participation reports."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Any


@dataclass
class PlayerStats:
    """Running match totals for one profile."""

    profile: dict[str, Any]
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    # Distinct event names, kept sorted.
    events: list[str] = field(default_factory=list)

    @property
    def win_rate(self) -> int:
        """Whole-number percentage of matches won; 0 before any match."""
        if self.total_matches == 0:
            return 0
        # Halves round up.
        return (200 * self.wins + self.total_matches) // (2 * self.total_matches)

    def record_result(self, won: bool) -> None:
        self.total_matches += 1
        if won:
            self.wins += 1
        else:
            self.losses += 1

    def add_event(self, name: str) -> None:
        index = bisect.bisect_left(self.events, name)
        if index == len(self.events) or self.events[index] != name:
            self.events.insert(index, name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "profile": self.profile,
            "totalMatches": self.total_matches,
            "wins": self.wins,
            "losses": self.losses,
            "winRate": self.win_rate,
            "events": list(self.events),
        }


@dataclass
class EventPlayerStats(PlayerStats):
    """Match totals for one invited player within a single event."""

    invitation_status: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        del data["events"]
        data["invitationStatus"] = self.invitation_status
        return data
