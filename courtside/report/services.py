"""Service layer for participation reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from courtside.core.constants import (
    EVENTS_COLLECTION,
    MATCHES_COLLECTION,
    UNKNOWN_EVENT_NAME,
)
from courtside.core.types import InvitationStatus, MatchStatus
from courtside.event.services import EventService
from courtside.match.services import MatchService
from courtside.profile.services import ProfileService
from courtside.utils import snapshot_to_dict

from .models import EventPlayerStats, PlayerStats

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def _is_completed(match: dict[str, Any]) -> bool:
    return match.get("status") == MatchStatus.COMPLETED.value


class ReportService:
    """Aggregates match history into player and event statistics."""

    @staticmethod
    def _event_names(db: Client, event_ids: list[str]) -> dict[str, str]:
        """Internal helper resolving event ids to names."""
        if not event_ids:
            return {}
        refs = [
            db.collection(EVENTS_COLLECTION).document(eid)
            for eid in dict.fromkeys(event_ids)
        ]
        return {
            doc.id: (doc.to_dict() or {}).get("name", UNKNOWN_EVENT_NAME)
            for doc in db.get_all(refs)
            if doc.exists
        }

    @staticmethod
    def player_participation_report(db: Client) -> list[dict[str, Any]]:
        """Totals per profile over every completed match.

        Only profiles with at least one match are listed, most matches first;
        ties keep profile order.
        """
        query = db.collection(MATCHES_COLLECTION).where(
            filter=firestore.FieldFilter("status", "==", MatchStatus.COMPLETED.value)
        )
        matches = [snapshot_to_dict(doc) for doc in query.stream()]
        event_names = ReportService._event_names(db, [m["eventId"] for m in matches])

        stats = {
            profile["id"]: PlayerStats(profile)
            for profile in ProfileService.list_profiles(db)
        }
        for match in matches:
            event_name = event_names.get(match["eventId"], UNKNOWN_EVENT_NAME)
            for player_id in match.get("playerIds", []):
                player_stats = stats.get(player_id)
                if player_stats is None:
                    continue
                player_stats.record_result(match.get("winnerId") == player_id)
                player_stats.add_event(event_name)

        rows = [s for s in stats.values() if s.total_matches > 0]
        rows.sort(key=lambda s: s.total_matches, reverse=True)
        return [s.to_dict() for s in rows]

    @staticmethod
    def event_participation_report(db: Client, event_id: str) -> dict[str, Any]:
        """Totals per invited player for one event.

        Players who accepted come first, then by matches played.
        """
        event = EventService.get_event(db, event_id)
        matches = MatchService.get_event_matches(db, event_id)
        invitations = EventService.get_invitations(db, event_id)
        players = ProfileService.get_profiles_map(
            db, [inv["playerId"] for inv in invitations]
        )

        stats: dict[str, EventPlayerStats] = {}
        for inv in invitations:
            player = players.get(inv["playerId"])
            if player is not None:
                stats[inv["playerId"]] = EventPlayerStats(
                    player, invitation_status=inv.get("status", "")
                )

        completed = [m for m in matches if _is_completed(m)]
        for match in completed:
            for player_id in match.get("playerIds", []):
                if player_id in stats:
                    stats[player_id].record_result(match.get("winnerId") == player_id)

        rows = sorted(
            stats.values(),
            key=lambda s: (
                s.invitation_status != InvitationStatus.ACCEPTED.value,
                -s.total_matches,
            ),
        )
        statuses = [inv.get("status") for inv in invitations]
        return {
            "event": event,
            "playerStats": [s.to_dict() for s in rows],
            "summary": {
                "totalInvited": len(invitations),
                "totalAccepted": statuses.count(InvitationStatus.ACCEPTED.value),
                "totalMatches": len(matches),
                "completedMatches": len(completed),
            },
        }
