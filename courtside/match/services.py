"""Service layer for match creation, scoring and event completion."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from courtside.core.constants import (
    COURTS_COLLECTION,
    EVENTS_COLLECTION,
    MATCHES_COLLECTION,
)
from courtside.core.types import EventStatus, MatchStatus
from courtside.errors import (
    DuplicateResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from courtside.invitation.services import InvitationService
from courtside.profile.services import ProfileService
from courtside.utils import snapshot_to_dict, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction

    from .models import SetScore

logger = logging.getLogger(__name__)


def match_id_for(court_id: str, match_number: int) -> str:
    """Each (court, match number) slot holds at most one match."""
    return f"{court_id}_{match_number}"


class MatchService:
    """Service class for match-related operations."""

    @staticmethod
    def create_match(
        db: Client,
        event_id: str,
        court_id: str,
        match_number: int,
        player_ids: list[str],
    ) -> dict[str, Any]:
        """Schedule a match for a court slot of a confirmed event.

        Raises:
            NotFoundError: If the event is missing, or the court is missing or
                belongs to another event.
            InvalidStateError: If the event is not confirmed.
            ValidationError: If the players do not fill the court exactly or
                have not all accepted the event's invitation.
            DuplicateResourceError: If the court slot already has a match.
        """
        event_ref = db.collection(EVENTS_COLLECTION).document(event_id)
        court_ref = db.collection(COURTS_COLLECTION).document(court_id)
        match_ref = db.collection(MATCHES_COLLECTION).document(
            match_id_for(court_id, match_number)
        )

        @firestore.transactional
        def insert_match(transaction: Transaction) -> dict[str, Any]:
            event_doc = cast("DocumentSnapshot", event_ref.get(transaction=transaction))
            if not event_doc.exists:
                raise NotFoundError("Event not found")
            if (event_doc.to_dict() or {}).get("status") != EventStatus.CONFIRMED.value:
                raise InvalidStateError("Event is not confirmed")

            court_doc = cast("DocumentSnapshot", court_ref.get(transaction=transaction))
            court = court_doc.to_dict() if court_doc.exists else None
            if not court or court.get("eventId") != event_id:
                raise NotFoundError("Court not found or not part of this event")

            capacity = court["capacity"]
            if len(player_ids) != capacity:
                raise ValidationError(f"Court requires exactly {capacity} players")
            if len(set(player_ids)) != len(player_ids):
                raise ValidationError("All players in a match must be unique")

            accepted = InvitationService.accepted_player_ids(db, event_id, transaction)
            if not set(player_ids) <= accepted:
                raise ValidationError("All players must be confirmed for this event")

            if cast("DocumentSnapshot", match_ref.get(transaction=transaction)).exists:
                raise DuplicateResourceError(
                    f"Match {match_number} already exists on this court"
                )

            payload = {
                "eventId": event_id,
                "courtId": court_id,
                "matchNumber": match_number,
                "playerIds": list(player_ids),
                "status": MatchStatus.SCHEDULED.value,
                "createdAt": utcnow(),
            }
            transaction.set(match_ref, payload)
            return {**payload, "id": match_ref.id}

        return insert_match(db.transaction())

    @staticmethod
    def _with_details(
        db: Client,
        matches: list[dict[str, Any]],
        include_event: bool = False,
    ) -> list[dict[str, Any]]:
        """Internal helper attaching players, court and optionally event."""
        if not matches:
            return []

        players = ProfileService.get_profiles_map(
            db, [pid for m in matches for pid in m.get("playerIds", [])]
        )
        court_refs = [
            db.collection(COURTS_COLLECTION).document(cid)
            for cid in dict.fromkeys(m["courtId"] for m in matches)
        ]
        courts = {
            doc.id: snapshot_to_dict(doc)
            for doc in cast(list[Any], db.get_all(court_refs))
            if doc.exists
        }
        events: dict[str, dict[str, Any]] = {}
        if include_event:
            event_refs = [
                db.collection(EVENTS_COLLECTION).document(eid)
                for eid in dict.fromkeys(m["eventId"] for m in matches)
            ]
            events = {
                doc.id: snapshot_to_dict(doc)
                for doc in cast(list[Any], db.get_all(event_refs))
                if doc.exists
            }

        for m in matches:
            m["players"] = [players.get(pid) for pid in m.get("playerIds", [])]
            m["court"] = courts.get(m["courtId"])
            if include_event:
                m["event"] = events.get(m["eventId"])
        return matches

    @staticmethod
    def get_event_matches(
        db: Client, event_id: str, transaction: Transaction | None = None
    ) -> list[dict[str, Any]]:
        """Fetch the raw match documents of an event."""
        query = db.collection(MATCHES_COLLECTION).where(
            filter=firestore.FieldFilter("eventId", "==", event_id)
        )
        return [snapshot_to_dict(doc) for doc in query.stream(transaction=transaction)]

    @staticmethod
    def list_matches_by_event(db: Client, event_id: str) -> list[dict[str, Any]]:
        """Fetch an event's matches with their players and court."""
        matches = MatchService.get_event_matches(db, event_id)
        MatchService._with_details(db, matches)
        matches.sort(
            key=lambda m: ((m["court"] or {}).get("courtNumber", 0), m["matchNumber"])
        )
        return matches

    @staticmethod
    def list_player_matches(
        db: Client, player: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Fetch every match the player is part of, across all events."""
        query = db.collection(MATCHES_COLLECTION).where(
            filter=firestore.FieldFilter("playerIds", "array_contains", player["id"])
        )
        matches = [snapshot_to_dict(doc) for doc in query.stream()]
        return MatchService._with_details(db, matches, include_event=True)

    @staticmethod
    def record_score(
        db: Client,
        match_id: str,
        scores: list[SetScore],
        winner_id: str,
        now: datetime.datetime | None = None,
    ) -> dict[str, Any]:
        """Record a match result and complete the event after its last match.

        The match patch and the scan over the event's matches share one
        transaction, so exactly one scoring call completes the event.
        """
        now = now or utcnow()
        match_ref = db.collection(MATCHES_COLLECTION).document(match_id)

        @firestore.transactional
        def apply_score(transaction: Transaction) -> dict[str, Any]:
            match_doc = cast("DocumentSnapshot", match_ref.get(transaction=transaction))
            if not match_doc.exists:
                raise NotFoundError("Match not found")
            match = snapshot_to_dict(match_doc)
            if match.get("status") == MatchStatus.COMPLETED.value:
                raise InvalidStateError("Match already completed")
            if winner_id not in match.get("playerIds", []):
                raise ValidationError("Winner must be one of the match players")

            event_ref = db.collection(EVENTS_COLLECTION).document(match["eventId"])
            event_doc = cast("DocumentSnapshot", event_ref.get(transaction=transaction))
            siblings = MatchService.get_event_matches(db, match["eventId"], transaction)
            all_completed = all(
                m["id"] == match_id or m.get("status") == MatchStatus.COMPLETED.value
                for m in siblings
            )

            update = {
                "scores": [dict(s) for s in scores],
                "winnerId": winner_id,
                "status": MatchStatus.COMPLETED.value,
                "completedAt": now,
            }
            transaction.update(match_ref, update)

            event_status = (event_doc.to_dict() or {}).get("status")
            if (
                all_completed
                and event_doc.exists
                and event_status != EventStatus.COMPLETED.value
            ):
                transaction.update(event_ref, {"status": EventStatus.COMPLETED.value})
                logger.info(f"Event {match['eventId']} completed")
            return {**match, **update}

        return apply_score(db.transaction())
