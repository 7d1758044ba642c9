"""Service layer for event business logic: setup, courts and invitations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from courtside.core.constants import (
    COURTS_COLLECTION,
    EVENTS_COLLECTION,
    INVITATIONS_COLLECTION,
    PROFILES_COLLECTION,
)
from courtside.core.types import EventStatus, InvitationStatus, Role
from courtside.errors import (
    DuplicateResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from courtside.profile.models import display_name
from courtside.profile.services import ProfileService
from courtside.utils import send_email, snapshot_to_dict, utcnow

from .models import InvitationStats

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction

logger = logging.getLogger(__name__)


def invitation_id_for(event_id: str, player_id: str) -> str:
    """Invitation document ids are derived from the pair they belong to."""
    return f"{event_id}_{player_id}"


class EventService:
    """Handles business logic and data access for events."""

    @staticmethod
    def _get_event_in_setup(
        db: Client, event_id: str, transaction: Transaction
    ) -> dict[str, Any]:
        """Read an event inside a transaction and require status setup."""
        doc = cast(
            "DocumentSnapshot",
            db.collection(EVENTS_COLLECTION)
            .document(event_id)
            .get(transaction=transaction),
        )
        if not doc.exists:
            raise NotFoundError("Event not found")
        event = snapshot_to_dict(doc)
        if event.get("status") != EventStatus.SETUP.value:
            raise InvalidStateError("Event is not in setup phase")
        return event

    @staticmethod
    def get_event(db: Client, event_id: str) -> dict[str, Any]:
        """Fetch an event or fail with NotFound."""
        doc = cast(
            "DocumentSnapshot", db.collection(EVENTS_COLLECTION).document(event_id).get()
        )
        if not doc.exists:
            raise NotFoundError("Event not found")
        return snapshot_to_dict(doc)

    @staticmethod
    def get_courts(
        db: Client, event_id: str, transaction: Transaction | None = None
    ) -> list[dict[str, Any]]:
        """Fetch the courts of an event ordered by court number."""
        query = db.collection(COURTS_COLLECTION).where(
            filter=firestore.FieldFilter("eventId", "==", event_id)
        )
        courts = [snapshot_to_dict(doc) for doc in query.stream(transaction=transaction)]
        courts.sort(key=lambda c: c.get("courtNumber", 0))
        return courts

    @staticmethod
    def get_invitations(db: Client, event_id: str) -> list[dict[str, Any]]:
        """Fetch every invitation sent for an event."""
        query = db.collection(INVITATIONS_COLLECTION).where(
            filter=firestore.FieldFilter("eventId", "==", event_id)
        )
        return [snapshot_to_dict(doc) for doc in query.stream()]

    @staticmethod
    def create_event(
        db: Client, organizer: dict[str, Any], data: dict[str, Any]
    ) -> dict[str, Any]:
        """Create an event in setup with no courts yet."""
        matchmaker = ProfileService.get_profile(db, data["matchmaker_id"])
        if not matchmaker or matchmaker.get("role") != Role.MATCHMAKER.value:
            raise ValidationError("Invalid matchmaker")

        payload = {
            "name": data["name"],
            "date": data["date"].isoformat(),
            "location": data["location"],
            "startTime": data["start_time"],
            "courtsReserved": data["courts_reserved"],
            "matchesPerCourt": data["matches_per_court"],
            "matchmakerId": matchmaker["id"],
            "organizerId": organizer["id"],
            "status": EventStatus.SETUP.value,
            "inviteDeadline": data["invite_deadline"],
            "totalCapacity": 0,
            "acceptedCount": 0,
            "createdAt": utcnow(),
        }
        _, ref = db.collection(EVENTS_COLLECTION).add(payload)
        return {**payload, "id": ref.id}

    @staticmethod
    def add_court(db: Client, event_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Add a court and recompute the event's total capacity.

        The court insert and the capacity patch are one transaction, so
        ``totalCapacity`` always equals the sum of the event's court capacities.
        """
        court_ref = db.collection(COURTS_COLLECTION).document()
        event_ref = db.collection(EVENTS_COLLECTION).document(event_id)
        payload = {
            "eventId": event_id,
            "courtNumber": data["court_number"],
            "label": data["label"],
            "surfaceType": data["surface_type"],
            "capacity": data["capacity"],
            "createdAt": utcnow(),
        }

        @firestore.transactional
        def insert_court(transaction: Transaction) -> int:
            EventService._get_event_in_setup(db, event_id, transaction)
            courts = EventService.get_courts(db, event_id, transaction)
            total_capacity = sum(c["capacity"] for c in courts) + payload["capacity"]
            transaction.set(court_ref, payload)
            transaction.update(event_ref, {"totalCapacity": total_capacity})
            return total_capacity

        total_capacity = insert_court(db.transaction())
        return {**payload, "id": court_ref.id, "totalCapacity": total_capacity}

    @staticmethod
    def _invitation_stats(invitations: list[dict[str, Any]]) -> InvitationStats:
        statuses = [inv.get("status") for inv in invitations]
        return {
            "totalInvited": len(invitations),
            "accepted": statuses.count(InvitationStatus.ACCEPTED.value),
            "declined": statuses.count(InvitationStatus.DECLINED.value),
            "pending": statuses.count(InvitationStatus.PENDING.value),
        }

    @staticmethod
    def list_events_by_organizer(
        db: Client, organizer: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Fetch the caller's events, each with its invitation counts."""
        query = db.collection(EVENTS_COLLECTION).where(
            filter=firestore.FieldFilter("organizerId", "==", organizer["id"])
        )
        events = []
        for doc in query.stream():
            event = snapshot_to_dict(doc)
            invitations = EventService.get_invitations(db, doc.id)
            event["invitationStats"] = EventService._invitation_stats(invitations)
            events.append(event)
        return events

    @staticmethod
    def list_events_by_matchmaker(
        db: Client, matchmaker: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Fetch the events the caller is matchmaker for."""
        query = db.collection(EVENTS_COLLECTION).where(
            filter=firestore.FieldFilter("matchmakerId", "==", matchmaker["id"])
        )
        return [snapshot_to_dict(doc) for doc in query.stream()]

    @staticmethod
    def get_event_details(db: Client, event_id: str) -> dict[str, Any]:
        """Fetch an event with its courts and its invitations with players."""
        event = EventService.get_event(db, event_id)
        courts = EventService.get_courts(db, event_id)
        invitations = EventService.get_invitations(db, event_id)

        players = ProfileService.get_profiles_map(
            db, [inv["playerId"] for inv in invitations]
        )
        for inv in invitations:
            inv["player"] = players.get(inv["playerId"])

        return {"event": event, "courts": courts, "invitations": invitations}

    @staticmethod
    def invite_player(db: Client, event_id: str, player_id: str) -> dict[str, Any]:
        """Invite a player to an event that is still in setup.

        Raises:
            NotFoundError: If the event or the player does not exist.
            InvalidStateError: If the event has left setup.
            DuplicateResourceError: If the player was already invited.
        """
        invitation_ref = db.collection(INVITATIONS_COLLECTION).document(
            invitation_id_for(event_id, player_id)
        )
        player_ref = db.collection(PROFILES_COLLECTION).document(player_id)

        @firestore.transactional
        def insert_invitation(transaction: Transaction) -> tuple[dict, dict]:
            event = EventService._get_event_in_setup(db, event_id, transaction)
            player_doc = cast("DocumentSnapshot", player_ref.get(transaction=transaction))
            if not player_doc.exists:
                raise NotFoundError("Player not found")
            existing = cast(
                "DocumentSnapshot", invitation_ref.get(transaction=transaction)
            )
            if existing.exists:
                raise DuplicateResourceError("Player already invited")

            payload = {
                "eventId": event_id,
                "playerId": player_id,
                "status": InvitationStatus.PENDING.value,
                "invitedAt": utcnow(),
                "respondedAt": None,
            }
            transaction.set(invitation_ref, payload)
            return event, {**payload, "id": invitation_ref.id}

        event, invitation = insert_invitation(db.transaction())
        player = ProfileService.get_profile(db, player_id)
        EventService._notify_invited_player(event, player)
        return invitation

    @staticmethod
    def _notify_invited_player(
        event: dict[str, Any], player: dict[str, Any] | None
    ) -> None:
        """Internal helper to e-mail a freshly invited player."""
        if not player or not player.get("email"):
            return
        try:
            send_email(
                to=player["email"],
                subject=f"You're invited: {event['name']}",
                template="email/invitation.html",
                player_name=display_name(player),
                event=event,
            )
        except Exception as e:
            logger.error(f"Invitation email to {player['email']} failed: {e}")

    @staticmethod
    def start_inviting(db: Client, event_id: str) -> dict[str, Any]:
        """Move an event from setup to inviting once every court is configured."""
        event_ref = db.collection(EVENTS_COLLECTION).document(event_id)

        @firestore.transactional
        def open_invitations(transaction: Transaction) -> dict[str, Any]:
            event = EventService._get_event_in_setup(db, event_id, transaction)
            courts = EventService.get_courts(db, event_id, transaction)
            if len(courts) != event.get("courtsReserved"):
                raise InvalidStateError(
                    "All courts must be configured before starting invitations"
                )
            transaction.update(event_ref, {"status": EventStatus.INVITING.value})
            return {**event, "status": EventStatus.INVITING.value}

        event = open_invitations(db.transaction())
        logger.info(f"Event {event_id} is now inviting players")
        return event
