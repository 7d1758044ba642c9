"""Service layer for invitation responses."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Any, cast

from firebase_admin import firestore

from courtside.core.constants import EVENTS_COLLECTION, INVITATIONS_COLLECTION
from courtside.core.types import EventStatus, InvitationStatus
from courtside.errors import (
    AlreadyRespondedError,
    DeadlineExpiredError,
    EventFullError,
    NotFoundError,
    ValidationError,
)
from courtside.utils import as_utc, snapshot_to_dict, utcnow

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.transaction import Transaction

logger = logging.getLogger(__name__)

RESPONSES = (InvitationStatus.ACCEPTED, InvitationStatus.DECLINED)
# Events in these states still confirm when the last seat is taken.
CONFIRMABLE_STATUSES = (EventStatus.SETUP.value, EventStatus.INVITING.value)


class InvitationService:
    """Handles business logic and data access for invitations."""

    @staticmethod
    def _accepted_query(db: Client, event_id: str) -> Any:
        return (
            db.collection(INVITATIONS_COLLECTION)
            .where(filter=firestore.FieldFilter("eventId", "==", event_id))
            .where(
                filter=firestore.FieldFilter(
                    "status", "==", InvitationStatus.ACCEPTED.value
                )
            )
        )

    @staticmethod
    def count_accepted(
        db: Client, event_id: str, transaction: Transaction | None = None
    ) -> int:
        """Count accepted invitations for an event."""
        query = InvitationService._accepted_query(db, event_id)
        return sum(1 for _ in query.stream(transaction=transaction))

    @staticmethod
    def accepted_player_ids(
        db: Client, event_id: str, transaction: Transaction | None = None
    ) -> set[str]:
        """Return the ids of players who accepted an event's invitation."""
        query = InvitationService._accepted_query(db, event_id)
        return {
            (doc.to_dict() or {}).get("playerId")
            for doc in query.stream(transaction=transaction)
        }

    @staticmethod
    def list_player_invitations(
        db: Client, player: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Fetch the player's invitations, each with its event."""
        query = db.collection(INVITATIONS_COLLECTION).where(
            filter=firestore.FieldFilter("playerId", "==", player["id"])
        )
        invitations = [snapshot_to_dict(doc) for doc in query.stream()]
        if not invitations:
            return []

        event_refs = [
            db.collection(EVENTS_COLLECTION).document(event_id)
            for event_id in dict.fromkeys(inv["eventId"] for inv in invitations)
        ]
        events = {
            doc.id: snapshot_to_dict(doc)
            for doc in cast(list[Any], db.get_all(event_refs))
            if doc.exists
        }
        for inv in invitations:
            inv["event"] = events.get(inv["eventId"])
        return invitations

    @staticmethod
    def respond_to_invitation(
        db: Client,
        player: dict[str, Any],
        invitation_id: str,
        response: InvitationStatus,
        now: datetime.datetime | None = None,
    ) -> dict[str, Any]:
        """Accept or decline one of the player's own invitations.

        All checks and writes run in a single transaction. Every accept also
        bumps ``acceptedCount`` on the event document, so two concurrent
        accepts always contend on that document and the second one re-runs
        against the first one's result. An answer after the deadline commits
        the invitation as expired before failing.

        Raises:
            NotFoundError: If the invitation is not the player's, or its event
                is missing.
            AlreadyRespondedError: If the invitation is no longer pending.
            DeadlineExpiredError: If the invite deadline has passed.
            EventFullError: If accepting would exceed the event's capacity.
        """
        if response not in RESPONSES:
            raise ValidationError("Response must be accepted or declined.")
        now = now or utcnow()
        invitation_ref = db.collection(INVITATIONS_COLLECTION).document(invitation_id)

        @firestore.transactional
        def apply_response(transaction: Transaction) -> dict[str, Any]:
            invitation_doc = cast(
                "DocumentSnapshot", invitation_ref.get(transaction=transaction)
            )
            invitation = snapshot_to_dict(invitation_doc) if invitation_doc.exists else None
            if invitation is None or invitation.get("playerId") != player["id"]:
                raise NotFoundError("Invitation not found")
            if invitation.get("status") != InvitationStatus.PENDING.value:
                raise AlreadyRespondedError("Invitation already responded to")

            event_ref = db.collection(EVENTS_COLLECTION).document(invitation["eventId"])
            event_doc = cast("DocumentSnapshot", event_ref.get(transaction=transaction))
            if not event_doc.exists:
                raise NotFoundError("Event not found")
            event = snapshot_to_dict(event_doc)

            if now > as_utc(event["inviteDeadline"]):
                update = {"status": InvitationStatus.EXPIRED.value, "respondedAt": now}
                transaction.update(invitation_ref, update)
                return {**invitation, **update}

            total_capacity = event.get("totalCapacity", 0)
            accepted = 0
            if response is InvitationStatus.ACCEPTED:
                accepted = InvitationService.count_accepted(
                    db, invitation["eventId"], transaction
                )
                if accepted >= total_capacity:
                    raise EventFullError("Event is full")

            update = {"status": response.value, "respondedAt": now}
            transaction.update(invitation_ref, update)

            if response is InvitationStatus.ACCEPTED:
                accepted += 1
                event_update: dict[str, Any] = {"acceptedCount": accepted}
                if (
                    accepted == total_capacity
                    and event.get("status") in CONFIRMABLE_STATUSES
                ):
                    event_update["status"] = EventStatus.CONFIRMED.value
                    logger.info(
                        f"Event {event['id']} confirmed with {accepted} players"
                    )
                transaction.update(event_ref, event_update)

            return {**invitation, **update}

        invitation = apply_response(db.transaction())
        if invitation["status"] == InvitationStatus.EXPIRED.value:
            raise DeadlineExpiredError("Invitation deadline has passed")
        return invitation
