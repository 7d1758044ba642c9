"""Base test cases and seed helpers shared by the test modules."""

from __future__ import annotations

import datetime
import unittest
from typing import Any
from unittest.mock import patch

from courtside import create_app
from courtside.core.constants import (
    COURTS_COLLECTION,
    EVENTS_COLLECTION,
    INVITATIONS_COLLECTION,
    MATCHES_COLLECTION,
    PROFILES_COLLECTION,
)
from courtside.core.types import EventStatus, InvitationStatus, MatchStatus, Role
from tests.mock_utils import EnhancedMockFirestore, patch_mockfirestore

UTC = datetime.timezone.utc
NOW = datetime.datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
DEADLINE = datetime.datetime(2026, 5, 10, 0, 0, tzinfo=UTC)


class BaseTestCase(unittest.TestCase):
    """Service-level test case backed by an in-memory Firestore."""

    def setUp(self) -> None:
        patch_mockfirestore()
        self.db = EnhancedMockFirestore()

        # Run transaction bodies once, directly against the mock database.
        transactional = patch("firebase_admin.firestore.transactional", new=lambda f: f)
        transactional.start()
        self.addCleanup(transactional.stop)

    def create_profile(
        self,
        profile_id: str,
        role: Role = Role.PLAYER,
        user_id: str | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        """Creates a profile owned by ``user_id`` (defaults to ``uid-<id>``)."""
        data = {
            "externalUserId": user_id or f"uid-{profile_id}",
            "role": role.value,
            "firstName": profile_id.title(),
            "lastName": "Tester",
            "skillLevel": "intermediate",
            "isActive": True,
            **extra,
        }
        self.db.collection(PROFILES_COLLECTION).document(profile_id).set(data)
        return {**data, "id": profile_id}

    def create_event(
        self,
        event_id: str = "event1",
        status: EventStatus = EventStatus.SETUP,
        **extra: Any,
    ) -> dict[str, Any]:
        data = {
            "name": "Spring Social",
            "date": "2026-05-15",
            "location": "Riverside Park",
            "startTime": "09:00",
            "courtsReserved": 1,
            "matchesPerCourt": 2,
            "matchmakerId": "matchmaker1",
            "organizerId": "organizer1",
            "status": status.value,
            "inviteDeadline": DEADLINE,
            "totalCapacity": 0,
            "acceptedCount": 0,
            **extra,
        }
        self.db.collection(EVENTS_COLLECTION).document(event_id).set(data)
        return {**data, "id": event_id}

    def create_court(
        self,
        court_id: str,
        event_id: str = "event1",
        court_number: int = 1,
        capacity: int = 4,
    ) -> dict[str, Any]:
        data = {
            "eventId": event_id,
            "courtNumber": court_number,
            "label": f"Court {court_number}",
            "surfaceType": "hard",
            "capacity": capacity,
        }
        self.db.collection(COURTS_COLLECTION).document(court_id).set(data)
        return {**data, "id": court_id}

    def create_invitation(
        self,
        player_id: str,
        event_id: str = "event1",
        status: InvitationStatus = InvitationStatus.PENDING,
    ) -> str:
        invitation_id = f"{event_id}_{player_id}"
        self.db.collection(INVITATIONS_COLLECTION).document(invitation_id).set(
            {
                "eventId": event_id,
                "playerId": player_id,
                "status": status.value,
                "invitedAt": NOW,
                "respondedAt": None,
            }
        )
        return invitation_id

    def create_match(
        self,
        match_id: str,
        player_ids: list[str],
        event_id: str = "event1",
        court_id: str = "court1",
        match_number: int = 1,
        status: MatchStatus = MatchStatus.SCHEDULED,
        winner_id: str | None = None,
    ) -> str:
        data: dict[str, Any] = {
            "eventId": event_id,
            "courtId": court_id,
            "matchNumber": match_number,
            "playerIds": player_ids,
            "status": status.value,
        }
        if winner_id:
            data["winnerId"] = winner_id
        self.db.collection(MATCHES_COLLECTION).document(match_id).set(data)
        return match_id

    def get_doc(self, collection: str, doc_id: str) -> dict[str, Any]:
        return self.db.collection(collection).document(doc_id).get().to_dict()


class RouteTestCase(BaseTestCase):
    """Route-level test case; the bearer token is the caller's uid."""

    def setUp(self) -> None:
        super().setUp()
        patchers = {
            "init_app": patch("firebase_admin.initialize_app"),
            "client": patch("firebase_admin.firestore.client", return_value=self.db),
            "verify_id_token": patch("firebase_admin.auth.verify_id_token"),
        }
        self.mocks = {name: p.start() for name, p in patchers.items()}
        for p in patchers.values():
            self.addCleanup(p.stop)
        self.mocks["verify_id_token"].side_effect = lambda token: {
            "uid": token,
            "email": f"{token}@example.com",
        }

        self.app = create_app({"TESTING": True, "WTF_CSRF_ENABLED": False})
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        self.app_context.pop()

    def auth_headers(self, user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {user_id}"}
