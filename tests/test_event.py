"""Tests for event setup: courts, capacity and invitations."""

from __future__ import annotations

import datetime
import unittest
from unittest.mock import patch

from courtside.core.constants import EVENTS_COLLECTION, INVITATIONS_COLLECTION
from courtside.core.types import EventStatus, InvitationStatus, Role
from courtside.errors import (
    DuplicateResourceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from courtside.event.services import EventService
from tests.helpers import UTC, BaseTestCase, RouteTestCase

COURT = {"court_number": 1, "label": "Center", "surface_type": "clay", "capacity": 4}

EVENT_BODY = {
    "name": "Spring Social",
    "date": "2026-05-15",
    "location": "Riverside Park",
    "start_time": "09:00",
    "courts_reserved": 2,
    "matches_per_court": 3,
    "matchmaker_id": "mm1",
    "invite_deadline": "2026-05-10",
}


class EventServiceTestCase(BaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.organizer = self.create_profile("org", Role.ORGANIZER)
        self.create_profile("mm1", Role.MATCHMAKER)

    def test_create_event_starts_in_setup(self) -> None:
        event = EventService.create_event(
            self.db,
            self.organizer,
            {
                "name": "Spring Social",
                "date": datetime.date(2026, 5, 15),
                "location": "Riverside Park",
                "start_time": "09:00",
                "courts_reserved": 2,
                "matches_per_court": 3,
                "matchmaker_id": "mm1",
                "invite_deadline": datetime.datetime(2026, 5, 10, tzinfo=UTC),
            },
        )

        stored = self.get_doc(EVENTS_COLLECTION, event["id"])
        self.assertEqual(stored["status"], "setup")
        self.assertEqual(stored["totalCapacity"], 0)
        self.assertEqual(stored["organizerId"], "org")
        self.assertEqual(stored["date"], "2026-05-15")

    def test_create_event_rejects_non_matchmaker(self) -> None:
        self.create_profile("p1")

        with self.assertRaises(ValidationError):
            EventService.create_event(
                self.db, self.organizer, {"matchmaker_id": "p1"}
            )

    def test_start_inviting_needs_every_court(self) -> None:
        self.create_event(courtsReserved=2)

        EventService.add_court(self.db, "event1", COURT)
        with self.assertRaises(InvalidStateError):
            EventService.start_inviting(self.db, "event1")

        EventService.add_court(self.db, "event1", {**COURT, "court_number": 2})
        event = EventService.start_inviting(self.db, "event1")

        self.assertEqual(event["status"], "inviting")
        self.assertEqual(self.get_doc(EVENTS_COLLECTION, "event1")["status"], "inviting")

    def test_total_capacity_tracks_courts(self) -> None:
        self.create_event(courtsReserved=2)

        EventService.add_court(self.db, "event1", COURT)
        court = EventService.add_court(
            self.db, "event1", {**COURT, "court_number": 2, "capacity": 2}
        )

        self.assertEqual(court["totalCapacity"], 6)
        self.assertEqual(self.get_doc(EVENTS_COLLECTION, "event1")["totalCapacity"], 6)

    def test_courts_only_added_in_setup(self) -> None:
        self.create_event(status=EventStatus.INVITING)

        with self.assertRaises(InvalidStateError):
            EventService.add_court(self.db, "event1", COURT)

    def test_add_court_unknown_event(self) -> None:
        with self.assertRaises(NotFoundError):
            EventService.add_court(self.db, "missing", COURT)

    def test_invite_player(self) -> None:
        self.create_event()
        self.create_profile("p1")

        invitation = EventService.invite_player(self.db, "event1", "p1")

        self.assertEqual(invitation["id"], "event1_p1")
        stored = self.get_doc(INVITATIONS_COLLECTION, "event1_p1")
        self.assertEqual(stored["status"], "pending")
        self.assertIsNone(stored["respondedAt"])

    def test_duplicate_invitation_is_rejected(self) -> None:
        self.create_event()
        self.create_profile("p1")
        EventService.invite_player(self.db, "event1", "p1")

        with self.assertRaises(DuplicateResourceError) as ctx:
            EventService.invite_player(self.db, "event1", "p1")
        self.assertEqual(ctx.exception.status_code, 409)

    def test_invite_requires_setup_status(self) -> None:
        self.create_event(status=EventStatus.INVITING)
        self.create_profile("p1")

        with self.assertRaises(InvalidStateError):
            EventService.invite_player(self.db, "event1", "p1")

    def test_invite_unknown_player(self) -> None:
        self.create_event()

        with self.assertRaises(NotFoundError):
            EventService.invite_player(self.db, "event1", "ghost")

    @patch("courtside.event.services.send_email")
    def test_invite_emails_player(self, mock_send_email) -> None:
        self.create_event()
        self.create_profile("p1", email="p1@example.com")

        EventService.invite_player(self.db, "event1", "p1")

        mock_send_email.assert_called_once()
        self.assertEqual(mock_send_email.call_args.kwargs["to"], "p1@example.com")

    @patch("courtside.event.services.send_email", side_effect=Exception("SMTP down"))
    def test_invite_survives_email_failure(self, mock_send_email) -> None:
        self.create_event()
        self.create_profile("p1", email="p1@example.com")

        invitation = EventService.invite_player(self.db, "event1", "p1")

        self.assertEqual(invitation["status"], "pending")

    def test_organizer_events_carry_invitation_stats(self) -> None:
        self.create_event(organizerId="org")
        self.create_event("event2", organizerId="someone-else")
        self.create_invitation("p1", status=InvitationStatus.ACCEPTED)
        self.create_invitation("p2", status=InvitationStatus.DECLINED)
        self.create_invitation("p3")

        events = EventService.list_events_by_organizer(self.db, self.organizer)

        self.assertEqual([e["id"] for e in events], ["event1"])
        self.assertEqual(
            events[0]["invitationStats"],
            {"totalInvited": 3, "accepted": 1, "declined": 1, "pending": 1},
        )

    def test_event_details(self) -> None:
        self.create_event()
        self.create_court("court2", court_number=2)
        self.create_court("court1", court_number=1)
        self.create_profile("p1")
        self.create_invitation("p1")

        details = EventService.get_event_details(self.db, "event1")

        self.assertEqual([c["id"] for c in details["courts"]], ["court1", "court2"])
        self.assertEqual(details["invitations"][0]["player"]["id"], "p1")


class EventRoutesTestCase(RouteTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.create_profile("org", Role.ORGANIZER)
        self.create_profile("mm1", Role.MATCHMAKER)
        self.create_profile("p1")

    def test_create_event(self) -> None:
        response = self.client.post(
            "/events/", json=EVENT_BODY, headers=self.auth_headers("uid-org")
        )

        self.assertEqual(response.status_code, 201)
        data = response.get_json()
        self.assertEqual(data["status"], "setup")
        stored = self.get_doc(EVENTS_COLLECTION, data["id"])
        self.assertEqual(
            stored["inviteDeadline"], datetime.datetime(2026, 5, 10, tzinfo=UTC)
        )

    def test_create_event_rejects_bad_start_time(self) -> None:
        response = self.client.post(
            "/events/",
            json={**EVENT_BODY, "start_time": "9am"},
            headers=self.auth_headers("uid-org"),
        )

        self.assertEqual(response.status_code, 400)

    def test_players_cannot_create_events(self) -> None:
        response = self.client.post(
            "/events/", json=EVENT_BODY, headers=self.auth_headers("uid-p1")
        )

        self.assertEqual(response.status_code, 403)

    def test_add_court_rejects_odd_capacity(self) -> None:
        self.create_event()

        response = self.client.post(
            "/events/event1/courts",
            json={**COURT, "capacity": 3},
            headers=self.auth_headers("uid-org"),
        )

        self.assertEqual(response.status_code, 400)

    def test_setup_flow(self) -> None:
        self.create_event()
        headers = self.auth_headers("uid-org")

        response = self.client.post("/events/event1/courts", json=COURT, headers=headers)
        self.assertEqual(response.status_code, 201)

        response = self.client.post(
            "/events/event1/invitations", json={"player_id": "p1"}, headers=headers
        )
        self.assertEqual(response.status_code, 201)

        response = self.client.post(
            "/events/event1/invitations", json={"player_id": "p1"}, headers=headers
        )
        self.assertEqual(response.status_code, 409)

        response = self.client.post("/events/event1/start_inviting", headers=headers)
        self.assertEqual(response.get_json()["status"], "inviting")

    def test_unknown_event(self) -> None:
        response = self.client.get("/events/missing", headers=self.auth_headers("uid-mm1"))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "NotFound")


if __name__ == "__main__":
    unittest.main()
