"""Tests for profile creation and the first-admin rule."""

from __future__ import annotations

import unittest

from courtside.core.constants import PROFILES_COLLECTION
from courtside.core.types import Role
from courtside.errors import DuplicateResourceError, ForbiddenError
from courtside.profile.services import ProfileService
from tests.helpers import BaseTestCase, RouteTestCase

PROFILE_DATA = {
    "first_name": "Pat",
    "last_name": "Cash",
    "role": "player",
    "phone": "",
    "skill_level": "advanced",
}


class ProfileServiceTestCase(BaseTestCase):
    def test_create_player_profile(self) -> None:
        profile = ProfileService.create_profile(
            self.db, "uid-pat", PROFILE_DATA, email="pat@example.com"
        )

        self.assertEqual(profile["role"], "player")
        self.assertTrue(profile["isActive"])
        self.assertIsNone(profile["phone"])
        stored = self.get_doc(PROFILES_COLLECTION, profile["id"])
        self.assertEqual(stored["externalUserId"], "uid-pat")
        self.assertEqual(stored["email"], "pat@example.com")

    def test_second_profile_for_same_user_is_rejected(self) -> None:
        ProfileService.create_profile(self.db, "uid-pat", PROFILE_DATA)

        with self.assertRaises(DuplicateResourceError):
            ProfileService.create_profile(self.db, "uid-pat", PROFILE_DATA)

    def test_first_admin_is_allowed(self) -> None:
        profile = ProfileService.create_profile(
            self.db, "uid-root", {**PROFILE_DATA, "role": "admin"}
        )
        self.assertEqual(profile["role"], "admin")

    def test_second_admin_is_forbidden(self) -> None:
        self.create_profile("root", Role.ADMIN)

        with self.assertRaises(ForbiddenError):
            ProfileService.create_profile(
                self.db, "uid-new", {**PROFILE_DATA, "role": "admin"}
            )
        self.assertIsNone(ProfileService.get_profile_by_user_id(self.db, "uid-new"))

    def test_organizer_self_signup_is_forbidden(self) -> None:
        for role in ("organizer", "matchmaker"):
            with self.subTest(role=role), self.assertRaises(ForbiddenError):
                ProfileService.create_profile(
                    self.db, f"uid-{role}", {**PROFILE_DATA, "role": role}
                )

    def test_list_active_profiles_by_role(self) -> None:
        self.create_profile("mm1", Role.MATCHMAKER)
        self.create_profile("mm2", Role.MATCHMAKER, isActive=False)
        self.create_profile("p1")

        everyone = ProfileService.list_active_profiles(self.db)
        matchmakers = ProfileService.list_active_profiles(self.db, Role.MATCHMAKER)

        self.assertEqual({p["id"] for p in everyone}, {"mm1", "p1"})
        self.assertEqual([p["id"] for p in matchmakers], ["mm1"])


class ProfileRoutesTestCase(RouteTestCase):
    def test_current_profile_is_null_before_creation(self) -> None:
        response = self.client.get("/profile/", headers=self.auth_headers("uid-pat"))

        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.get_json())

    def test_create_profile_stores_token_email(self) -> None:
        response = self.client.post(
            "/profile/", json=PROFILE_DATA, headers=self.auth_headers("uid-pat")
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["email"], "uid-pat@example.com")

        response = self.client.get("/profile/", headers=self.auth_headers("uid-pat"))
        self.assertEqual(response.get_json()["firstName"], "Pat")

    def test_create_profile_requires_authentication(self) -> None:
        response = self.client.post("/profile/", json=PROFILE_DATA)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["error"], "Unauthenticated")

    def test_create_profile_validates_body(self) -> None:
        response = self.client.post(
            "/profile/",
            json={**PROFILE_DATA, "first_name": ""},
            headers=self.auth_headers("uid-pat"),
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "ValidationFailed")

    def test_second_admin_route_is_forbidden(self) -> None:
        self.create_profile("root", Role.ADMIN)

        response = self.client.post(
            "/profile/",
            json={**PROFILE_DATA, "role": "admin"},
            headers=self.auth_headers("uid-new"),
        )

        self.assertEqual(response.status_code, 403)

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)


if __name__ == "__main__":
    unittest.main()
