"""API tests for /api/v1/users: admin management and self-service ownership."""

import unittest

from traintrack.models import Role

from tests.support import ApiTestCase


class TestUsersApi(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin_id = self.make_user("admin@example.com", role="admin")
        self.user_id = self.make_user("user@example.com")
        self.other_id = self.make_user("other@example.com")

    def _role_id(self, name: str) -> int:
        with self.Session() as db:
            return db.query(Role).filter(Role.name == name).one().id

    def test_list_is_admin_only_and_paginated(self) -> None:
        response = self.client.get("/api/v1/users?page=1&limit=2", headers=self.auth("admin@example.com"))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["data"]), 2)
        self.assertEqual(body["pagination"], {"currentPage": 1, "totalPages": 2, "totalNumber": 3})

        forbidden = self.client.get("/api/v1/users", headers=self.auth("user@example.com"))
        self.assertEqual(forbidden.status_code, 403)
        self.assertEqual(forbidden.json()["name"], "FORBIDDEN")

    def test_limit_bounds_validated(self) -> None:
        response = self.client.get("/api/v1/users?limit=1000", headers=self.auth("admin@example.com"))
        self.assertEqual(response.status_code, 400)

    def test_user_reads_only_self(self) -> None:
        headers = self.auth("user@example.com")
        own = self.client.get(f"/api/v1/users/{self.user_id}", headers=headers)
        self.assertEqual(own.status_code, 200)
        self.assertEqual(own.json()["data"]["email"], "user@example.com")
        self.assertEqual(self.client.get(f"/api/v1/users/{self.other_id}", headers=headers).status_code, 403)

    def test_missing_user_is_not_found(self) -> None:
        response = self.client.get("/api/v1/users/9999", headers=self.auth("admin@example.com"))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "User not found")

    def test_user_cannot_change_own_role(self) -> None:
        response = self.client.put(
            f"/api/v1/users/{self.user_id}",
            json={"role_id": self._role_id("admin")},
            headers=self.auth("user@example.com"),
        )
        self.assertEqual(response.status_code, 403)

    def test_user_updates_profile_but_not_to_taken_email(self) -> None:
        headers = self.auth("user@example.com")
        ok = self.client.put(f"/api/v1/users/{self.user_id}", json={"language": "de"}, headers=headers)
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["data"]["language"], "de")
        taken = self.client.put(f"/api/v1/users/{self.user_id}", json={"email": "other@example.com"}, headers=headers)
        self.assertEqual(taken.status_code, 409)

    def test_admin_creates_studio_owner_and_deletes_user(self) -> None:
        headers = self.auth("admin@example.com")
        created = self.client.post(
            "/api/v1/users",
            json={
                "name": "Olga Owner",
                "email": "olga@example.com",
                "password": "owner-pass-1",
                "role_id": self._role_id("studio_owner"),
            },
            headers=headers,
        )
        self.assertEqual(created.status_code, 201, created.text)
        self.login("olga@example.com", "owner-pass-1")

        deleted = self.client.delete(f"/api/v1/users/{self.other_id}", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json()["message"], "User deleted")
        self.assertEqual(self.client.get(f"/api/v1/users/{self.other_id}", headers=headers).status_code, 404)

    def test_non_admin_cannot_create_users(self) -> None:
        response = self.client.post(
            "/api/v1/users",
            json={"name": "X", "email": "x@example.com", "password": "pass-word-1", "role_id": 1},
            headers=self.auth("user@example.com"),
        )
        self.assertEqual(response.status_code, 403)


if __name__ == "__main__":
    unittest.main()
