"""API tests for /api/auth: registration, login, refresh rotation, logout and password reset."""

import unittest
from unittest.mock import patch

from traintrack.models import AuthToken, User

from tests.support import PASSWORD, ApiTestCase

REGISTER = {"name": "Alex", "email": "a@x.com", "password": "p1"}


class TestRegisterLoginLogout(ApiTestCase):
    def test_register_login_logout_then_token_rejected(self) -> None:
        response = self.client.post("/api/auth/register", json=REGISTER)
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertEqual(body["user"]["email"], "a@x.com")
        self.assertNotIn("password_hash", body["user"])
        self.assertIn("access_token", body)

        tokens = self.login("a@x.com", REGISTER["password"])
        self.assertIn("refresh_token", tokens)
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}
        self.assertEqual(self.client.get("/api/v1/sessions/user", headers=headers).status_code, 200)

        response = self.client.get("/api/auth/logout", headers=headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["httpCode"], 200)

        response = self.client.get("/api/v1/sessions/user", headers=headers)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["name"], "UNAUTHORIZED")
        self.assertEqual(response.headers["WWW-Authenticate"], "Bearer")

    def test_register_assigns_user_role_and_normalizes_email(self) -> None:
        response = self.client.post("/api/auth/register", json={**REGISTER, "email": "  A@X.COM "})
        self.assertEqual(response.status_code, 201, response.text)
        with self.Session() as db:
            user = db.query(User).one()
            self.assertEqual(user.email, "a@x.com")
            self.assertEqual(user.role_name, "user")

    def test_malformed_email_rejected(self) -> None:
        for email in ("a..b@x.com", "nope", "a@"):
            with self.subTest(email=email):
                response = self.client.post("/api/auth/register", json={**REGISTER, "email": email})
                self.assertEqual(response.status_code, 400)
                self.assertTrue(any(e.startswith("email") for e in response.json()["errors"]))

    def test_empty_password_rejected(self) -> None:
        response = self.client.post("/api/auth/register", json={**REGISTER, "password": ""})
        self.assertEqual(response.status_code, 400)

    def test_duplicate_email_conflicts(self) -> None:
        self.client.post("/api/auth/register", json=REGISTER)
        response = self.client.post("/api/auth/register", json=REGISTER)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["name"], "CONFLICT")

    def test_validation_errors_use_error_envelope(self) -> None:
        response = self.client.post("/api/auth/register", json={"email": "nope", "password": "short"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["message"], "Validation Errors")
        self.assertEqual(body["httpCode"], 400)
        self.assertTrue(any("name" in e for e in body["errors"]))

    def test_wrong_password_is_unauthorized(self) -> None:
        self.make_user("user@example.com")
        response = self.client.post(
            "/api/auth/login", json={"email": "user@example.com", "password": "not-the-password"}
        )
        self.assertEqual(response.status_code, 401)

    def test_unknown_email_is_not_found(self) -> None:
        response = self.client.post("/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
        self.assertEqual(response.status_code, 404)

    def test_missing_or_malformed_bearer(self) -> None:
        self.assertEqual(self.client.get("/api/v1/units").status_code, 401)
        response = self.client.get("/api/v1/units", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)

    def test_me_reports_principal(self) -> None:
        studio_id = self.make_studio()
        self.make_user("owner@example.com", role="studio_owner", studio_ids=(studio_id,))
        response = self.client.get("/api/auth/me", headers=self.auth("owner@example.com"))
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["role"], "studio_owner")
        self.assertEqual(body["studio_ids"], [studio_id])

    def test_logout_twice_reports_missing_session(self) -> None:
        self.make_user("user@example.com")
        headers = self.auth("user@example.com")
        self.assertEqual(self.client.get("/api/auth/logout", headers=headers).status_code, 200)
        self.assertEqual(self.client.get("/api/auth/logout", headers=headers).status_code, 404)


class TestRefresh(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("user@example.com")

    def test_refresh_rotates_pair(self) -> None:
        old = self.login("user@example.com")
        response = self.client.post("/api/auth/refresh", json={"refresh_token": old["refresh_token"]})
        self.assertEqual(response.status_code, 200, response.text)
        new = response.json()
        self.assertNotEqual(new["access_token"], old["access_token"])

        ok = self.client.get("/api/v1/units", headers={"Authorization": f"Bearer {new['access_token']}"})
        self.assertEqual(ok.status_code, 200)
        stale = self.client.get("/api/v1/units", headers={"Authorization": f"Bearer {old['access_token']}"})
        self.assertEqual(stale.status_code, 401)

        reuse = self.client.post("/api/auth/refresh", json={"refresh_token": old["refresh_token"]})
        self.assertEqual(reuse.status_code, 401)

    def test_refresh_with_access_token_fails(self) -> None:
        tokens = self.login("user@example.com")
        response = self.client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})
        self.assertEqual(response.status_code, 401)


class TestPasswordReset(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("user@example.com")

    def _request_token(self) -> str:
        with patch("traintrack.api.auth.send_password_reset_mail") as send:
            response = self.client.post("/api/auth/forgotPassword", json={"email": "user@example.com"})
        self.assertEqual(response.status_code, 200, response.text)
        send.assert_called_once()
        return send.call_args.args[1]

    def test_reset_token_is_single_use(self) -> None:
        token = self._request_token()
        response = self.client.post("/api/auth/resetPassword", json={"token": token, "password": "brand-new-pass"})
        self.assertEqual(response.status_code, 200, response.text)

        self.login("user@example.com", "brand-new-pass")
        again = self.client.post("/api/auth/resetPassword", json={"token": token, "password": "another-pass-1"})
        self.assertEqual(again.status_code, 401)

    def test_reset_revokes_existing_sessions(self) -> None:
        headers = self.auth("user@example.com")
        token = self._request_token()
        self.client.post("/api/auth/resetPassword", json={"token": token, "password": "brand-new-pass"})
        self.assertEqual(self.client.get("/api/v1/units", headers=headers).status_code, 401)
        with self.Session() as db:
            self.assertEqual(db.query(AuthToken).count(), 0)

    def test_new_request_supersedes_previous_token(self) -> None:
        first = self._request_token()
        second = self._request_token()
        stale = self.client.post("/api/auth/resetPassword", json={"token": first, "password": "brand-new-pass"})
        self.assertEqual(stale.status_code, 401)
        fresh = self.client.post("/api/auth/resetPassword", json={"token": second, "password": "brand-new-pass"})
        self.assertEqual(fresh.status_code, 200)

    def test_unknown_email(self) -> None:
        response = self.client.post("/api/auth/forgotPassword", json={"email": "ghost@example.com"})
        self.assertEqual(response.status_code, 404)

    def test_short_new_password_accepted(self) -> None:
        token = self._request_token()
        response = self.client.post("/api/auth/resetPassword", json={"token": token, "password": "p2"})
        self.assertEqual(response.status_code, 200, response.text)
        self.login("user@example.com", "p2")

    def test_garbage_token(self) -> None:
        response = self.client.post("/api/auth/resetPassword", json={"token": "x.y.z", "password": "brand-new-pass"})
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
