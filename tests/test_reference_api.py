"""API tests for reference data (units, machine categories), seeding and the health check."""

import unittest

from traintrack.models import Licence, MachineCategory, Role, Unit
from traintrack.services.seed import LICENCES, MACHINE_CATEGORIES, UNITS, seed_all

from tests.support import ApiTestCase


class TestSeed(ApiTestCase):
    def test_seed_is_idempotent(self) -> None:
        with self.Session() as db:
            self.assertEqual(
                seed_all(db), {"roles": 0, "licences": 0, "units": 0, "machine_categories": 0}
            )
            self.assertEqual(db.query(Role).count(), 3)
            self.assertEqual(db.query(Licence).count(), len(LICENCES))
            self.assertEqual(db.query(Unit).count(), len(UNITS))
            self.assertEqual(db.query(MachineCategory).count(), len(MACHINE_CATEGORIES))


class TestUnitsAndCategories(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.make_user("admin@example.com", role="admin")
        self.make_user("user@example.com")

    def test_everyone_reads_units(self) -> None:
        response = self.client.get(f"/api/v1/units?limit={len(UNITS)}", headers=self.auth("user@example.com"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["data"]), len(UNITS))

    def test_only_admin_writes_units(self) -> None:
        denied = self.client.post("/api/v1/units", json={"name": "Laps"}, headers=self.auth("user@example.com"))
        self.assertEqual(denied.status_code, 403)

        admin = self.auth("admin@example.com")
        created = self.client.post("/api/v1/units", json={"name": "Laps"}, headers=admin)
        self.assertEqual(created.status_code, 201)
        duplicate = self.client.post("/api/v1/units", json={"name": "Laps"}, headers=admin)
        self.assertEqual(duplicate.status_code, 409)

    def test_admin_manages_categories(self) -> None:
        admin = self.auth("admin@example.com")
        created = self.client.post("/api/v1/machinecategories", json={"name": "Sleds"}, headers=admin)
        self.assertEqual(created.status_code, 201, created.text)
        category_id = created.json()["data"]["id"]
        renamed = self.client.put(f"/api/v1/machinecategories/{category_id}", json={"name": "Prowlers"}, headers=admin)
        self.assertEqual(renamed.json()["data"]["name"], "Prowlers")
        self.assertEqual(self.client.delete(f"/api/v1/machinecategories/{category_id}", headers=admin).status_code, 200)
        gone = self.client.get(f"/api/v1/machinecategories/{category_id}", headers=admin)
        self.assertEqual(gone.status_code, 404)


class TestHealth(ApiTestCase):
    def test_health_needs_no_token(self) -> None:
        response = self.client.get("/api/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["database"], "connected")
        self.assertEqual(response.json()["environment"], "dev")


class TestOpenApi(ApiTestCase):
    def test_conflict_responses_documented(self) -> None:
        paths = self.client.get("/openapi.json").json()["paths"]
        for path, method in (
            ("/api/auth/register", "post"),
            ("/api/v1/users/{user_id}", "put"),
            ("/api/v1/studios", "post"),
            ("/api/v1/machines", "post"),
        ):
            with self.subTest(path=path):
                self.assertIn("409", paths[path][method]["responses"])


if __name__ == "__main__":
    unittest.main()
