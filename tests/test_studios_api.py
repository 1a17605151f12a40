"""API tests for studios, NFC tags and machines: studio-owner scoping and licence limits."""

import unittest

from traintrack.models import Machine, NFCTag, User

from tests.support import ApiTestCase


class StudioTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.studio_id = self.make_studio("Iron Temple")
        self.other_studio_id = self.make_studio("Rival Gym")
        self.make_user("admin@example.com", role="admin")
        self.make_user("owner@example.com", role="studio_owner", studio_ids=(self.studio_id,))
        self.make_user("rival@example.com", role="studio_owner", studio_ids=(self.other_studio_id,))
        self.make_user("user@example.com")

    def create_machine(self, studio_id: int, tag_id: int, email: str = "owner@example.com"):
        return self.client.post(
            "/api/v1/machines",
            json={
                "name": "Leg Press 1",
                "machine_category_id": self.category_id(),
                "nfc_tag_id": tag_id,
                "studio_id": studio_id,
            },
            headers=self.auth(email),
        )


class TestStudiosApi(StudioTestCase):
    def test_owner_updates_only_own_studio(self) -> None:
        headers = self.auth("owner@example.com")
        ok = self.client.put(f"/api/v1/studios/{self.studio_id}", json={"city": "Hamburg"}, headers=headers)
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["data"]["city"], "Hamburg")
        denied = self.client.put(f"/api/v1/studios/{self.other_studio_id}", json={"city": "Hamburg"}, headers=headers)
        self.assertEqual(denied.status_code, 403)

    def test_owner_creating_studio_becomes_its_owner(self) -> None:
        response = self.client.post(
            "/api/v1/studios",
            json={"name": "New Gym", "licence_id": 1},
            headers=self.auth("owner@example.com"),
        )
        self.assertEqual(response.status_code, 201, response.text)
        new_id = response.json()["data"]["id"]
        me = self.client.get("/api/auth/me", headers=self.auth("owner@example.com")).json()
        self.assertIn(new_id, me["studio_ids"])

    def test_duplicate_name_conflicts(self) -> None:
        response = self.client.post(
            "/api/v1/studios", json={"name": "Rival Gym", "licence_id": 1}, headers=self.auth("admin@example.com")
        )
        self.assertEqual(response.status_code, 409)

    def test_plain_user_cannot_create_studio(self) -> None:
        response = self.client.post(
            "/api/v1/studios", json={"name": "Mine", "licence_id": 1}, headers=self.auth("user@example.com")
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_assigns_owner(self) -> None:
        admin = self.auth("admin@example.com")
        with self.Session() as db:
            rival_id = db.query(User).filter(User.email == "rival@example.com").one().id
        path = f"/api/v1/studios/{self.studio_id}/owners/{rival_id}"
        self.assertEqual(self.client.post(path, headers=admin).status_code, 200)
        self.assertEqual(self.client.post(path, headers=admin).status_code, 409)
        rival = self.client.put(
            f"/api/v1/studios/{self.studio_id}", json={"zip": "10115"}, headers=self.auth("rival@example.com")
        )
        self.assertEqual(rival.status_code, 200)
        self.assertEqual(self.client.delete(path, headers=admin).status_code, 200)

    def test_licences_readable_by_everyone(self) -> None:
        response = self.client.get("/api/v1/licences", headers=self.auth("user@example.com"))
        self.assertEqual(response.status_code, 200)
        names = [lic["name"] for lic in response.json()["data"]]
        self.assertEqual(names, ["basic", "premium", "enterprise"])


class TestNfcTagsApi(StudioTestCase):
    def test_owner_creates_tag_only_in_own_studio(self) -> None:
        headers = self.auth("owner@example.com")
        ok = self.client.post("/api/v1/nfctags", json={"nfc_id": "tag-1", "studio_id": self.studio_id}, headers=headers)
        self.assertEqual(ok.status_code, 201, ok.text)
        denied = self.client.post(
            "/api/v1/nfctags", json={"nfc_id": "tag-2", "studio_id": self.other_studio_id}, headers=headers
        )
        self.assertEqual(denied.status_code, 403)

    def test_owner_lists_tags_of_own_studios(self) -> None:
        self.make_nfc_tag(self.studio_id, "mine")
        self.make_nfc_tag(self.other_studio_id, "theirs")
        response = self.client.get("/api/v1/nfctags/studios", headers=self.auth("owner@example.com"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([t["nfc_id"] for t in response.json()["data"]], ["mine"])

        user = self.client.get("/api/v1/nfctags/studios", headers=self.auth("user@example.com"))
        self.assertEqual(user.status_code, 403)

    def test_deleting_tag_removes_bound_machine(self) -> None:
        tag_id = self.make_nfc_tag(self.studio_id)
        self.assertEqual(self.create_machine(self.studio_id, tag_id).status_code, 201)
        response = self.client.delete(f"/api/v1/nfctags/{tag_id}", headers=self.auth("owner@example.com"))
        self.assertEqual(response.status_code, 200)
        with self.Session() as db:
            self.assertEqual(db.query(NFCTag).count(), 0)
            self.assertEqual(db.query(Machine).count(), 0)


class TestMachinesApi(StudioTestCase):
    def test_create_and_read_machine(self) -> None:
        tag_id = self.make_nfc_tag(self.studio_id)
        response = self.create_machine(self.studio_id, tag_id)
        self.assertEqual(response.status_code, 201, response.text)
        machine = response.json()["data"]
        self.assertEqual(machine["nfc_tag"]["id"], tag_id)

        read = self.client.get(f"/api/v1/machines/{machine['id']}", headers=self.auth("user@example.com"))
        self.assertEqual(read.status_code, 200)

    def test_rival_owner_cannot_touch_machine(self) -> None:
        tag_id = self.make_nfc_tag(self.studio_id)
        machine_id = self.create_machine(self.studio_id, tag_id).json()["data"]["id"]
        headers = self.auth("rival@example.com")
        self.assertEqual(
            self.client.put(f"/api/v1/machines/{machine_id}", json={"name": "Mine now"}, headers=headers).status_code,
            403,
        )
        self.assertEqual(self.client.delete(f"/api/v1/machines/{machine_id}", headers=headers).status_code, 403)

    def test_tag_from_other_studio_rejected(self) -> None:
        foreign_tag = self.make_nfc_tag(self.other_studio_id)
        response = self.create_machine(self.studio_id, foreign_tag)
        self.assertEqual(response.status_code, 400)

    def test_tag_binds_one_machine(self) -> None:
        tag_id = self.make_nfc_tag(self.studio_id)
        self.assertEqual(self.create_machine(self.studio_id, tag_id).status_code, 201)
        self.assertEqual(self.create_machine(self.studio_id, tag_id).status_code, 409)

    def test_licence_caps_machine_count(self) -> None:
        licence_id = self.make_licence("tiny", max_machines=1)
        admin = self.auth("admin@example.com")
        self.client.put(f"/api/v1/studios/{self.studio_id}", json={"licence_id": licence_id}, headers=admin)

        first = self.make_nfc_tag(self.studio_id, "t1")
        second = self.make_nfc_tag(self.studio_id, "t2")
        self.assertEqual(self.create_machine(self.studio_id, first).status_code, 201)
        response = self.create_machine(self.studio_id, second)
        self.assertEqual(response.status_code, 400)
        self.assertIn("tiny", response.json()["message"])

    def test_licence_downgrade_below_machine_count_rejected(self) -> None:
        licence_id = self.make_licence("none", max_machines=0)
        tag_id = self.make_nfc_tag(self.studio_id)
        self.create_machine(self.studio_id, tag_id)
        response = self.client.put(
            f"/api/v1/studios/{self.studio_id}", json={"licence_id": licence_id}, headers=self.auth("admin@example.com")
        )
        self.assertEqual(response.status_code, 400)

    def test_user_cannot_create_machine(self) -> None:
        tag_id = self.make_nfc_tag(self.studio_id)
        response = self.create_machine(self.studio_id, tag_id, email="user@example.com")
        self.assertEqual(response.status_code, 403)


if __name__ == "__main__":
    unittest.main()
