"""Shared fixtures: in-memory database, seeded reference data and an authenticated client."""

import unittest
from collections.abc import Generator
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from traintrack.core.config import get_settings
from traintrack.core.database import build_engine, get_db
from traintrack.core.security import hash_password
from traintrack.main import app
from traintrack.models import Base, Licence, MachineCategory, NFCTag, Role, Studio, Unit, User
from traintrack.services.seed import seed_all

PASSWORD = "correct-horse-42"


class DatabaseTestCase(unittest.TestCase):
    """Fresh SQLite schema with seeded roles, licences, units and categories per test."""

    def setUp(self) -> None:
        self.settings = get_settings()
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)
        with self.Session() as db:
            seed_all(db)

    def tearDown(self) -> None:
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def make_user(
        self,
        email: str = "user@example.com",
        role: str = "user",
        name: str = "Test User",
        studio_ids: tuple[int, ...] = (),
    ) -> int:
        with self.Session() as db:
            role_row = db.query(Role).filter(Role.name == role).one()
            user = User(
                name=name,
                email=email,
                password_hash=hash_password(PASSWORD, self.settings.BCRYPT_ROUNDS),
                language="en",
                role_id=role_row.id,
            )
            user.studios = [db.get(Studio, sid) for sid in studio_ids]
            db.add(user)
            db.commit()
            return user.id

    def make_studio(self, name: str = "Iron Temple", licence: str = "basic") -> int:
        with self.Session() as db:
            licence_row = db.query(Licence).filter(Licence.name == licence).one()
            studio = Studio(name=name, city="Berlin", licence_id=licence_row.id)
            db.add(studio)
            db.commit()
            return studio.id

    def make_licence(self, name: str, max_machines: int) -> int:
        with self.Session() as db:
            licence = Licence(name=name, max_machines=max_machines, price=Decimal("1.00"))
            db.add(licence)
            db.commit()
            return licence.id

    def make_nfc_tag(self, studio_id: int, nfc_id: str = "04:A2:19:7B") -> int:
        with self.Session() as db:
            tag = NFCTag(nfc_id=nfc_id, studio_id=studio_id)
            db.add(tag)
            db.commit()
            return tag.id

    def first_id(self, model: type[Base]) -> int:
        with self.Session() as db:
            return db.query(model).order_by(model.id).first().id

    def unit_id(self) -> int:
        return self.first_id(Unit)

    def category_id(self) -> int:
        return self.first_id(MachineCategory)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient wired to the test database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def login(self, email: str, password: str = PASSWORD) -> dict:
        response = self.client.post("/api/auth/login", json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def auth(self, email: str) -> dict[str, str]:
        """Authorization header for a fresh session of the given account."""
        return {"Authorization": f"Bearer {self.login(email)['access_token']}"}
