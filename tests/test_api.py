"""End-to-end tests of the HTTP surface with an in-memory SQLite database."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rolegate.core.database import get_db
from rolegate.core.errors import StoreUnavailableError
from rolegate.core.security import TokenIssuer, get_token_issuer
from rolegate.main import app
from rolegate.models import Base

SECRET = "test-signing-secret-not-for-production"


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        def override_get_db():
            db = Session()
            try:
                yield db
            finally:
                db.close()

        self.issuer = TokenIssuer(secret=SECRET)
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_token_issuer] = lambda: self.issuer
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def register(self, username: str, password: str = "secret1", role: str | None = None):
        body: dict[str, str] = {"username": username, "password": password}
        if role is not None:
            body["role"] = role
        return self.client.post("/auth/register", json=body)

    def login(self, username: str, password: str = "secret1"):
        return self.client.post("/auth/login", json={"username": username, "password": password})


class TestAliceScenario(ApiTestCase):
    """Register an admin, log in, and hit the admin-only route with and without credentials."""

    def test_scenario(self) -> None:
        resp = self.register("alice", "secret1", "Admin")
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), {"message": "User registered successfully"})

        resp = self.login("alice", "secret1")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["role"], "Admin")
        token = body["token"]

        resp = self.client.get("/admin/users", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["users"][0]["username"], "alice")

        resp = self.client.get("/admin/users")
        self.assertEqual(resp.status_code, 401)

        self.register("bob", "secret1")
        user_token = self.login("bob").json()["token"]
        resp = self.client.get("/admin/users", headers={"Authorization": f"Bearer {user_token}"})
        self.assertEqual(resp.status_code, 403)


class TestRegisterEndpoint(ApiTestCase):
    def test_duplicate_is_400(self) -> None:
        self.assertEqual(self.register("alice").status_code, 201)
        resp = self.register("alice", "another1", "Moderator")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("already taken", resp.json()["error"])

    def test_invalid_role_is_400(self) -> None:
        resp = self.register("alice", "secret1", "Superuser")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Role must be one of", resp.json()["error"])

    def test_missing_password_is_400(self) -> None:
        resp = self.client.post("/auth/register", json={"username": "alice"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("password", resp.json()["error"])

    def test_short_password_is_400(self) -> None:
        resp = self.register("alice", "abc")
        self.assertEqual(resp.status_code, 400)


class TestLoginEndpoint(ApiTestCase):
    def test_wrong_password_and_unknown_user_look_the_same(self) -> None:
        self.register("alice")
        wrong = self.login("alice", "not-the-password")
        unknown = self.login("mallory", "secret1")
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), {"message": "Invalid credentials"})
        self.assertEqual(wrong.json(), unknown.json())

    def test_default_role_is_user(self) -> None:
        self.register("bob")
        self.assertEqual(self.login("bob").json()["role"], "User")


class TestProtectedRoutes(ApiTestCase):
    def _token(self, username: str, role: str) -> str:
        self.register(username, "secret1", role)
        return self.login(username).json()["token"]

    def test_me_returns_token_identity(self) -> None:
        token = self._token("carol", "User")
        resp = self.client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["role"], "User")

    def test_moderator_route(self) -> None:
        mod = self._token("mod", "Moderator")
        admin = self._token("root", "Admin")
        ok = self.client.get("/moderator/me", headers={"Authorization": f"Bearer {mod}"})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["role"], "Moderator")
        denied = self.client.get("/moderator/me", headers={"Authorization": f"Bearer {admin}"})
        self.assertEqual(denied.status_code, 403)

    def test_moderator_token_cannot_reach_admin(self) -> None:
        mod = self._token("mod", "Moderator")
        resp = self.client.get("/admin/users", headers={"Authorization": f"Bearer {mod}"})
        self.assertEqual(resp.status_code, 403)

    def test_user_list_has_no_password_hash(self) -> None:
        admin = self._token("root", "Admin")
        self.register("bob")
        users = self.client.get("/admin/users", headers={"Authorization": f"Bearer {admin}"}).json()["users"]
        self.assertEqual([u["username"] for u in users], ["root", "bob"])
        for u in users:
            self.assertEqual(set(u), {"id", "username", "role"})


class TestStoreFailure(ApiTestCase):
    def test_store_unavailable_is_500(self) -> None:
        with patch(
            "rolegate.services.credential_store.CredentialStore.find_by_username",
            side_effect=StoreUnavailableError("Credential store unavailable"),
        ):
            resp = self.login("alice")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Internal server error"})

    def test_register_refresh_failure_is_json_500(self) -> None:
        with patch(
            "sqlalchemy.orm.Session.refresh",
            side_effect=OperationalError("SELECT", {}, Exception("connection lost")),
        ):
            resp = self.register("alice")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Internal server error"})


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")

    def test_health_reports_token_settings(self) -> None:
        body = self.client.get("/health").json()
        self.assertEqual(body["token_algorithm"], "HS256")
        self.assertEqual(body["token_lifetime_minutes"], 60)

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Rolegate API"})


if __name__ == "__main__":
    unittest.main()
