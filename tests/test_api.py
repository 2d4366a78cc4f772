"""API tests: signup/login, case submission and lookup, config, health, and store error translation."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from intake.core.config import Settings
from intake.main import create_app

SIGNUP = {
    "email": "test@example.com",
    "password": "password123",
    "name": "Test User",
    "phone": "+91 98765 43210",
}

CASE = {
    "companyName": "Acme Retail",
    "domain": "E-commerce",
    "incidentDate": "2025-01-01",
    "description": "Paid for a phone that never shipped.",
    "lossTypes": ["money", "time"],
    "monetaryLoss": "15000",
    "contactName": "Test User",
    "contactEmail": "test@example.com",
    "contactPhone": "9876543210",
}


class ApiTestCase(unittest.TestCase):
    """Base: an app on JSON file storage in a temp dir."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.data_dir = Path(self._tmp.name)
        settings = Settings(
            _env_file=None,
            DATA_DIR=str(self.data_dir),
            VERCEL=None,
            SUPABASE_URL=None,
            SUPABASE_SERVICE_ROLE_KEY=None,
        )
        self.client = TestClient(create_app(settings))

    def signup(self, **overrides: str) -> dict:
        resp = self.client.post("/api/auth/signup", json={**SIGNUP, **overrides})
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def read_collection(self, name: str) -> list[dict]:
        return json.loads((self.data_dir / f"{name}.json").read_text(encoding="utf-8"))


class TestSignup(ApiTestCase):
    def test_creates_user_with_hashed_password(self) -> None:
        body = self.signup()
        self.assertTrue(body["success"])
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["email"], SIGNUP["email"])
        self.assertNotIn("password", body["user"])

        (stored,) = self.read_collection("users")
        self.assertEqual(stored["id"], body["user"]["id"])
        self.assertNotEqual(stored["password"], SIGNUP["password"])
        self.assertIn("createdAt", stored)

    def test_duplicate_email_conflict(self) -> None:
        self.signup()
        resp = self.client.post("/api/auth/signup", json=SIGNUP)
        self.assertEqual(resp.status_code, 409)

    def test_invalid_email(self) -> None:
        resp = self.client.post("/api/auth/signup", json={**SIGNUP, "email": "invalid"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("email", resp.json()["detail"].lower())

    def test_invalid_phone(self) -> None:
        resp = self.client.post("/api/auth/signup", json={**SIGNUP, "phone": "12345"})
        self.assertEqual(resp.status_code, 400)

    def test_short_password(self) -> None:
        resp = self.client.post("/api/auth/signup", json={**SIGNUP, "password": "12345"})
        self.assertEqual(resp.status_code, 400)

    def test_missing_field(self) -> None:
        payload = {k: v for k, v in SIGNUP.items() if k != "phone"}
        resp = self.client.post("/api/auth/signup", json=payload)
        self.assertEqual(resp.status_code, 422)


class TestLogin(ApiTestCase):
    def test_success(self) -> None:
        user_id = self.signup()["user"]["id"]
        resp = self.client.post(
            "/api/auth/login",
            json={"email": SIGNUP["email"], "password": SIGNUP["password"]},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["id"], user_id)

    def test_wrong_password(self) -> None:
        self.signup()
        resp = self.client.post(
            "/api/auth/login", json={"email": SIGNUP["email"], "password": "wrongpass"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_unknown_email(self) -> None:
        resp = self.client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "password123"}
        )
        self.assertEqual(resp.status_code, 401)


class TestCases(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.token = self.signup()["token"]

    def post_case(self, token: str | None = None, **overrides: object) -> dict:
        resp = self.client.post(
            "/api/cases",
            json={**CASE, **overrides},
            headers=self.auth_headers(token or self.token),
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["case"]

    def test_requires_auth(self) -> None:
        self.assertEqual(self.client.get("/api/cases").status_code, 401)
        resp = self.client.get("/api/cases", headers=self.auth_headers("invalid-token"))
        self.assertEqual(resp.status_code, 401)

    def test_submit_creates_case_and_system_update(self) -> None:
        case = self.post_case()
        self.assertEqual(case["status"], "submitted")
        self.assertEqual(case["monetaryLoss"], 15000.0)
        self.assertEqual(case["lossTypes"], ["money", "time"])

        (stored,) = self.read_collection("cases")
        self.assertEqual(stored["id"], case["id"])
        (update,) = self.read_collection("updates")
        self.assertEqual(update["caseId"], case["id"])
        self.assertEqual(update["createdBy"], "system")

    def test_zero_monetary_loss_is_omitted(self) -> None:
        case = self.post_case(monetaryLoss="0")
        self.assertIsNone(case["monetaryLoss"])

    def test_empty_loss_types_rejected(self) -> None:
        resp = self.client.post(
            "/api/cases", json={**CASE, "lossTypes": []}, headers=self.auth_headers(self.token)
        )
        self.assertEqual(resp.status_code, 422)

    def test_list_only_own_cases_newest_first(self) -> None:
        first = self.post_case(companyName="First Co")
        second = self.post_case(companyName="Second Co")
        other_token = self.signup(email="other@example.com")["token"]
        self.post_case(token=other_token, companyName="Other Co")

        resp = self.client.get("/api/cases", headers=self.auth_headers(self.token))

        self.assertEqual(resp.status_code, 200)
        ids = [c["id"] for c in resp.json()["cases"]]
        self.assertEqual(set(ids), {first["id"], second["id"]})
        created = [c["createdAt"] for c in resp.json()["cases"]]
        self.assertEqual(created, sorted(created, reverse=True))

    def test_get_case_with_updates(self) -> None:
        case = self.post_case()
        resp = self.client.get(f"/api/cases/{case['id']}", headers=self.auth_headers(self.token))
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["case"]["id"], case["id"])
        self.assertEqual(len(body["updates"]), 1)
        self.assertIn("submitted successfully", body["updates"][0]["message"])

    def test_get_unknown_case(self) -> None:
        resp = self.client.get("/api/cases/missing", headers=self.auth_headers(self.token))
        self.assertEqual(resp.status_code, 404)

    def test_get_other_users_case_forbidden(self) -> None:
        case = self.post_case()
        other_token = self.signup(email="other@example.com")["token"]
        resp = self.client.get(f"/api/cases/{case['id']}", headers=self.auth_headers(other_token))
        self.assertEqual(resp.status_code, 403)


class TestConfig(ApiTestCase):
    def test_default_when_empty(self) -> None:
        resp = self.client.get("/api/config")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["channelUrl"], "https://www.youtube.com/@HonestCustomerExperienceIndia")
        self.assertEqual(body["featuredVideoId"], "")
        self.assertTrue(body["lastUpdated"])

    def test_first_stored_config(self) -> None:
        rows = [
            {
                "id": "cfg-1",
                "channelUrl": "https://www.youtube.com/@first",
                "featuredVideoId": "abc123",
                "lastUpdated": "2025-03-01T00:00:00.000Z",
            },
            {
                "id": "cfg-2",
                "channelUrl": "https://www.youtube.com/@second",
                "featuredVideoId": "",
                "lastUpdated": "2025-03-02T00:00:00.000Z",
            },
        ]
        (self.data_dir / "config.json").write_text(json.dumps(rows), encoding="utf-8")
        body = self.client.get("/api/config").json()
        self.assertEqual(body["id"], "cfg-1")
        self.assertEqual(body["featuredVideoId"], "abc123")


class TestHealth(ApiTestCase):
    def test_file_backend(self) -> None:
        resp = self.client.get("/api/health/")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["storage_backend"], "file")
        self.assertEqual(body["storage"], "available")

    def test_unusable_data_dir_reports_unavailable(self) -> None:
        blocker = self.data_dir / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        settings = Settings(
            _env_file=None,
            DATA_DIR=str(blocker / "data"),
            VERCEL=None,
            SUPABASE_URL=None,
            SUPABASE_SERVICE_ROLE_KEY=None,
        )
        body = TestClient(create_app(settings)).get("/api/health/").json()
        self.assertEqual(body["storage_backend"], "file")
        self.assertEqual(body["storage"], "unavailable")


class TestFileWriteFailure(ApiTestCase):
    """A failed document write becomes a generic 500 and leaves the stored data alone."""

    def test_signup_returns_500(self) -> None:
        self.signup()
        before = self.read_collection("users")
        with patch("intake.storage.file_store.os.replace", side_effect=OSError("disk full")):
            resp = self.client.post(
                "/api/auth/signup", json={**SIGNUP, "email": "other@example.com"}
            )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})
        self.assertEqual(self.read_collection("users"), before)
        self.assertFalse(list(self.data_dir.glob("*.tmp")))
        self.assertFalse(list(self.data_dir.glob(".*.tmp")))


class TestInvalidStoredUser(ApiTestCase):
    """A stored user row the model rejects survives later signups."""

    def test_signup_keeps_invalid_row(self) -> None:
        self.signup()
        users = self.read_collection("users")
        broken = {k: v for k, v in users[0].items() if k != "phone"}
        broken["id"] = "2"
        broken["email"] = "legacy@example.com"
        (self.data_dir / "users.json").write_text(
            json.dumps(users + [broken]), encoding="utf-8"
        )

        self.signup(email="new@example.com")

        emails = [row["email"] for row in self.read_collection("users")]
        self.assertEqual(emails, ["test@example.com", "legacy@example.com", "new@example.com"])


def _failing_remote_client(mock_client_class: MagicMock) -> None:
    resp = MagicMock()
    resp.status_code = 503
    resp.is_success = False
    resp.text = "upstream unavailable"
    mock_instance = MagicMock()
    mock_instance.request = AsyncMock(return_value=resp)
    mock_client_class.return_value.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_client_class.return_value.__aexit__ = AsyncMock(return_value=None)


class TestRemoteBackendFailures(unittest.TestCase):
    """Remote API failures surface as 500 (routes) or 'unavailable' (health), never as empty data."""

    def setUp(self) -> None:
        settings = Settings(
            _env_file=None,
            SUPABASE_URL="https://proj.supabase.co",
            SUPABASE_SERVICE_ROLE_KEY="service-key",
        )
        self.client = TestClient(create_app(settings))

    @patch("intake.storage.remote_store.httpx.AsyncClient")
    def test_config_returns_500(self, mock_client_class: MagicMock) -> None:
        _failing_remote_client(mock_client_class)
        resp = self.client.get("/api/config")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})

    @patch("intake.storage.remote_store.httpx.AsyncClient")
    def test_health_reports_unavailable(self, mock_client_class: MagicMock) -> None:
        _failing_remote_client(mock_client_class)
        body = self.client.get("/api/health/").json()
        self.assertEqual(body["storage_backend"], "remote")
        self.assertEqual(body["storage"], "unavailable")


if __name__ == "__main__":
    unittest.main()
