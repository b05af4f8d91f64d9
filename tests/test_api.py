# -*- coding: utf-8 -*-

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock
from uuid import uuid4

from fastapi.testclient import TestClient


class ApiTestCase(unittest.TestCase):
    rate_limit_max = 10_000

    @classmethod
    def setUpClass(cls) -> None:
        cls._tmp = Path(tempfile.mkdtemp(prefix="peptide-test-"))
        data_root = cls._tmp / "data"
        os.environ["PEPTIDE_DATA_ROOT"] = str(data_root)
        os.environ["PEPTIDE_DB_PATH"] = str(data_root / "peptide.db")
        os.environ["PEPTIDE_ANALYTICS_FILE"] = str(data_root / "analytics.json")
        os.environ["PEPTIDE_LOG_DIR"] = str(cls._tmp / "logs")
        os.environ["PEPTIDE_JWT_SECRET"] = "test-secret"
        os.environ["PEPTIDE_ENV"] = "production"
        os.environ["PEPTIDE_RATE_LIMIT_MAX"] = str(cls.rate_limit_max)

        # Ensure settings/app reflect the env vars above.
        for name in list(sys.modules.keys()):
            if name == "peptide_api" or name.startswith("peptide_api."):
                sys.modules.pop(name, None)

        from peptide_api.api import app  # noqa: WPS433 (import inside test for env control)

        cls.app = app
        cls.client = TestClient(app)

    @classmethod
    def tearDownClass(cls) -> None:
        try:
            cls.client.close()
        except Exception:
            pass
        shutil.rmtree(cls._tmp, ignore_errors=True)

    def _today(self) -> dict:
        resp = self.client.get("/api/analytics")
        self.assertEqual(resp.status_code, 200)
        return resp.json()


class TestSuggestionsEndpoints(ApiTestCase):
    def test_suggestions_are_recorded_in_analytics(self) -> None:
        before = self._today()

        resp = self.client.post("/api/suggestions", json={"age": 30, "goal": "sleep"})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertTrue(body["requestId"])
        self.assertEqual(body["meta"]["ageGroup"], "young")
        self.assertEqual(body["meta"]["goalCategory"], "sleep")
        self.assertTrue(1 <= len(body["suggestions"]) <= 3)
        self.assertIn("personalizedNote", body["suggestions"][0])

        after = self._today()
        self.assertEqual(after["data"]["totalRequests"], before["data"]["totalRequests"] + 1)
        self.assertEqual(after["data"]["successfulRequests"], before["data"]["successfulRequests"] + 1)
        self.assertEqual(
            after["data"]["goalSelections"].get("sleep", 0),
            before["data"]["goalSelections"].get("sleep", 0) + 1,
        )
        self.assertEqual(after["currentCounters"]["requests"], before["currentCounters"]["requests"] + 1)
        self.assertEqual(after["data"]["uniqueCallers"], ["testclient"])

    def test_unknown_goal_is_a_recorded_failure(self) -> None:
        before = self._today()

        resp = self.client.post("/api/suggestions", json={"age": 30, "goal": "telepathy"})
        self.assertEqual(resp.status_code, 400)
        detail = resp.json()["detail"]
        self.assertEqual(detail["error"], "Unknown health goal")
        self.assertTrue(detail["requestId"])

        after = self._today()
        self.assertEqual(after["data"]["failedRequests"], before["data"]["failedRequests"] + 1)
        self.assertEqual(after["currentCounters"]["errors"], before["currentCounters"]["errors"] + 1)
        self.assertEqual(after["data"]["errors"][-1]["requestId"], detail["requestId"])
        self.assertNotIn("telepathy", after["data"]["goalSelections"])
        self.assertNotIn("telepathy", after["currentCounters"]["goalSelections"])
        popular = self.client.get("/api/analytics/summary?days=1").json()["summary"]["popularGoals"]
        self.assertNotIn("telepathy", [g["goal"] for g in popular])

    def test_ledger_write_failure_is_not_counted_twice(self) -> None:
        from peptide_api.analytics.storage import LedgerWriteError  # noqa: WPS433 (module reloaded per class)

        before = self._today()

        store = self.app.state.analytics.store
        with mock.patch.object(store, "save", side_effect=LedgerWriteError("disk full")):
            resp = self.client.post("/api/suggestions", json={"age": 30, "goal": "energy"})

        self.assertEqual(resp.status_code, 500)
        detail = resp.json()["detail"]
        self.assertEqual(detail["error"], "Failed to generate suggestions")
        self.assertTrue(detail["requestId"])

        after = self._today()
        self.assertEqual(after["currentCounters"]["errors"], before["currentCounters"]["errors"])
        self.assertLessEqual(after["currentCounters"]["requests"] - before["currentCounters"]["requests"], 1)
        self.assertEqual(after["data"]["totalRequests"], before["data"]["totalRequests"])
        self.assertEqual(after["data"]["failedRequests"], before["data"]["failedRequests"])

    def test_invalid_body(self) -> None:
        resp = self.client.post("/api/suggestions", json={"age": 10, "goal": "sleep"})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post("/api/suggestions", json={"age": 30})
        self.assertEqual(resp.status_code, 422)

    def test_goals(self) -> None:
        resp = self.client.get("/api/suggestions/goals")
        self.assertEqual(resp.status_code, 200)
        values = [g["value"] for g in resp.json()["goals"]]
        self.assertEqual(values, ["energy", "sleep", "focus", "recovery", "longevity"])

    def test_export_pdf(self) -> None:
        resp = self.client.post("/api/suggestions/export-pdf", json={"age": 45, "goal": "focus"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertIn("peptide-suggestions-focus.pdf", resp.headers["content-disposition"])
        self.assertTrue(resp.content.startswith(b"%PDF"))

        resp = self.client.post("/api/suggestions/export-pdf", json={"age": 45, "goal": "telepathy"})
        self.assertEqual(resp.status_code, 400)


class TestAnalyticsEndpoints(ApiTestCase):
    def test_day_without_data(self) -> None:
        resp = self.client.get("/api/analytics/day/1999-01-01")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["date"], "1999-01-01")
        self.assertEqual(body["data"]["totalRequests"], 0)
        self.assertEqual(body["data"]["uniqueCallers"], [])
        self.assertIsNone(body["data"]["firstRequestAt"])

    def test_bad_dates(self) -> None:
        self.assertEqual(self.client.get("/api/analytics/day/2026-13-01").status_code, 400)
        self.assertEqual(self.client.get("/api/analytics/range?start=bad&end=2026-10-19").status_code, 400)
        self.assertEqual(self.client.get("/api/analytics/range?start=2026-10-19").status_code, 422)

    def test_range(self) -> None:
        resp = self.client.get("/api/analytics/range?start=2026-10-19&end=2026-10-18")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {})

        resp = self.client.get("/api/analytics/range?start=2024-02-28&end=2024-03-01")
        self.assertEqual(list(resp.json()), ["2024-02-28", "2024-02-29", "2024-03-01"])

    def test_summary(self) -> None:
        self.client.post("/api/suggestions", json={"age": 60, "goal": "longevity"})

        resp = self.client.get("/api/analytics/summary?days=3")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["period"], "3 days")
        self.assertEqual(len(body["dailyData"]), 4)
        self.assertGreaterEqual(body["summary"]["totalRequests"], 1)
        self.assertIn("longevity", [g["goal"] for g in body["summary"]["popularGoals"]])

        self.assertEqual(self.client.get("/api/analytics/summary").json()["period"], "7 days")
        self.assertEqual(self.client.get("/api/analytics/summary?days=0").status_code, 422)


class TestAccounts(ApiTestCase):
    def _register(self, client: TestClient, password: str = "password123") -> dict:
        email = f"user-{uuid4().hex[:8]}@example.com"
        resp = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "first_name": "Ada", "last_name": "L"},
        )
        self.assertEqual(resp.status_code, 200)
        return {"email": email, "password": password, **resp.json()}

    def test_register_login_and_profile(self) -> None:
        client = TestClient(self.app)
        account = self._register(client)

        resp = client.post("/api/auth/register", json={"email": account["email"], "password": "password123"})
        self.assertEqual(resp.status_code, 400)

        resp = client.post("/api/auth/login", json={"email": account["email"], "password": "wrong-pass"})
        self.assertEqual(resp.status_code, 401)

        resp = client.post("/api/auth/login", json={"email": account["email"], "password": account["password"]})
        self.assertEqual(resp.status_code, 200)

        resp = client.get("/api/auth/me")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], account["email"])
        self.assertEqual(resp.json()["first_name"], "Ada")

        resp = client.patch("/api/auth/me", json={"first_name": "Grace"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["first_name"], "Grace")
        self.assertEqual(resp.json()["last_name"], "L")
        client.close()

    def test_auth_required(self) -> None:
        anon = TestClient(self.app)
        self.assertEqual(anon.get("/api/auth/me").status_code, 401)
        self.assertEqual(anon.get("/api/history").status_code, 401)
        resp = anon.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})
        self.assertEqual(resp.status_code, 401)
        anon.close()

    def test_change_password(self) -> None:
        client = TestClient(self.app)
        account = self._register(client)

        resp = client.post(
            "/api/auth/change-password",
            json={"current_password": "nope-nope", "new_password": "newpassword1"},
        )
        self.assertEqual(resp.status_code, 400)

        resp = client.post(
            "/api/auth/change-password",
            json={"current_password": account["password"], "new_password": "newpassword1"},
        )
        self.assertEqual(resp.status_code, 200)

        login = {"email": account["email"], "password": account["password"]}
        self.assertEqual(client.post("/api/auth/login", json=login).status_code, 401)
        login["password"] = "newpassword1"
        self.assertEqual(client.post("/api/auth/login", json=login).status_code, 200)
        client.close()

    def test_history_saved_for_signed_in_user(self) -> None:
        client = TestClient(self.app)
        self._register(client)

        self.assertEqual(client.get("/api/history").json()["items"], [])
        resp = client.post("/api/suggestions", json={"age": 40, "goal": "recovery"})
        self.assertEqual(resp.status_code, 200)

        items = client.get("/api/history").json()["items"]
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["health_goal"], "recovery")
        self.assertEqual(items[0]["age"], 40)
        self.assertEqual(
            [s["name"] for s in items[0]["suggestions"]],
            [s["name"] for s in resp.json()["suggestions"]],
        )
        client.close()

    def test_delete_account(self) -> None:
        client = TestClient(self.app)
        account = self._register(client)
        client.post("/api/suggestions", json={"age": 40, "goal": "energy"})
        headers = {"Authorization": f"Bearer {account['token']}"}

        resp = client.delete("/api/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 200)

        self.assertEqual(client.get("/api/auth/me", headers=headers).status_code, 401)
        resp = client.post("/api/auth/login", json={"email": account["email"], "password": account["password"]})
        self.assertEqual(resp.status_code, 401)
        client.close()


class TestAppEndpoints(ApiTestCase):
    def test_health(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["version"], "1.0.0")
        self.assertTrue(body["timestamp"].endswith("Z"))

    def test_unknown_endpoint(self) -> None:
        resp = self.client.get("/api/does-not-exist")
        self.assertEqual(resp.status_code, 404)
        body = resp.json()
        self.assertEqual(body["error"], "Endpoint not found")
        self.assertIn("/api/does-not-exist", body["message"])

    def test_unhandled_error(self) -> None:
        client = TestClient(self.app, raise_server_exceptions=False)
        with mock.patch.object(self.app.state.analytics, "get_summary", side_effect=RuntimeError("boom")):
            resp = client.get("/api/analytics/summary")
        client.close()

        self.assertEqual(resp.status_code, 500)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["message"], "Internal Server Error")
        self.assertTrue(body["error"]["errorId"])
        self.assertNotIn("stack", body["error"])

    def test_security_headers(self) -> None:
        resp = self.client.get("/health")
        self.assertEqual(resp.headers["x-content-type-options"], "nosniff")
        self.assertEqual(resp.headers["x-frame-options"], "SAMEORIGIN")
        self.assertEqual(resp.headers["cross-origin-resource-policy"], "cross-origin")
        self.assertIn("max-age=", resp.headers["strict-transport-security"])


class TestRateLimit(ApiTestCase):
    rate_limit_max = 3

    def test_429_after_limit(self) -> None:
        remaining = []
        for _ in range(3):
            resp = self.client.get("/health")
            self.assertEqual(resp.status_code, 200)
            remaining.append(resp.headers["ratelimit-remaining"])
        self.assertEqual(remaining, ["2", "1", "0"])

        resp = self.client.post("/api/suggestions", json={"age": 30, "goal": "sleep"})
        self.assertEqual(resp.status_code, 429)
        self.assertEqual(resp.json(), {"error": "Too many requests from this IP, please try again later."})
        self.assertEqual(resp.headers["ratelimit-limit"], "3")
        self.assertGreater(int(resp.headers["retry-after"]), 0)
        self.assertEqual(resp.headers["x-content-type-options"], "nosniff")

        # Rejected requests never reach the route, so nothing is recorded.
        self.assertEqual(self.app.state.analytics.counters.requests, 0)


if __name__ == "__main__":
    unittest.main()
