"""
HTTP-level tests for the assembled application: health endpoints, the
error envelope and a few routes with their services mocked.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.core.database import get_db
from app.core.rate_limit import reset_memory_store
from app.core.security import create_access_token
from app.main import app
from app.modules.badges.models import BadgeRarity
from app.modules.badges.schemas import BadgeResponse
from app.modules.stats.schemas import HomepageStats


@pytest.fixture
def client(mock_db):
    async def override_get_db():
        yield mock_db

    reset_memory_store()
    app.dependency_overrides[get_db] = override_get_db
    with patch("app.core.redis.redis_client", None):
        yield TestClient(app)
    app.dependency_overrides.clear()
    reset_memory_store()


def _auth(user_id: str, role: str) -> dict[str, str]:
    token = create_access_token(user_id, {"email": f"{role}@test.com", "role": role})
    return {"Authorization": f"Bearer {token}"}


class TestHealthEndpoints:
    """Tests for root-level endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "timestamp" in body
        assert "uptime_seconds" in body
        assert body["environment"]

    def test_root_reports_version(self, client):
        response = client.get("/")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "running"
        assert body["version"] == app.version

    def test_ready_when_database_down(self, client):
        with patch("app.main.check_db_connection", AsyncMock(return_value=False)):
            response = client.get("/ready")
        assert response.status_code == 503
        assert response.json()["database"] is False


class TestErrorEnvelope:
    """Tests for error rendering."""

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_missing_token(self, client):
        response = client.get("/api/modules")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_UNAUTHORIZED"

    def test_student_cannot_read_other_student(self, client):
        response = client.get(
            f"/api/badges/student/{uuid4()}",
            headers=_auth(str(uuid4()), "student"),
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "AUTH_FORBIDDEN"

    def test_body_validation_is_400(self, client):
        response = client.post(
            "/api/badges",
            json={"student_id": "s"},
            headers=_auth(str(uuid4()), "teacher"),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_invalid_module_import_is_400(self, client):
        import_module = AsyncMock()
        with patch("app.modules.vark_modules.service.import_module", import_module):
            response = client.post(
                "/api/modules/import",
                json={"title": "Fractions", "difficulty_level": "expert"},
                headers=_auth(str(uuid4()), "teacher"),
            )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        import_module.assert_not_called()


class TestRoutes:
    """Tests for routes with mocked services."""

    def test_public_homepage_stats(self, client):
        with patch(
            "app.modules.stats.service.get_homepage_stats",
            AsyncMock(return_value=HomepageStats(total_students=3)),
        ):
            response = client.get("/api/stats/homepage")

        assert response.status_code == 200
        assert response.json()["data"]["total_students"] == 3

    def test_existing_badge_returns_200(self, client):
        student_id = str(uuid4())
        now = datetime.now(UTC)
        badge = BadgeResponse(
            id=str(uuid4()),
            student_id=student_id,
            badge_type="first_module",
            badge_name="First Module",
            badge_rarity=BadgeRarity.BRONZE,
            module_id=str(uuid4()),
            earned_date=now,
            created_at=now,
        )
        payload = {"student_id": student_id, "badge_type": "first_module", "module_id": "m"}

        with patch("app.modules.badges.service.award_badge", AsyncMock(return_value=(badge, False))):
            existing = client.post("/api/badges", json=payload, headers=_auth(student_id, "student"))
        with patch("app.modules.badges.service.award_badge", AsyncMock(return_value=(badge, True))):
            created = client.post("/api/badges", json=payload, headers=_auth(student_id, "student"))

        assert existing.status_code == 200
        assert existing.json()["message"] == "Badge already awarded"
        assert created.status_code == 201
