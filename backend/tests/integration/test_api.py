"""
Integration tests for the HTTP API.

The application is built with test settings; the request session is
overridden with the in-memory test session and the structured generator on
app state runs over the scripted text client.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from careercoach.core.database import get_db
from careercoach.core.exceptions import (
    GenerationFailedError,
    MalformedResponseError,
    ModelNotAvailableError,
    NotFoundError,
    PersistenceFailedError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)
from careercoach.main import create_app, status_code_for

from conftest import insight_json


@pytest.fixture
def app(test_settings, db_session, structured):
    application = create_app(test_settings)

    async def _override_get_db():
        yield db_session

    application.dependency_overrides[get_db] = _override_get_db
    application.state.structured_generator = structured
    db_manager = MagicMock()
    db_manager.check_health = AsyncMock(return_value={"status": "healthy", "response_time": 0.001})
    application.state.db_manager = db_manager
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as async_client:
        yield async_client


PROFILE = {
    "industry": "tech-software-development",
    "experience": 4,
    "bio": "Backend developer",
    "skills": ["Python", "FastAPI"],
}


class TestErrorMapping:

    @pytest.mark.parametrize("error,status_code", [
        (UnauthorizedError(), 401),
        (NotFoundError(), 404),
        (ValidationError(), 400),
        (PersistenceFailedError(), 500),
        (GenerationFailedError(), 503),
        (MalformedResponseError(), 503),
        (ModelNotAvailableError(), 502),
        (RateLimitedError(), 502),
    ])
    def test_status_codes(self, error, status_code):
        assert status_code_for(error) == status_code


class TestAuthentication:
    """Missing or invalid identity is rejected before any work."""

    async def test_dashboard_without_token(self, client, text_client):
        response = await client.get("/api/v1/dashboard/insights")

        assert response.status_code == 401
        error = response.json()["error"]
        assert error["type"] == "UnauthorizedError"
        assert error["path"] == "/api/v1/dashboard/insights"
        assert text_client.call_count == 0

    async def test_invalid_token(self, client):
        response = await client.get(
            "/api/v1/cover-letters", headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.status_code == 401

    async def test_onboarding_status_without_token(self, client):
        response = await client.get("/api/v1/users/onboarding-status")

        assert response.status_code == 200
        assert response.json() == {"is_onboarded": False}


class TestOnboardingAndDashboard:
    """Test suite for the profile and insight endpoints."""

    async def test_dashboard_unknown_user(self, client, auth_headers):
        response = await client.get("/api/v1/dashboard/insights", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["type"] == "NotFoundError"

    async def test_profile_then_insights(self, client, auth_headers, text_client):
        text_client.queue(insight_json(demand_level="High", market_outlook="positive"))

        response = await client.put("/api/v1/users/profile", json=PROFILE, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["industry"] == "tech-software-development"
        assert body["user"]["skills"] == ["Python", "FastAPI"]
        assert body["industry_insight"]["demand_level"] == "HIGH"
        assert body["industry_insight"]["market_outlook"] == "POSITIVE"

        response = await client.get("/api/v1/dashboard/insights", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["industry"] == "tech-software-development"
        assert text_client.call_count == 1

        response = await client.get("/api/v1/users/onboarding-status", headers=auth_headers)
        assert response.json() == {"is_onboarded": True}

    async def test_profile_generation_failure_is_503(self, client, auth_headers, text_client):
        text_client.queue(ModelNotAvailableError("unknown model"))

        response = await client.put("/api/v1/users/profile", json=PROFILE, headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["error"]["type"] == "GenerationFailedError"

    async def test_profile_validation_error(self, client, auth_headers):
        response = await client.put(
            "/api/v1/users/profile", json={"industry": "", "experience": -1}, headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "ValidationError"


class TestCoverLetters:

    async def test_create_get_list_delete(self, client, auth_headers, text_client):
        text_client.queue(insight_json())
        await client.put("/api/v1/users/profile", json=PROFILE, headers=auth_headers)
        text_client.queue(json.dumps({"coverLetter": "Dear Acme team,"}))

        response = await client.post(
            "/api/v1/cover-letters",
            json={"job_title": "Engineer", "company_name": "Acme", "job_description": "APIs"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        letter = response.json()
        assert letter["content"] == "Dear Acme team,"
        assert letter["status"] == "completed"

        response = await client.get(f"/api/v1/cover-letters/{letter['id']}", headers=auth_headers)
        assert response.status_code == 200

        response = await client.get("/api/v1/cover-letters", headers=auth_headers)
        assert [item["id"] for item in response.json()] == [letter["id"]]

        response = await client.delete(f"/api/v1/cover-letters/{letter['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/cover-letters/{letter['id']}", headers=auth_headers)
        assert response.status_code == 404


class TestInterview:

    async def test_quiz_placeholder_and_assessment(self, client, auth_headers, text_client):
        text_client.queue(insight_json())
        await client.put("/api/v1/users/profile", json=PROFILE, headers=auth_headers)
        text_client.queue("not json")

        response = await client.post("/api/v1/interview/quiz", headers=auth_headers)

        assert response.status_code == 200
        questions = response.json()
        assert len(questions) == 1

        text_client.queue(json.dumps({"tip": "Revisit the basics."}))
        response = await client.post(
            "/api/v1/interview/assessments",
            json={"questions": questions, "answers": ["B"], "score": 0},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["improvement_tip"] == "Revisit the basics."

        response = await client.get("/api/v1/interview/assessments", headers=auth_headers)
        assert len(response.json()) == 1


class TestHealth:

    async def test_health(self, client):
        for path in ("/health", "/api/v1/health"):
            response = await client.get(path)

            assert response.status_code == 200
            body = response.json()
            assert body["status"] == "healthy"
            assert body["services"]["llm"] == "configured"
            assert body["services"]["scheduler"] == "stopped"
