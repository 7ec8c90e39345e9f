"""Tests for the application exception handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.exception_handlers import setup_exception_handlers
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def client():
    app = FastAPI()
    setup_exception_handlers(app)

    errors = {
        "not-found": NotFoundError("missing", code="X_NOT_FOUND"),
        "invalid": ValidationError("bad input", details={"field": "text"}),
        "conflict": ConflictError("not yet"),
        "unauthenticated": AuthenticationError("who are you"),
        "forbidden": AuthorizationError("no"),
        "unavailable": ExternalServiceError("down", service="supabase"),
    }

    @app.get("/raise/{kind}")
    async def raise_error(kind: str):
        if kind == "crash":
            raise RuntimeError("kaboom")
        raise errors[kind]

    @app.get("/typed/{number}")
    async def typed(number: int):
        return {"number": number}

    return TestClient(app, raise_server_exceptions=False)


class TestExceptionHandlers:
    @pytest.mark.parametrize(
        "kind, status",
        [
            ("not-found", 404),
            ("invalid", 422),
            ("conflict", 409),
            ("unauthenticated", 401),
            ("forbidden", 403),
            ("unavailable", 503),
        ],
    )
    def test_status_per_error_class(self, client, kind, status):
        response = client.get(f"/raise/{kind}")
        assert response.status_code == status
        assert set(response.json()) == {"error", "message", "details"}

    def test_body_carries_code_and_details(self, client):
        data = client.get("/raise/invalid").json()
        assert data == {
            "error": "ValidationError",
            "message": "bad input",
            "details": {"field": "text"},
        }

    def test_external_error_names_service(self, client):
        assert client.get("/raise/unavailable").json()["details"]["service"] == "supabase"

    def test_authentication_challenge(self, client):
        response = client.get("/raise/unauthenticated")
        assert response.headers["www-authenticate"] == "Bearer"

    def test_request_validation(self, client):
        response = client.get("/typed/not-a-number")
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "path.number"

    def test_unexpected_error_is_500(self, client):
        response = client.get("/raise/crash")
        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_ERROR"
        assert "kaboom" not in response.text
