"""Tests for error messages and the {"error": ...} handlers."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.exceptions import (
    Forbidden,
    InternalError,
    NotFoundError,
    ValidationError,
    first_error_message,
    register_exception_handlers,
)
from app.domains.itinerary.schemas import itinerary_payload_adapter


def _errors(data):
    with pytest.raises(PydanticValidationError) as exc_info:
        itinerary_payload_adapter.validate_python(data)
    return exc_info.value.errors()


class TestFirstErrorMessage:
    """Tests for first_error_message."""

    def test_own_validator_message_is_bare(self):
        assert first_error_message(_errors({"title": "  "})) == "Title is required"

    def test_nested_validator_message_is_bare(self):
        errors = _errors({"title": "Trip", "days": [{"activities": [{"title": ""}]}]})
        assert first_error_message(errors) == "Activity title is required"

    def test_type_error_is_prefixed_with_field(self):
        message = first_error_message(_errors({"title": "Trip", "budgetLevel": "high"}))
        assert message.startswith("budgetLevel: ")

    def test_unknown_type(self):
        assert first_error_message(_errors({"title": "Trip", "type": "cruise"})) == (
            "Type must be 'daily' or 'guide'"
        )

    def test_empty(self):
        assert first_error_message([]) == "Invalid request"


class Echo(BaseModel):
    count: int


@pytest.fixture
def error_app():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Trip not found")

    @app.get("/forbidden")
    async def forbidden():
        raise Forbidden()

    @app.get("/invalid")
    async def invalid():
        raise ValidationError("Missing required parameters")

    @app.get("/broken")
    async def broken():
        raise InternalError()

    @app.post("/echo")
    async def echo(body: Echo):
        return body

    return app


class TestExceptionHandlers:
    """Every error leaves as {"error": message}."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, status_code, message",
        [
            ("/missing", 404, "Trip not found"),
            ("/forbidden", 403, "Forbidden"),
            ("/invalid", 400, "Missing required parameters"),
            ("/broken", 500, "Internal server error"),
            ("/no-such-route", 404, "Not Found"),
        ],
    )
    async def test_error_shape(self, error_app, path, status_code, message):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as c:
            response = await c.get(path)
        assert response.status_code == status_code
        assert response.json() == {"error": message}

    @pytest.mark.asyncio
    async def test_request_validation_is_400(self, error_app):
        async with AsyncClient(transport=ASGITransport(app=error_app), base_url="http://test") as c:
            response = await c.post("/echo", json={"count": "many"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("count: ")
