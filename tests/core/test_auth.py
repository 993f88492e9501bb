"""Tests for token verification and request identity."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from app.core.auth import TokenService


class TestTokenService:
    """Tests for TokenService."""

    @pytest.fixture
    def service(self):
        return TokenService(secret_key="test-secret", algorithm="HS256", audience="authenticated")

    def test_round_trip(self, service):
        """A minted token decodes to the same subject and email."""
        user_id = uuid4()
        token = service.create_access_token(user_id, email="a@example.com")

        identity = service.get_identity(token)

        assert identity is not None
        assert identity.id == user_id
        assert identity.email == "a@example.com"

    def test_provider_claims(self, service):
        token = service.create_access_token(uuid4())
        claims = jwt.get_unverified_claims(token)
        assert claims["aud"] == "authenticated"
        assert claims["role"] == "authenticated"
        assert "email" not in claims

    def test_wrong_secret_rejected(self, service):
        token = TokenService(secret_key="other", audience="authenticated").create_access_token(uuid4())
        assert service.decode_token(token) is None

    def test_expired_token_rejected(self, service):
        token = service.create_access_token(uuid4(), expires_delta=timedelta(seconds=-10))
        assert service.decode_token(token) is None

    def test_wrong_audience_rejected(self, service):
        token = TokenService(secret_key="test-secret", audience="anon").create_access_token(uuid4())
        assert service.decode_token(token) is None

    def test_audience_check_can_be_disabled(self):
        lenient = TokenService(secret_key="test-secret", audience=None)
        token = TokenService(secret_key="test-secret", audience="anything").create_access_token(uuid4())
        assert lenient.decode_token(token) is not None

    def test_non_uuid_subject_has_no_identity(self, service):
        token = service.create_access_token("not-a-uuid")
        assert service.decode_token(token) is not None
        assert service.get_identity(token) is None

    def test_garbage_token(self, service):
        assert service.get_identity("not.a.jwt") is None


class TestRequestIdentity:
    """Tests for the bearer dependencies through the API."""

    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client):
        response = await client.get("/api/v1/itineraries")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_invalid_token_is_401(self, client):
        response = await client.get(
            "/api/v1/itineraries", headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token_reads_as_anonymous(self, client):
        """Optional-auth routes treat a bad token like no token."""
        response = await client.get(
            "/api/v1/itineraries/explore", headers={"Authorization": "Bearer nope"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_valid_token(self, client, alice, auth_headers):
        response = await client.get("/api/v1/itineraries", headers=auth_headers(alice))
        assert response.status_code == 200
        assert response.json() == []
