"""Unit tests for Google ID token verification."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from invitely.adapter.error import ProviderError
from invitely.adapter.google.identity import (
    MockGoogleIdentityProvider,
    RealGoogleIdentityProvider,
)

TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"
CLIENT_ID = "client-123.apps.googleusercontent.com"


def _response(status_code: int = 200, claims: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = "error"
    response.json.return_value = claims or {}
    return response


def _claims(**overrides) -> dict:
    claims = {
        "aud": CLIENT_ID,
        "sub": "1234567890",
        "email": "sarah@example.com",
        "email_verified": "true",
        "name": "Sarah",
        "picture": "https://example.com/sarah.png",
    }
    claims.update(overrides)
    return claims


class TestRealGoogleIdentityProvider:
    """Tests for RealGoogleIdentityProvider.verify_id_token()."""

    @pytest.mark.asyncio
    async def test_verified_token(self):
        provider = RealGoogleIdentityProvider(CLIENT_ID, TOKENINFO_URL)

        with patch("httpx.AsyncClient") as mock_client:
            get = AsyncMock(return_value=_response(claims=_claims()))
            mock_client.return_value.__aenter__.return_value.get = get

            identity = await provider.verify_id_token("id-token")

        assert identity.email == "sarah@example.com"
        assert identity.name == "Sarah"
        assert identity.avatar_url == "https://example.com/sarah.png"
        get.assert_called_once_with(
            TOKENINFO_URL, params={"id_token": "id-token"}, timeout=10.0
        )

    @pytest.mark.asyncio
    async def test_rejected_token(self):
        provider = RealGoogleIdentityProvider(CLIENT_ID, TOKENINFO_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(status_code=400)
            )

            with pytest.raises(ProviderError):
                await provider.verify_id_token("id-token")

    @pytest.mark.asyncio
    async def test_audience_mismatch(self):
        provider = RealGoogleIdentityProvider(CLIENT_ID, TOKENINFO_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(claims=_claims(aud="someone-else"))
            )

            with pytest.raises(ProviderError, match="another client"):
                await provider.verify_id_token("id-token")

    @pytest.mark.asyncio
    async def test_unverified_email(self):
        provider = RealGoogleIdentityProvider(CLIENT_ID, TOKENINFO_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=_response(claims=_claims(email_verified="false"))
            )

            with pytest.raises(ProviderError, match="not verified"):
                await provider.verify_id_token("id-token")

    @pytest.mark.asyncio
    async def test_network_error(self):
        provider = RealGoogleIdentityProvider(CLIENT_ID, TOKENINFO_URL)

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.ConnectError("boom")
            )

            with pytest.raises(ProviderError, match="HTTP error"):
                await provider.verify_id_token("id-token")


class TestMockGoogleIdentityProvider:
    """Tests for the mock provider used in tests."""

    @pytest.mark.asyncio
    async def test_valid_mock_token(self):
        identity = await MockGoogleIdentityProvider().verify_id_token(
            "valid:sarah@example.com:Sarah"
        )

        assert identity.email == "sarah@example.com"
        assert identity.name == "Sarah"

    @pytest.mark.asyncio
    async def test_other_tokens_are_rejected(self):
        with pytest.raises(ProviderError):
            await MockGoogleIdentityProvider().verify_id_token("garbage")
