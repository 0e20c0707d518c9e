"""Integration tests for the auth endpoints"""

import httpx
import pytest

from src.adapter.services.auth_service import HostedAuthService
from src.depends import get_auth_service


def _unreachable_provider(access_token=None) -> HostedAuthService:
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    return HostedAuthService(
        "http://auth.test/auth/v1",
        api_key="project-key",
        access_token=access_token,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
class TestAuthAPI:
    async def test_sign_in_with_static_principal(self, client):
        response = await client.post(
            "/auth/sign-in", json={"email": "owner@acme.example", "password": "secret"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == "user-integration"

    async def test_sign_in_with_unreachable_provider_returns_401(self, app, client):
        app.dependency_overrides[get_auth_service] = lambda: _unreachable_provider()

        response = await client.post(
            "/auth/sign-in", json={"email": "owner@acme.example", "password": "secret"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == {
            "code": "UNAUTHENTICATED",
            "message": "Authentication service is unavailable",
        }

    async def test_sign_out_with_unreachable_provider_returns_401(self, app, client):
        app.dependency_overrides[get_auth_service] = lambda: _unreachable_provider("token-abc")

        response = await client.post("/auth/sign-out")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"
