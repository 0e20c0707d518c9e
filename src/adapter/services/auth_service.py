"""Auth Service Implementations

The hosted auth provider exposes a small REST API (password grant, logout,
user lookup) authenticated with the project API key.
"""

import logging
from typing import Callable, List, Optional
import httpx
from src.app.services.auth_service import (
    AuthService,
    AuthSession,
    AuthStateCallback,
    AuthUser,
)

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class _CallbackRegistry:
    def __init__(self):
        self._callbacks: List[AuthStateCallback] = []

    def add(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._callbacks.append(callback)

        def unsubscribe():
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, event: str, session: Optional[AuthSession]) -> None:
        for callback in list(self._callbacks):
            try:
                callback(event, session)
            except Exception as e:
                logger.error(f"Auth state callback failed on {event}: {e}")


class HostedAuthService(AuthService):
    """
    AuthService backed by the hosted auth provider

    One instance per request in the API, built from the request's bearer
    token. sign_in() replaces the token with the new session's.
    """

    def __init__(
        self,
        auth_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            auth_url: Base URL of the provider's auth API
            api_key: Project API key sent with every call
            access_token: Bearer token of an existing session
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.auth_url = auth_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.transport = transport
        self._session: Optional[AuthSession] = None
        self._user: Optional[AuthUser] = None
        self._callbacks = _CallbackRegistry()

    def _headers(self, with_token: bool = False) -> dict:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        if with_token and self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            async with self._client() as client:
                response = await client.post(
                    f"{self.auth_url}/token",
                    params={"grant_type": "password"},
                    json={"email": email, "password": password},
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            logger.error(f"Auth provider unreachable during sign-in: {e}")
            raise PermissionError("Authentication service is unavailable") from e

        if response.status_code != 200:
            raise PermissionError(_provider_message(response, "Failed to sign in"))

        data = response.json()
        session = AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            user=AuthUser(id=data["user"]["id"], email=data["user"].get("email")),
        )
        self.access_token = session.access_token
        self._session = session
        self._user = session.user
        logger.info(f"User {session.user.id} signed in")
        self._callbacks.emit(SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        if self.access_token:
            try:
                async with self._client() as client:
                    response = await client.post(
                        f"{self.auth_url}/logout", headers=self._headers(with_token=True)
                    )
            except httpx.HTTPError as e:
                logger.error(f"Auth provider unreachable during sign-out: {e}")
                raise PermissionError("Authentication service is unavailable") from e
            if response.status_code >= 400 and response.status_code != 401:
                raise PermissionError(_provider_message(response, "Failed to sign out"))

        self.access_token = None
        self._session = None
        self._user = None
        self._callbacks.emit(SIGNED_OUT, None)

    async def get_session(self) -> Optional[AuthSession]:
        if self._session:
            return self._session
        user = await self.get_current_user()
        if not user:
            return None
        return AuthSession(access_token=self.access_token, user=user)

    async def get_current_user(self) -> Optional[AuthUser]:
        if self._user:
            return self._user
        if not self.access_token:
            return None

        try:
            async with self._client() as client:
                response = await client.get(
                    f"{self.auth_url}/user", headers=self._headers(with_token=True)
                )
        except httpx.HTTPError as e:
            logger.error(f"Auth provider unreachable while resolving user: {e}")
            return None

        if response.status_code != 200:
            logger.info(f"Auth provider rejected token (status {response.status_code})")
            return None

        data = response.json()
        self._user = AuthUser(id=data["id"], email=data.get("email"))
        return self._user

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        return self._callbacks.add(callback)


class StaticAuthService(AuthService):
    """
    AuthService with one fixed principal

    Used when AUTH_DISABLED is set (local development, tests).
    """

    def __init__(self, user_id: str, email: Optional[str] = None):
        self._default_user = AuthUser(id=user_id, email=email)
        self._user: Optional[AuthUser] = self._default_user
        self._callbacks = _CallbackRegistry()

    async def sign_in(self, email: str, password: str) -> AuthSession:
        self._user = self._default_user
        session = AuthSession(access_token="static", user=self._user)
        self._callbacks.emit(SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        self._user = None
        self._callbacks.emit(SIGNED_OUT, None)

    async def get_session(self) -> Optional[AuthSession]:
        if not self._user:
            return None
        return AuthSession(access_token="static", user=self._user)

    async def get_current_user(self) -> Optional[AuthUser]:
        return self._user

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        return self._callbacks.add(callback)


def _provider_message(response: httpx.Response, default: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return default
    if not isinstance(data, dict):
        return default
    return data.get("error_description") or data.get("msg") or data.get("message") or default
