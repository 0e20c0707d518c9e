"""Auth Service Interface

Sessions and identities live with an external auth provider. This interface
is the only way the application learns who the current principal is.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """Principal as reported by the auth provider"""

    id: str = Field(..., description="Principal identifier")
    email: Optional[str] = Field(default=None, description="Principal email")


class AuthSession(BaseModel):
    """Active session issued by the auth provider"""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    user: AuthUser


AuthStateCallback = Callable[[str, Optional[AuthSession]], None]


class AuthService(ABC):
    """
    Service interface for the external auth provider

    Events passed to state-change callbacks: SIGNED_IN, SIGNED_OUT.
    """

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthSession:
        """
        Sign in with email and password

        Raises:
            PermissionError: If the provider rejects the credentials
        """
        pass

    @abstractmethod
    async def sign_out(self) -> None:
        pass

    @abstractmethod
    async def get_session(self) -> Optional[AuthSession]:
        pass

    @abstractmethod
    async def get_current_user(self) -> Optional[AuthUser]:
        """
        Resolve the current principal

        Returns:
            AuthUser, or None when no principal can be resolved
        """
        pass

    @abstractmethod
    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        """
        Register a callback for session changes

        Returns:
            Function that unregisters the callback
        """
        pass
