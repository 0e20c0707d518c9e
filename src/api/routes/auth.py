"""Auth API Routes

Thin pass-through to the hosted auth provider.
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from libs.result import Error
from src.api.error import ClientError
from src.api.schemas.auth_request import SignInRequestSchema
from src.app.services.auth_service import AuthService, AuthSession, AuthUser
from src.app.use_cases.invoices.errors import UNAUTHENTICATED, unauthenticated
from src.depends import get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/sign-in", response_model=AuthSession)
async def sign_in(
    request: SignInRequestSchema,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Exchange email and password for a session. Use `access_token` as the bearer token."""
    try:
        return await auth_service.sign_in(request.email, request.password)
    except PermissionError as e:
        raise ClientError(
            Error(code=UNAUTHENTICATED, message=str(e)),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(auth_service: AuthService = Depends(get_auth_service)):
    try:
        await auth_service.sign_out()
    except PermissionError as e:
        logger.warning(f"Sign-out rejected by auth provider: {e}")
        raise ClientError(
            Error(code=UNAUTHENTICATED, message=str(e)),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/user", response_model=AuthUser)
async def current_user(auth_service: AuthService = Depends(get_auth_service)):
    user = await auth_service.get_current_user()
    if not user:
        raise ClientError(unauthenticated(), status_code=status.HTTP_401_UNAUTHORIZED)
    return user
