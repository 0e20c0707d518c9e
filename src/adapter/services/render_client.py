"""HTTP Render Client Implementation

Posts documents to the rendering service and validates what comes back.
"""

import base64
import binascii
import logging
from typing import Optional
import httpx
from src.app.services.render_client import RenderClient
from src.domain.errors import InvalidArtifactError, RenderServiceError
from src.domain.pdf import ensure_pdf

logger = logging.getLogger(__name__)

BASE64_ENCODING_HEADER = "X-Content-Encoding"


class HttpRenderClient(RenderClient):
    """
    httpx implementation of RenderClient

    Accepts both response variants of the rendering service: raw PDF bytes,
    or a base64 body flagged with X-Content-Encoding: base64.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def render(self, html: str, filename: str) -> bytes:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.endpoint,
                    json={"html": html, "filename": filename},
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            raise RenderServiceError(f"Rendering service unreachable: {e}") from e

        if not response.is_success:
            message, details = _error_from_response(response)
            raise RenderServiceError(message, status_code=response.status_code, details=details)

        content = response.content
        if response.headers.get(BASE64_ENCODING_HEADER, "").lower() == "base64":
            try:
                content = base64.b64decode(content, validate=True)
            except (binascii.Error, ValueError) as e:
                raise InvalidArtifactError(f"Response body is not valid base64: {e}") from e

        logger.debug(f"Rendering service returned {len(content)} bytes for {filename}")
        return ensure_pdf(content)


def _error_from_response(response: httpx.Response):
    """Message and details from an error body, or a status based fallback"""
    fallback = f"PDF generation failed with status {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return fallback, None
    if not isinstance(data, dict):
        return fallback, None

    error = data.get("error")
    if isinstance(error, dict):
        error = error.get("message")
    details = data.get("details")
    if not error:
        return fallback, details
    if details:
        return f"{error}: {details}", details
    return error, None
