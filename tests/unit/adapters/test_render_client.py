"""Unit tests for HttpRenderClient"""

import base64
import json

import httpx
import pytest

from src.adapter.services.render_client import HttpRenderClient
from src.domain.errors import InvalidArtifactError, RenderServiceError

ENDPOINT = "http://render.test/api/generate-pdf"
PDF = b"%PDF-1.7\nfake body"


def _client(handler) -> HttpRenderClient:
    return HttpRenderClient(ENDPOINT, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestHttpRenderClient:
    async def test_posts_html_and_filename(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, content=PDF, headers={"Content-Type": "application/pdf"})

        content = await _client(handler).render("<html></html>", "Invoice-1.pdf")

        assert content == PDF
        assert seen["url"] == ENDPOINT
        assert seen["body"] == {"html": "<html></html>", "filename": "Invoice-1.pdf"}

    async def test_base64_variant_is_decoded(self):
        def handler(request):
            return httpx.Response(
                200,
                content=base64.b64encode(PDF),
                headers={"Content-Type": "application/pdf", "X-Content-Encoding": "base64"},
            )

        assert await _client(handler).render("<p/>", "a.pdf") == PDF

    async def test_html_with_success_status_is_rejected(self):
        """Given: A 200 response whose body is an HTML error page"""
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(InvalidArtifactError):
            await _client(handler).render("<p/>", "a.pdf")

    async def test_empty_body_is_rejected(self):
        def handler(request):
            return httpx.Response(200, content=b"")

        with pytest.raises(InvalidArtifactError, match="empty"):
            await _client(handler).render("<p/>", "a.pdf")

    async def test_invalid_base64_is_rejected(self):
        def handler(request):
            return httpx.Response(200, content=b"%%%not-base64", headers={"X-Content-Encoding": "base64"})

        with pytest.raises(InvalidArtifactError):
            await _client(handler).render("<p/>", "a.pdf")

    async def test_error_body_message(self):
        def handler(request):
            return httpx.Response(
                500, json={"error": "Failed to generate PDF", "details": "browser crashed"}
            )

        with pytest.raises(RenderServiceError) as exc_info:
            await _client(handler).render("<p/>", "a.pdf")

        assert str(exc_info.value) == "Failed to generate PDF: browser crashed"
        assert exc_info.value.status_code == 500
        assert exc_info.value.details == "browser crashed"

    async def test_error_without_json_body(self):
        def handler(request):
            return httpx.Response(502, content=b"Bad Gateway")

        with pytest.raises(RenderServiceError, match="PDF generation failed with status 502"):
            await _client(handler).render("<p/>", "a.pdf")

    async def test_unreachable_service(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RenderServiceError, match="unreachable"):
            await _client(handler).render("<p/>", "a.pdf")
