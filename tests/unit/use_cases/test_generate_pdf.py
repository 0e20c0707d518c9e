"""Unit tests for GeneratePdf use case"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.dtos import GeneratePdfCommandDTO
from src.app.use_cases.invoices.generate_pdf import GeneratePdf
from src.domain.errors import RenderFailureError, RenderTimeoutError


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.render_pdf = AsyncMock(return_value=b"%PDF-1.7 test")
    return service


@pytest.mark.asyncio
class TestGeneratePdf:
    async def test_render_success(self, mock_pdf_service):
        use_case = GeneratePdf(mock_pdf_service)

        result = await use_case.execute(
            GeneratePdfCommandDTO(html="<html><body>Hi</body></html>", filename="Invoice-1.pdf")
        )

        assert result.is_ok()
        assert result.value.filename == "Invoice-1.pdf"
        assert result.value.content.startswith(b"%PDF")

    async def test_default_filename(self, mock_pdf_service):
        result = await GeneratePdf(mock_pdf_service).execute(GeneratePdfCommandDTO(html="<p>x</p>"))

        assert result.value.filename == "invoice.pdf"

    @pytest.mark.parametrize("html", [None, ""])
    async def test_missing_html(self, mock_pdf_service, html):
        result = await GeneratePdf(mock_pdf_service).execute(GeneratePdfCommandDTO(html=html))

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.message == "HTML content is required"
        mock_pdf_service.render_pdf.assert_not_called()

    async def test_timeout(self, mock_pdf_service):
        mock_pdf_service.render_pdf = AsyncMock(side_effect=RenderTimeoutError("30000 ms"))

        result = await GeneratePdf(mock_pdf_service).execute(GeneratePdfCommandDTO(html="<p>x</p>"))

        assert result.error.code == "RENDER_TIMEOUT"
        assert result.error.message == "Failed to generate PDF"
        assert result.error.reason == "30000 ms"

    async def test_browser_failure(self, mock_pdf_service):
        mock_pdf_service.render_pdf = AsyncMock(side_effect=RenderFailureError("launch failed"))

        result = await GeneratePdf(mock_pdf_service).execute(GeneratePdfCommandDTO(html="<p>x</p>"))

        assert result.error.code == "RENDER_FAILURE"
        assert result.error.reason == "launch failed"
