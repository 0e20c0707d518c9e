"""GeneratePdf Use Case

Server half of the rendering pipeline: HTML in, PDF bytes out.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.pdf_service import PdfService
from src.domain.errors import RenderTimeoutError, RenderFailureError
from .dtos import GeneratePdfCommandDTO, PdfArtifactDTO
from .errors import RENDER_FAILURE, RENDER_TIMEOUT, VALIDATION_ERROR

logger = logging.getLogger(__name__)


class GeneratePdf:
    """
    Use Case: Render a self-contained HTML document to PDF

    Business Rules:
    1. html is required
    2. Each request gets its own browser, nothing is shared between renders
    """

    def __init__(self, pdf_service: PdfService):
        self.pdf_service = pdf_service

    async def execute(self, command: GeneratePdfCommandDTO) -> Result[PdfArtifactDTO]:
        if not command.html:
            return Return.err(
                Error(
                    code=VALIDATION_ERROR,
                    message="HTML content is required",
                    reason="html is missing or empty",
                )
            )

        try:
            content = await self.pdf_service.render_pdf(command.html)
            return Return.ok(PdfArtifactDTO(filename=command.filename, content=content))

        except RenderTimeoutError as e:
            logger.error(f"Error generating PDF: {e}")
            return Return.err(
                Error(code=RENDER_TIMEOUT, message="Failed to generate PDF", reason=str(e))
            )
        except RenderFailureError as e:
            logger.error(f"Error generating PDF: {e}")
            return Return.err(
                Error(code=RENDER_FAILURE, message="Failed to generate PDF", reason=str(e))
            )
        except Exception as e:
            logger.error(f"Unexpected error generating PDF: {e}")
            return Return.err(
                Error(code=RENDER_FAILURE, message="Failed to generate PDF", reason=str(e))
            )
