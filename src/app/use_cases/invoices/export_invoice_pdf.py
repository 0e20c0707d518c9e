"""ExportInvoicePdf Use Case

Client half of the rendering pipeline: render the invoice page, capture it
as a standalone document, have the rendering service print it and hand back
the validated PDF.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.auth_service import AuthService
from src.app.services.document_capture import DocumentCapture
from src.app.services.invoice_view import InvoiceView
from src.app.services.render_client import RenderClient
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import InvalidArtifactError, RenderServiceError
from .dtos import PdfArtifactDTO
from .errors import (
    INVALID_ARTIFACT,
    RENDER_FAILURE,
    RENDER_SERVICE_ERROR,
    invoice_not_found,
    unauthenticated,
)
from .mappers import fetch_hydrated

logger = logging.getLogger(__name__)


def pdf_filename(invoice_number: str) -> str:
    return f"Invoice-{invoice_number}.pdf"


class ExportInvoicePdf:
    """
    Use Case: Export an invoice as PDF

    Flow:
    1. Load the invoice under the user's scope
    2. Render the invoice page
    3. Capture the invoice subtree as a self-contained document
    4. Send it to the rendering service
    5. Return the PDF (already checked for the %PDF marker by the client)
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        auth_service: AuthService,
        invoice_view: InvoiceView,
        document_capture: DocumentCapture,
        render_client: RenderClient,
        base_url: str,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.auth_service = auth_service
        self.invoice_view = invoice_view
        self.document_capture = document_capture
        self.render_client = render_client
        self.base_url = base_url.rstrip("/")

    async def execute(self, invoice_id: str) -> Result[PdfArtifactDTO]:
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            invoice = await fetch_hydrated(
                self.invoice_repo, self.line_item_repo, invoice_id, user.id
            )
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            page = self.invoice_view.render(invoice)
            document = await self.document_capture.capture(
                page,
                base_url=f"{self.base_url}/invoices/{invoice_id}/preview",
                title=f"Invoice {invoice.invoice_number}",
            )

            filename = pdf_filename(invoice.invoice_number)
            content = await self.render_client.render(document, filename)
            logger.info(f"Invoice {invoice_id} exported as {filename} ({len(content)} bytes)")

            return Return.ok(PdfArtifactDTO(filename=filename, content=content))

        except InvalidArtifactError as e:
            logger.error(f"Rendering service returned an invalid PDF for invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code=INVALID_ARTIFACT,
                    message="Generated file is not a valid PDF",
                    reason=str(e),
                )
            )
        except RenderServiceError as e:
            logger.error(f"Rendering service failed for invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code=RENDER_SERVICE_ERROR,
                    message=str(e),
                    reason=e.details,
                )
            )
        except Exception as e:
            logger.error(f"Export of invoice {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code=RENDER_FAILURE,
                    message="Failed to export invoice as PDF",
                    reason=str(e),
                )
            )
