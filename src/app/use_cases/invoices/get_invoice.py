"""GetInvoice Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from .dtos import InvoiceResponseDTO
from .errors import PERSISTENCE_ERROR, invoice_not_found, unauthenticated
from .mappers import fetch_hydrated

logger = logging.getLogger(__name__)


class GetInvoice:
    """
    Use Case: Retrieve one invoice of the current user with its line items
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        auth_service: AuthService,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.auth_service = auth_service

    async def execute(self, invoice_id: str) -> Result[InvoiceResponseDTO]:
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            invoice = await fetch_hydrated(
                self.invoice_repo, self.line_item_repo, invoice_id, user.id
            )
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            return Return.ok(invoice)

        except Exception as e:
            logger.error(f"Get invoice {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to fetch invoice",
                    reason=str(e),
                )
            )
