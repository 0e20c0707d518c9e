"""ListInvoices Use Case"""

import logging
from typing import List
from libs.result import Result, Return, Error
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from .dtos import InvoiceResponseDTO
from .errors import PERSISTENCE_ERROR, unauthenticated
from .mappers import group_by_invoice, to_response_dto

logger = logging.getLogger(__name__)


class ListInvoices:
    """
    Use Case: List all invoices of the current user

    Invoices come back newest first. Line items for all of them are loaded
    with a single query and grouped per invoice.
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

    async def execute(self) -> Result[List[InvoiceResponseDTO]]:
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            invoices = await self.invoice_repo.list_by_user(user.id)
            if not invoices:
                return Return.ok([])

            line_items = await self.line_item_repo.get_by_invoice_ids(
                [invoice.id for invoice in invoices]
            )
            grouped = group_by_invoice(line_items)

            return Return.ok(
                [to_response_dto(invoice, grouped.get(invoice.id, [])) for invoice in invoices]
            )

        except Exception as e:
            logger.error(f"List invoices failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to fetch invoices",
                    reason=str(e),
                )
            )
