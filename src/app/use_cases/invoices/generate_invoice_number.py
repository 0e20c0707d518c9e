"""GenerateInvoiceNumber Use Case

Invoice numbers are YYYYMMDD followed by a per-day sequence. The sequence
is zero-padded to 3 digits and simply grows wider past 999.
"""

import logging
from datetime import date, datetime, timezone
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import InvoiceNumberResponseDTO
from .errors import PERSISTENCE_ERROR, unauthenticated

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 8


def parse_sequence(invoice_number: str) -> int:
    """Sequence part of an invoice number, 0 if it is not numeric"""
    try:
        return int(invoice_number[PREFIX_LENGTH:])
    except ValueError:
        return 0


class GenerateInvoiceNumber:
    """
    Use Case: Next free invoice number for today

    The next sequence is the highest existing sequence for today's prefix
    plus one, not the count of today's invoices, so gaps are never refilled.
    """

    def __init__(self, invoice_repo: InvoiceRepository, auth_service: AuthService):
        self.invoice_repo = invoice_repo
        self.auth_service = auth_service

    async def execute(self, today: Optional[date] = None) -> Result[InvoiceNumberResponseDTO]:
        """
        Args:
            today: Day to number for; defaults to the current UTC date
        """
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            prefix = (today or datetime.now(timezone.utc).date()).strftime("%Y%m%d")
            numbers = await self.invoice_repo.list_invoice_numbers(user.id, prefix)
            next_sequence = max([0] + [parse_sequence(number) for number in numbers]) + 1

            return Return.ok(InvoiceNumberResponseDTO(invoice_number=f"{prefix}{next_sequence:03d}"))

        except Exception as e:
            logger.error(f"Generate invoice number failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to generate invoice number",
                    reason=str(e),
                )
            )
