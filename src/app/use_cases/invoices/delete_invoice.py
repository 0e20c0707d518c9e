"""DeleteInvoice Use Case"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from .errors import PERSISTENCE_ERROR, invoice_not_found, unauthenticated

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete an invoice of the current user

    Line items are removed by the store through the foreign key cascade.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        auth_service: AuthService,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.auth_service = auth_service

    async def execute(self, invoice_id: str) -> Result[bool]:
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            deleted = await self.invoice_repo.delete(invoice_id, user.id)
            if not deleted:
                await self.uow.rollback()
                return Return.err(invoice_not_found(invoice_id))

            await self.uow.commit()
            logger.info(f"Invoice {invoice_id} deleted by user {user.id}")
            return Return.ok(True)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Delete invoice {invoice_id} failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
