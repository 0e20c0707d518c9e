"""CreateInvoice Use Case

Persists a new invoice and its line items as two separate writes, with a
read-after-write check in between and a compensating delete on failure.
"""

import asyncio
import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from .dtos import InvoiceCommandDTO, InvoiceResponseDTO
from .errors import PERSISTENCE_ERROR, PERSISTENCE_INCONSISTENCY, unauthenticated
from .line_item_inserter import LineItemInserter, LineItemInsertError
from .mappers import build_invoice, fetch_hydrated, validate_command

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create an invoice with its line items

    Business Rules:
    1. invoice_number, business_name and customer_name are required
    2. At least one line item is required
    3. Validation failures perform no writes
    4. The caller only ever sees a fully committed invoice or an error

    Flow:
    1. Resolve current user
    2. Validate command
    3. Insert and commit the invoice row (Inserted)
    4. Re-read the row under the user's scope until visible (Verified)
    5. Insert line items, routine first, direct insert with retry second
    6. On failure in 4 or 5, delete the invoice row (RolledBack)
    7. Re-fetch and return the hydrated invoice (Committed)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        auth_service: AuthService,
        verify_attempts: int = 5,
        verify_backoff_seconds: float = 0.1,
        line_item_attempts: int = 3,
        line_item_backoff_seconds: float = 0.2,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.auth_service = auth_service
        self.verify_attempts = verify_attempts
        self.verify_backoff_seconds = verify_backoff_seconds
        self.line_item_inserter = LineItemInserter(
            uow,
            line_item_repo,
            attempts=line_item_attempts,
            backoff_seconds=line_item_backoff_seconds,
        )

    async def execute(self, command: InvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: InvoiceCommandDTO with invoice fields and line items

        Returns:
            Result[InvoiceResponseDTO]: Success with the stored invoice or error
        """
        try:
            # Step 1: Resolve current user
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            # Step 2: Validate before touching the store
            validation_error = validate_command(command)
            if validation_error:
                return Return.err(validation_error)

            # Step 3: Insert invoice row
            created = await self.invoice_repo.create(build_invoice(command, user.id))
            invoice_id = created.id
            await self.uow.commit()
            logger.info(f"Invoice {invoice_id} inserted for user {user.id}")

            # Step 4: Wait until the row is readable under the user's scope
            if not await self._verify_readable(invoice_id, user.id):
                await self._discard(invoice_id, user.id)
                return Return.err(
                    Error(
                        code=PERSISTENCE_INCONSISTENCY,
                        message="Invoice was created but is not accessible. "
                                "This may be a database configuration issue.",
                        reason=f"Invoice {invoice_id} not readable after {self.verify_attempts} attempts",
                    )
                )

            # Step 5: Insert line items
            try:
                await self.line_item_inserter.insert(invoice_id, command.line_items)
            except LineItemInsertError as e:
                await self._discard(invoice_id, user.id)
                return Return.err(
                    Error(
                        code=PERSISTENCE_INCONSISTENCY,
                        message="Failed to insert line items. Invoice has been rolled back.",
                        reason=str(e),
                    )
                )

            # Step 6: Return the committed invoice as stored
            invoice = await fetch_hydrated(
                self.invoice_repo, self.line_item_repo, invoice_id, user.id
            )
            if not invoice:
                return Return.err(
                    Error(
                        code=PERSISTENCE_INCONSISTENCY,
                        message="Invoice was created but could not be read back",
                        reason=f"Invoice {invoice_id} missing after commit",
                    )
                )
            return Return.ok(invoice)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Create invoice failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

    async def _verify_readable(self, invoice_id: str, user_id: str) -> bool:
        for attempt in range(1, self.verify_attempts + 1):
            try:
                if await self.invoice_repo.get_by_id(invoice_id, user_id):
                    return True
            except Exception as e:
                await self.uow.rollback()
                logger.warning(
                    f"Verification read of invoice {invoice_id} failed "
                    f"(attempt {attempt}/{self.verify_attempts}): {e}"
                )
            if attempt < self.verify_attempts:
                await asyncio.sleep(self.verify_backoff_seconds * attempt)
        return False

    async def _discard(self, invoice_id: str, user_id: str) -> None:
        """Compensating delete of a half-created invoice"""
        try:
            await self.invoice_repo.delete(invoice_id, user_id)
            await self.uow.commit()
            logger.warning(f"Invoice {invoice_id} rolled back")
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Could not roll back invoice {invoice_id}: {e}")
