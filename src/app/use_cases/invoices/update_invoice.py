"""UpdateInvoice Use Case

Full-document update: the invoice row is overwritten and the line item set
is replaced wholesale.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.auth_service import AuthService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from .create_invoice import CreateInvoice
from .dtos import InvoiceCommandDTO, InvoiceResponseDTO
from .errors import (
    INVOICE_NOT_FOUND,
    PERSISTENCE_ERROR,
    PERSISTENCE_INCONSISTENCY,
    unauthenticated,
)
from .line_item_inserter import LineItemInserter, LineItemInsertError
from .mappers import fetch_hydrated, invoice_columns, to_line_item_dto, validate_command

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Update an invoice and replace its line items

    Business Rules:
    1. Same required fields as creation
    2. An unknown id without created_at is an unsaved draft and is created instead
    3. An unknown id with created_at was deleted or mistyped and is an error
    4. If the new line items cannot be stored, the previous set is put back

    Flow:
    1. Resolve current user and validate
    2. Look up the invoice under the user's scope
    3. Update the row, snapshot and delete the old line items, commit
    4. Insert the new line items (routine first, direct insert with retry second)
    5. Re-fetch and return the hydrated invoice
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        auth_service: AuthService,
        create_invoice: CreateInvoice,
        line_item_attempts: int = 3,
        line_item_backoff_seconds: float = 0.2,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.auth_service = auth_service
        self.create_invoice = create_invoice
        self.line_item_inserter = LineItemInserter(
            uow,
            line_item_repo,
            attempts=line_item_attempts,
            backoff_seconds=line_item_backoff_seconds,
        )

    async def execute(self, command: InvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice update

        Args:
            command: InvoiceCommandDTO carrying the invoice id

        Returns:
            Result[InvoiceResponseDTO]: Success with the stored invoice or error
        """
        try:
            user = await self.auth_service.get_current_user()
            if not user:
                return Return.err(unauthenticated())

            validation_error = validate_command(command)
            if validation_error:
                return Return.err(validation_error)

            # Step 2: Confirm the invoice exists and belongs to the user
            try:
                existing = None
                if command.id:
                    existing = await self.invoice_repo.get_by_id(command.id, user.id)
            except Exception as e:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=PERSISTENCE_ERROR,
                        message=f"Failed to verify invoice: {e}",
                        reason=str(e),
                    )
                )

            if not existing:
                if command.created_at is None:
                    logger.warning(
                        f"Invoice {command.id} is not in the store. Treating it as a new invoice."
                    )
                    draft = command.model_copy(
                        update={"id": None, "created_at": None, "updated_at": None}
                    )
                    return await self.create_invoice.execute(draft)
                return Return.err(
                    Error(
                        code=INVOICE_NOT_FOUND,
                        message="Invoice not found. It may have been deleted or the ID is incorrect.",
                        reason=f"Invoice {command.id} with created_at set is missing",
                    )
                )

            invoice_id = existing.id

            # Step 3: Overwrite the row and clear the old line items
            previous_items = [
                to_line_item_dto(item)
                for item in await self.line_item_repo.get_by_invoice_id(invoice_id)
            ]
            for column, value in invoice_columns(command).items():
                setattr(existing, column, value)
            await self.invoice_repo.update(existing)
            await self.line_item_repo.delete_by_invoice_id(invoice_id)
            await self.uow.commit()

            # Step 4: Insert the new line items
            try:
                await self.line_item_inserter.insert(invoice_id, command.line_items)
            except LineItemInsertError as e:
                restored = await self._restore(invoice_id, previous_items)
                message = (
                    "Failed to insert line items. Previous line items have been restored."
                    if restored
                    else "Failed to insert line items. Previous line items could not be restored."
                )
                return Return.err(
                    Error(code=PERSISTENCE_INCONSISTENCY, message=message, reason=str(e))
                )

            # Step 5: Return the invoice as stored
            invoice = await fetch_hydrated(
                self.invoice_repo, self.line_item_repo, invoice_id, user.id
            )
            if not invoice:
                return Return.err(
                    Error(
                        code=INVOICE_NOT_FOUND,
                        message="Invoice not found. It may have been deleted or the ID is incorrect.",
                        reason=f"Invoice {invoice_id} vanished during update",
                    )
                )
            return Return.ok(invoice)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Update invoice failed: {e}")
            return Return.err(
                Error(
                    code=PERSISTENCE_ERROR,
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )

    async def _restore(self, invoice_id: str, previous_items) -> bool:
        """Compensation: put back the line items that were deleted in step 3"""
        if not previous_items:
            return True
        try:
            await self.line_item_inserter.insert(invoice_id, previous_items)
            logger.warning(f"Previous line items of invoice {invoice_id} restored")
            return True
        except LineItemInsertError as e:
            logger.error(f"Could not restore line items of invoice {invoice_id}: {e}")
            return False
