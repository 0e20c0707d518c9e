"""Unit tests for CreateInvoice use case

Tests cover:
- Validation failures perform no writes
- Read-after-write verification with compensating delete
- Line item insert: routine first, direct insert with retry second
- Compensating delete when line items cannot be stored
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.create_invoice import CreateInvoice
from src.domain.errors import LineItemRoutineUnavailableError
from tests.unit.factories import USER_ID, make_invoice, make_line_item


@pytest.fixture
def stored_invoice():
    return make_invoice("inv-1")


@pytest.fixture
def mock_invoice_repo(stored_invoice):
    """Invoice repository whose row is immediately readable"""
    repo = MagicMock()
    repo.create = AsyncMock(return_value=stored_invoice)
    repo.get_by_id = AsyncMock(return_value=stored_invoice)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_line_item_repo():
    """Line item repository without a routine, direct insert works"""
    repo = MagicMock()
    repo.insert_via_routine = AsyncMock(
        side_effect=LineItemRoutineUnavailableError("No line item routine configured")
    )
    repo.insert_batch = AsyncMock()
    repo.get_by_invoice_id = AsyncMock(
        return_value=[
            make_line_item("inv-1", 0, item_name="T-shirt", quantity=2, unit_cost=Decimal("450.00")),
            make_line_item("inv-1", 1, item_name="Cap", quantity=1, unit_cost=Decimal("120.00")),
        ]
    )
    return repo


@pytest.fixture
def create_invoice_use_case(mock_uow, mock_invoice_repo, mock_line_item_repo, mock_auth_service):
    """CreateInvoice with zero backoff"""
    return CreateInvoice(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
        line_item_repo=mock_line_item_repo,
        auth_service=mock_auth_service,
        verify_attempts=5,
        verify_backoff_seconds=0,
        line_item_attempts=3,
        line_item_backoff_seconds=0,
    )


@pytest.mark.asyncio
class TestCreateInvoiceSuccess:
    async def test_create_invoice_success(
        self, create_invoice_use_case, mock_invoice_repo, mock_line_item_repo, mock_uow, sample_command
    ):
        """
        Given: A valid command and no line item routine
        When: execute is called
        Then: The hydrated invoice is returned with computed totals
        """
        # Act
        result = await create_invoice_use_case.execute(sample_command)

        # Assert
        assert result.is_ok()
        invoice = result.value
        assert invoice.id == "inv-1"
        assert [item.item_name for item in invoice.line_items] == ["T-shirt", "Cap"]
        assert invoice.subtotal == Decimal("1020.00")
        assert invoice.tax == Decimal("51")
        assert invoice.total == Decimal("1021")
        assert invoice.due == Decimal("821")

        mock_invoice_repo.create.assert_called_once()
        mock_invoice_repo.delete.assert_not_called()
        mock_line_item_repo.insert_batch.assert_called_once()

    async def test_invoice_row_is_scoped_to_current_user(
        self, create_invoice_use_case, mock_invoice_repo, sample_command
    ):
        await create_invoice_use_case.execute(sample_command)

        created = mock_invoice_repo.create.call_args[0][0]
        assert created.user_id == USER_ID
        assert created.business_email is None  # empty optional text stored as NULL
        mock_invoice_repo.get_by_id.assert_any_call("inv-1", USER_ID)

    async def test_line_items_keep_supplied_order(
        self, create_invoice_use_case, mock_line_item_repo, sample_command
    ):
        await create_invoice_use_case.execute(sample_command)

        inserted = mock_line_item_repo.insert_batch.call_args[0][0]
        assert [item.item_name for item in inserted] == ["T-shirt", "Cap"]
        assert [item.position for item in inserted] == [0, 1]

    async def test_routine_used_when_available(
        self, create_invoice_use_case, mock_line_item_repo, sample_command
    ):
        """Given: The routine succeeds. Then: No direct insert happens"""
        mock_line_item_repo.insert_via_routine = AsyncMock(return_value=None)

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_ok()
        mock_line_item_repo.insert_via_routine.assert_called_once()
        mock_line_item_repo.insert_batch.assert_not_called()

    async def test_verification_tolerates_lagging_reads(
        self, create_invoice_use_case, mock_invoice_repo, stored_invoice, sample_command
    ):
        """
        Given: The row becomes readable only on the third verification read
        Then: Creation still succeeds
        """
        mock_invoice_repo.get_by_id = AsyncMock(
            side_effect=[None, None, stored_invoice, stored_invoice]
        )

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_ok()
        assert mock_invoice_repo.get_by_id.call_count == 4
        mock_invoice_repo.delete.assert_not_called()


@pytest.mark.asyncio
class TestCreateInvoiceValidation:
    async def test_missing_customer_name_performs_no_writes(
        self, create_invoice_use_case, mock_invoice_repo, mock_line_item_repo, mock_uow, sample_command
    ):
        command = sample_command.model_copy(update={"customer_name": ""})

        result = await create_invoice_use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.message == "Missing required fields"
        mock_invoice_repo.create.assert_not_called()
        mock_line_item_repo.insert_batch.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_empty_line_items_rejected(
        self, create_invoice_use_case, mock_invoice_repo, sample_command
    ):
        command = sample_command.model_copy(update={"line_items": []})

        result = await create_invoice_use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.message == "At least one line item is required"
        mock_invoice_repo.create.assert_not_called()

    async def test_unauthenticated(
        self, mock_uow, mock_invoice_repo, mock_line_item_repo, anonymous_auth_service, sample_command
    ):
        use_case = CreateInvoice(
            mock_uow, mock_invoice_repo, mock_line_item_repo, anonymous_auth_service
        )

        result = await use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "UNAUTHENTICATED"
        mock_invoice_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestCreateInvoiceCompensation:
    async def test_unreadable_invoice_is_deleted(
        self, create_invoice_use_case, mock_invoice_repo, mock_line_item_repo, sample_command
    ):
        """
        Given: The inserted row never becomes readable
        When: All 5 verification reads return nothing
        Then: The row is deleted and no line items are written
        """
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_INCONSISTENCY"
        assert "not accessible" in result.error.message
        assert mock_invoice_repo.get_by_id.call_count == 5
        mock_invoice_repo.delete.assert_called_once_with("inv-1", USER_ID)
        mock_line_item_repo.insert_via_routine.assert_not_called()
        mock_line_item_repo.insert_batch.assert_not_called()

    async def test_line_item_failure_rolls_back_invoice(
        self, create_invoice_use_case, mock_invoice_repo, mock_line_item_repo, mock_uow, sample_command
    ):
        """
        Given: Routine unavailable and every direct insert fails
        Then: Direct insert is tried 3 times and the invoice row is deleted
        """
        mock_line_item_repo.insert_batch = AsyncMock(side_effect=RuntimeError("constraint violation"))

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_INCONSISTENCY"
        assert result.error.message == "Failed to insert line items. Invoice has been rolled back."
        assert mock_line_item_repo.insert_batch.call_count == 3
        mock_invoice_repo.delete.assert_called_once_with("inv-1", USER_ID)
        # one rollback for the routine, one per failed direct attempt
        assert mock_uow.rollback.call_count == 4

    async def test_direct_insert_recovers_on_retry(
        self, create_invoice_use_case, mock_invoice_repo, mock_line_item_repo, sample_command
    ):
        mock_line_item_repo.insert_batch = AsyncMock(side_effect=[RuntimeError("deadlock"), None])

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_ok()
        assert mock_line_item_repo.insert_batch.call_count == 2
        mock_invoice_repo.delete.assert_not_called()

    async def test_insert_failure_returns_persistence_error(
        self, create_invoice_use_case, mock_invoice_repo, mock_uow, sample_command
    ):
        mock_invoice_repo.create = AsyncMock(side_effect=RuntimeError("connection lost"))

        result = await create_invoice_use_case.execute(sample_command)

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.rollback.assert_called_once()
        mock_invoice_repo.delete.assert_not_called()
