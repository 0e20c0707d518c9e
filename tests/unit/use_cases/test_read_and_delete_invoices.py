"""Unit tests for GetInvoice, ListInvoices and DeleteInvoice use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.delete_invoice import DeleteInvoice
from src.app.use_cases.invoices.get_invoice import GetInvoice
from src.app.use_cases.invoices.list_invoices import ListInvoices
from tests.unit.factories import USER_ID, make_invoice, make_line_item


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_invoice("inv-1"))
    repo.list_by_user = AsyncMock(return_value=[])
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_line_item_repo():
    repo = MagicMock()
    repo.get_by_invoice_id = AsyncMock(
        return_value=[make_line_item("inv-1", 0, quantity=3, unit_cost=Decimal("10.00"))]
    )
    repo.get_by_invoice_ids = AsyncMock(return_value=[])
    return repo


@pytest.mark.asyncio
class TestGetInvoice:
    async def test_get_hydrated_invoice(self, mock_invoice_repo, mock_line_item_repo, mock_auth_service):
        use_case = GetInvoice(mock_invoice_repo, mock_line_item_repo, mock_auth_service)

        result = await use_case.execute("inv-1")

        assert result.is_ok()
        assert result.value.subtotal == Decimal("30.00")
        assert result.value.business_email == ""
        mock_invoice_repo.get_by_id.assert_called_once_with("inv-1", USER_ID)

    async def test_other_users_invoice_is_not_found(
        self, mock_invoice_repo, mock_line_item_repo, mock_auth_service
    ):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        use_case = GetInvoice(mock_invoice_repo, mock_line_item_repo, mock_auth_service)

        result = await use_case.execute("inv-2")

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_line_item_repo.get_by_invoice_id.assert_not_called()


@pytest.mark.asyncio
class TestListInvoices:
    async def test_line_items_loaded_in_one_batch(
        self, mock_invoice_repo, mock_line_item_repo, mock_auth_service
    ):
        """
        Given: Two invoices with items returned out of order
        Then: One batch query, items grouped per invoice and sorted by position
        """
        mock_invoice_repo.list_by_user = AsyncMock(
            return_value=[make_invoice("inv-2"), make_invoice("inv-1")]
        )
        mock_line_item_repo.get_by_invoice_ids = AsyncMock(
            return_value=[
                make_line_item("inv-1", 1, item_name="second"),
                make_line_item("inv-2", 0, item_name="only"),
                make_line_item("inv-1", 0, item_name="first"),
            ]
        )
        use_case = ListInvoices(mock_invoice_repo, mock_line_item_repo, mock_auth_service)

        result = await use_case.execute()

        assert result.is_ok()
        assert [invoice.id for invoice in result.value] == ["inv-2", "inv-1"]
        assert [item.item_name for item in result.value[1].line_items] == ["first", "second"]
        assert [item.item_name for item in result.value[0].line_items] == ["only"]
        mock_line_item_repo.get_by_invoice_ids.assert_called_once_with(["inv-2", "inv-1"])

    async def test_no_invoices(self, mock_invoice_repo, mock_line_item_repo, mock_auth_service):
        use_case = ListInvoices(mock_invoice_repo, mock_line_item_repo, mock_auth_service)

        result = await use_case.execute()

        assert result.is_ok()
        assert result.value == []
        mock_line_item_repo.get_by_invoice_ids.assert_not_called()

    async def test_store_failure(self, mock_invoice_repo, mock_line_item_repo, mock_auth_service):
        mock_invoice_repo.list_by_user = AsyncMock(side_effect=RuntimeError("gone"))
        use_case = ListInvoices(mock_invoice_repo, mock_line_item_repo, mock_auth_service)

        result = await use_case.execute()

        assert result.is_err()
        assert result.error.code == "PERSISTENCE_ERROR"
        assert result.error.message == "Failed to fetch invoices"


@pytest.mark.asyncio
class TestDeleteInvoice:
    async def test_delete_commits(self, mock_uow, mock_invoice_repo, mock_auth_service):
        use_case = DeleteInvoice(mock_uow, mock_invoice_repo, mock_auth_service)

        result = await use_case.execute("inv-1")

        assert result.is_ok()
        mock_invoice_repo.delete.assert_called_once_with("inv-1", USER_ID)
        mock_uow.commit.assert_called_once()

    async def test_delete_missing_invoice(self, mock_uow, mock_invoice_repo, mock_auth_service):
        mock_invoice_repo.delete = AsyncMock(return_value=False)
        use_case = DeleteInvoice(mock_uow, mock_invoice_repo, mock_auth_service)

        result = await use_case.execute("inv-404")

        assert result.is_err()
        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_uow.commit.assert_not_called()

    async def test_delete_unauthenticated(self, mock_uow, mock_invoice_repo, anonymous_auth_service):
        use_case = DeleteInvoice(mock_uow, mock_invoice_repo, anonymous_auth_service)

        result = await use_case.execute("inv-1")

        assert result.is_err()
        assert result.error.code == "UNAUTHENTICATED"
        mock_invoice_repo.delete.assert_not_called()
