"""Unit tests for GenerateInvoiceNumber use case"""

import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.generate_invoice_number import (
    GenerateInvoiceNumber,
    parse_sequence,
)
from tests.unit.factories import USER_ID

TODAY = date(2024, 1, 31)


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.list_invoice_numbers = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def generate_number_use_case(mock_invoice_repo, mock_auth_service):
    return GenerateInvoiceNumber(mock_invoice_repo, mock_auth_service)


@pytest.mark.asyncio
class TestGenerateInvoiceNumber:
    async def test_first_invoice_of_the_day(self, generate_number_use_case, mock_invoice_repo):
        result = await generate_number_use_case.execute(today=TODAY)

        assert result.is_ok()
        assert result.value.invoice_number == "20240131001"
        mock_invoice_repo.list_invoice_numbers.assert_called_once_with(USER_ID, "20240131")

    async def test_next_after_highest_not_count(self, generate_number_use_case, mock_invoice_repo):
        """
        Given: 20240131001 and 20240131003 exist (002 was deleted)
        Then: The next number is 004, gaps are not refilled
        """
        mock_invoice_repo.list_invoice_numbers = AsyncMock(
            return_value=["20240131001", "20240131003"]
        )

        result = await generate_number_use_case.execute(today=TODAY)

        assert result.value.invoice_number == "20240131004"

    async def test_sequence_widens_past_999(self, generate_number_use_case, mock_invoice_repo):
        mock_invoice_repo.list_invoice_numbers = AsyncMock(return_value=["20240131999"])

        result = await generate_number_use_case.execute(today=TODAY)

        assert result.value.invoice_number == "202401311000"

    async def test_non_numeric_suffix_ignored(self, generate_number_use_case, mock_invoice_repo):
        mock_invoice_repo.list_invoice_numbers = AsyncMock(
            return_value=["20240131-draft", "20240131002"]
        )

        result = await generate_number_use_case.execute(today=TODAY)

        assert result.value.invoice_number == "20240131003"

    async def test_unauthenticated(self, mock_invoice_repo, anonymous_auth_service):
        use_case = GenerateInvoiceNumber(mock_invoice_repo, anonymous_auth_service)

        result = await use_case.execute(today=TODAY)

        assert result.is_err()
        assert result.error.code == "UNAUTHENTICATED"
        mock_invoice_repo.list_invoice_numbers.assert_not_called()


class TestParseSequence:
    @pytest.mark.parametrize(
        "invoice_number, expected",
        [("20240131007", 7), ("202401311000", 1000), ("20240131", 0), ("20240131abc", 0)],
    )
    def test_parse(self, invoice_number, expected):
        assert parse_sequence(invoice_number) == expected
