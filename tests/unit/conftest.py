import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.auth_service import AuthUser
from src.app.use_cases.invoices.dtos import InvoiceCommandDTO, LineItemDTO
from tests.unit.factories import USER_ID


@pytest.fixture
def mock_uow():
    """Mock unit of work with async commit/rollback"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_auth_service():
    """Auth service resolving a fixed user"""
    auth_service = MagicMock()
    auth_service.get_current_user = AsyncMock(
        return_value=AuthUser(id=USER_ID, email="owner@acme.example")
    )
    return auth_service


@pytest.fixture
def anonymous_auth_service():
    auth_service = MagicMock()
    auth_service.get_current_user = AsyncMock(return_value=None)
    return auth_service


@pytest.fixture
def sample_command():
    """Valid command with two line items"""
    return InvoiceCommandDTO(
        invoice_number="20240131001",
        date=date(2024, 1, 31),
        business_name="Acme Supplies",
        customer_name="Jane Doe",
        line_items=[
            LineItemDTO(item_name="T-shirt", size="M", quantity=2, unit_cost=Decimal("450.00")),
            LineItemDTO(item_name="Cap", quantity=1, unit_cost=Decimal("120.00")),
        ],
        tax_rate=Decimal("5"),
        discount=Decimal("50.00"),
        advance_paid=Decimal("200.00"),
    )
