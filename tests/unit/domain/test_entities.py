"""Unit tests for entity timestamps"""

from datetime import timezone

import pytest

from src.domain.invoice import Invoice
from src.domain.line_item import LineItem


@pytest.mark.parametrize(
    "entity",
    [
        lambda: Invoice(user_id="user-1", invoice_number="20240131001", business_name="A", customer_name="B"),
        lambda: LineItem(invoice_id="inv-1"),
    ],
)
def test_default_timestamps_are_timezone_aware(entity):
    instance = entity()

    assert instance.created_at.tzinfo is timezone.utc
    assert instance.updated_at.tzinfo is timezone.utc


@pytest.mark.parametrize("model", [Invoice, LineItem])
def test_timestamp_columns_store_timezone(model):
    columns = model.__table__.columns

    assert columns["created_at"].type.timezone is True
    assert columns["updated_at"].type.timezone is True
