"""Invoice financial figures

Pure computation over an invoice and its line items. Amounts stay Decimal
the whole way through; rounding only happens in format_amount.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

TWO_PLACES = Decimal("0.01")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    due: Decimal


def _decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    # str() first so floats do not drag their binary expansion along
    return Decimal(str(value))


def line_total(item) -> Decimal:
    return _decimal(item.quantity) * _decimal(item.unit_cost)


def compute_totals(invoice, line_items: Optional[Iterable] = None) -> InvoiceTotals:
    """
    Compute subtotal, tax, total and due amount

    Args:
        invoice: Any object exposing tax_rate, discount and advance_paid
        line_items: Items to sum; defaults to invoice.line_items

    Returns:
        InvoiceTotals. Values are never clamped, a discount larger than the
        total yields a negative due amount.
    """
    items = invoice.line_items if line_items is None else line_items

    subtotal = sum((line_total(item) for item in items), Decimal("0"))
    tax = subtotal * _decimal(invoice.tax_rate) / HUNDRED
    total = subtotal + tax - _decimal(invoice.discount)
    due = total - _decimal(invoice.advance_paid)

    return InvoiceTotals(subtotal=subtotal, tax=tax, total=total, due=due)


def format_amount(value) -> str:
    """Format an amount with thousands separators and 2 decimal places"""
    return f"{_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP):,.2f}"
