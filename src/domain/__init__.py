from .base import BaseModel, generate_uuid
from .invoice import Invoice
from .line_item import LineItem
from .financials import InvoiceTotals, compute_totals, format_amount

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Invoice",
    "LineItem",
    "InvoiceTotals",
    "compute_totals",
    "format_amount",
]
