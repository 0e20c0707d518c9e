from .invoice_repository import InvoiceRepository
from .line_item_repository import LineItemRepository

__all__ = [
    "InvoiceRepository",
    "LineItemRepository",
]
