from .invoice_repository import SqlAlchemyInvoiceRepository
from .line_item_repository import SqlAlchemyLineItemRepository, LINE_ITEMS_ROUTINE_SQL

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyLineItemRepository",
    "LINE_ITEMS_ROUTINE_SQL",
]
