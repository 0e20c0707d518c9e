"""Line Item Repository Interface

Line items are not owner-scoped themselves. Callers must only pass invoice
ids that were already resolved within the owner's scope.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.line_item import LineItem


class LineItemRepository(ABC):
    """
    Repository interface for LineItem persistence
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: str) -> List[LineItem]:
        """
        Retrieve the line items of one invoice in position order
        """
        pass

    @abstractmethod
    async def get_by_invoice_ids(self, invoice_ids: List[str]) -> List[LineItem]:
        """
        Retrieve the line items of several invoices in one query

        Returns:
            Items ordered by invoice_id, then position
        """
        pass

    @abstractmethod
    async def insert_via_routine(self, invoice_id: str, line_items: List[LineItem]) -> None:
        """
        Insert a batch through the store's server-side routine

        The routine runs with elevated rights and skips per-row security checks.

        Raises:
            LineItemRoutineUnavailableError: If the store has no such routine
        """
        pass

    @abstractmethod
    async def insert_batch(self, line_items: List[LineItem]) -> None:
        """
        Insert a batch with plain INSERT statements
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        """
        Delete all line items of an invoice

        Returns:
            Number of deleted rows
        """
        pass
