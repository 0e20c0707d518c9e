"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
Every read and write is scoped to the owning principal.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Insert a new invoice row

        Args:
            invoice: Invoice entity to persist (id may already be set)

        Returns:
            Created Invoice
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        """
        Retrieve invoice by ID within the owner's scope

        Args:
            invoice_id: Invoice ID
            user_id: Owning principal

        Returns:
            Invoice if found and owned by user_id, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[Invoice]:
        """
        Retrieve all invoices of a principal, newest created_at first
        """
        pass

    @abstractmethod
    async def list_invoice_numbers(self, user_id: str, prefix: str) -> List[str]:
        """
        Retrieve the principal's invoice numbers starting with prefix
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice row

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice_id: str, user_id: str) -> bool:
        """
        Delete an invoice within the owner's scope

        Line items go with it through the foreign key cascade.

        Returns:
            True if a row was deleted, False otherwise
        """
        pass
