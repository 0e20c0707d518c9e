"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: str, user_id: str) -> Optional[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: str) -> List[Invoice]:
        statement = (
            select(Invoice)
            .where(Invoice.user_id == user_id)
            .order_by(Invoice.created_at.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_invoice_numbers(self, user_id: str, prefix: str) -> List[str]:
        statement = (
            select(Invoice.invoice_number)
            .where(Invoice.user_id == user_id)
            .where(Invoice.invoice_number.like(f"{prefix}%"))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice_id: str, user_id: str) -> bool:
        statement = (
            delete(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.rowcount > 0
