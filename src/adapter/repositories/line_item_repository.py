"""SQLAlchemy Line Item Repository Implementation

Implements line item persistence using SQLAlchemy async session.
"""

import json
from typing import List, Optional
from sqlalchemy import delete, text
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.errors import LineItemRoutineUnavailableError
from src.domain.line_item import LineItem


# Installed on PostgreSQL at startup. SECURITY DEFINER lets the routine write
# rows the caller's row-level policies would otherwise reject.
LINE_ITEMS_ROUTINE_SQL = """
CREATE OR REPLACE FUNCTION {name}(p_invoice_id text, p_line_items jsonb)
RETURNS void
LANGUAGE plpgsql
SECURITY DEFINER
AS $$
BEGIN
  INSERT INTO line_items (
    id, invoice_id, item_name, description, size, quantity, unit_cost,
    position, created_at, updated_at
  )
  SELECT
    item->>'id',
    p_invoice_id,
    COALESCE(item->>'item_name', ''),
    item->>'description',
    item->>'size',
    COALESCE((item->>'quantity')::integer, 1),
    COALESCE((item->>'unit_cost')::numeric, 0),
    (item->>'position')::integer,
    now(),
    now()
  FROM jsonb_array_elements(p_line_items) AS item;
END;
$$;
"""


def _routine_payload(line_items: List[LineItem]) -> str:
    return json.dumps(
        [
            {
                "id": item.id,
                "item_name": item.item_name or "",
                "description": item.description,
                "size": item.size,
                "quantity": item.quantity or 1,
                "unit_cost": str(item.unit_cost or 0),
                "position": item.position,
            }
            for item in line_items
        ]
    )


class SqlAlchemyLineItemRepository(LineItemRepository):
    """
    SQLAlchemy implementation of LineItemRepository

    The routine path is only available on PostgreSQL and only when a routine
    name is configured.
    """

    def __init__(self, session: AsyncSession, routine_name: Optional[str] = None):
        self.session = session
        self.routine_name = routine_name

    async def get_by_invoice_id(self, invoice_id: str) -> List[LineItem]:
        statement = (
            select(LineItem)
            .where(LineItem.invoice_id == invoice_id)
            .order_by(LineItem.position, LineItem.created_at)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_invoice_ids(self, invoice_ids: List[str]) -> List[LineItem]:
        if not invoice_ids:
            return []
        statement = (
            select(LineItem)
            .where(LineItem.invoice_id.in_(invoice_ids))
            .order_by(LineItem.invoice_id, LineItem.position)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def insert_via_routine(self, invoice_id: str, line_items: List[LineItem]) -> None:
        if not self.routine_name:
            raise LineItemRoutineUnavailableError("No line item routine configured")
        if self.session.bind.dialect.name != "postgresql":
            raise LineItemRoutineUnavailableError(
                f"Line item routine requires postgresql, store is {self.session.bind.dialect.name}"
            )

        statement = text(
            f"SELECT {self.routine_name}(:p_invoice_id, CAST(:p_line_items AS jsonb))"
        )
        await self.session.execute(
            statement,
            {"p_invoice_id": invoice_id, "p_line_items": _routine_payload(line_items)},
        )

    async def insert_batch(self, line_items: List[LineItem]) -> None:
        self.session.add_all(line_items)
        await self.session.flush()

    async def delete_by_invoice_id(self, invoice_id: str) -> int:
        statement = delete(LineItem).where(LineItem.invoice_id == invoice_id)
        result = await self.session.execute(statement)
        return result.rowcount
