"""Two-strategy line item insert

Line items are written through the store's batch routine when it exists. If
the routine is missing or fails, a plain batched INSERT is tried a bounded
number of times with a growing pause between attempts. A failed attempt is
rolled back completely, so the next attempt starts from a clean slate.
"""

import asyncio
import logging
from typing import List

from src.app.repositories.line_item_repository import LineItemRepository
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LineItemDTO
from .mappers import build_line_items

logger = logging.getLogger(__name__)

ROUTINE = "routine"
DIRECT = "direct"


class LineItemInsertError(Exception):
    """Every insert strategy failed"""


class LineItemInserter:
    """
    Inserts the full line item set of one invoice

    Usage:
        inserter = LineItemInserter(uow, line_item_repo, attempts=3, backoff_seconds=0.2)
        strategy = await inserter.insert(invoice_id, command.line_items)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        line_item_repo: LineItemRepository,
        attempts: int = 3,
        backoff_seconds: float = 0.2,
    ):
        self.uow = uow
        self.line_item_repo = line_item_repo
        self.attempts = attempts
        self.backoff_seconds = backoff_seconds

    async def insert(self, invoice_id: str, line_items: List[LineItemDTO]) -> str:
        """
        Insert and commit the line items of an invoice

        Returns:
            Name of the strategy that succeeded ("routine" or "direct")

        Raises:
            LineItemInsertError: If the routine and every direct attempt failed
        """
        try:
            await self.line_item_repo.insert_via_routine(
                invoice_id, build_line_items(invoice_id, line_items)
            )
            await self.uow.commit()
            logger.info(f"Line items for invoice {invoice_id} inserted via routine")
            return ROUTINE
        except Exception as e:
            await self.uow.rollback()
            logger.warning(
                f"Line item routine failed for invoice {invoice_id}, trying direct insert: {e}"
            )

        last_error = None
        for attempt in range(1, self.attempts + 1):
            try:
                await self.line_item_repo.insert_batch(build_line_items(invoice_id, line_items))
                await self.uow.commit()
                logger.info(
                    f"Line items for invoice {invoice_id} inserted via direct insert "
                    f"(attempt {attempt}/{self.attempts})"
                )
                return DIRECT
            except Exception as e:
                last_error = e
                await self.uow.rollback()
                logger.warning(
                    f"Direct line item insert for invoice {invoice_id} failed "
                    f"(attempt {attempt}/{self.attempts}): {e}"
                )
                if attempt < self.attempts:
                    await asyncio.sleep(self.backoff_seconds * attempt)

        raise LineItemInsertError(f"Failed to insert line items: {last_error}")
