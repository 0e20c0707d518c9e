import logging
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    Unit of work over one async session

    Invoice writes commit in several steps (row, then line items), so use
    cases call commit() more than once per operation. Leaving the context
    discards whatever was not committed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        if self.session.in_transaction():
            logger.debug("Discarding uncommitted changes")
        await self.session.rollback()
