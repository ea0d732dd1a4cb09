"""Order lookup repository: SQLAlchemy implementation of ExistenceOracle"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.validation.port import ExistenceOracle, OracleUnavailableError
from models.order import Order


logger = logging.getLogger(__name__)


class OrderLookupRepository(ExistenceOracle):
    """Answers the validator's existence questions from the order table.

    Each lookup opens its own short-lived session, so the pipeline can
    issue lookups concurrently. Database errors are re-raised as
    OracleUnavailableError.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        """Initialize repository.

        Args:
            session_factory: Async session factory; defaults to the
                application factory from database.get_session_factory()
        """
        if session_factory is None:
            from database import get_session_factory
            session_factory = get_session_factory()
        self.session_factory = session_factory

    async def title_author_exists(self, title: str, author: str) -> bool:
        query = select(Order.id).where(
            and_(
                Order.title == title,
                Order.author == author
            )
        ).limit(1)
        return await self._scalar("title_author", query) is not None

    async def isbn_exists(self, isbn: str) -> bool:
        """Match on the stored ISBN with hyphens and spaces removed."""
        stored = func.replace(func.replace(func.upper(Order.isbn), "-", ""), " ", "")
        query = select(Order.id).where(stored == isbn).limit(1)
        return await self._scalar("isbn", query) is not None

    async def count_published_on(self, day: date) -> int:
        query = select(func.count(Order.id)).where(Order.published_date == day)
        return int(await self._scalar("daily_count", query) or 0)

    async def _scalar(self, lookup: str, query):
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return result.scalar()
        except SQLAlchemyError as e:
            logger.error(f"Order lookup '{lookup}' failed: {e}", exc_info=True)
            raise OracleUnavailableError(lookup) from e
