"""ExistenceOracle port interface (Hexagonal Architecture)"""

from abc import ABC, abstractmethod
from datetime import date

from .models import OrderValidationPipelineError


class ExistenceOracle(ABC):
    """Port interface for the read-only lookups the validator needs.

    Implementations answer questions about already persisted orders.
    They never mutate the store. Any failure to answer must surface as
    OracleUnavailableError, not as a False/0 answer.
    """

    @abstractmethod
    async def title_author_exists(self, title: str, author: str) -> bool:
        """Check whether an order with this exact title and author exists.

        Raises:
            OracleUnavailableError: The store could not be queried
        """
        pass

    @abstractmethod
    async def isbn_exists(self, isbn: str) -> bool:
        """Check whether an order with this ISBN exists.

        Args:
            isbn: Normalised ISBN (no hyphens or spaces, uppercase)

        Raises:
            OracleUnavailableError: The store could not be queried
        """
        pass

    @abstractmethod
    async def count_published_on(self, day: date) -> int:
        """Count orders whose published date equals day.

        Raises:
            OracleUnavailableError: The store could not be queried
        """
        pass


class OracleUnavailableError(OrderValidationPipelineError):
    """The existence oracle could not answer a lookup"""

    def __init__(self, lookup: str, message: str = "Existence lookup failed"):
        self.lookup = lookup
        # Filled by ValidationPipeline with the aborted run's metrics
        self.metrics = None
        super().__init__(f"{message} ({lookup})")
