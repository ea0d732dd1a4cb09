"""Rule contract shared by all order validation rules"""

import logging
import math
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Optional, TypeVar

from domain.validation.models import (
    FieldId,
    OrderDraft,
    ValidationContext,
    Violation,
)
from domain.validation.port import ExistenceOracle, OracleUnavailableError
from observability.metrics import order_oracle_errors_total


logger = logging.getLogger(__name__)

T = TypeVar("T")


class ValidationRule(ABC):
    """One entry of the ordered rule list run by ValidationPipeline.

    A rule owns every check for its field. Checks on the same field may
    gate each other; rules never look at each other's results.
    """

    field: FieldId

    @abstractmethod
    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        """Evaluate the rule against a draft.

        Args:
            draft: Order draft under validation
            oracle: Read-only existence lookups
            context: Per-call context (operation id, date snapshot)

        Returns:
            Violations for this rule's field, empty if it passed

        Raises:
            OracleUnavailableError: A lookup could not be answered
        """
        pass

    @property
    def name(self) -> str:
        return type(self).__name__

    def violation(self, code: str, message: str, **details: Any) -> Violation:
        return Violation(field=self.field, message=message, code=code, details=details)


async def ask_oracle(lookup: str, call: Awaitable[T]) -> T:
    """Await an oracle lookup, mapping any failure to OracleUnavailableError.

    Args:
        lookup: Lookup name used in logs and metrics
        call: Pending oracle coroutine

    Returns:
        The oracle's answer
    """
    try:
        return await call
    except OracleUnavailableError:
        order_oracle_errors_total.labels(lookup=lookup).inc()
        raise
    except Exception as e:
        order_oracle_errors_total.labels(lookup=lookup).inc()
        logger.error(f"Existence lookup '{lookup}' failed: {e}", exc_info=True)
        raise OracleUnavailableError(lookup) from e


def as_decimal(value: Any) -> Optional[Decimal]:
    """Parse a submitted amount, returning None if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, float) and not math.isfinite(value):
            return None
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not amount.is_finite():
        return None
    return amount


def is_blank(value: Any) -> bool:
    """True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()
