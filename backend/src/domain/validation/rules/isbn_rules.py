"""ISBN validation rules"""

import logging

from domain.validation.isbn import is_valid_isbn, normalize_isbn
from domain.validation.models import (
    FieldId,
    OrderDraft,
    ValidationContext,
    Violation,
)
from domain.validation.port import ExistenceOracle

from .base import ValidationRule, ask_oracle, is_blank


logger = logging.getLogger(__name__)


class IsbnRule(ValidationRule):
    """ISBN presence, checksum and uniqueness.

    The uniqueness lookup runs only for a well-formed ISBN and is issued
    with the normalised form, so "0-306-40615-2" and "0306406152" collide.
    """

    field = FieldId.ISBN

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        if is_blank(draft.isbn):
            return [self.violation("ISBN_REQUIRED", "The ISBN is required.")]

        if not is_valid_isbn(draft.isbn):
            logger.warning(
                f"Invalid ISBN format: {draft.isbn!r}",
                extra={"operation_id": context.operation_id, "field": self.field.value}
            )
            return [self.violation(
                "ISBN_INVALID_FORMAT",
                "The ISBN must be a valid ISBN-10 or ISBN-13 (hyphens and spaces allowed)."
            )]

        clean = normalize_isbn(draft.isbn)
        if await ask_oracle("isbn", oracle.isbn_exists(clean)):
            logger.warning(
                f"ISBN {clean!r} is not unique",
                extra={"operation_id": context.operation_id, "field": self.field.value}
            )
            return [self.violation(
                "ISBN_DUPLICATE",
                "An order with this ISBN already exists in the system."
            )]

        return []
