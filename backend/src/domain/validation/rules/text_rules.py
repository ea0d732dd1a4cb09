"""Title and author validation rules"""

import logging
import re

from domain.validation.models import (
    FieldId,
    OrderDraft,
    ValidationContext,
    Violation,
)
from domain.validation.policy import ValidationPolicy
from domain.validation.port import ExistenceOracle

from .base import ValidationRule, ask_oracle, is_blank


logger = logging.getLogger(__name__)

AUTHOR_PATTERN = re.compile(r"[A-Za-z .'-]+")


class TitleRule(ValidationRule):
    """Title checks plus the title/author uniqueness lookup.

    Rules:
    - TITLE_REQUIRED: title must be non-empty (stops further title checks)
    - TITLE_TOO_LONG: at most policy.title_max_length characters
    - TITLE_INAPPROPRIATE: no denylisted substring, case-insensitive
    - TITLE_DUPLICATE_FOR_AUTHOR: no stored order with the same title and
      author; only looked up when the title passed and an author is given
    """

    field = FieldId.TITLE

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        if is_blank(draft.title):
            return [self.violation("TITLE_REQUIRED", "The order title is required.")]

        issues = []
        title = draft.title

        if len(title) > self.policy.title_max_length:
            issues.append(self.violation(
                "TITLE_TOO_LONG",
                f"The title must not exceed {self.policy.title_max_length} characters.",
                max_length=self.policy.title_max_length
            ))

        if self.policy.find_denylisted(title):
            logger.warning(
                f"Inappropriate content detected in title: {title!r}",
                extra={"operation_id": context.operation_id, "field": self.field.value}
            )
            issues.append(self.violation(
                "TITLE_INAPPROPRIATE",
                "The title contains inappropriate content."
            ))

        if issues or is_blank(draft.author):
            return issues

        if await ask_oracle("title_author", oracle.title_author_exists(title, draft.author)):
            logger.warning(
                f"Title {title!r} by author {draft.author!r} is not unique",
                extra={"operation_id": context.operation_id, "field": self.field.value}
            )
            issues.append(self.violation(
                "TITLE_DUPLICATE_FOR_AUTHOR",
                "An order with this title already exists for this author."
            ))

        return issues


class AuthorRule(ValidationRule):
    """Author name checks.

    Rules:
    - AUTHOR_REQUIRED: author must be non-empty (stops further author checks)
    - AUTHOR_TOO_SHORT / AUTHOR_TOO_LONG: length within policy bounds
    - AUTHOR_INVALID_CHARACTERS: letters, spaces, hyphens, apostrophes, dots
    """

    field = FieldId.AUTHOR

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        if is_blank(draft.author):
            return [self.violation("AUTHOR_REQUIRED", "The author's name is required.")]

        issues = []
        author = draft.author

        if len(author) < self.policy.author_min_length:
            issues.append(self.violation(
                "AUTHOR_TOO_SHORT",
                f"The author's name must be at least {self.policy.author_min_length} characters long.",
                min_length=self.policy.author_min_length
            ))
        elif len(author) > self.policy.author_max_length:
            issues.append(self.violation(
                "AUTHOR_TOO_LONG",
                f"The author's name must not exceed {self.policy.author_max_length} characters.",
                max_length=self.policy.author_max_length
            ))

        if not AUTHOR_PATTERN.fullmatch(author):
            issues.append(self.violation(
                "AUTHOR_INVALID_CHARACTERS",
                "The author's name contains invalid characters. Only letters, spaces, "
                "hyphens, apostrophes, and dots are allowed."
            ))

        return issues
