"""Category, price, date, stock and cover image rules"""

import logging
from datetime import date, datetime
from urllib.parse import unquote, urlparse

from domain.validation.models import (
    FieldId,
    OrderCategory,
    OrderDraft,
    ValidationContext,
    Violation,
)
from domain.validation.policy import ValidationPolicy
from domain.validation.port import ExistenceOracle

from .base import ValidationRule, as_decimal


logger = logging.getLogger(__name__)


class CategoryRule(ValidationRule):
    """Category must name one of the OrderCategory members"""

    field = FieldId.CATEGORY

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        if OrderCategory.coerce(draft.category) is not None:
            return []

        allowed = ", ".join(member.value for member in OrderCategory)
        return [self.violation(
            "CATEGORY_INVALID",
            f"The category must be one of the following: {allowed}.",
            allowed=[member.value for member in OrderCategory]
        )]


class PriceRule(ValidationRule):
    """Price must be a positive amount below policy.price_upper_bound"""

    field = FieldId.PRICE

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        price = as_decimal(draft.price)
        if price is None:
            return [self.violation("PRICE_INVALID", "The price must be a valid amount.")]

        if price <= 0:
            return [self.violation("PRICE_NOT_POSITIVE", "The price must be greater than zero.")]

        if price >= self.policy.price_upper_bound:
            return [self.violation(
                "PRICE_TOO_HIGH",
                f"The price must be less than {self.policy.price_upper_bound:,}.",
                upper_bound=str(self.policy.price_upper_bound)
            )]

        return []


class PublishedDateRule(ValidationRule):
    """Published date must lie between the earliest allowed date and today.

    Compares against context.today so every rule of a run sees one date.
    """

    field = FieldId.PUBLISHED_DATE

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        published = draft.published_date
        if isinstance(published, datetime):
            published = published.date()

        if not isinstance(published, date):
            return [self.violation("PUBLISHED_DATE_REQUIRED", "The published date is required.")]

        if published > context.today:
            return [self.violation(
                "PUBLISHED_DATE_IN_FUTURE",
                "The published date cannot be in the future."
            )]

        earliest = self.policy.earliest_published_date
        if published < earliest:
            return [self.violation(
                "PUBLISHED_DATE_TOO_OLD",
                f"The published date cannot be before the year {earliest.year}.",
                earliest=earliest.isoformat()
            )]

        return []


class StockQuantityRule(ValidationRule):
    """Stock must be an integer in 0..policy.stock_max"""

    field = FieldId.STOCK_QUANTITY

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        stock = draft.stock_quantity
        if isinstance(stock, bool) or not isinstance(stock, int):
            return [self.violation("STOCK_INVALID", "The stock quantity must be a whole number.")]

        if stock < 0:
            return [self.violation("STOCK_NEGATIVE", "The stock quantity cannot be negative.")]

        if stock > self.policy.stock_max:
            return [self.violation(
                "STOCK_TOO_HIGH",
                f"The stock quantity cannot exceed {self.policy.stock_max:,}.",
                max_stock=self.policy.stock_max
            )]

        return []


class CoverImageUrlRule(ValidationRule):
    """Optional cover URL: absolute http(s) URL pointing at an image file"""

    field = FieldId.COVER_IMAGE_URL

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        url = draft.cover_image_url
        if not url:
            return []

        if self.is_image_url(url):
            return []

        logger.warning(
            f"Invalid cover image URL: {url!r}",
            extra={"operation_id": context.operation_id, "field": self.field.value}
        )
        extensions = ", ".join(sorted(self.policy.image_extensions))
        return [self.violation(
            "COVER_IMAGE_URL_INVALID",
            "The cover image URL must be a valid HTTP/HTTPS URL ending with an image "
            f"extension ({extensions})."
        )]

    def is_image_url(self, url: str) -> bool:
        if not isinstance(url, str) or url != url.strip() or any(ch.isspace() for ch in url):
            return False

        try:
            parsed = urlparse(url)
        except ValueError:
            return False

        if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
            return False

        # Last dot of the last segment starts the extension: "/img/.jpg" -> ".jpg"
        last_segment = unquote(parsed.path).rsplit("/", 1)[-1]
        _, dot, suffix = last_segment.rpartition(".")
        extension = f".{suffix}".lower() if dot else ""
        return extension in self.policy.image_extensions
