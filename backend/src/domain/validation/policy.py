"""Thresholds and lists the validation rules enforce"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any


DEFAULT_TITLE_DENYLIST = ("badword1", "badword2", "inappropriate")
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})


@dataclass(frozen=True)
class ValidationPolicy:
    """Limits applied by the order validation rules.

    Defaults match the production configuration; use from_settings() to
    pick up environment overrides.
    """
    title_denylist: tuple[str, ...] = DEFAULT_TITLE_DENYLIST
    title_max_length: int = 200
    author_min_length: int = 2
    author_max_length: int = 100
    price_upper_bound: Decimal = Decimal("10000")
    earliest_published_date: date = date(1400, 1, 1)
    stock_max: int = 100_000
    image_extensions: frozenset[str] = field(default=IMAGE_EXTENSIONS)

    # Cross-field business rules
    daily_intake_limit: int = 500
    technical_min_price: Decimal = Decimal("20.00")
    high_value_threshold: Decimal = Decimal("500.00")
    high_value_max_stock: int = 10

    @classmethod
    def from_settings(cls, settings: Any) -> "ValidationPolicy":
        """Build a policy from a config.Settings instance"""
        return cls(
            title_denylist=tuple(word.lower() for word in settings.ORDER_TITLE_DENYLIST if word),
            daily_intake_limit=settings.ORDER_DAILY_INTAKE_LIMIT,
            technical_min_price=Decimal(str(settings.ORDER_TECHNICAL_MIN_PRICE)),
            high_value_threshold=Decimal(str(settings.ORDER_HIGH_VALUE_THRESHOLD)),
            high_value_max_stock=settings.ORDER_HIGH_VALUE_MAX_STOCK,
        )

    def find_denylisted(self, text: str) -> list[str]:
        """Return the denylisted substrings found in text (case-insensitive)."""
        lowered = text.lower()
        return [word for word in self.title_denylist if word and word.lower() in lowered]
