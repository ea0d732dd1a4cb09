"""Validation models and enums for order intake"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4


class OrderCategory(str, Enum):
    """Book categories an order may be filed under"""
    FICTION = "Fiction"
    NON_FICTION = "NonFiction"
    TECHNICAL = "Technical"
    CHILDREN = "Children"
    SCIENCE = "Science"
    HISTORY = "History"

    @classmethod
    def coerce(cls, value: Any) -> Optional["OrderCategory"]:
        """Return the member matching value, or None if it names no category.

        Accepts members and their string values (case-insensitive).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


class FieldId(str, Enum):
    """Fields a violation can be reported against, in declaration order"""
    TITLE = "Title"
    AUTHOR = "Author"
    ISBN = "ISBN"
    CATEGORY = "Category"
    PRICE = "Price"
    PUBLISHED_DATE = "PublishedDate"
    STOCK_QUANTITY = "StockQuantity"
    COVER_IMAGE_URL = "CoverImageUrl"

    # Cross-field business rules
    ORDER = "Order"


@dataclass(frozen=True)
class OrderDraft:
    """Incoming order-creation request.

    Values are kept as submitted; rules decide whether they are usable.
    """
    title: str
    author: str
    isbn: str
    category: Any
    price: Decimal
    published_date: date
    cover_image_url: Optional[str] = None
    stock_quantity: int = 1


@dataclass(frozen=True)
class Violation:
    """A single failed rule for one field."""
    field: FieldId
    message: str
    code: str
    details: dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field.value,
            "message": self.message,
            "code": self.code,
            "details": dict(self.details),
        }


class OrderValidationPipelineError(Exception):
    """Base exception for the order validation pipeline"""
    pass


class OrderValidationError(OrderValidationPipelineError):
    """Draft was rejected; carries every violation found"""

    def __init__(self, violations: tuple[Violation, ...]):
        self.violations = tuple(violations)
        fields = ", ".join(dict.fromkeys(v.field.value for v in self.violations))
        super().__init__(f"Order validation failed for: {fields}")


@dataclass(frozen=True)
class ValidationOutcome:
    """Accepted, or Rejected with violations in rule declaration order."""
    violations: tuple[Violation, ...] = ()

    @classmethod
    def accept(cls) -> "ValidationOutcome":
        return cls()

    @classmethod
    def reject(cls, violations: list[Violation]) -> "ValidationOutcome":
        if not violations:
            raise ValueError("A rejected outcome needs at least one violation")
        return cls(violations=tuple(violations))

    @property
    def accepted(self) -> bool:
        return not self.violations

    def errors_by_field(self) -> dict[str, list[str]]:
        """Group violation messages by field name, keeping order."""
        grouped: dict[str, list[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.field.value, []).append(violation.message)
        return grouped

    def raise_for_rejection(self) -> None:
        """Raise OrderValidationError if the draft was rejected."""
        if not self.accepted:
            raise OrderValidationError(self.violations)


@dataclass(frozen=True)
class ValidationContext:
    """Per-call context shared by every rule of one validation run.

    `today` is the date snapshot all date-dependent rules compare against.
    """
    operation_id: str = field(default_factory=lambda: str(uuid4()))
    today: date = field(default_factory=date.today)


@dataclass
class ValidationMetrics:
    """Timing and result figures for one validation run.

    Returned to the caller together with the outcome.
    """
    operation_id: str
    order_title: str
    isbn: str
    category: str
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    validation_duration_ms: float = 0.0
    rules_evaluated: int = 0
    violation_count: int = 0
    success: bool = False
    error_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for log payloads"""
        return {
            "operation_id": self.operation_id,
            "order_title": self.order_title,
            "isbn": self.isbn,
            "category": self.category,
            "started_at": self.started_at.isoformat(),
            "validation_duration_ms": round(self.validation_duration_ms, 3),
            "rules_evaluated": self.rules_evaluated,
            "violation_count": self.violation_count,
            "success": self.success,
            "error_reason": self.error_reason,
        }


@dataclass(frozen=True)
class ValidationReport:
    """What ValidationPipeline.validate returns."""
    outcome: ValidationOutcome
    metrics: ValidationMetrics
