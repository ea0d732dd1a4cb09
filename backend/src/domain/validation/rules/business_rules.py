"""Cross-field business rules"""

import logging

from domain.validation.models import (
    FieldId,
    OrderCategory,
    OrderDraft,
    ValidationContext,
    Violation,
)
from domain.validation.policy import ValidationPolicy
from domain.validation.port import ExistenceOracle

from .base import ValidationRule, as_decimal, ask_oracle


logger = logging.getLogger(__name__)


class BusinessRulesRule(ValidationRule):
    """Composite business check reported as a single Order violation.

    Rules (all must pass):
    1. DAILY_LIMIT_REACHED: fewer than policy.daily_intake_limit orders
       published today
    2. TECHNICAL_MIN_PRICE: Technical orders cost at least
       policy.technical_min_price
    3. CHILDREN_CONTENT: Children titles carry no denylisted substring
    4. HIGH_VALUE_STOCK_LIMIT: orders above policy.high_value_threshold
       hold at most policy.high_value_max_stock copies

    Sub-rules whose input field is unusable are skipped; the field rule
    reports that value.
    """

    field = FieldId.ORDER

    def __init__(self, policy: ValidationPolicy):
        self.policy = policy

    async def evaluate(
        self,
        draft: OrderDraft,
        oracle: ExistenceOracle,
        context: ValidationContext
    ) -> list[Violation]:
        failed_rules = []
        log_extra = {"operation_id": context.operation_id, "field": self.field.value}

        published_today = await ask_oracle("daily_count", oracle.count_published_on(context.today))
        if published_today >= self.policy.daily_intake_limit:
            logger.warning(
                f"Business rule violation: daily order limit reached ({published_today} today)",
                extra={**log_extra, "rule": "DAILY_LIMIT_REACHED"}
            )
            failed_rules.append("DAILY_LIMIT_REACHED")

        category = OrderCategory.coerce(draft.category)
        price = as_decimal(draft.price)
        title = draft.title if isinstance(draft.title, str) else ""

        if category is OrderCategory.TECHNICAL and price is not None \
                and price < self.policy.technical_min_price:
            logger.warning(
                f"Business rule violation: technical order {title!r} priced {price} "
                f"below minimum {self.policy.technical_min_price}",
                extra={**log_extra, "rule": "TECHNICAL_MIN_PRICE"}
            )
            failed_rules.append("TECHNICAL_MIN_PRICE")

        if category is OrderCategory.CHILDREN and self.policy.find_denylisted(title):
            logger.warning(
                f"Business rule violation: children's order {title!r} contains restricted words",
                extra={**log_extra, "rule": "CHILDREN_CONTENT"}
            )
            failed_rules.append("CHILDREN_CONTENT")

        stock = draft.stock_quantity
        if price is not None and price > self.policy.high_value_threshold \
                and isinstance(stock, int) and not isinstance(stock, bool) \
                and stock > self.policy.high_value_max_stock:
            logger.warning(
                f"Business rule violation: high-value order {title!r} (price {price}) "
                f"exceeds stock limit with {stock} copies",
                extra={**log_extra, "rule": "HIGH_VALUE_STOCK_LIMIT"}
            )
            failed_rules.append("HIGH_VALUE_STOCK_LIMIT")

        if not failed_rules:
            return []

        return [self.violation(
            "BUSINESS_RULES_FAILED",
            "The order failed business rule validation.",
            failed_rules=failed_rules
        )]
