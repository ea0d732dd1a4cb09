"""ValidationPipeline - runs the order rules against a draft"""

import asyncio
import logging
import time
from typing import Optional, Sequence

from observability.metrics import (
    order_validation_duration_seconds,
    order_validation_violations_total,
    order_validations_total,
)

from .models import (
    OrderCategory,
    OrderDraft,
    ValidationContext,
    ValidationMetrics,
    ValidationOutcome,
    ValidationReport,
)
from .policy import ValidationPolicy
from .port import ExistenceOracle, OracleUnavailableError
from .rules import ValidationRule, build_default_rules


logger = logging.getLogger(__name__)


class ValidationPipeline:
    """Decides whether an OrderDraft may become a persisted order.

    Every rule runs on every draft (full-form reporting). Rules are
    awaited concurrently, so their oracle lookups overlap, and their
    violations are collected in rule declaration order.
    """

    def __init__(
        self,
        oracle: ExistenceOracle,
        rules: Optional[Sequence[ValidationRule]] = None,
        policy: Optional[ValidationPolicy] = None
    ):
        """Initialize pipeline.

        Args:
            oracle: Read-only existence lookups over persisted orders
            rules: Ordered rule list; defaults to build_default_rules(policy)
            policy: Limits for the default rules; ignored when rules is given
        """
        self.oracle = oracle
        self.policy = policy or ValidationPolicy()
        self.rules = list(rules) if rules is not None else build_default_rules(self.policy)

    async def validate(
        self,
        draft: OrderDraft,
        context: Optional[ValidationContext] = None
    ) -> ValidationReport:
        """Run all rules on a draft.

        Args:
            draft: Order draft to validate
            context: Per-call context; a fresh one (new operation id,
                today's date) is created when omitted

        Returns:
            ValidationReport with the outcome and the run's metrics

        Raises:
            OracleUnavailableError: A lookup failed; no outcome is produced
                and the error's metrics attribute holds the aborted run
        """
        context = context or ValidationContext()
        category = OrderCategory.coerce(draft.category)
        metrics = ValidationMetrics(
            operation_id=context.operation_id,
            order_title=draft.title if isinstance(draft.title, str) else "",
            isbn=draft.isbn if isinstance(draft.isbn, str) else "",
            category=category.value if category else str(draft.category),
        )
        started = time.perf_counter()

        try:
            results = await self._run_rules(draft, context)
        except OracleUnavailableError as e:
            self._finish(metrics, started)
            metrics.error_reason = str(e)
            e.metrics = metrics
            order_validations_total.labels(outcome="error").inc()
            logger.error(
                f"Validation aborted for order {metrics.order_title!r}: {e}",
                extra={"operation_id": context.operation_id, "outcome": "error"}
            )
            raise

        metrics.rules_evaluated = len(results)
        violations = [violation for rule_violations in results for violation in rule_violations]
        self._finish(metrics, started)
        metrics.violation_count = len(violations)
        metrics.success = not violations

        if violations:
            outcome = ValidationOutcome.reject(violations)
            metrics.error_reason = "; ".join(v.message for v in violations)
            order_validations_total.labels(outcome="rejected").inc()
            for violation in violations:
                order_validation_violations_total.labels(field=violation.field.value).inc()
            logger.warning(
                f"Validation failed for order {metrics.order_title!r} (ISBN {metrics.isbn!r}, "
                f"category {metrics.category}) after {metrics.validation_duration_ms:.1f}ms: "
                f"{len(violations)} violations",
                extra={
                    "operation_id": context.operation_id,
                    "outcome": "rejected",
                    "duration_ms": metrics.validation_duration_ms,
                    "violation_count": len(violations),
                }
            )
        else:
            outcome = ValidationOutcome.accept()
            order_validations_total.labels(outcome="accepted").inc()
            logger.info(
                f"Validation passed for order {metrics.order_title!r} "
                f"in {metrics.validation_duration_ms:.1f}ms",
                extra={
                    "operation_id": context.operation_id,
                    "outcome": "accepted",
                    "duration_ms": metrics.validation_duration_ms,
                }
            )

        return ValidationReport(outcome=outcome, metrics=metrics)

    async def _run_rules(self, draft: OrderDraft, context: ValidationContext):
        tasks = [
            asyncio.ensure_future(rule.evaluate(draft, self.oracle, context))
            for rule in self.rules
        ]
        try:
            # gather keeps results in task order regardless of completion order
            return await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise

    @staticmethod
    def _finish(metrics: ValidationMetrics, started: float) -> None:
        elapsed = time.perf_counter() - started
        metrics.validation_duration_ms = elapsed * 1000
        order_validation_duration_seconds.observe(elapsed)
