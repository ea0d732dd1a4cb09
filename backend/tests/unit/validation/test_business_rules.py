"""Unit tests for the composite cross-field business rule"""

from decimal import Decimal

import pytest

from domain.validation.models import FieldId, OrderCategory
from domain.validation.policy import ValidationPolicy
from domain.validation.rules import BusinessRulesRule


@pytest.fixture
def rule():
    return BusinessRulesRule(ValidationPolicy())


def failed_rules(violations):
    assert len(violations) == 1
    assert violations[0].field == FieldId.ORDER
    assert violations[0].code == "BUSINESS_RULES_FAILED"
    return violations[0].details["failed_rules"]


class TestBusinessRulesRule:
    """Test daily cap, technical minimum, children content and high-value stock"""

    @pytest.mark.asyncio
    async def test_valid_draft_passes(self, rule, make_draft, oracle, context):
        assert await rule.evaluate(make_draft(), oracle, context) == []

    @pytest.mark.asyncio
    async def test_daily_count_uses_context_date(self, rule, make_draft, oracle, context):
        await rule.evaluate(make_draft(), oracle, context)
        assert oracle.calls == [("daily_count", context.today)]

    @pytest.mark.asyncio
    async def test_daily_limit_reached(self, rule, make_draft, make_oracle, context):
        oracle = make_oracle(published_today=500)
        violations = await rule.evaluate(make_draft(), oracle, context)
        assert failed_rules(violations) == ["DAILY_LIMIT_REACHED"]

    @pytest.mark.asyncio
    async def test_below_daily_limit_passes(self, rule, make_draft, make_oracle, context):
        oracle = make_oracle(published_today=499)
        assert await rule.evaluate(make_draft(), oracle, context) == []

    @pytest.mark.asyncio
    async def test_technical_below_minimum_price(self, rule, make_draft, oracle, context):
        draft = make_draft(category=OrderCategory.TECHNICAL, price=Decimal("19.99"))

        violations = await rule.evaluate(draft, oracle, context)

        assert failed_rules(violations) == ["TECHNICAL_MIN_PRICE"]
        assert violations[0].message == "The order failed business rule validation."

    @pytest.mark.asyncio
    async def test_technical_at_minimum_price_passes(self, rule, make_draft, oracle, context):
        draft = make_draft(category=OrderCategory.TECHNICAL, price=Decimal("20.00"))
        assert await rule.evaluate(draft, oracle, context) == []

    @pytest.mark.asyncio
    async def test_cheap_fiction_passes(self, rule, make_draft, oracle, context):
        draft = make_draft(category=OrderCategory.FICTION, price=Decimal("4.99"))
        assert await rule.evaluate(draft, oracle, context) == []

    @pytest.mark.asyncio
    async def test_children_title_with_restricted_word(self, rule, make_draft, oracle, context):
        draft = make_draft(category="Children", title="Badword1 Bedtime", price=Decimal("9.99"))
        violations = await rule.evaluate(draft, oracle, context)
        assert failed_rules(violations) == ["CHILDREN_CONTENT"]

    @pytest.mark.asyncio
    async def test_restricted_word_outside_children_is_left_to_title_rule(self, rule, make_draft, oracle, context):
        draft = make_draft(category=OrderCategory.FICTION, title="Badword1 Bedtime")
        assert await rule.evaluate(draft, oracle, context) == []

    @pytest.mark.asyncio
    async def test_high_value_stock_limit(self, rule, make_draft, oracle, context):
        draft = make_draft(price=Decimal("500.01"), stock_quantity=11)
        violations = await rule.evaluate(draft, oracle, context)
        assert failed_rules(violations) == ["HIGH_VALUE_STOCK_LIMIT"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price,stock", [
        (Decimal("500.00"), 50),
        (Decimal("750.00"), 10),
    ])
    async def test_high_value_boundaries_pass(self, rule, make_draft, oracle, context, price, stock):
        draft = make_draft(price=price, stock_quantity=stock)
        assert await rule.evaluate(draft, oracle, context) == []

    @pytest.mark.asyncio
    async def test_all_failed_sub_rules_are_listed(self, rule, make_draft, make_oracle, context):
        oracle = make_oracle(published_today=1000)
        draft = make_draft(category=OrderCategory.TECHNICAL, price=Decimal("5.00"))

        violations = await rule.evaluate(draft, oracle, context)

        assert failed_rules(violations) == ["DAILY_LIMIT_REACHED", "TECHNICAL_MIN_PRICE"]

    @pytest.mark.asyncio
    async def test_unparseable_price_skips_price_rules(self, rule, make_draft, oracle, context):
        draft = make_draft(category=OrderCategory.TECHNICAL, price="n/a", stock_quantity=500)
        assert await rule.evaluate(draft, oracle, context) == []

    @pytest.mark.asyncio
    async def test_custom_policy_limits(self, make_draft, make_oracle, context):
        rule = BusinessRulesRule(ValidationPolicy(daily_intake_limit=3, technical_min_price=Decimal("50")))
        oracle = make_oracle(published_today=3)

        violations = await rule.evaluate(make_draft(price=Decimal("39.99")), oracle, context)

        assert failed_rules(violations) == ["DAILY_LIMIT_REACHED", "TECHNICAL_MIN_PRICE"]
