"""Validation rules implementations.

Each rule object owns the checks for one field and returns Violation
objects when checks fail. build_default_rules() composes them in field
declaration order.
"""

from domain.validation.policy import ValidationPolicy

from .base import ValidationRule
from .business_rules import BusinessRulesRule
from .isbn_rules import IsbnRule
from .text_rules import AuthorRule, TitleRule
from .value_rules import (
    CategoryRule,
    CoverImageUrlRule,
    PriceRule,
    PublishedDateRule,
    StockQuantityRule,
)


def build_default_rules(policy: ValidationPolicy) -> list[ValidationRule]:
    """Return the order-creation rules in declaration order"""
    return [
        TitleRule(policy),
        AuthorRule(policy),
        IsbnRule(),
        CategoryRule(),
        PriceRule(policy),
        PublishedDateRule(policy),
        StockQuantityRule(policy),
        CoverImageUrlRule(policy),
        BusinessRulesRule(policy),
    ]


__all__ = [
    "ValidationRule",
    "TitleRule",
    "AuthorRule",
    "IsbnRule",
    "CategoryRule",
    "PriceRule",
    "PublishedDateRule",
    "StockQuantityRule",
    "CoverImageUrlRule",
    "BusinessRulesRule",
    "build_default_rules",
]
