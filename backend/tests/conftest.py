"""Shared pytest fixtures for order validation tests.

Provides:
- A configurable in-memory existence oracle
- A draft factory producing drafts that pass every rule
- A fixed validation context (date snapshot) so date rules are deterministic
"""

import sys
from dataclasses import replace
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from domain.validation.isbn import normalize_isbn
from domain.validation.models import OrderCategory, OrderDraft, ValidationContext
from domain.validation.port import ExistenceOracle


TODAY = date(2024, 6, 15)


class FakeOracle(ExistenceOracle):
    """In-memory oracle recording every lookup it answers."""

    def __init__(self, existing=(), isbns=(), published_today=0, error=None):
        self.existing = set(existing)
        self.isbns = {normalize_isbn(isbn) for isbn in isbns}
        self.published_today = published_today
        self.error = error
        self.calls = []

    async def title_author_exists(self, title, author):
        self.calls.append(("title_author", title, author))
        if self.error:
            raise self.error
        return (title, author) in self.existing

    async def isbn_exists(self, isbn):
        self.calls.append(("isbn", isbn))
        if self.error:
            raise self.error
        return isbn in self.isbns

    async def count_published_on(self, day):
        self.calls.append(("daily_count", day))
        if self.error:
            raise self.error
        return self.published_today


@pytest.fixture
def oracle():
    return FakeOracle()


@pytest.fixture
def context():
    return ValidationContext(operation_id="op-test", today=TODAY)


@pytest.fixture
def make_draft():
    """Factory for drafts that pass every rule; override fields by keyword."""
    base = OrderDraft(
        title="The Pragmatic Programmer",
        author="Andrew Hunt",
        isbn="978-0-306-40615-7",
        category=OrderCategory.TECHNICAL,
        price=Decimal("39.99"),
        published_date=date(1999, 10, 20),
        cover_image_url="https://covers.example.com/pragmatic.jpg",
        stock_quantity=5,
    )

    def _make(**overrides):
        return replace(base, **overrides)

    return _make


@pytest.fixture
def make_oracle():
    """Factory for FakeOracle instances with custom stored data."""
    return FakeOracle
