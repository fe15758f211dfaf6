"""
Shared test configuration and fixtures.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from infrastructure.providers.schemas import RawRateQuote


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def valid_for():
    return datetime(2025, 11, 5, tzinfo=UTC)


@pytest.fixture
def make_quote(valid_for):
    """Factory for raw upstream quotes"""
    def _make_quote(code: str, amount: int, rate: str, when: datetime | None = valid_for):
        return RawRateQuote(
            currency_code=code, amount=amount, rate=Decimal(rate), valid_for=when
        )
    return _make_quote


@pytest.fixture
def daily_quotes(make_quote):
    """A small CNB-like daily set: USD, EUR (quoted per 2) and JPY (quoted per 100)"""
    return [
        make_quote('USD', 1, '22.50'),
        make_quote('EUR', 2, '48.00'),
        make_quote('JPY', 100, '17.00'),
    ]
