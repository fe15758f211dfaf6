from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from domain.exceptions.currency import InvalidCurrencyError


@dataclass(frozen=True)
class Currency:
    code: str

    def __post_init__(self):
        if not isinstance(self.code, str):
            raise InvalidCurrencyError(f'Currency code must be a string, got {self.code!r}')
        code = self.code.strip().upper()
        if len(code) != 3 or not (code.isascii() and code.isalpha()):
            raise InvalidCurrencyError(f'Invalid currency code: {self.code!r}')
        object.__setattr__(self, 'code', code)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ExchangeRate:
    source_currency: Currency
    target_currency: Currency
    value: Decimal  # target units per one unit of source
    valid_for: datetime

    def __post_init__(self):
        if self.value <= 0:
            raise ValueError(
                f'Exchange rate {self.source_currency}/{self.target_currency} must be positive, '
                f'got {self.value}'
            )

    def __str__(self) -> str:
        return f'{self.source_currency}/{self.target_currency}={self.value}'


class InvalidQuotePolicy(StrEnum):
    """What normalization does with an upstream quote that cannot be used."""

    SKIP = 'skip'  # drop the entry and keep going
    FAIL = 'fail'  # abort the whole batch
