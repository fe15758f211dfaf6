from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from domain.exceptions.currency import ProviderError


class RawRateQuote(BaseModel):
    """A daily rate entry as published upstream.

    ``rate`` is quoted for ``amount`` units of the source currency, e.g.
    amount=100, rate=17.00 means 17.00 target units per 100 JPY.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    currency_code: str = Field(
        validation_alias=AliasChoices('code', 'currencycode', 'currency_code')
    )
    amount: int = 0
    rate: Decimal
    valid_for: datetime | None = Field(
        default=None, validation_alias=AliasChoices('validfor', 'valid_for')
    )

    @field_validator('valid_for', mode='before')
    @classmethod
    def parse_valid_for(cls, v: Any):
        # CNB publishes plain dates ("2025-11-05")
        if isinstance(v, str):
            return datetime.fromisoformat(v)
        return v


def _lower_keys(data: dict) -> dict:
    return {str(key).lower(): value for key, value in data.items()}


def parse_rates_payload(payload: Any) -> list[RawRateQuote]:
    """Map a ``{"rates": [...]}`` document onto raw quotes, ignoring key case."""
    if payload is None:
        return []
    if not isinstance(payload, dict):
        raise ProviderError(f'Unexpected rates payload type: {type(payload).__name__}')

    entries = _lower_keys(payload).get('rates') or []
    if not isinstance(entries, list):
        raise ProviderError('Malformed rates payload: "rates" is not a list')

    quotes = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ProviderError(f'Malformed rate entry at index {index}: {entry!r}')
        try:
            quotes.append(RawRateQuote.model_validate(_lower_keys(entry)))
        except ValidationError as e:
            raise ProviderError(f'Malformed rate entry at index {index}: {e}') from e
    return quotes
