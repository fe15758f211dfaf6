# nosec B101


from datetime import datetime
from decimal import Decimal

import pytest

from domain.exceptions.currency import ProviderError
from infrastructure.providers.schemas import RawRateQuote, parse_rates_payload


def test_parse_accepts_code_and_currency_code_spellings():
    quotes = parse_rates_payload({
        'rates': [
            {'code': 'EUR', 'amount': 1, 'rate': Decimal('25.10')},
            {'currencyCode': 'JPY', 'amount': 100, 'rate': Decimal('13.605')},
        ]
    })

    assert [q.currency_code for q in quotes] == ['EUR', 'JPY']


def test_parse_date_only_valid_for():
    quotes = parse_rates_payload({
        'rates': [{'code': 'EUR', 'amount': 1, 'rate': Decimal('25.10'), 'validFor': '2025-11-05'}]
    })

    assert quotes[0].valid_for == datetime(2025, 11, 5)


def test_parse_missing_valid_for_is_none():
    quotes = parse_rates_payload({'rates': [{'code': 'EUR', 'amount': 1, 'rate': Decimal('1')}]})

    assert quotes[0].valid_for is None


def test_missing_amount_defaults_to_zero():
    quotes = parse_rates_payload({'rates': [{'code': 'EUR', 'rate': Decimal('25.10')}]})

    assert quotes[0].amount == 0


@pytest.mark.parametrize('payload', [None, {}, {'rates': None}, {'rates': []}])
def test_absent_or_empty_rates_is_empty(payload):
    assert parse_rates_payload(payload) == []


@pytest.mark.parametrize(
    'payload',
    [
        ['not', 'an', 'object'],
        {'rates': {'code': 'EUR'}},
        {'rates': ['EUR']},
        {'rates': [{'code': 'EUR', 'amount': 1, 'rate': 'abc'}]},
    ],
)
def test_malformed_payload_raises_provider_error(payload):
    with pytest.raises(ProviderError):
        parse_rates_payload(payload)


def test_raw_quote_can_be_built_by_field_name():
    quote = RawRateQuote(currency_code='usd', amount=1, rate=Decimal('22.50'))

    assert quote.currency_code == 'usd'
    assert quote.rate == Decimal('22.50')
