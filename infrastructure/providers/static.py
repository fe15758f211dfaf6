from collections.abc import Mapping
from datetime import UTC, datetime
from decimal import Decimal

from infrastructure.providers.base import RateSourceClient
from infrastructure.providers.schemas import RawRateQuote

# USD per one unit of the source currency
USD_MOCK_RATES: dict[str, Decimal] = {
	'EUR': Decimal('1.18'),
	'JPY': Decimal('0.009'),
	'GBP': Decimal('1.33'),
	'AUD': Decimal('0.74'),
	'CAD': Decimal('0.80'),
	'CZK': Decimal('0.044'),
	'CHF': Decimal('1.10'),
	'SEK': Decimal('0.095'),
	'NOK': Decimal('0.093'),
	'DKK': Decimal('0.158'),
	'NZD': Decimal('0.61'),
	'CNY': Decimal('0.14'),
	'INR': Decimal('0.012'),
	'BRL': Decimal('0.20'),
	'MXN': Decimal('0.058'),
	'ZAR': Decimal('0.052'),
}


class StaticRateSource(RateSourceClient):
	"""Serves a fixed rate table, used where no live upstream is wired in."""

	def __init__(
		self,
		rates: Mapping[str, Decimal] | None = None,
		name: str = 'fed-mock',
		endpoint: str = 'Mock data for testing purposes',
	):
		self._rates = dict(USD_MOCK_RATES if rates is None else rates)
		self._name = name
		self._endpoint = endpoint

	@property
	def name(self) -> str:
		return self._name

	@property
	def endpoint(self) -> str:
		return self._endpoint

	async def fetch_daily_rates(self) -> list[RawRateQuote]:
		now = datetime.now(UTC)
		return [
			RawRateQuote(currency_code=code, amount=1, rate=rate, valid_for=now)
			for code, rate in self._rates.items()
		]
