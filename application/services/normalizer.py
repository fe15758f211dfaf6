import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from domain.exceptions.currency import InvalidCurrencyError, NormalizationError
from domain.models.currency import Currency, ExchangeRate, InvalidQuotePolicy
from infrastructure.providers.schemas import RawRateQuote

logger = logging.getLogger(__name__)


class RateNormalizer:
	"""Turns raw upstream quotes into per-unit ``ExchangeRate`` records.

	A quote for ``amount`` units is divided down to one unit using Decimal
	arithmetic. Quotes with a non-positive amount or rate, or an unusable
	currency code, are handled according to ``policy``.
	"""

	def __init__(
		self,
		target_currency: Currency | str,
		policy: InvalidQuotePolicy = InvalidQuotePolicy.SKIP,
	):
		if isinstance(target_currency, str):
			target_currency = Currency(target_currency)
		self.target_currency = target_currency
		self.policy = InvalidQuotePolicy(policy)

	def normalize(self, quotes: Iterable[RawRateQuote]) -> list[ExchangeRate]:
		fetched_at = datetime.now(UTC)
		rates: list[ExchangeRate] = []

		for quote in quotes:
			try:
				rates.append(self._normalize_quote(quote, fetched_at))
			except NormalizationError as e:
				if self.policy is InvalidQuotePolicy.FAIL:
					raise
				logger.debug(f'Skipping rate entry: {e}')

		return rates

	def _normalize_quote(self, quote: RawRateQuote, fetched_at: datetime) -> ExchangeRate:
		if quote.amount <= 0:
			raise NormalizationError(
				f'Invalid rate entry for {quote.currency_code!r}: amount must be positive, got {quote.amount}'
			)
		if quote.rate <= 0:
			raise NormalizationError(
				f'Invalid rate entry for {quote.currency_code!r}: rate must be positive, got {quote.rate}'
			)
		try:
			source = Currency(quote.currency_code)
		except InvalidCurrencyError as e:
			raise NormalizationError(f'Invalid rate entry: {e}') from e

		return ExchangeRate(
			source_currency=source,
			target_currency=self.target_currency,
			value=quote.rate / quote.amount,
			valid_for=quote.valid_for or fetched_at,
		)
