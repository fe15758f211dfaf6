import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from domain.models.currency import Currency, ExchangeRate

from application.services.rate_store import CachedRateStore

logger = logging.getLogger(__name__)


@runtime_checkable
class RateProvider(Protocol):
	@property
	def target_currency(self) -> Currency: ...

	async def get_exchange_rates(
		self, currencies: Iterable[Currency] | None
	) -> list[ExchangeRate]: ...


class ExchangeRateProvider:
	def __init__(self, store: CachedRateStore, name: str, description: str = ''):
		self.store = store
		self.name = name
		self.description = description

	@property
	def target_currency(self) -> Currency:
		return self.store.target_currency

	@property
	def endpoint(self) -> str:
		return self.store.client.endpoint

	async def get_exchange_rates(
		self, currencies: Iterable[Currency] | None
	) -> list[ExchangeRate]:
		"""Return today's rates for the requested source currencies.

		An absent or empty request yields an empty list without touching the
		rate store. The result follows the order of the daily rate list.
		"""
		requested = {c.code.upper() for c in currencies} if currencies is not None else set()
		if not requested:
			logger.warning('Requested currencies collection is empty. Returning empty result.')
			return []

		logger.debug(
			f'Fetching exchange rates for {len(requested)} requested currencies '
			f'via provider {self.target_currency}.'
		)
		all_rates = await self.store.get_daily_rates()

		requested_rates = [r for r in all_rates if r.source_currency.code.upper() in requested]

		logger.info(
			f'Provider {self.target_currency} returned '
			f'{len(requested_rates)}/{len(all_rates)} matching rates.'
		)
		return requested_rates
