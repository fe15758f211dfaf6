import asyncio
import logging
from datetime import timedelta

from domain.models.currency import Currency, ExchangeRate
from infrastructure.cache.memory_cache import InMemoryCacheService, make_daily_rates_key
from infrastructure.providers.base import RateSourceClient

from application.services.normalizer import RateNormalizer

logger = logging.getLogger(__name__)


class CachedRateStore:
	"""Cache-aside access to one target currency's daily rates.

	On a miss exactly one fetch-and-normalize runs per cache key; concurrent
	callers attach to it and receive the same result or the same exception.
	Failures are not cached.

	Cancelling the caller that started the fetch cancels the fetch, and the
	callers attached to it go back to the cache and start a new one. An
	attached caller that is cancelled just stops waiting.
	"""

	def __init__(
		self,
		client: RateSourceClient,
		normalizer: RateNormalizer,
		cache: InMemoryCacheService,
		ttl: timedelta = timedelta(minutes=5),
	):
		self.client = client
		self.normalizer = normalizer
		self.cache = cache
		self.ttl = ttl
		self.cache_key = make_daily_rates_key(normalizer.target_currency.code)

		self._lock = asyncio.Lock()
		self._pending: dict[str, asyncio.Task] = {}

	@property
	def target_currency(self) -> Currency:
		return self.normalizer.target_currency

	async def get_daily_rates(self) -> tuple[ExchangeRate, ...]:
		while True:
			async with self._lock:
				cached = self.cache.get(self.cache_key)
				if cached is not None:
					logger.debug(f'Cache hit for {self.cache_key}')
					return cached

				fetch = self._pending.get(self.cache_key)
				# a finished task here was cancelled before it ever ran
				owner = fetch is None or fetch.done()
				if owner:
					logger.info(f'Cache miss for {self.cache_key}. Fetching and normalizing.')
					fetch = asyncio.create_task(self._fetch_and_store())
					self._pending[self.cache_key] = fetch

			if owner:
				return await fetch

			await asyncio.wait({fetch})
			if fetch.cancelled():
				logger.debug(f'In-flight fetch for {self.cache_key} was cancelled; retrying')
				continue
			return fetch.result()

	async def _fetch_and_store(self) -> tuple[ExchangeRate, ...]:
		try:
			raw = await self.client.fetch_daily_rates()
			rates = tuple(self.normalizer.normalize(raw))
			async with self._lock:
				self.cache.set(self.cache_key, rates, self.ttl)
			logger.info(
				f'Normalized {len(rates)} {self.client.name} exchange rates '
				f'(base {self.target_currency}).'
			)
			return rates
		finally:
			if self._pending.get(self.cache_key) is asyncio.current_task():
				del self._pending[self.cache_key]
