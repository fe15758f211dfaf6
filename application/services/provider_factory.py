from datetime import timedelta

import httpx

from config.settings import Settings
from infrastructure.cache.memory_cache import InMemoryCacheService
from infrastructure.providers import CnbApiClient, RateSourceClient, RetryPolicy, StaticRateSource

from application.services.normalizer import RateNormalizer
from application.services.rate_provider import ExchangeRateProvider
from application.services.rate_store import CachedRateStore


def build_provider(
	source: RateSourceClient,
	target_currency: str,
	cache: InMemoryCacheService,
	settings: Settings,
	name: str,
	description: str,
) -> ExchangeRateProvider:
	store = CachedRateStore(
		client=source,
		normalizer=RateNormalizer(target_currency, policy=settings.INVALID_QUOTE_POLICY),
		cache=cache,
		ttl=timedelta(seconds=settings.RATES_CACHE_TTL_SECONDS),
	)
	return ExchangeRateProvider(store, name=name, description=description)


def build_providers(
	settings: Settings, http_client: httpx.AsyncClient, cache: InMemoryCacheService
) -> list[ExchangeRateProvider]:
	"""Create one provider per supported target currency (CZK and USD)."""
	cnb = CnbApiClient(
		client=http_client,
		endpoint=settings.CNB_API_URL,
		retry_policy=RetryPolicy.from_settings(settings),
	)
	return [
		build_provider(
			cnb,
			'CZK',
			cache,
			settings,
			name='Czech National Bank',
			description='Provides exchange rates with CZK as target currency',
		),
		build_provider(
			StaticRateSource(),
			'USD',
			cache,
			settings,
			name='FED',
			description='Provides exchange rates with USD as target currency',
		),
	]
