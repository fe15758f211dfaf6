import logging
from datetime import timedelta
from typing import Annotated

import httpx
from fastapi import Depends

from application.services import ExchangeRateService, ProviderRegistry, build_providers
from config.settings import Settings, get_settings
from infrastructure.cache.memory_cache import InMemoryCacheService

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	http_client: httpx.AsyncClient | None = None
	cache: InMemoryCacheService | None = None
	registry: ProviderRegistry | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.HTTP_TIMEOUT))
	deps.cache = InMemoryCacheService(
		default_ttl=timedelta(seconds=settings.RATES_CACHE_TTL_SECONDS)
	)
	providers = build_providers(settings, deps.http_client, deps.cache)
	deps.registry = ProviderRegistry.from_providers(providers)

	logger.info(f'Dependencies initialized with providers for {", ".join(deps.registry.currency_codes)}')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.http_client:
		await deps.http_client.aclose()
	deps.http_client = None
	deps.cache = None
	deps.registry = None

	logger.info('Cleanup complete')


def get_registry() -> ProviderRegistry:
	if deps.registry is None:
		raise RuntimeError('Provider registry not initialized')
	return deps.registry


def get_exchange_rate_service(
	registry: Annotated[ProviderRegistry, Depends(get_registry)],
) -> ExchangeRateService:
	return ExchangeRateService(registry=registry)


def get_app_settings() -> Settings:
	return get_settings()
