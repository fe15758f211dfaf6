from .exchange_rate_service import ExchangeRateService
from .normalizer import RateNormalizer
from .provider_factory import build_providers
from .rate_provider import ExchangeRateProvider, RateProvider
from .rate_store import CachedRateStore
from .registry import ProviderRegistry

__all__ = [
	'CachedRateStore',
	'ExchangeRateProvider',
	'ExchangeRateService',
	'ProviderRegistry',
	'RateNormalizer',
	'RateProvider',
	'build_providers',
]
