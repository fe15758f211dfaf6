import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from domain.exceptions.currency import InvalidCurrencyError, UnknownProviderError

from application.services.rate_provider import RateProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
	"""Fixed mapping of target currency code to the provider serving it.

	Codes are looked up as given; callers normalize them first.
	"""

	def __init__(self, providers: Mapping[str, RateProvider]):
		self._providers = MappingProxyType(dict(providers))

	@classmethod
	def from_providers(cls, providers: Iterable[RateProvider]) -> 'ProviderRegistry':
		mapping: dict[str, RateProvider] = {}
		for provider in providers:
			code = provider.target_currency.code
			if code in mapping:
				raise ValueError(f'Duplicate exchange rate provider for currency {code}')
			mapping[code] = provider
		return cls(mapping)

	@property
	def providers(self) -> list[RateProvider]:
		return list(self._providers.values())

	@property
	def currency_codes(self) -> list[str]:
		return list(self._providers)

	def resolve(self, currency_code: str | None) -> RateProvider:
		if currency_code is None or not currency_code.strip():
			logger.error('Attempted to get provider with empty currency code.')
			raise InvalidCurrencyError('Target currency code must be provided')

		provider = self._providers.get(currency_code)
		if provider is None:
			logger.error(f'No exchange rate provider registered for currency {currency_code}')
			raise UnknownProviderError(currency_code)

		logger.debug(f'Resolved exchange rate provider for currency {currency_code}')
		return provider
