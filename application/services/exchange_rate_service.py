from collections.abc import Iterable

from domain.models.currency import Currency, ExchangeRate

from application.services.rate_provider import RateProvider
from application.services.registry import ProviderRegistry


class ExchangeRateService:
	def __init__(self, registry: ProviderRegistry):
		self.registry = registry

	def get_providers(self) -> list[RateProvider]:
		return self.registry.providers

	async def get_exchange_rates(
		self, target_currency: str | None, currencies: Iterable[Currency]
	) -> list[ExchangeRate]:
		code = (target_currency or '').strip().upper()
		provider = self.registry.resolve(code)
		return await provider.get_exchange_rates(currencies)
