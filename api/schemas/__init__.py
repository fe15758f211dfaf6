from .requests import ExchangeRateRequest
from .responses import ExchangeRateDto, ExchangeRateResponse, ProviderInfo, ProvidersResponse

__all__ = [
	'ExchangeRateDto',
	'ExchangeRateRequest',
	'ExchangeRateResponse',
	'ProviderInfo',
	'ProvidersResponse',
]
