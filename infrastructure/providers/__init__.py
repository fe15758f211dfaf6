from .base import RateSourceClient
from .cnb import CnbApiClient
from .retry import RetryPolicy, is_retryable_status
from .schemas import RawRateQuote, parse_rates_payload
from .static import StaticRateSource

__all__ = [
	'CnbApiClient',
	'RateSourceClient',
	'RawRateQuote',
	'RetryPolicy',
	'StaticRateSource',
	'is_retryable_status',
	'parse_rates_payload',
]
