from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.models.currency import InvalidQuotePolicy


class Settings(BaseSettings):
	# Upstream
	CNB_API_URL: str = 'https://api.cnb.cz/cnbapi/exrates/daily'
	HTTP_TIMEOUT: float = 10.0

	# Retry policy for upstream calls
	RETRY_MAX_RETRIES: int = 3
	RETRY_BACKOFF_INITIAL: float = 0.5
	RETRY_BACKOFF_MAX: float = 4.0
	RETRY_BACKOFF_JITTER: float = 0.5

	RATES_CACHE_TTL_SECONDS: int = 300
	INVALID_QUOTE_POLICY: InvalidQuotePolicy = InvalidQuotePolicy.SKIP
	DEFAULT_TARGET_CURRENCY: str = 'CZK'

	# Application
	APP_NAME: str = 'Exchange Rate API'
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
