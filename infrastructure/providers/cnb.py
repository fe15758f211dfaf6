import logging
from decimal import Decimal

import httpx

from domain.exceptions.currency import ProviderError
from infrastructure.providers.base import RateSourceClient
from infrastructure.providers.retry import RetryPolicy
from infrastructure.providers.schemas import RawRateQuote, parse_rates_payload

logger = logging.getLogger(__name__)


class CnbApiClient(RateSourceClient):
	"""Czech National Bank daily rates, quoted in CZK."""

	DEFAULT_ENDPOINT = 'https://api.cnb.cz/cnbapi/exrates/daily'

	def __init__(
		self,
		client: httpx.AsyncClient | None = None,
		endpoint: str = DEFAULT_ENDPOINT,
		retry_policy: RetryPolicy | None = None,
		timeout: float = 10,
	):
		self._endpoint = endpoint
		self.retry_policy = retry_policy or RetryPolicy()
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'cnb'

	@property
	def endpoint(self) -> str:
		return self._endpoint

	async def _send(self) -> httpx.Response:
		response = await self._client.get(self._endpoint)
		if self.retry_policy.retryable_status(response.status_code):
			response.raise_for_status()
		return response

	async def fetch_daily_rates(self) -> list[RawRateQuote]:
		logger.info(f'Requesting CNB rates from {self._endpoint}')
		try:
			response = await self.retry_policy.retrying()(self._send)
			response.raise_for_status()
			payload = response.json(parse_float=Decimal)

		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'CNB HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'CNB request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise ProviderError(f'CNB response parsing error: {str(e)}') from e

		quotes = parse_rates_payload(payload)
		if not quotes:
			logger.warning('CNB rates response empty.')
		else:
			logger.info(f'CNB returned {len(quotes)} raw rates.')
		return quotes

	async def close(self) -> None:
		await self._client.aclose()
