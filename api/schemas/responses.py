from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ExchangeRateDto(BaseModel):
	source_currency: str = Field(..., description='Currency being priced')
	target_currency: str = Field(..., description='Currency the rate is expressed in')
	rate: Decimal = Field(..., description='Target units per one unit of source currency')
	valid_for: datetime = Field(..., description='Date the rate applies to')


class ExchangeRateResponse(BaseModel):
	target_currency: str = Field(..., description='Target currency code used for all rates')
	rates: list[ExchangeRateDto] = Field(default_factory=list)
	retrieved_at: datetime = Field(
		default_factory=lambda: datetime.now(UTC),
		description='UTC timestamp when the rates were retrieved',
	)

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'target_currency': 'CZK',
				'rates': [
					{
						'source_currency': 'USD',
						'target_currency': 'CZK',
						'rate': 22.5,
						'valid_for': '2025-11-05T00:00:00',
					}
				],
				'retrieved_at': '2025-11-05T10:30:00Z',
			}
		}
	)


class ProviderInfo(BaseModel):
	currency_code: str = Field(..., description='Target currency served by the provider')
	name: str
	description: str
	endpoint: str


class ProvidersResponse(BaseModel):
	providers: list[ProviderInfo]
