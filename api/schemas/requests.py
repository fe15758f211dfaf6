from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExchangeRateRequest(BaseModel):
	currency_codes: list[str] = Field(..., description='Source currency codes to price')
	target_currency: str | None = Field(
		default=None, description='Target currency code, defaults to CZK'
	)

	model_config = ConfigDict(
		json_schema_extra={
			'example': {'currency_codes': ['USD', 'EUR', 'JPY'], 'target_currency': 'CZK'}
		}
	)

	@field_validator('currency_codes')
	@classmethod
	def drop_blank_codes(cls, v: list[str]):
		return [code.strip().upper() for code in v if code and code.strip()]

	@field_validator('target_currency')
	@classmethod
	def uppercase_target(cls, v: str | None):
		if v is None or not v.strip():
			return None
		return v.strip().upper()
