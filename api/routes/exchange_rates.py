import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_app_settings, get_exchange_rate_service
from api.schemas import (
	ExchangeRateDto,
	ExchangeRateRequest,
	ExchangeRateResponse,
	ProviderInfo,
	ProvidersResponse,
)
from application.services import ExchangeRateService
from config.settings import Settings
from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import Currency

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/v1/api/exchange-rates', tags=['exchange-rates'])

QUERY_CODES_PATTERN = re.compile(r'^[A-Za-z]{3}(?:,[A-Za-z]{3})*$')


async def _fetch_rates(
	service: ExchangeRateService, target_currency: str, codes: list[str]
) -> ExchangeRateResponse:
	if not codes:
		logger.warning('Exchange rate request received with no valid currency codes')
		raise InvalidCurrencyError('At least one currency code must be provided')

	currencies = [Currency(code) for code in codes]
	rates = await service.get_exchange_rates(target_currency, currencies)

	logger.info(
		f'Successfully retrieved {len(rates)} exchange rates for target currency {target_currency}'
	)
	return ExchangeRateResponse(
		target_currency=target_currency,
		rates=[
			ExchangeRateDto(
				source_currency=rate.source_currency.code,
				target_currency=rate.target_currency.code,
				rate=rate.value,
				valid_for=rate.valid_for,
			)
			for rate in rates
		],
	)


@router.post(
	'/rates',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get exchange rates using POST request',
)
async def get_exchange_rates(
	request: ExchangeRateRequest,
	service: Annotated[ExchangeRateService, Depends(get_exchange_rate_service)],
	settings: Annotated[Settings, Depends(get_app_settings)],
) -> ExchangeRateResponse:
	logger.info(
		f'Received request for exchange rates with {len(request.currency_codes)} currencies'
	)
	target_currency = request.target_currency or settings.DEFAULT_TARGET_CURRENCY
	return await _fetch_rates(service, target_currency, request.currency_codes)


@router.get(
	'/rates',
	response_model=ExchangeRateResponse,
	status_code=status.HTTP_200_OK,
	summary='Get exchange rates using GET request',
)
async def get_exchange_rates_query(
	currencies: Annotated[
		str, Query(description="Comma-separated currency codes (e.g. 'USD,EUR,JPY')")
	],
	service: Annotated[ExchangeRateService, Depends(get_exchange_rate_service)],
	settings: Annotated[Settings, Depends(get_app_settings)],
	target_currency: Annotated[
		str | None, Query(description='Target currency code, defaults to CZK')
	] = None,
) -> ExchangeRateResponse:
	currencies = currencies.strip()
	if not QUERY_CODES_PATTERN.match(currencies):
		raise InvalidCurrencyError(
			'Currency codes must be in XXX,YYY,ZZZ format with 3-letter codes'
		)

	codes = [code.upper() for code in currencies.split(',')]
	target = (target_currency or '').strip().upper() or settings.DEFAULT_TARGET_CURRENCY
	return await _fetch_rates(service, target, codes)


@router.get(
	'/providers',
	response_model=ProvidersResponse,
	status_code=status.HTTP_200_OK,
	summary='List available exchange rate providers',
)
async def get_available_providers(
	service: Annotated[ExchangeRateService, Depends(get_exchange_rate_service)],
) -> ProvidersResponse:
	return ProvidersResponse(
		providers=[
			ProviderInfo(
				currency_code=provider.target_currency.code,
				name=provider.name,
				description=provider.description,
				endpoint=provider.endpoint,
			)
			for provider in service.get_providers()
		]
	)
