class CurrencyException(Exception):
    pass


class InvalidCurrencyError(CurrencyException, ValueError):
    pass

class ProviderError(CurrencyException):
    pass

class NormalizationError(CurrencyException):
    pass

class UnknownProviderError(CurrencyException):
    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        super().__init__(f'No exchange rate provider registered for currency {currency_code}')
