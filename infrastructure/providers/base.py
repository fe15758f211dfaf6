from abc import ABC, abstractmethod

from infrastructure.providers.schemas import RawRateQuote


class RateSourceClient(ABC):
    """A source of raw daily rate quotes for a single target currency."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def endpoint(self) -> str:
        ...

    @abstractmethod
    async def fetch_daily_rates(self) -> list[RawRateQuote]:
        ...

    async def close(self) -> None:
        """Release any resources held by the client."""
