"""Price use cases consumed by the view-models."""

import logging
from abc import ABC, abstractmethod

from .data.repository import IMarketsRepository
from .models import AllPrice, USDPrice

logger = logging.getLogger(__name__)


class IMarketsPriceUseCase(ABC):
    """Fetches cryptocurrency prices for display."""

    @abstractmethod
    async def fetch_usd_prices(self) -> list[USDPrice]:
        """USD prices only."""
        ...

    @abstractmethod
    async def fetch_all_prices(self) -> list[AllPrice]:
        """USD and EUR prices."""
        ...


class MarketsPriceUseCase(IMarketsPriceUseCase):
    def __init__(self, repository: IMarketsRepository):
        self._repository = repository

    async def fetch_usd_prices(self) -> list[USDPrice]:
        prices = await self._repository.fetch_usd_prices()
        logger.debug(f"Fetched {len(prices)} USD prices")
        return prices

    async def fetch_all_prices(self) -> list[AllPrice]:
        prices = await self._repository.fetch_all_prices()
        logger.debug(f"Fetched {len(prices)} USD/EUR prices")
        return prices
