"""Markets repository: price lists on top of a data source."""

from abc import ABC, abstractmethod

from ..models import AllPrice, AllPriceList, USDPrice, USDPriceList
from .resources import DataSourceResource
from .sources import IDataSource


class IMarketsRepository(ABC):
    @abstractmethod
    async def fetch_usd_prices(self) -> list[USDPrice]:
        ...

    @abstractmethod
    async def fetch_all_prices(self) -> list[AllPrice]:
        ...


class MarketsRepository(IMarketsRepository):
    def __init__(self, data_source: IDataSource):
        self._data_source = data_source

    async def fetch_usd_prices(self) -> list[USDPrice]:
        prices = await self._data_source.fetch_data(
            DataSourceResource.USD_PRICES, USDPriceList
        )
        return prices.data

    async def fetch_all_prices(self) -> list[AllPrice]:
        prices = await self._data_source.fetch_data(
            DataSourceResource.ALL_PRICES, AllPriceList
        )
        return prices.data
