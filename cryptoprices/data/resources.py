from enum import Enum


class DataSourceResource(str, Enum):
    """Bundled data resources, one fixture file each."""

    USD_PRICES = "usdPrices"
    ALL_PRICES = "allPrices"

    @property
    def description(self) -> str:
        return {
            DataSourceResource.USD_PRICES: "USD Price Data",
            DataSourceResource.ALL_PRICES: "All Price Data (USD + EUR)",
        }[self]

    @property
    def file_extension(self) -> str:
        return "json"

    @property
    def filename(self) -> str:
        return f"{self.value}.{self.file_extension}"

    @classmethod
    def price_resources(cls) -> list["DataSourceResource"]:
        return [cls.USD_PRICES, cls.ALL_PRICES]
