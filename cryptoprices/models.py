"""Price models decoded from the bundled fixtures."""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Union

from pydantic import BaseModel, BeforeValidator


def _exact_decimal(value: Any) -> Any:
    # JSON numbers arrive as floats; go through repr so 0.1 stays 0.1
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


Amount = Annotated[Decimal, BeforeValidator(_exact_decimal)]


class Tag(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class PriceModel(BaseModel):
    """Fields shared by every price item."""

    model_config = {"frozen": True}

    id: int
    name: str
    tags: list[Tag] = []

    @property
    def tag_strings(self) -> list[str]:
        """Tags as plain strings for display."""
        return [tag.value for tag in self.tags]


class USDPrice(PriceModel):
    usd: Amount


class PriceRecord(BaseModel):
    model_config = {"frozen": True}

    usd: Amount
    eur: Amount


class AllPrice(PriceModel):
    price: PriceRecord

    @property
    def usd(self) -> Decimal:
        return self.price.usd

    @property
    def eur(self) -> Decimal:
        return self.price.eur


class USDPriceList(BaseModel):
    data: list[USDPrice]


class AllPriceList(BaseModel):
    data: list[AllPrice]


CryptoPriceItem = Union[USDPrice, AllPrice]
