"""View-model behind the price list screen."""

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..container import Container
from ..exceptions import PricesError
from ..flags import FeatureFlag
from ..formatting import CryptoFormatter
from ..models import AllPrice, USDPrice
from ..observable import Subscription
from ..services import FEATURE_FLAGS, FORMATTER, PRICE_USE_CASE

logger = logging.getLogger(__name__)


class LoadingState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class DisplayItem:
    """One formatted row. Rows are identified by ``id`` alone."""

    id: int
    name: str
    symbol: str
    usd_price: str
    eur_price: Optional[str] = field(default=None)
    tags: tuple[str, ...] = ()
    show_eur: bool = False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DisplayItem):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def extract_symbol(name: str) -> str:
    return name[:3].upper()


class CryptoListViewModel:
    """
    Loads prices in USD, or USD and EUR when the supportEUR flag is on.

    Once ``load()`` has run on an event loop, later flag changes reload the
    list on that loop. Only the most recent load may publish its result.
    """

    def __init__(self, container: Container):
        self._use_case = container.require(PRICE_USE_CASE)
        self._flags = container.require(FEATURE_FLAGS)
        self._formatter = container.resolve(FORMATTER) or CryptoFormatter()

        self.items: list[DisplayItem] = []
        self.state = LoadingState.IDLE
        self.error_message: Optional[str] = None
        self.show_eur_price = False

        self._all_items: list[DisplayItem] = []
        self._search_text = ""
        self._generation = 0
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._load_task: Optional[asyncio.Task] = None

        self._subscriptions: list[Subscription] = [
            self._flags.observe_flag_value(FeatureFlag.SUPPORT_EUR).subscribe(self._on_show_eur)
        ]

    @property
    def is_loading(self) -> bool:
        return self.state is LoadingState.LOADING

    @property
    def search_text(self) -> str:
        return self._search_text

    @search_text.setter
    def search_text(self, value: str) -> None:
        self._search_text = value
        self._filter_items()

    async def load(self) -> list[DisplayItem]:
        """Fetch prices for the current flag value and publish them."""
        self._loop = asyncio.get_running_loop()
        self._generation += 1
        generation = self._generation
        show_eur = self.show_eur_price

        self.state = LoadingState.LOADING
        self.error_message = None

        try:
            if show_eur:
                items = self._convert_all_prices(await self._use_case.fetch_all_prices())
            else:
                items = self._convert_usd_prices(await self._use_case.fetch_usd_prices())
        except PricesError as e:
            if generation == self._generation:
                logger.warning(f"Loading prices failed: {e.message}")
                self.state = LoadingState.ERROR
                self.error_message = e.message
            return []

        if generation != self._generation:
            return items

        self._all_items = items
        self._filter_items()
        self.state = LoadingState.SUCCESS
        return self.items

    def close(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()

    def _on_show_eur(self, show_eur: bool) -> None:
        self.show_eur_price = show_eur
        loop = self._loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(self._reload)

    def _reload(self) -> None:
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        if self._loop is not None:
            self._load_task = self._loop.create_task(self.load())

    def _filter_items(self) -> None:
        if not self._search_text:
            self.items = list(self._all_items)
            return

        needle = self._search_text.lower()
        self.items = [
            item
            for item in self._all_items
            if needle in item.name.lower()
            or needle in item.symbol.lower()
            or any(needle in tag.lower() for tag in item.tags)
        ]

    def _convert_usd_prices(self, prices: list[USDPrice]) -> list[DisplayItem]:
        return [
            self._display_item(price.id, price.name, price.tag_strings, price.usd, None)
            for price in prices
        ]

    def _convert_all_prices(self, prices: list[AllPrice]) -> list[DisplayItem]:
        return [
            self._display_item(price.id, price.name, price.tag_strings, price.usd, price.eur)
            for price in prices
        ]

    def _display_item(
        self,
        id: int,
        name: str,
        tags: list[str],
        usd: Decimal,
        eur: Optional[Decimal],
    ) -> DisplayItem:
        return DisplayItem(
            id=id,
            name=name,
            symbol=extract_symbol(name),
            usd_price=self._formatter.format_usd(usd),
            eur_price=self._formatter.format_eur(eur) if eur is not None else None,
            tags=tuple(sorted(tags, key=str.lower)),
            show_eur=eur is not None,
        )
