"""Detail screen state for a single price row."""

from ..container import Container
from ..flags import FeatureFlag
from ..services import FEATURE_FLAGS
from .list_view_model import DisplayItem


class DetailViewModel:
    """Price breakdown for a single token; EUR line follows the supportEUR flag."""

    def __init__(self, display_item: DisplayItem, container: Container):
        self._display_item = display_item
        self._flags = container.require(FEATURE_FLAGS)

        self.show_eur_price = False
        self.formatted_prices = ""
        self._update_formatted_prices()

        self._subscription = self._flags.observe_flag_value(
            FeatureFlag.SUPPORT_EUR
        ).subscribe(self._on_show_eur)

    @property
    def token_name(self) -> str:
        return self._display_item.name

    def close(self) -> None:
        self._subscription.cancel()

    def _on_show_eur(self, show_eur: bool) -> None:
        self.show_eur_price = show_eur
        self._update_formatted_prices()

    def _update_formatted_prices(self) -> None:
        item = self._display_item
        if self.show_eur_price and item.eur_price is not None:
            self.formatted_prices = f"USD: {item.usd_price}\nEUR: {item.eur_price}"
        else:
            self.formatted_prices = f"USD: {item.usd_price}"
