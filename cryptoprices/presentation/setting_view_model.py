"""Settings screen state."""

from ..container import Container
from ..flags import FeatureFlag
from ..services import FEATURE_FLAGS


class SettingViewModel:
    """Settings screen state. Writes go straight through to the flag store."""

    def __init__(self, container: Container):
        self._flags = container.require(FEATURE_FLAGS)
        self._support_eur = self._flags.get_value(FeatureFlag.SUPPORT_EUR)

    @property
    def support_eur(self) -> bool:
        return self._support_eur

    @support_eur.setter
    def support_eur(self, value: bool) -> None:
        self._support_eur = bool(value)
        self._flags.update(FeatureFlag.SUPPORT_EUR, self._support_eur)

    def toggle_support_eur(self) -> bool:
        self.support_eur = not self._support_eur
        return self._support_eur
