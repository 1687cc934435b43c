"""Feature flags with synchronous access and observable changes."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Optional

from .observable import BehaviorRelay, Observable

logger = logging.getLogger(__name__)


class FeatureFlag(Enum):
    SUPPORT_EUR = "supportEUR"

    @classmethod
    def parse(cls, name: str) -> "FeatureFlag":
        """Look up a flag by value ("supportEUR") or member name ("SUPPORT_EUR")."""
        for flag in cls:
            if name in (flag.value, flag.name):
                return flag
        raise ValueError(f"Unknown feature flag: {name}")


class IFeatureFlagProvider(ABC):
    """Port for reading, writing and observing feature flags."""

    @abstractmethod
    def observe_flag_value(self, flag: FeatureFlag) -> Observable[bool]:
        """Stream of the flag's value: current value first, then each change."""
        ...

    @abstractmethod
    def get_value(self, flag: FeatureFlag) -> bool:
        """Current value of the flag. False if never set."""
        ...

    @abstractmethod
    def update(self, flag: FeatureFlag, new_value: bool) -> None:
        """Set the flag's value."""
        ...


class FeatureFlagProvider(IFeatureFlagProvider):
    """In-memory flag store.

    All flags share one relay of immutable snapshots. Each write publishes a
    fresh snapshot, so readers see a whole map before or after the write.
    Observers derive their own flag from the snapshot and suppress repeats.
    """

    def __init__(self, initial: Optional[Mapping[FeatureFlag, bool]] = None) -> None:
        flags = {flag: bool(value) for flag, value in (initial or {}).items()}
        self._relay: BehaviorRelay[Mapping[FeatureFlag, bool]] = BehaviorRelay(
            MappingProxyType(flags)
        )

    def observe_flag_value(self, flag: FeatureFlag) -> Observable[bool]:
        return (
            self._relay.observe()
            .map(lambda flags: flags.get(flag, False))
            .distinct_until_changed()
        )

    def get_value(self, flag: FeatureFlag) -> bool:
        return self._relay.value.get(flag, False)

    def update(self, flag: FeatureFlag, new_value: bool) -> None:
        def replace(current: Mapping[FeatureFlag, bool]) -> Mapping[FeatureFlag, bool]:
            flags = dict(current)
            flags[flag] = bool(new_value)
            return MappingProxyType(flags)

        self._relay.update(replace)
        logger.debug(f"Feature flag {flag.value} set to {bool(new_value)}")

    def snapshot(self) -> dict[FeatureFlag, bool]:
        return dict(self._relay.value)
