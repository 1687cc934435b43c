"""
Crypto Prices - cryptocurrency price list backed by bundled JSON fixtures.

The core is a thread-safe lazy-singleton service container and an
observable feature-flag store distributed through it.

Quick Start:
    from cryptoprices import build_container, FeatureFlag
    from cryptoprices.services import FEATURE_FLAGS

    container = build_container()
    flags = container.require(FEATURE_FLAGS)

    subscription = flags.observe_flag_value(FeatureFlag.SUPPORT_EUR).subscribe(print)
    flags.update(FeatureFlag.SUPPORT_EUR, True)
    subscription.cancel()
"""

from .app import build_container
from .config import PricesConfig
from .container import Container, ServiceKey
from .exceptions import (
    ConfigurationError,
    DataSourceError,
    DependencyMissingError,
    InvalidDataError,
    MissingFileError,
    PricesError,
    RemoteNotImplementedError,
)
from .flags import FeatureFlag, FeatureFlagProvider, IFeatureFlagProvider
from .observable import BehaviorRelay, Observable, Subscription

__version__ = "1.0.0"

__all__ = [
    # Core
    "Container",
    "ServiceKey",
    "FeatureFlag",
    "FeatureFlagProvider",
    "IFeatureFlagProvider",
    "BehaviorRelay",
    "Observable",
    "Subscription",
    "PricesConfig",
    "build_container",
    # Exceptions
    "PricesError",
    "ConfigurationError",
    "DependencyMissingError",
    "DataSourceError",
    "MissingFileError",
    "InvalidDataError",
    "RemoteNotImplementedError",
]
