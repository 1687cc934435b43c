"""
Application composition root.

Library code receives a Container explicitly. The process-wide default
container exists only here, for entry points such as the CLI.
"""

import logging
import threading
from typing import Optional

from .config import PricesConfig
from .container import Container
from .data.repository import MarketsRepository
from .data.sources import NetworkProvider, create_data_source
from .flags import FeatureFlagProvider
from .formatting import CryptoFormatter
from .services import (
    DATA_SOURCE,
    FEATURE_FLAGS,
    FORMATTER,
    MARKETS_REPOSITORY,
    PRICE_USE_CASE,
)
from .use_cases import MarketsPriceUseCase

logger = logging.getLogger(__name__)


def network_provider(config: PricesConfig) -> NetworkProvider:
    if config.provider == "remote":
        return NetworkProvider.remote(config.remote_base_url)
    return NetworkProvider.local()


def build_container(config: Optional[PricesConfig] = None) -> Container:
    """Register every application service. Nothing is built until resolved."""
    config = config or PricesConfig()
    provider = network_provider(config)
    initial_flags = config.initial_flags()

    container = Container()
    container.register(FEATURE_FLAGS, lambda c: FeatureFlagProvider(initial_flags))
    container.register(
        DATA_SOURCE,
        lambda c: create_data_source(provider, config.fixtures_dir, config.network_delay),
    )
    container.register(
        MARKETS_REPOSITORY, lambda c: MarketsRepository(c.require(DATA_SOURCE))
    )
    container.register(
        PRICE_USE_CASE, lambda c: MarketsPriceUseCase(c.require(MARKETS_REPOSITORY))
    )
    container.register(FORMATTER, lambda c: CryptoFormatter())

    logger.debug(f"Container built with {provider.description}")
    return container


_default_container: Optional[Container] = None
_default_lock = threading.Lock()


def get_default_container(config: Optional[PricesConfig] = None) -> Container:
    """Get or create the process-wide container. ``config`` applies on creation only."""
    global _default_container
    with _default_lock:
        if _default_container is None:
            _default_container = build_container(config)
        return _default_container


def reset_default_container() -> None:
    global _default_container
    with _default_lock:
        _default_container = None
