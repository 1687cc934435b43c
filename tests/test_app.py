"""
Tests for the composition root.
"""

import pytest

from cryptoprices.app import (
    build_container,
    get_default_container,
    network_provider,
    reset_default_container,
)
from cryptoprices.config import PricesConfig
from cryptoprices.data import LocalDataSource, MarketsRepository, RemoteDataSource
from cryptoprices.exceptions import ConfigurationError, RemoteNotImplementedError
from cryptoprices.flags import FeatureFlag, FeatureFlagProvider
from cryptoprices.formatting import CryptoFormatter
from cryptoprices.services import (
    DATA_SOURCE,
    FEATURE_FLAGS,
    FORMATTER,
    MARKETS_REPOSITORY,
    PRICE_USE_CASE,
)
from cryptoprices.use_cases import MarketsPriceUseCase


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("CRYPTOPRICES_PROVIDER", "CRYPTOPRICES_NETWORK_DELAY", "CRYPTOPRICES_FIXTURES_DIR"):
        monkeypatch.delenv(var, raising=False)
    reset_default_container()
    yield
    reset_default_container()


class TestBuildContainer:
    def test_registers_every_service(self):
        container = build_container(PricesConfig.testing())

        assert list(container.keys()) == [
            DATA_SOURCE,
            FEATURE_FLAGS,
            FORMATTER,
            MARKETS_REPOSITORY,
            PRICE_USE_CASE,
        ]

    def test_resolves_every_service(self):
        container = build_container(PricesConfig.testing())

        assert isinstance(container.resolve(FEATURE_FLAGS), FeatureFlagProvider)
        assert isinstance(container.resolve(DATA_SOURCE), LocalDataSource)
        assert isinstance(container.resolve(MARKETS_REPOSITORY), MarketsRepository)
        assert isinstance(container.resolve(PRICE_USE_CASE), MarketsPriceUseCase)
        assert isinstance(container.resolve(FORMATTER), CryptoFormatter)

    def test_services_are_singletons(self):
        container = build_container(PricesConfig.testing())
        assert container.require(PRICE_USE_CASE) is container.require(PRICE_USE_CASE)
        assert container.require(FEATURE_FLAGS) is container.require(FEATURE_FLAGS)

    def test_nothing_built_until_resolved(self, monkeypatch):
        built = []
        monkeypatch.setattr(
            "cryptoprices.app.FeatureFlagProvider",
            lambda initial: built.append(initial) or FeatureFlagProvider(initial),
        )

        container = build_container(PricesConfig.testing())
        assert built == []

        container.resolve(FEATURE_FLAGS)
        assert built == [{}]

    def test_initial_flags_from_config(self):
        config = PricesConfig.testing(feature_flags={"supportEUR": True})
        flags = build_container(config).require(FEATURE_FLAGS)

        assert flags.get_value(FeatureFlag.SUPPORT_EUR) is True

    def test_unknown_flag_in_config(self):
        with pytest.raises(ConfigurationError):
            build_container(PricesConfig.testing(feature_flags={"nope": True}))

    def test_data_source_uses_config(self, tmp_path):
        config = PricesConfig.testing(fixtures_dir=tmp_path, network_delay=0.5)
        source = build_container(config).require(DATA_SOURCE)

        assert source.fixtures_dir == tmp_path
        assert source.network_delay == 0.5

    @pytest.mark.asyncio
    async def test_remote_provider(self):
        config = PricesConfig.testing(provider="remote", remote_base_url="https://example.test")
        container = build_container(config)

        assert isinstance(container.require(DATA_SOURCE), RemoteDataSource)
        with pytest.raises(RemoteNotImplementedError):
            await container.require(PRICE_USE_CASE).fetch_usd_prices()


class TestNetworkProvider:
    def test_local(self):
        assert network_provider(PricesConfig.testing()).description == "Local Data Source"

    def test_remote(self):
        config = PricesConfig.testing(provider="remote", remote_base_url="https://example.test")
        assert network_provider(config).description == "Remote Data Source (https://example.test)"


class TestDefaultContainer:
    def test_singleton(self):
        assert get_default_container() is get_default_container()

    def test_config_applies_on_creation_only(self):
        first = get_default_container(PricesConfig.testing(feature_flags={"supportEUR": True}))
        second = get_default_container(PricesConfig.testing())

        assert first is second
        assert second.require(FEATURE_FLAGS).get_value(FeatureFlag.SUPPORT_EUR) is True

    def test_reset(self):
        first = get_default_container()
        reset_default_container()
        assert get_default_container() is not first
