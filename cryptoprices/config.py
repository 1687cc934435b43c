"""
Crypto Prices Configuration.

Provides sensible defaults with override capability.
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError
from .flags import FeatureFlag

DEFAULT_FIXTURES_DIR = Path(__file__).resolve().parent / "data" / "fixtures"
DEFAULT_REMOTE_BASE_URL = "https://api.crypto.com"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigurationError(f"Not a boolean: {value!r}")


class PricesConfig(BaseModel):
    """
    Configuration for the price list client.

    Environment variables override defaults (CRYPTOPRICES_* prefix).
    """

    # Data source
    provider: Literal["local", "remote"] = "local"
    remote_base_url: str = DEFAULT_REMOTE_BASE_URL
    fixtures_dir: Path = Field(default_factory=lambda: DEFAULT_FIXTURES_DIR)
    network_delay: float = Field(default=1.0, ge=0.0)  # simulated, seconds
    source_logging: bool = False

    # Feature flag defaults, keyed by flag value ("supportEUR")
    feature_flags: dict[str, bool] = Field(default_factory=dict)

    # Logging
    log_level: str = "INFO"

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def model_post_init(self, __context: Any) -> None:
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self) -> None:
        env_map = {
            "CRYPTOPRICES_PROVIDER": ("provider", str),
            "CRYPTOPRICES_REMOTE_BASE_URL": ("remote_base_url", str),
            "CRYPTOPRICES_FIXTURES_DIR": ("fixtures_dir", Path),
            "CRYPTOPRICES_NETWORK_DELAY": ("network_delay", float),
            "CRYPTOPRICES_SOURCE_LOGGING": ("source_logging", parse_bool),
            "CRYPTOPRICES_LOG_LEVEL": ("log_level", str),
        }

        for env_var, (attr, type_fn) in env_map.items():
            value = os.environ.get(env_var)
            if value is None:
                continue
            try:
                setattr(self, attr, type_fn(value))
            except ValueError as e:
                raise ConfigurationError(f"Invalid {env_var}: {value!r}") from e

        if self.provider not in ("local", "remote"):
            raise ConfigurationError(f"Unknown provider: {self.provider}")
        if self.network_delay < 0:
            raise ConfigurationError(f"network_delay must be >= 0, got {self.network_delay}")

        level = self.log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown log level: {self.log_level!r}")
        self.log_level = level

    def initial_flags(self) -> dict[FeatureFlag, bool]:
        """Feature flag defaults as FeatureFlag members."""
        try:
            return {FeatureFlag.parse(name): value for name, value in self.feature_flags.items()}
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "remote_base_url": self.remote_base_url,
            "fixtures_dir": str(self.fixtures_dir),
            "network_delay": self.network_delay,
            "source_logging": self.source_logging,
            "feature_flags": dict(self.feature_flags),
            "log_level": self.log_level,
        }

    @classmethod
    def load(cls, path: Path) -> "PricesConfig":
        """Load config from a YAML file."""
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigurationError(f"Cannot read config {path}: {e}", str(path)) from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}", str(path)) from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {path} must be a mapping", str(path))

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config {path}: {e}", str(path)) from e

    @classmethod
    def from_file(cls, path: Optional[Path] = None) -> "PricesConfig":
        """Load from ``path`` if given, else from defaults and environment."""
        return cls.load(path) if path else cls()

    @classmethod
    def development(cls) -> "PricesConfig":
        """Development config: no simulated delay, verbose logging."""
        return cls(network_delay=0.0, source_logging=True, log_level="DEBUG")

    @classmethod
    def testing(cls, **overrides: Any) -> "PricesConfig":
        """Test config: no simulated delay."""
        values: dict[str, Any] = {"network_delay": 0.0}
        values.update(overrides)
        return cls(**values)
