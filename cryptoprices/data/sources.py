"""
Data sources for price fixtures.

The local source reads JSON files bundled with the package and simulates a
network round trip. The remote source is a placeholder.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import (
    DataSourceError,
    DataSourceInternalError,
    InvalidDataError,
    MissingFileError,
    RemoteNotImplementedError,
)
from .resources import DataSourceResource

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class NetworkProvider:
    """Which data source backs the repository."""

    kind: Literal["local", "remote"] = "local"
    base_url: Optional[str] = None

    @classmethod
    def local(cls) -> "NetworkProvider":
        return cls("local")

    @classmethod
    def remote(cls, base_url: str) -> "NetworkProvider":
        return cls("remote", base_url)

    @property
    def description(self) -> str:
        if self.kind == "local":
            return "Local Data Source"
        return f"Remote Data Source ({self.base_url})"


class IDataSource(ABC):
    """Port for fetching a resource decoded into a model."""

    @abstractmethod
    async def fetch_data(self, resource: DataSourceResource, model: type[M]) -> M:
        """Fetch ``resource`` and validate it into ``model``.

        Raises:
            DataSourceError: On any failure.
        """
        ...


class LocalDataSource(IDataSource):
    """Reads bundled JSON fixtures from a directory."""

    def __init__(self, fixtures_dir: Path, network_delay: float = 1.0):
        self.fixtures_dir = Path(fixtures_dir)
        self.network_delay = network_delay

    async def fetch_data(self, resource: DataSourceResource, model: type[M]) -> M:
        logger.debug(f"Starting to fetch data for type: {resource.description}")

        if self.network_delay > 0:
            await asyncio.sleep(self.network_delay)
            logger.debug(f"Simulated network delay: {self.network_delay} seconds")

        try:
            raw = await asyncio.to_thread(self._read, resource)
            result = model.model_validate_json(raw)
        except ValidationError as e:
            logger.error(f"Decoding failed for {resource.filename}: {e}")
            raise InvalidDataError(e) from e
        except DataSourceError as e:
            logger.error(f"Data fetch failed: {e.message}")
            raise

        logger.debug(f"Successfully parsed data for type {resource.description}")
        return result

    def _read(self, resource: DataSourceResource) -> bytes:
        path = self.fixtures_dir / resource.filename
        if not path.is_file():
            raise MissingFileError(resource.filename)
        try:
            return path.read_bytes()
        except OSError as e:
            raise DataSourceInternalError(e) from e


class RemoteDataSource(IDataSource):
    """Placeholder for an HTTP-backed source."""

    def __init__(self, base_url: str):
        self.base_url = base_url

    async def fetch_data(self, resource: DataSourceResource, model: type[M]) -> M:
        raise RemoteNotImplementedError(self.base_url)


def create_data_source(
    provider: NetworkProvider,
    fixtures_dir: Path,
    network_delay: float = 1.0,
) -> IDataSource:
    if provider.kind == "remote":
        return RemoteDataSource(provider.base_url or "")
    return LocalDataSource(fixtures_dir, network_delay)
