from .repository import IMarketsRepository, MarketsRepository
from .resources import DataSourceResource
from .sources import (
    IDataSource,
    LocalDataSource,
    NetworkProvider,
    RemoteDataSource,
    create_data_source,
)

__all__ = [
    "DataSourceResource",
    "IDataSource",
    "IMarketsRepository",
    "LocalDataSource",
    "MarketsRepository",
    "NetworkProvider",
    "RemoteDataSource",
    "create_data_source",
]
