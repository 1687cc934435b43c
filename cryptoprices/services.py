"""Well-known service keys. One key per abstract contract."""

from .container import ServiceKey
from .data.repository import IMarketsRepository
from .data.sources import IDataSource
from .flags import IFeatureFlagProvider
from .formatting import CryptoFormatter
from .use_cases import IMarketsPriceUseCase

FEATURE_FLAGS: ServiceKey[IFeatureFlagProvider] = ServiceKey("feature_flags", IFeatureFlagProvider)
DATA_SOURCE: ServiceKey[IDataSource] = ServiceKey("data_source", IDataSource)
MARKETS_REPOSITORY: ServiceKey[IMarketsRepository] = ServiceKey("markets_repository", IMarketsRepository)
PRICE_USE_CASE: ServiceKey[IMarketsPriceUseCase] = ServiceKey("price_use_case", IMarketsPriceUseCase)
FORMATTER: ServiceKey[CryptoFormatter] = ServiceKey("formatter", CryptoFormatter)
