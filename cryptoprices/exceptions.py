"""
Crypto Prices Exceptions.

All package exceptions inherit from PricesError for easy catching.
The container and the flag store never raise these for ordinary absence.
"""

from typing import Optional


class PricesError(Exception):
    """Base exception for all cryptoprices errors."""

    def __init__(self, message: str, code: str = "PRICES_ERROR"):
        super().__init__(message)
        self.code = code
        self.message = message


class ConfigurationError(PricesError):
    """Configuration file missing, unreadable or invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, "CONFIGURATION_ERROR")
        self.path = path


class DependencyMissingError(PricesError):
    """A required service could not be resolved from the container."""

    def __init__(self, service: str, registered: bool = False):
        reason = "could not be resolved from" if registered else "is not registered in"
        super().__init__(
            f"{service} {reason} dependency container",
            "DEPENDENCY_MISSING",
        )
        self.service = service
        self.registered = registered


class DataSourceError(PricesError):
    """Base for data source failures."""

    def __init__(self, message: str, code: str = "DATA_SOURCE_ERROR"):
        super().__init__(message, code)


class MissingFileError(DataSourceError):
    """Bundled fixture file not found."""

    def __init__(self, filename: str):
        super().__init__(f"Missing file: '{filename}'", "MISSING_FILE")
        self.filename = filename


class InvalidDataError(DataSourceError):
    """Fixture content could not be decoded into the requested model."""

    def __init__(self, cause: Exception):
        super().__init__(f"Invalid data format: {cause}", "INVALID_DATA")
        self.cause = cause


class DataSourceInternalError(DataSourceError):
    """Unexpected failure while reading a fixture."""

    def __init__(self, cause: Exception):
        super().__init__(f"Internal error: {cause}", "INTERNAL_ERROR")
        self.cause = cause


class RemoteNotImplementedError(DataSourceError):
    """The remote data source is a placeholder."""

    def __init__(self, base_url: Optional[str] = None):
        super().__init__(
            "RemoteDataSource is not implemented - this is just a demo",
            "NOT_IMPLEMENTED",
        )
        self.base_url = base_url
