"""
Exceptions raised by the fetch and persistence adapters.

Each carries the monitoring label it is recorded under.
"""

from co2re_hub.core.constants import (
    ERROR_PARSE_FAILURE,
    ERROR_PERSISTENCE_FAILURE,
    ERROR_SOURCE_UNREACHABLE,
)


class IngestionError(Exception):
    """Base class for ingestion failures."""

    error_type = "unknown"

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url


class SourceUnreachableError(IngestionError):
    """Network failure, non-200 response or non-JSON API body."""

    error_type = ERROR_SOURCE_UNREACHABLE


class ParseFailureError(IngestionError):
    """A fetched page yielded no usable record."""

    error_type = ERROR_PARSE_FAILURE


class PersistenceError(IngestionError):
    """The record store rejected a read or write."""

    error_type = ERROR_PERSISTENCE_FAILURE
