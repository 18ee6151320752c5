"""Services package."""

from lifeos.services.currency import (
    ExchangeRateService,
    HttpRateFetcher,
    RateCache,
    RateUnavailableError,
)
from lifeos.services.records import (
    InMemoryRecordSource,
    NotFoundError,
    RecordSourceError,
    RecordSourceInterface,
)

__all__ = [
    # Currency services
    "ExchangeRateService",
    "HttpRateFetcher",
    "RateCache",
    "RateUnavailableError",
    # Record sources
    "InMemoryRecordSource",
    "NotFoundError",
    "RecordSourceError",
    "RecordSourceInterface",
]
