"""
Record Source Package

Provides the abstract interface the engine reads records through and
an in-memory implementation.
"""

from lifeos.services.records.interface import (
    NotFoundError,
    RecordSourceError,
    RecordSourceInterface,
)
from lifeos.services.records.memory import InMemoryRecordSource

__all__ = [
    # Interface
    "RecordSourceInterface",
    # Exceptions
    "NotFoundError",
    "RecordSourceError",
    # Implementations
    "InMemoryRecordSource",
]
