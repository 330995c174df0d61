"""
Core infrastructure for the POI sync service: exceptions, logging,
database access and dependency wiring.
"""

from .exceptions import (
    ErrorCode,
    PoiSyncException,
    NotFoundError,
    UnsupportedGeometryError,
    ChangesetOpenFailedError,
    ChangesetCloseFailedError,
    ElementMutationError,
    GatewayUnavailableError,
)
from .logging import configure_logging

__all__ = [
    "ErrorCode",
    "PoiSyncException",
    "NotFoundError",
    "UnsupportedGeometryError",
    "ChangesetOpenFailedError",
    "ChangesetCloseFailedError",
    "ElementMutationError",
    "GatewayUnavailableError",
    "configure_logging",
]
