"""
Custom exceptions for the POI sync service.

Gateway and collaborator failures surface to callers unchanged; each exception
carries the status code the HTTP layer should answer with.
"""

from typing import Optional, Dict, Any
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"
    UNSUPPORTED_GEOMETRY = "UNSUPPORTED_GEOMETRY"

    # Changeset errors
    CHANGESET_OPEN_FAILED = "CHANGESET_OPEN_FAILED"
    CHANGESET_CLOSE_FAILED = "CHANGESET_CLOSE_FAILED"
    ELEMENT_MUTATION_FAILED = "ELEMENT_MUTATION_FAILED"

    # Transport errors
    GATEWAY_UNAVAILABLE = "GATEWAY_UNAVAILABLE"

    # Generic errors
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class PoiSyncException(Exception):
    """Base exception for the POI sync service."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code


class NotFoundError(PoiSyncException):
    """Raised when the search index has no feature for the requested id."""

    def __init__(self, poi_id: str, source: Optional[str] = None):
        details = {"id": poi_id}
        if source:
            details["source"] = source
        super().__init__(
            message=f"Point of interest '{poi_id}' was not found",
            error_code=ErrorCode.NOT_FOUND,
            details=details,
            status_code=404
        )


class UnsupportedGeometryError(PoiSyncException):
    """Raised when an element cannot be resolved for the type implied by its geometry."""

    def __init__(self, element_type: str, element_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Unable to fetch {element_type} '{element_id}' for editing",
            error_code=ErrorCode.UNSUPPORTED_GEOMETRY,
            details=details or {"element_type": element_type, "element_id": element_id},
            status_code=422
        )


class ChangesetOpenFailedError(PoiSyncException):
    """Raised when the OSM store rejects opening a changeset."""

    def __init__(self, message: str = "Failed to open changeset", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.CHANGESET_OPEN_FAILED,
            details=details,
            status_code=502
        )


class ChangesetCloseFailedError(PoiSyncException):
    """Raised when an opened changeset could not be closed."""

    def __init__(self, changeset_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Failed to close changeset '{changeset_id}'",
            error_code=ErrorCode.CHANGESET_CLOSE_FAILED,
            details=details or {"changeset_id": changeset_id},
            status_code=502
        )


class ElementMutationError(PoiSyncException):
    """Raised when creating or updating an element inside a changeset is rejected."""

    def __init__(self, message: str = "Element mutation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.ELEMENT_MUTATION_FAILED,
            details=details,
            status_code=502
        )


class GatewayUnavailableError(PoiSyncException):
    """Raised on a transport failure talking to either gateway."""

    def __init__(self, gateway_name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"Gateway '{gateway_name}' is temporarily unavailable",
            error_code=ErrorCode.GATEWAY_UNAVAILABLE,
            details=details or {"gateway_name": gateway_name},
            status_code=503
        )
