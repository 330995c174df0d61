from .base import Envelope, StandardErrorResponse
from .poi import LatLng, PointOfInterest, PointOfInterestExtended, PoiListResponse, TokenAndSecret

__all__ = [
    "Envelope",
    "StandardErrorResponse",
    "LatLng",
    "PointOfInterest",
    "PointOfInterestExtended",
    "PoiListResponse",
    "TokenAndSecret",
]
