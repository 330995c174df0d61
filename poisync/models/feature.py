"""Search index feature document and geometry classification."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FeatureAttributes:
    """Property names used on search index features."""
    ID = "identifier"
    NAME = "name"
    DESCRIPTION = "description"
    IMAGE_URL = "image"
    WEBSITE = "website"
    ICON = "icon"
    ICON_COLOR = "iconColor"
    POI_SOURCE = "poiSource"
    POI_CATEGORY = "poiCategory"
    GEOLOCATION = "geolocation"


class Sources:
    OSM = "OSM"


class GeometryKind(str, Enum):
    """Which OSM element type backs a feature."""
    POINT = "point"
    PATH = "path"
    RELATION = "relation"

    @classmethod
    def from_geojson_type(cls, geometry_type: Optional[str]) -> "GeometryKind":
        if geometry_type == "Point":
            return cls.POINT
        if geometry_type in ("LineString", "Polygon"):
            return cls.PATH
        return cls.RELATION


class Feature(BaseModel):
    """A GeoJSON feature as stored in the search index."""
    id: str
    geometry: Dict[str, Any]
    properties: Dict[str, Any] = Field(default_factory=dict)

    @property
    def geometry_kind(self) -> GeometryKind:
        return GeometryKind.from_geojson_type(self.geometry.get("type"))

    @property
    def source(self) -> str:
        return self.properties.get(FeatureAttributes.POI_SOURCE, Sources.OSM)

    @property
    def category(self) -> str:
        return self.properties.get(FeatureAttributes.POI_CATEGORY, "Other")

    def get_localized(self, key: str, language: str) -> str:
        """Value of ``key:language``, falling back to the base key."""
        value = self.properties.get(f"{key}:{language}")
        if value:
            return value
        return self.properties.get(key) or ""
