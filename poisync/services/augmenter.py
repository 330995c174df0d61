"""Source specific data for the extended point of interest view."""

from abc import ABC, abstractmethod

from poisync.models.feature import Feature, FeatureAttributes, Sources
from poisync.schemas.poi import PointOfInterestExtended

_NON_TAG_PROPERTIES = {
    FeatureAttributes.ID,
    FeatureAttributes.POI_SOURCE,
    FeatureAttributes.POI_CATEGORY,
    FeatureAttributes.ICON,
    FeatureAttributes.ICON_COLOR,
    FeatureAttributes.GEOLOCATION,
}


class BaseAugmenter(ABC):
    @abstractmethod
    async def augment(self, poi: PointOfInterestExtended, feature: Feature,
                      language: str) -> PointOfInterestExtended:
        """Return ``poi`` with the fields the adapter does not compute filled in."""
        pass


class OsmDataAugmenter(BaseAugmenter):
    """OSM features are editable and expose their raw tags and websites."""

    async def augment(self, poi: PointOfInterestExtended, feature: Feature,
                      language: str) -> PointOfInterestExtended:
        tags = {
            key: str(value) for key, value in feature.properties.items()
            if key not in _NON_TAG_PROPERTIES
        }
        websites = [value for key, value in sorted(tags.items())
                    if key == FeatureAttributes.WEBSITE or key.startswith(f"{FeatureAttributes.WEBSITE}:")]
        return poi.model_copy(update={
            "is_editable": feature.source == Sources.OSM,
            "tags": tags,
            "websites": websites,
        })
