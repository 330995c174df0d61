"""Pure projection of search index features into points of interest."""

from typing import Type, TypeVar

from shapely.geometry import shape

from poisync.models.feature import Feature, FeatureAttributes
from poisync.schemas.poi import LatLng, PointOfInterest

PoiType = TypeVar("PoiType", bound=PointOfInterest)


def feature_location(feature: Feature) -> LatLng:
    """The feature's ``geolocation`` property, or its geometry centroid."""
    geolocation = feature.properties.get(FeatureAttributes.GEOLOCATION)
    if geolocation:
        return LatLng(lat=geolocation["lat"], lng=geolocation["lon"])
    centroid = shape(feature.geometry).centroid
    return LatLng(lat=centroid.y, lng=centroid.x)


def convert_to_poi(feature: Feature, language: str, poi_type: Type[PoiType] = PointOfInterest) -> PoiType:
    properties = feature.properties
    return poi_type(
        id=str(properties.get(FeatureAttributes.ID, feature.id)),
        source=feature.source,
        location=feature_location(feature),
        category=feature.category,
        icon=properties.get(FeatureAttributes.ICON, ""),
        icon_color=properties.get(FeatureAttributes.ICON_COLOR, "black"),
        title=feature.get_localized(FeatureAttributes.NAME, language),
        description=feature.get_localized(FeatureAttributes.DESCRIPTION, language),
        image_url=properties.get(FeatureAttributes.IMAGE_URL, ""),
        url=properties.get(FeatureAttributes.WEBSITE, ""),
    )
