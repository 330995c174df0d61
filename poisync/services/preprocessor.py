"""
OSM element to search index feature conversion.

Geometry is built with shapely: nodes become points, ways become line strings
or polygons when closed, relations become the union of their member lines.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from shapely.geometry import LineString, MultiLineString, Point, Polygon, mapping
from shapely.geometry.base import BaseGeometry

from poisync.models.feature import Feature, FeatureAttributes, Sources
from poisync.models.osm import CompleteRelation, CompleteWay, Node, OsmElement
from poisync.services.tag_reconciler import icon_for_tags

logger = logging.getLogger(__name__)

# Icon -> (category, icon color)
ICON_CATEGORIES: Dict[str, Tuple[str, str]] = {
    "icon-viewpoint": ("Viewpoint", "#008000"),
    "icon-tint": ("Water", "blue"),
    "icon-ruins": ("Historic", "#666666"),
    "icon-picnic": ("Camping", "#734a08"),
    "icon-campsite": ("Camping", "#734a08"),
    "icon-tree": ("Natural", "green"),
    "icon-cave": ("Natural", "black"),
    "icon-star": ("Other", "#ffb800"),
    "icon-peak": ("Natural", "black"),
}


def icon_properties(icon: str) -> Dict[str, str]:
    """Icon, icon color and category properties for an icon id."""
    category, color = ICON_CATEGORIES.get(icon, ("Other", "black"))
    return {
        FeatureAttributes.ICON: icon,
        FeatureAttributes.ICON_COLOR: color,
        FeatureAttributes.POI_CATEGORY: category,
    }


class BasePreprocessor(ABC):
    """Turns OSM elements grouped by name into search index features."""

    @abstractmethod
    def preprocess(self, name_to_elements: Dict[str, List[OsmElement]]) -> Dict[str, List[Feature]]:
        pass


def _node_point(node: Node) -> Tuple[float, float]:
    return (node.longitude, node.latitude)


def _way_geometry(way: CompleteWay) -> Optional[BaseGeometry]:
    coordinates = [_node_point(node) for node in way.nodes]
    if way.is_closed:
        return Polygon(coordinates)
    if len(coordinates) < 2:
        return None
    return LineString(coordinates)


def _relation_lines(relation: CompleteRelation) -> List[LineString]:
    lines = []
    for member in relation.members:
        if isinstance(member.element, CompleteWay) and len(member.element.nodes) >= 2:
            lines.append(LineString([_node_point(node) for node in member.element.nodes]))
        elif isinstance(member.element, CompleteRelation):
            lines.extend(_relation_lines(member.element))
    return lines


def element_geometry(element: OsmElement) -> Optional[BaseGeometry]:
    if isinstance(element, Node):
        return Point(_node_point(element))
    if isinstance(element, CompleteWay):
        return _way_geometry(element)
    lines = _relation_lines(element)
    return MultiLineString(lines) if lines else None


class OsmGeoJsonPreprocessor(BasePreprocessor):
    """Deterministic conversion of OSM elements to GeoJSON features"""

    def preprocess(self, name_to_elements: Dict[str, List[OsmElement]]) -> Dict[str, List[Feature]]:
        result: Dict[str, List[Feature]] = {}
        for name, elements in name_to_elements.items():
            features = [f for f in (self.to_feature(e) for e in elements) if f is not None]
            if features:
                result[name] = features
        return result

    def to_feature(self, element: OsmElement) -> Optional[Feature]:
        geometry = element_geometry(element)
        if geometry is None or geometry.is_empty or element.id is None:
            logger.debug(f"No geometry for {element.element_type} {element.id}, skipping")
            return None

        properties = dict(element.tags)
        centroid = geometry.centroid
        properties.update({
            FeatureAttributes.ID: str(element.id),
            FeatureAttributes.POI_SOURCE: Sources.OSM,
            FeatureAttributes.GEOLOCATION: {"lat": centroid.y, "lon": centroid.x},
        })
        properties.update(icon_properties(icon_for_tags(element.tags) or ""))
        return Feature(id=str(element.id), geometry=mapping(geometry), properties=properties)
