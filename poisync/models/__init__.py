"""
Models package for the POI sync service.

OSM elements as edited through the API, search index features, and the
table that stores them.
"""

from .osm import (
    Node,
    CompleteWay,
    CompleteRelation,
    RelationMember,
    OsmElement,
    OsmXmlError,
)
from .feature import Feature, FeatureAttributes, GeometryKind, Sources
from .search_index import PoiFeatureRecord

__all__ = [
    "Node",
    "CompleteWay",
    "CompleteRelation",
    "RelationMember",
    "OsmElement",
    "OsmXmlError",
    "Feature",
    "FeatureAttributes",
    "GeometryKind",
    "Sources",
    "PoiFeatureRecord",
]
