# Business logic services

from .tag_reconciler import TagReconciler, ICON_TAGS
from .osm_gateway import BaseOsmGateway, OsmGateway, HttpGatewayFactory
from .search_index import BaseSearchIndexGateway, SqlSearchIndexGateway
from .preprocessor import BasePreprocessor, OsmGeoJsonPreprocessor
from .osm_repository import BaseElementRepository, OsmRepository
from .augmenter import BaseAugmenter, OsmDataAugmenter
from .changeset import run_in_changeset
from .geometry_dispatcher import fetch_for_update
from .poi_adapter import OsmPointsOfInterestAdapter

__all__ = [
    'TagReconciler',
    'ICON_TAGS',
    'BaseOsmGateway',
    'OsmGateway',
    'HttpGatewayFactory',
    'BaseSearchIndexGateway',
    'SqlSearchIndexGateway',
    'BasePreprocessor',
    'OsmGeoJsonPreprocessor',
    'BaseElementRepository',
    'OsmRepository',
    'BaseAugmenter',
    'OsmDataAugmenter',
    'run_in_changeset',
    'fetch_for_update',
    'OsmPointsOfInterestAdapter',
]
