"""Shared fakes for the OSM gateway, the search index and the element source."""
import copy
from typing import Dict, List, Optional

import pytest

from poisync.config.settings import PoiSettings
from poisync.core.exceptions import NotFoundError
from poisync.models.feature import Feature
from poisync.models.osm import CompleteRelation, CompleteWay, Node, OsmElement
from poisync.schemas.poi import TokenAndSecret
from poisync.services.augmenter import OsmDataAugmenter
from poisync.services.osm_gateway import BaseOsmGateway
from poisync.services.osm_repository import BaseElementRepository
from poisync.services.poi_adapter import OsmPointsOfInterestAdapter
from poisync.services.preprocessor import OsmGeoJsonPreprocessor
from poisync.services.search_index import BaseSearchIndexGateway


class FakeOsmGateway(BaseOsmGateway):
    """Records every call in order; failures are injected per operation."""

    def __init__(self):
        self.calls: List[tuple] = []
        self.elements: Dict[tuple, OsmElement] = {}
        self.open_error: Optional[Exception] = None
        self.mutation_error: Optional[Exception] = None
        self.close_error: Optional[Exception] = None
        self.next_id = 5000
        self.uploaded: List[OsmElement] = []
        self.closed = False

    async def open_changeset(self, comment: str) -> str:
        self.calls.append(("open_changeset", comment))
        if self.open_error:
            raise self.open_error
        return "42"

    async def close_changeset(self, changeset_id: str) -> None:
        self.calls.append(("close_changeset", changeset_id))
        if self.close_error:
            raise self.close_error

    async def create_element(self, changeset_id: str, element: OsmElement) -> str:
        self.calls.append(("create_element", changeset_id))
        if self.mutation_error:
            raise self.mutation_error
        self.uploaded.append(copy.deepcopy(element))
        self.next_id += 1
        return str(self.next_id)

    async def update_element(self, changeset_id: str, element: OsmElement) -> None:
        self.calls.append(("update_element", changeset_id))
        if self.mutation_error:
            raise self.mutation_error
        self.uploaded.append(copy.deepcopy(element))

    async def get_node(self, node_id: str) -> Node:
        self.calls.append(("get_node", node_id))
        return self.elements[("node", node_id)]

    async def get_complete_way(self, way_id: str) -> CompleteWay:
        self.calls.append(("get_complete_way", way_id))
        return self.elements[("way", way_id)]

    async def get_complete_relation(self, relation_id: str) -> CompleteRelation:
        self.calls.append(("get_complete_relation", relation_id))
        return self.elements[("relation", relation_id)]

    async def aclose(self) -> None:
        self.closed = True

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]


class FakeGatewayFactory:
    def __init__(self, gateway: FakeOsmGateway):
        self.gateway = gateway
        self.credentials: List[TokenAndSecret] = []

    def create_osm_gateway(self, credentials: TokenAndSecret) -> FakeOsmGateway:
        self.credentials.append(credentials)
        return self.gateway


class FakeSearchIndex(BaseSearchIndexGateway):
    """Keeps features in insertion order and returns all of them for any box."""

    def __init__(self, features: Optional[List[Feature]] = None):
        self.features: Dict[str, Feature] = {f.id: f for f in features or []}
        self.upserts: List[Feature] = []

    async def query_by_bounding_box(self, north_east, south_west, categories) -> List[Feature]:
        return [f for f in self.features.values() if f.category in categories]

    async def get_by_id(self, poi_id: str, source: str) -> Feature:
        if poi_id not in self.features:
            raise NotFoundError(poi_id, source)
        return self.features[poi_id]

    async def upsert(self, feature: Feature) -> None:
        self.upserts.append(feature)
        self.features[feature.id] = feature


class FakeElementRepository(BaseElementRepository):
    def __init__(self, elements: Optional[Dict[str, List[OsmElement]]] = None):
        self.elements = elements or {}

    async def get_elements_with_name(self, stream):
        return self.elements


def make_feature(feature_id: str, geometry: dict, **properties) -> Feature:
    props = {"identifier": feature_id, "poiSource": "OSM", "poiCategory": "Natural"}
    props.update(properties)
    return Feature(id=feature_id, geometry=geometry, properties=props)


@pytest.fixture
def osm_gateway():
    return FakeOsmGateway()


@pytest.fixture
def search_index():
    return FakeSearchIndex()


@pytest.fixture
def credentials():
    return TokenAndSecret(token="user-token", secret="user-secret")


@pytest.fixture
def make_adapter(osm_gateway, search_index):
    def _make(index=None, preprocessor=None, repository=None):
        return OsmPointsOfInterestAdapter(
            search_index=index or search_index,
            gateway_factory=FakeGatewayFactory(osm_gateway),
            preprocessor=preprocessor or OsmGeoJsonPreprocessor(),
            element_repository=repository or FakeElementRepository(),
            augmenter=OsmDataAugmenter(),
            poi_settings=PoiSettings(default_language="he"),
        )
    return _make
