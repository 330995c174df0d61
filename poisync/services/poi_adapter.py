"""
Points of interest adapter for OSM data.

Reads come from the search index. Writes go to OSM inside a changeset and the
search index entry is re-derived from the committed element only after the
changeset closed successfully.
"""

import logging
from typing import BinaryIO, Dict, List, Optional, Sequence

from poisync.config.settings import PoiSettings, get_settings
from poisync.models.feature import Feature, FeatureAttributes, Sources
from poisync.models.osm import Node, OsmElement
from poisync.schemas.poi import LatLng, PointOfInterest, PointOfInterestExtended, TokenAndSecret
from poisync.services.augmenter import BaseAugmenter
from poisync.services.changeset import run_in_changeset
from poisync.services.geometry_dispatcher import fetch_for_update
from poisync.services.osm_gateway import HttpGatewayFactory
from poisync.services.osm_repository import BaseElementRepository
from poisync.services.preprocessor import ICON_CATEGORIES, BasePreprocessor, icon_properties
from poisync.services.projection import convert_to_poi
from poisync.services.search_index import BaseSearchIndexGateway
from poisync.services.tag_reconciler import TagReconciler

logger = logging.getLogger(__name__)


class OsmPointsOfInterestAdapter:
    """Lists, reads, creates and updates OSM backed points of interest"""

    source = Sources.OSM

    def __init__(
        self,
        search_index: BaseSearchIndexGateway,
        gateway_factory: HttpGatewayFactory,
        preprocessor: BasePreprocessor,
        element_repository: BaseElementRepository,
        augmenter: BaseAugmenter,
        poi_settings: Optional[PoiSettings] = None,
    ):
        self.search_index = search_index
        self.gateway_factory = gateway_factory
        self.preprocessor = preprocessor
        self.element_repository = element_repository
        self.augmenter = augmenter
        self.settings = poi_settings or get_settings().poi
        self.tags = TagReconciler(self.settings.default_language)

    async def get_pois(self, north_east: LatLng, south_west: LatLng,
                       categories: Sequence[str], language: str) -> List[PointOfInterest]:
        features = await self.search_index.query_by_bounding_box(north_east, south_west, categories)
        return [convert_to_poi(feature, language) for feature in features]

    async def get_poi_by_id(self, poi_id: str, language: str) -> PointOfInterestExtended:
        feature = await self.search_index.get_by_id(poi_id, self.source)
        poi = convert_to_poi(feature, language, PointOfInterestExtended)
        return await self.augmenter.augment(poi, feature, language)

    async def create_poi(self, poi: PointOfInterestExtended, credentials: TokenAndSecret,
                         language: str) -> str:
        """
        Add a new node for ``poi`` and index it.

        Args:
            poi: Point of interest to add; its id is ignored
            credentials: OSM credentials of the editing user
            language: Language the user edits in

        Returns:
            Id OSM assigned to the new node
        """
        node = Node(
            latitude=poi.location.lat,
            longitude=poi.location.lng,
            tags={
                FeatureAttributes.IMAGE_URL: poi.image_url,
                FeatureAttributes.WEBSITE: poi.url,
            },
        )
        self.tags.set_localized_tag(node.tags, FeatureAttributes.NAME, poi.title, language)
        self.tags.set_localized_tag(node.tags, FeatureAttributes.DESCRIPTION, poi.description, language)
        self.tags.apply_icon_vocabulary(node.tags, poi.icon)
        self.tags.strip_empty_tags(node.tags)

        async with self.gateway_factory.create_osm_gateway(credentials) as gateway:
            async def create(changeset_id: str) -> str:
                return await gateway.create_element(changeset_id, node)

            node_id = await run_in_changeset(self.settings.create_comment, gateway, create)

        node.id = int(node_id)
        logger.info(f"Created node {node_id}")
        await self._update_search_index(node, poi.title, poi.icon)
        return node_id

    async def update_poi(self, poi: PointOfInterestExtended, credentials: TokenAndSecret,
                         language: str) -> str:
        """
        Apply the edited fields of ``poi`` to its OSM element and re-index it.

        Icon tags are only written when the icon differs from the indexed one.
        """
        feature = await self.search_index.get_by_id(poi.id, self.source)
        kind = feature.geometry_kind
        previous_icon = feature.properties.get(FeatureAttributes.ICON, "")

        async with self.gateway_factory.create_osm_gateway(credentials) as gateway:
            element = await fetch_for_update(poi.id, kind, gateway)
            self.tags.set_localized_tag(element.tags, FeatureAttributes.NAME, poi.title, language)
            self.tags.set_localized_tag(element.tags, FeatureAttributes.DESCRIPTION, poi.description, language)
            element.tags[FeatureAttributes.IMAGE_URL] = poi.image_url
            element.tags[FeatureAttributes.WEBSITE] = poi.url
            if poi.icon != previous_icon:
                self.tags.apply_icon_vocabulary(element.tags, poi.icon)
            self.tags.strip_empty_tags(element.tags)

            async def update(changeset_id: str) -> str:
                await gateway.update_element(changeset_id, element)
                return poi.id

            await run_in_changeset(self.settings.update_comment, gateway, update)

        logger.info(f"Updated {element.element_type} {poi.id}")
        await self._update_search_index(element, poi.title, poi.icon)
        return poi.id

    async def index_from_bulk_source(self, stream: BinaryIO) -> List[Feature]:
        """Features for every named element of an OSM extract; never touches the live API."""
        name_to_elements = await self.element_repository.get_elements_with_name(stream)
        name_to_features = self.preprocessor.preprocess(name_to_elements)
        return [feature for features in name_to_features.values() for feature in features]

    async def _update_search_index(self, element: OsmElement, name: str, icon: Optional[str]) -> None:
        """
        Re-derive the index entry of a committed element.

        Old category tags stay on an element when its icon changes, so the icon
        the user submitted takes precedence over the one derived from tags.
        """
        name_to_features: Dict[str, List[Feature]] = self.preprocessor.preprocess({name: [element]})
        feature = next((f for features in name_to_features.values() for f in features), None)
        if feature is None:
            logger.info(f"No feature derived from {element.element_type} {element.id}, index unchanged")
            return
        if icon in ICON_CATEGORIES:
            feature.properties.update(icon_properties(icon))
        await self.search_index.upsert(feature)
