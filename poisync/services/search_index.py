"""
Search index gateway.

Features are stored as JSON documents next to their centroid and category so
bounding box and category filters run in the database.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from poisync.core.db import session_scope
from poisync.core.exceptions import GatewayUnavailableError, NotFoundError
from poisync.models.feature import Feature
from poisync.models.search_index import PoiFeatureRecord
from poisync.schemas.poi import LatLng
from poisync.services.projection import feature_location

logger = logging.getLogger(__name__)


class BaseSearchIndexGateway(ABC):
    """Read and write access to the POI search index"""

    @abstractmethod
    async def query_by_bounding_box(self, north_east: LatLng, south_west: LatLng,
                                    categories: Sequence[str]) -> List[Feature]:
        pass

    @abstractmethod
    async def get_by_id(self, poi_id: str, source: str) -> Feature:
        """Raises NotFoundError when the index has no such feature."""
        pass

    @abstractmethod
    async def upsert(self, feature: Feature) -> None:
        pass


class SqlSearchIndexGateway(BaseSearchIndexGateway):
    """SQLAlchemy backed search index"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], max_results: int = 1000):
        self.session_factory = session_factory
        self.max_results = max_results

    async def query_by_bounding_box(self, north_east: LatLng, south_west: LatLng,
                                    categories: Sequence[str]) -> List[Feature]:
        """
        Features whose centroid lies inside the box and whose category is requested.

        Args:
            north_east: North east corner
            south_west: South west corner
            categories: Categories to include; empty means none

        Returns:
            Features in insertion order
        """
        if not categories:
            return []
        stmt = (
            select(PoiFeatureRecord)
            .where(
                PoiFeatureRecord.latitude >= south_west.lat,
                PoiFeatureRecord.latitude <= north_east.lat,
                PoiFeatureRecord.longitude >= south_west.lng,
                PoiFeatureRecord.longitude <= north_east.lng,
                PoiFeatureRecord.category.in_(list(categories)),
            )
            .limit(self.max_results)
        )
        records = await self._execute(stmt)
        return [Feature.model_validate(record.document) for record in records]

    async def get_by_id(self, poi_id: str, source: str) -> Feature:
        stmt = select(PoiFeatureRecord).where(
            PoiFeatureRecord.id == str(poi_id),
            PoiFeatureRecord.source == source,
        )
        records = await self._execute(stmt)
        if not records:
            raise NotFoundError(poi_id, source)
        return Feature.model_validate(records[0].document)

    async def upsert(self, feature: Feature) -> None:
        location = feature_location(feature)
        record = PoiFeatureRecord(
            id=feature.id,
            source=feature.source,
            category=feature.category,
            latitude=location.lat,
            longitude=location.lng,
            document=feature.model_dump(mode="json"),
        )
        try:
            async with session_scope(self.session_factory) as session:
                await session.merge(record)
        except OperationalError as e:
            raise GatewayUnavailableError("search_index", details={"reason": str(e)}) from e
        logger.info(f"Upserted feature {feature.id} into the search index")

    async def _execute(self, stmt) -> List[PoiFeatureRecord]:
        try:
            async with session_scope(self.session_factory) as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except OperationalError as e:
            raise GatewayUnavailableError("search_index", details={"reason": str(e)}) from e
