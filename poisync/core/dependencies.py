"""
Dependency injection setup for FastAPI.
Builds the adapter and its collaborators once per application.
"""

import asyncio
import logging
from typing import Optional

from fastapi import Header, Request

from poisync.config.settings import Settings, get_settings
from poisync.core.db import create_engine_from_url, create_session_factory, create_tables
from poisync.schemas.poi import TokenAndSecret
from poisync.services import (
    HttpGatewayFactory,
    OsmDataAugmenter,
    OsmGeoJsonPreprocessor,
    OsmPointsOfInterestAdapter,
    OsmRepository,
    SqlSearchIndexGateway,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for the adapter and the resources it holds."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._engine = None
        self._adapter: Optional[OsmPointsOfInterestAdapter] = None
        self._initialization_lock = asyncio.Lock()

    async def initialize_services(self) -> None:
        async with self._initialization_lock:
            if self._adapter is not None:
                return

            logger.info("Initializing service container")
            index_settings = self.settings.search_index
            self._engine = create_engine_from_url(index_settings.database_url, echo=index_settings.echo)
            await create_tables(self._engine)
            search_index = SqlSearchIndexGateway(
                create_session_factory(self._engine),
                max_results=index_settings.max_results,
            )
            self._adapter = OsmPointsOfInterestAdapter(
                search_index=search_index,
                gateway_factory=HttpGatewayFactory(self.settings.osm),
                preprocessor=OsmGeoJsonPreprocessor(),
                element_repository=OsmRepository(),
                augmenter=OsmDataAugmenter(),
                poi_settings=self.settings.poi,
            )
            logger.info("Service container initialization completed")

    async def cleanup_services(self) -> None:
        logger.info("Cleaning up service container")
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._adapter = None

    @property
    def adapter(self) -> OsmPointsOfInterestAdapter:
        if self._adapter is None:
            raise RuntimeError("Service container is not initialized")
        return self._adapter


def get_poi_adapter(request: Request) -> OsmPointsOfInterestAdapter:
    return request.app.state.service_container.adapter


def get_osm_credentials(
    x_osm_token: str = Header(...),
    x_osm_secret: str = Header(""),
) -> TokenAndSecret:
    return TokenAndSecret(token=x_osm_token, secret=x_osm_secret)
