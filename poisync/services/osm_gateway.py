"""
OSM API 0.6 gateway.

Each gateway is scoped to one set of user credentials and one request; build
it through ``HttpGatewayFactory`` and use it as an async context manager.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from poisync.config.settings import OsmSettings, get_settings
from poisync.core.exceptions import (
    ChangesetCloseFailedError,
    ChangesetOpenFailedError,
    ElementMutationError,
    GatewayUnavailableError,
    UnsupportedGeometryError,
)
from poisync.models.osm import (
    CompleteRelation,
    CompleteWay,
    Node,
    OsmElement,
    OsmXmlError,
    changeset_to_xml,
    element_to_xml,
    parse_complete_relation,
    parse_complete_way,
    parse_node,
)
from poisync.schemas.poi import TokenAndSecret

logger = logging.getLogger(__name__)


class BaseOsmGateway(ABC):
    """Changeset and element operations against the OSM store."""

    @abstractmethod
    async def open_changeset(self, comment: str) -> str:
        pass

    @abstractmethod
    async def close_changeset(self, changeset_id: str) -> None:
        pass

    @abstractmethod
    async def create_element(self, changeset_id: str, element: OsmElement) -> str:
        pass

    @abstractmethod
    async def update_element(self, changeset_id: str, element: OsmElement) -> None:
        pass

    @abstractmethod
    async def get_node(self, node_id: str) -> Node:
        pass

    @abstractmethod
    async def get_complete_way(self, way_id: str) -> CompleteWay:
        pass

    @abstractmethod
    async def get_complete_relation(self, relation_id: str) -> CompleteRelation:
        pass

    async def aclose(self) -> None:
        pass

    async def __aenter__(self) -> "BaseOsmGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class OsmTokenAuth(httpx.Auth):
    """OAuth 2.0 bearer auth; the secret half of the pair is not sent."""

    def __init__(self, credentials: TokenAndSecret):
        self._credentials = credentials

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self._credentials.token.get_secret_value()}"
        yield request


class OsmGateway(BaseOsmGateway):
    """httpx based OSM API client"""

    def __init__(
        self,
        credentials: TokenAndSecret,
        osm_settings: Optional[OsmSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = osm_settings or get_settings().osm
        self.client = httpx.AsyncClient(
            base_url=self.settings.api_url,
            auth=OsmTokenAuth(credentials),
            headers={"User-Agent": self.settings.user_agent, "Content-Type": "text/xml; charset=utf-8"},
            timeout=self.settings.timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _send(self, method: str, url: str, content: Optional[bytes] = None) -> httpx.Response:
        try:
            return await self.client.request(method, url, content=content)
        except httpx.TransportError as e:
            logger.warning(f"OSM request {method} {url} failed: {e}")
            raise GatewayUnavailableError("osm", details={"url": url, "reason": str(e)}) from e

    async def open_changeset(self, comment: str) -> str:
        response = await self._send("PUT", "/changeset/create", changeset_to_xml(comment, self.settings.user_agent))
        if response.status_code != 200:
            raise ChangesetOpenFailedError(
                details={"status_code": response.status_code, "body": response.text[:200]}
            )
        return response.text.strip()

    async def close_changeset(self, changeset_id: str) -> None:
        response = await self._send("PUT", f"/changeset/{changeset_id}/close")
        if response.status_code != 200:
            raise ChangesetCloseFailedError(
                changeset_id,
                details={"changeset_id": changeset_id, "status_code": response.status_code},
            )

    async def create_element(self, changeset_id: str, element: OsmElement) -> str:
        response = await self._send(
            "PUT", f"/{element.element_type}/create", element_to_xml(element, changeset_id)
        )
        if response.status_code != 200:
            raise ElementMutationError(
                f"Failed to create {element.element_type}",
                details={"status_code": response.status_code, "body": response.text[:200]},
            )
        return response.text.strip()

    async def update_element(self, changeset_id: str, element: OsmElement) -> None:
        response = await self._send(
            "PUT", f"/{element.element_type}/{element.id}", element_to_xml(element, changeset_id)
        )
        if response.status_code != 200:
            raise ElementMutationError(
                f"Failed to update {element.element_type} {element.id}",
                details={"status_code": response.status_code, "body": response.text[:200]},
            )

    async def _fetch(self, element_type: str, element_id: str, url: str) -> bytes:
        response = await self._send("GET", url)
        if response.status_code in (404, 410):
            raise UnsupportedGeometryError(element_type, element_id)
        if response.status_code != 200:
            raise GatewayUnavailableError(
                "osm", details={"url": url, "status_code": response.status_code}
            )
        return response.content

    async def get_node(self, node_id: str) -> Node:
        payload = await self._fetch("node", node_id, f"/node/{node_id}")
        try:
            return parse_node(payload)
        except OsmXmlError as e:
            raise UnsupportedGeometryError("node", node_id, details={"reason": str(e)}) from e

    async def get_complete_way(self, way_id: str) -> CompleteWay:
        payload = await self._fetch("way", way_id, f"/way/{way_id}/full")
        try:
            return parse_complete_way(payload, int(way_id))
        except OsmXmlError as e:
            raise UnsupportedGeometryError("way", way_id, details={"reason": str(e)}) from e

    async def get_complete_relation(self, relation_id: str) -> CompleteRelation:
        payload = await self._fetch("relation", relation_id, f"/relation/{relation_id}/full")
        try:
            return parse_complete_relation(payload, int(relation_id))
        except OsmXmlError as e:
            raise UnsupportedGeometryError("relation", relation_id, details={"reason": str(e)}) from e


class HttpGatewayFactory:
    """Builds credential scoped OSM gateways"""

    def __init__(self, osm_settings: Optional[OsmSettings] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.osm_settings = osm_settings
        self.transport = transport

    def create_osm_gateway(self, credentials: TokenAndSecret) -> BaseOsmGateway:
        return OsmGateway(credentials, self.osm_settings, self.transport)
