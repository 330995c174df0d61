import httpx
import pytest

from poisync.config.settings import OsmSettings
from poisync.core.exceptions import (
    ChangesetCloseFailedError,
    ChangesetOpenFailedError,
    ElementMutationError,
    GatewayUnavailableError,
    UnsupportedGeometryError,
)
from poisync.models.osm import Node
from poisync.schemas.poi import TokenAndSecret
from poisync.services.osm_gateway import HttpGatewayFactory

SETTINGS = OsmSettings(base_url="https://osm.test")
CREDENTIALS = TokenAndSecret(token="abc", secret="def")


def gateway_for(handler):
    return HttpGatewayFactory(SETTINGS, httpx.MockTransport(handler)).create_osm_gateway(CREDENTIALS)


@pytest.mark.asyncio
async def test_open_changeset_sends_bearer_token():
    seen = {}

    def handler(request: httpx.Request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = request.content.decode()
        return httpx.Response(200, text="123\n")

    async with gateway_for(handler) as gateway:
        changeset_id = await gateway.open_changeset("Add POI interface from IHM site.")

    assert changeset_id == "123"
    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/0.6/changeset/create"
    assert seen["auth"] == "Bearer abc"
    assert "Add POI interface from IHM site." in seen["body"]


@pytest.mark.asyncio
async def test_rejected_open_raises_changeset_open_failed():
    async with gateway_for(lambda request: httpx.Response(401, text="Unauthorized")) as gateway:
        with pytest.raises(ChangesetOpenFailedError) as exc_info:
            await gateway.open_changeset("comment")
    assert exc_info.value.details["status_code"] == 401


@pytest.mark.asyncio
async def test_create_and_update_element():
    requests = []

    def handler(request: httpx.Request):
        requests.append((request.method, request.url.path))
        if request.url.path.endswith("/create"):
            return httpx.Response(200, text="777")
        return httpx.Response(200, text="2")

    async with gateway_for(handler) as gateway:
        node_id = await gateway.create_element("5", Node(latitude=32.0, longitude=35.0, tags={"name": "x"}))
        await gateway.update_element("5", Node(id=777, latitude=32.0, longitude=35.0, version=1))

    assert node_id == "777"
    assert requests == [("PUT", "/api/0.6/node/create"), ("PUT", "/api/0.6/node/777")]


@pytest.mark.asyncio
async def test_rejected_update_raises_mutation_error():
    async with gateway_for(lambda request: httpx.Response(409, text="Version mismatch")) as gateway:
        with pytest.raises(ElementMutationError):
            await gateway.update_element("5", Node(id=1, version=1))


@pytest.mark.asyncio
async def test_failed_close_raises_close_error():
    async with gateway_for(lambda request: httpx.Response(409)) as gateway:
        with pytest.raises(ChangesetCloseFailedError):
            await gateway.close_changeset("5")


@pytest.mark.asyncio
async def test_get_complete_way_uses_full_endpoint():
    paths = []

    def handler(request: httpx.Request):
        paths.append(request.url.path)
        return httpx.Response(200, text=(
            '<osm><node id="1" lat="1" lon="2"/><node id="2" lat="3" lon="4"/>'
            '<way id="9" version="1"><nd ref="1"/><nd ref="2"/></way></osm>'
        ))

    async with gateway_for(handler) as gateway:
        way = await gateway.get_complete_way("9")

    assert paths == ["/api/0.6/way/9/full"]
    assert [n.id for n in way.nodes] == [1, 2]


@pytest.mark.asyncio
async def test_missing_element_raises_unsupported_geometry():
    async with gateway_for(lambda request: httpx.Response(404)) as gateway:
        with pytest.raises(UnsupportedGeometryError):
            await gateway.get_node("1")


@pytest.mark.asyncio
async def test_transport_error_raises_gateway_unavailable():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    async with gateway_for(handler) as gateway:
        with pytest.raises(GatewayUnavailableError):
            await gateway.get_complete_relation("1")
