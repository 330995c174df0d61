"""Picks the OSM fetch that matches a feature's geometry kind."""

from poisync.models.feature import GeometryKind
from poisync.models.osm import OsmElement
from poisync.services.osm_gateway import BaseOsmGateway


async def fetch_for_update(element_id: str, kind: GeometryKind, gateway: BaseOsmGateway) -> OsmElement:
    """
    Fetch the full editable element for an update.

    Args:
        element_id: OSM id of the element
        kind: Geometry kind of the indexed feature, classified once by the caller
        gateway: Authenticated OSM gateway

    Returns:
        Node, complete way or complete relation
    """
    if kind is GeometryKind.POINT:
        return await gateway.get_node(element_id)
    if kind is GeometryKind.PATH:
        return await gateway.get_complete_way(element_id)
    return await gateway.get_complete_relation(element_id)
