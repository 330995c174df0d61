"""
Bulk extraction of named OSM elements from a PBF stream using pyosmium.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Dict, List, Optional, Set, Tuple

import osmium

from poisync.models.osm import CompleteRelation, CompleteWay, Node, OsmElement, RelationMember

logger = logging.getLogger(__name__)

MEMBER_TYPES = {"n": "node", "w": "way", "r": "relation"}


class BaseElementRepository(ABC):
    """Source of raw OSM elements for offline indexing"""

    @abstractmethod
    async def get_elements_with_name(self, stream: BinaryIO) -> Dict[str, List[OsmElement]]:
        pass


def element_name(tags: Dict[str, str]) -> Optional[str]:
    """``name`` tag, otherwise the first language specific name."""
    if tags.get("name"):
        return tags["name"]
    for key in sorted(tags):
        if key.startswith("name:") and tags[key]:
            return tags[key]
    return None


def _tags_to_dict(tags) -> Dict[str, str]:
    return {t.k: t.v for t in tags}


def _way_nodes(way) -> List[Node]:
    return [
        Node(id=nd.ref, latitude=nd.location.lat, longitude=nd.location.lon)
        for nd in way.nodes if nd.location.valid()
    ]


class NamedElementHandler(osmium.SimpleHandler):
    """First pass: named nodes, ways and relations."""

    def __init__(self):
        super().__init__()
        self.nodes: List[Node] = []
        self.ways: Dict[int, CompleteWay] = {}
        self.relations: List[Tuple[int, Dict[str, str], int, List[Tuple[str, int, str]]]] = []

    def node(self, n):
        tags = _tags_to_dict(n.tags)
        if element_name(tags) and n.location.valid():
            self.nodes.append(Node(id=n.id, latitude=n.location.lat, longitude=n.location.lon,
                                   tags=tags, version=n.version))

    def way(self, w):
        tags = _tags_to_dict(w.tags)
        if element_name(tags):
            self.ways[w.id] = CompleteWay(id=w.id, nodes=_way_nodes(w), tags=tags, version=w.version)

    def relation(self, r):
        tags = _tags_to_dict(r.tags)
        if element_name(tags):
            members = [(MEMBER_TYPES.get(m.type, m.type), m.ref, m.role) for m in r.members]
            self.relations.append((r.id, tags, r.version, members))


class MemberWayHandler(osmium.SimpleHandler):
    """Second pass: unnamed ways referenced by named relations."""

    def __init__(self, wanted: Set[int]):
        super().__init__()
        self.wanted = wanted
        self.ways: Dict[int, CompleteWay] = {}

    def way(self, w):
        if w.id in self.wanted:
            self.ways[w.id] = CompleteWay(id=w.id, nodes=_way_nodes(w),
                                          tags=_tags_to_dict(w.tags), version=w.version)


class OsmRepository(BaseElementRepository):
    """Reads named elements out of an OSM PBF extract"""

    def __init__(self, file_format: str = "pbf"):
        self.file_format = file_format

    async def get_elements_with_name(self, stream: BinaryIO) -> Dict[str, List[OsmElement]]:
        data = stream.read()
        return await asyncio.to_thread(self._extract, data)

    def _extract(self, data: bytes) -> Dict[str, List[OsmElement]]:
        named = NamedElementHandler()
        named.apply_buffer(data, self.file_format, locations=True)

        ways = dict(named.ways)
        missing = {ref for _, _, _, members in named.relations
                   for member_type, ref, _ in members if member_type == "way" and ref not in ways}
        if missing:
            member_ways = MemberWayHandler(missing)
            member_ways.apply_buffer(data, self.file_format, locations=True)
            ways.update(member_ways.ways)

        elements: List[OsmElement] = [*named.nodes, *named.ways.values()]
        for relation_id, tags, version, members in named.relations:
            resolved = [RelationMember(role, ways[ref])
                        for member_type, ref, role in members
                        if member_type == "way" and ref in ways]
            elements.append(CompleteRelation(id=relation_id, members=resolved, tags=tags, version=version))

        result: Dict[str, List[OsmElement]] = {}
        for element in elements:
            result.setdefault(element_name(element.tags), []).append(element)
        logger.info(f"Extracted {len(elements)} named elements under {len(result)} names")
        return result
