"""
OSM element model and OSM API 0.6 XML (de)serialization.

Elements carry their tags as a plain ``dict`` so a key holds at most one value
and writing an existing key replaces it.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Union


@dataclass
class Node:
    """A single OSM node."""
    id: Optional[int] = None
    latitude: float = 0.0
    longitude: float = 0.0
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None

    element_type: ClassVar[str] = "node"


@dataclass
class CompleteWay:
    """A way together with its resolved nodes."""
    id: Optional[int] = None
    nodes: List[Node] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None

    element_type: ClassVar[str] = "way"

    @property
    def is_closed(self) -> bool:
        return len(self.nodes) > 3 and self.nodes[0].id == self.nodes[-1].id


@dataclass
class RelationMember:
    """
    A relation member.

    ``member_type`` and ``ref`` always describe the member; ``element`` is None
    when the payload did not include its content.
    """
    role: str
    element: Optional["OsmElement"] = None
    member_type: Optional[str] = None
    ref: Optional[int] = None

    def __post_init__(self):
        if self.element is not None:
            self.member_type = self.member_type or self.element.element_type
            if self.ref is None:
                self.ref = self.element.id
        if self.member_type is None or self.ref is None:
            raise ValueError("Relation member needs a type and a ref")


@dataclass
class CompleteRelation:
    """A relation together with its resolved members."""
    id: Optional[int] = None
    members: List[RelationMember] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)
    version: Optional[int] = None

    element_type: ClassVar[str] = "relation"


OsmElement = Union[Node, CompleteWay, CompleteRelation]


class OsmXmlError(ValueError):
    """Raised when an OSM API payload cannot be parsed."""
    pass


def _append_tags(parent: ET.Element, tags: Dict[str, str]) -> None:
    for key, value in tags.items():
        ET.SubElement(parent, "tag", k=key, v=value)


def _read_tags(xml_element: ET.Element) -> Dict[str, str]:
    return {tag.get("k"): tag.get("v", "") for tag in xml_element.findall("tag")}


def changeset_to_xml(comment: str, created_by: str) -> bytes:
    root = ET.Element("osm")
    changeset = ET.SubElement(root, "changeset")
    _append_tags(changeset, {"comment": comment, "created_by": created_by})
    return ET.tostring(root, encoding="utf-8")


def element_to_xml(element: OsmElement, changeset_id: str) -> bytes:
    """
    Serialize an element for a create or update call.

    Args:
        element: Node, way or relation to upload
        changeset_id: Id of the open changeset the upload belongs to

    Returns:
        UTF-8 encoded ``<osm>`` document
    """
    root = ET.Element("osm")
    attributes = {"changeset": str(changeset_id)}
    if element.id is not None:
        attributes["id"] = str(element.id)
    if element.version is not None:
        attributes["version"] = str(element.version)

    if isinstance(element, Node):
        attributes["lat"] = repr(element.latitude)
        attributes["lon"] = repr(element.longitude)
        xml_element = ET.SubElement(root, "node", attributes)
    elif isinstance(element, CompleteWay):
        xml_element = ET.SubElement(root, "way", attributes)
        for node in element.nodes:
            ET.SubElement(xml_element, "nd", ref=str(node.id))
    else:
        xml_element = ET.SubElement(root, "relation", attributes)
        for member in element.members:
            ET.SubElement(
                xml_element, "member",
                type=member.member_type,
                ref=str(member.ref),
                role=member.role,
            )
    _append_tags(xml_element, element.tags)
    return ET.tostring(root, encoding="utf-8")


def _parse_root(payload: Union[str, bytes]) -> ET.Element:
    try:
        return ET.fromstring(payload)
    except ET.ParseError as e:
        raise OsmXmlError(f"Invalid OSM XML: {e}") from e


def _optional_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value is not None else None


def _parse_node(xml_node: ET.Element) -> Node:
    return Node(
        id=int(xml_node.get("id")),
        latitude=float(xml_node.get("lat", 0.0)),
        longitude=float(xml_node.get("lon", 0.0)),
        tags=_read_tags(xml_node),
        version=_optional_int(xml_node.get("version")),
    )


def parse_node(payload: Union[str, bytes]) -> Node:
    xml_node = _parse_root(payload).find("node")
    if xml_node is None:
        raise OsmXmlError("Payload has no node")
    return _parse_node(xml_node)


class _FullDocument:
    """Index of every element in a ``/full`` response, keyed by type and id."""

    def __init__(self, root: ET.Element):
        self.nodes = {int(n.get("id")): _parse_node(n) for n in root.findall("node")}
        self.ways = {int(w.get("id")): w for w in root.findall("way")}
        self.relations = {int(r.get("id")): r for r in root.findall("relation")}

    def way(self, way_id: int) -> CompleteWay:
        xml_way = self.ways.get(way_id)
        if xml_way is None:
            raise OsmXmlError(f"Way {way_id} missing from payload")
        refs = [int(nd.get("ref")) for nd in xml_way.findall("nd")]
        missing = [ref for ref in refs if ref not in self.nodes]
        if missing:
            raise OsmXmlError(f"Way {way_id} references nodes missing from payload: {missing}")
        return CompleteWay(
            id=way_id,
            nodes=[self.nodes[ref] for ref in refs],
            tags=_read_tags(xml_way),
            version=_optional_int(xml_way.get("version")),
        )

    def _member_element(self, member_type: str, ref: int, visited: set) -> Optional["OsmElement"]:
        if member_type == "node":
            return self.nodes.get(ref)
        if member_type == "way" and ref in self.ways:
            try:
                return self.way(ref)
            except OsmXmlError:
                # ways of nested relations come without their nodes
                return None
        if member_type == "relation" and ref in self.relations and ref not in visited:
            return self.relation(ref, visited)
        return None

    def relation(self, relation_id: int, visited: Optional[set] = None) -> CompleteRelation:
        xml_relation = self.relations.get(relation_id)
        if xml_relation is None:
            raise OsmXmlError(f"Relation {relation_id} missing from payload")
        visited = (visited or set()) | {relation_id}
        members = []
        for xml_member in xml_relation.findall("member"):
            ref = int(xml_member.get("ref"))
            member_type = xml_member.get("type")
            members.append(RelationMember(
                role=xml_member.get("role", ""),
                element=self._member_element(member_type, ref, visited),
                member_type=member_type,
                ref=ref,
            ))
        return CompleteRelation(
            id=relation_id,
            members=members,
            tags=_read_tags(xml_relation),
            version=_optional_int(xml_relation.get("version")),
        )


def parse_complete_way(payload: Union[str, bytes], way_id: int) -> CompleteWay:
    return _FullDocument(_parse_root(payload)).way(int(way_id))


def parse_complete_relation(payload: Union[str, bytes], relation_id: int) -> CompleteRelation:
    return _FullDocument(_parse_root(payload)).relation(int(relation_id))
