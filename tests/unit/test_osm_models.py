import xml.etree.ElementTree as ET

import pytest

from poisync.models.osm import (
    CompleteRelation,
    CompleteWay,
    Node,
    OsmXmlError,
    RelationMember,
    changeset_to_xml,
    element_to_xml,
    parse_complete_relation,
    parse_complete_way,
    parse_node,
)

FULL_RELATION = """<osm version="0.6">
  <node id="1" lat="32.0" lon="35.0" version="1"/>
  <node id="2" lat="32.1" lon="35.1" version="1"/>
  <node id="3" lat="32.2" lon="35.0" version="2"><tag k="natural" v="spring"/></node>
  <way id="10" version="4">
    <nd ref="1"/><nd ref="2"/>
    <tag k="highway" v="path"/>
  </way>
  <relation id="100" version="7">
    <member type="way" ref="10" role="outer"/>
    <member type="node" ref="3" role=""/>
    <member type="way" ref="999" role="outer"/>
    <tag k="name" v="שביל ישראל"/>
    <tag k="route" v="hiking"/>
  </relation>
</osm>"""


def test_node_xml_carries_changeset_position_and_tags():
    node = Node(id=5, latitude=32.5, longitude=34.9, tags={"name": "נקודה"}, version=2)
    root = ET.fromstring(element_to_xml(node, "42"))
    xml_node = root.find("node")
    assert xml_node.get("changeset") == "42"
    assert xml_node.get("id") == "5"
    assert xml_node.get("version") == "2"
    assert float(xml_node.get("lat")) == 32.5
    assert {t.get("k"): t.get("v") for t in xml_node.findall("tag")} == {"name": "נקודה"}


def test_new_node_xml_has_no_id():
    root = ET.fromstring(element_to_xml(Node(latitude=1.0, longitude=2.0), "1"))
    assert root.find("node").get("id") is None


def test_way_and_relation_xml_reference_members():
    way = CompleteWay(id=10, nodes=[Node(id=1), Node(id=2)], tags={"highway": "path"}, version=4)
    relation = CompleteRelation(id=100, members=[RelationMember("outer", way)], version=7)

    way_xml = ET.fromstring(element_to_xml(way, "9")).find("way")
    relation_xml = ET.fromstring(element_to_xml(relation, "9")).find("relation")

    assert [nd.get("ref") for nd in way_xml.findall("nd")] == ["1", "2"]
    member = relation_xml.find("member")
    assert (member.get("type"), member.get("ref"), member.get("role")) == ("way", "10", "outer")


def test_changeset_xml_has_comment():
    root = ET.fromstring(changeset_to_xml("Add POI", "poisync/1.0"))
    tags = {t.get("k"): t.get("v") for t in root.find("changeset").findall("tag")}
    assert tags == {"comment": "Add POI", "created_by": "poisync/1.0"}


def test_parse_node():
    node = parse_node('<osm><node id="3" lat="32.2" lon="35.0" version="2"><tag k="a" v="b"/></node></osm>')
    assert node == Node(id=3, latitude=32.2, longitude=35.0, tags={"a": "b"}, version=2)


def test_parse_complete_way_resolves_nodes():
    way = parse_complete_way(FULL_RELATION, 10)
    assert [n.id for n in way.nodes] == [1, 2]
    assert way.nodes[1].latitude == 32.1
    assert way.version == 4
    assert not way.is_closed


def test_parse_complete_relation_keeps_unresolved_members():
    relation = parse_complete_relation(FULL_RELATION, 100)
    assert relation.tags == {"name": "שביל ישראל", "route": "hiking"}
    assert [(m.role, m.member_type, m.ref) for m in relation.members] == [
        ("outer", "way", 10),
        ("", "node", 3),
        ("outer", "way", 999),
    ]
    assert relation.members[0].element.nodes[0].id == 1
    assert relation.members[2].element is None


def test_relation_reserialization_preserves_every_member():
    payload = """<osm version="0.6">
      <node id="1" lat="32.0" lon="35.0"/>
      <node id="2" lat="32.1" lon="35.1"/>
      <way id="10" version="1"><nd ref="1"/><nd ref="2"/></way>
      <relation id="100" version="3">
        <member type="way" ref="10" role="outer"/>
        <member type="relation" ref="100" role="sub"/>
        <member type="relation" ref="555" role=""/>
        <tag k="name" v="x"/>
      </relation>
    </osm>"""
    relation = parse_complete_relation(payload, 100)
    relation.tags["name"] = "y"

    xml_relation = ET.fromstring(element_to_xml(relation, "8")).find("relation")

    assert [(m.get("type"), m.get("ref"), m.get("role")) for m in xml_relation.findall("member")] == [
        ("way", "10", "outer"),
        ("relation", "100", "sub"),
        ("relation", "555", ""),
    ]


def test_parse_complete_way_with_missing_node_raises():
    payload = '<osm><node id="1" lat="32.0" lon="35.0"/><way id="10"><nd ref="1"/><nd ref="2"/></way></osm>'
    with pytest.raises(OsmXmlError):
        parse_complete_way(payload, 10)


def test_invalid_payload_raises():
    with pytest.raises(OsmXmlError):
        parse_node("not xml")
    with pytest.raises(OsmXmlError):
        parse_complete_way(FULL_RELATION, 11)
