"""Tests for model serialization and wire names."""

from topology.models.cache_group import CacheGroup, CacheGroupType
from topology.models.editable import ROOT_LABEL, EditableNode, node_label
from topology.models.persisted import PersistedNode, PersistedTopology


class TestCacheGroup:
    """Test CacheGroup wire format."""

    def test_accepts_camel_case_type_name(self):
        """Catalog records arrive with typeName."""
        cache_group = CacheGroup.model_validate({"id": "7", "name": "edge-1", "typeName": "EDGE_LOC"})

        assert cache_group.type_name == "EDGE_LOC"
        assert cache_group.is_edge

    def test_dumps_type_name_alias(self):
        """Serializing by alias should give typeName back."""
        cache_group = CacheGroup(id="1", name="mid-1", type_name="MID_LOC")

        data = cache_group.model_dump(by_alias=True)

        assert data == {"id": "1", "name": "mid-1", "typeName": "MID_LOC"}
        assert not cache_group.is_edge

    def test_type_enum_compares_to_plain_strings(self):
        """CacheGroupType values are plain strings on the wire."""
        assert CacheGroupType.ORG_LOC == "ORG_LOC"
        assert CacheGroupType("EDGE_LOC") is CacheGroupType.EDGE_LOC


class TestPersistedTopology:
    """Test PersistedTopology serialization."""

    def test_round_trip_json(self):
        """PersistedTopology should serialize and deserialize cleanly."""
        topology = PersistedTopology(
            name="demo",
            desc="a demo",
            nodes=[
                PersistedNode(cachegroup="A"),
                PersistedNode(cachegroup="B", parents=[0]),
            ],
        )
        restored = PersistedTopology.model_validate_json(topology.model_dump_json(by_alias=True))

        assert restored.name == "demo"
        assert restored.desc == "a demo"
        assert [node.parents for node in restored.nodes] == [[], [0]]

    def test_description_alias(self):
        """The wire name for desc is description; desc is accepted too."""
        from_wire = PersistedTopology.model_validate({"name": "t", "description": "wire", "nodes": []})
        from_field = PersistedTopology.model_validate({"name": "t", "desc": "field", "nodes": []})

        assert from_wire.desc == "wire"
        assert from_field.desc == "field"
        assert "description" in from_wire.model_dump(by_alias=True)

    def test_parents_default_empty(self):
        """A node without parents is a root."""
        assert PersistedNode(cachegroup="A").parents == []


class TestEditableNode:
    """Test EditableNode helpers."""

    def test_synthetic_root(self):
        """A node without cache group is the synthetic root."""
        root = EditableNode()

        assert root.is_root
        assert root.parent == ""
        assert root.sec_parent == ""
        assert root.children == []

    def test_sec_parent_alias(self):
        """secParent is accepted and produced on the wire."""
        node = EditableNode.model_validate({"cachegroup": "C", "parent": "A", "secParent": "B"})

        assert node.sec_parent == "B"
        assert node.model_dump(by_alias=True)["secParent"] == "B"

    def test_type_flags(self):
        """is_edge / is_origin follow the type."""
        edge = EditableNode(cachegroup="E", type="EDGE_LOC")
        origin = EditableNode(cachegroup="O", type="ORG_LOC")

        assert edge.is_edge and not edge.is_origin
        assert origin.is_origin and not origin.is_edge
        assert not edge.is_root

    def test_node_label(self):
        """Labels show the cache group and its type, or the root label."""
        assert node_label(EditableNode()) == ROOT_LABEL
        assert node_label(EditableNode(cachegroup="mid-east", type="MID_LOC")) == "mid-east [MID_LOC]"
