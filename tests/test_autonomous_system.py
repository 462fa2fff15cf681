"""Tests for the autonomous system container and node promotion."""

import pytest

from fogtopo.graph import (
    AutonomousSystem,
    BackboneNode,
    EdgeDeviceNode,
    EdgeNode,
    Graph,
    NodeType,
    convert_to_backbone,
    convert_to_edge_device,
    convert_to_edge_node,
)


class TestNodeCreation:
    """Creating and looking up nodes of each variant."""

    def test_create_each_variant(self, device_emulation):
        system = AutonomousSystem(7)
        edge = system.create_edge_node(1)
        backbone = system.create_backbone_node(2)
        device = system.create_edge_device_node(3, device_emulation)

        assert isinstance(edge, EdgeNode)
        assert isinstance(backbone, BackboneNode)
        assert isinstance(device, EdgeDeviceNode)
        assert system.edge_nodes == {1: edge}
        assert system.backbone_nodes == {2: backbone}
        assert system.edge_device_nodes == {3: device}
        assert len(system) == 3
        for node in (edge, backbone, device):
            assert node.system is system
            assert node.edges == []

    def test_get_node_finds_any_variant(self, device_emulation):
        system = AutonomousSystem(7)
        system.create_edge_node(1)
        system.create_backbone_node(2)
        system.create_edge_device_node(3, device_emulation)

        assert system.get_node(1).node_type is NodeType.EDGE
        assert system.get_node(2).node_type is NodeType.BACKBONE
        assert system.get_node(3).node_type is NodeType.EDGE_DEVICE
        assert system.get_node(4) is None

    def test_typed_getters_return_none_for_other_variant(self):
        system = AutonomousSystem(7)
        system.create_backbone_node(2)

        assert system.get_edge_node(2) is None
        assert system.get_edge_device_node(2) is None
        assert system.get_backbone_node(2) is not None

    def test_duplicate_id_is_rejected(self):
        system = AutonomousSystem(7)
        system.create_edge_node(1)

        with pytest.raises(ValueError, match="already exists"):
            system.create_backbone_node(1)
        assert len(system) == 1
        assert system.backbone_nodes == {}

    def test_edge_device_requires_emulation_settings(self, emulation):
        system = AutonomousSystem(7)

        with pytest.raises(ValueError):
            system.create_edge_device_node(3, None)
        with pytest.raises(ValueError):
            system.create_edge_device_node(3, emulation)
        assert system.get_node(3) is None

    def test_contains_node(self):
        system = AutonomousSystem(7)
        other = AutonomousSystem(8)
        node = system.create_edge_node(1)
        foreign = other.create_edge_node(2)

        assert system.contains_node(node)
        assert not system.contains_node(foreign)

    def test_identity_by_id(self):
        assert AutonomousSystem(7) == AutonomousSystem(7)
        assert hash(AutonomousSystem(7)) == hash(AutonomousSystem(7))
        assert AutonomousSystem(7) != AutonomousSystem(8)
        assert repr(AutonomousSystem(7)) == "AS: 7"


class TestReplacement:
    """Promotion of a node to another variant."""

    def _connected(self):
        graph = Graph()
        system = graph.get_or_create_autonomous_system(7)
        a = graph.create_edge_node(1, system)
        b = graph.create_edge_node(2, system)
        c = graph.create_edge_node(3, system)
        first = graph.create_edge(a, b, 1.0, 1000.0)
        second = graph.create_edge(c, a, 2.0, 500.0)
        return graph, system, first, second

    def test_replace_by_backbone_keeps_id_and_edges(self):
        graph, system, first, second = self._connected()
        node = system.get_node(1)

        backbone = system.replace_by_backbone_node(node)

        assert isinstance(backbone, BackboneNode)
        assert backbone.id == 1
        assert backbone.edges == [first, second]
        assert 1 in system.backbone_nodes
        assert 1 not in system.edge_nodes
        assert 1 not in system.edge_device_nodes
        assert system.get_node(1) is backbone
        assert graph.get_node(1) is backbone

    def test_edges_resolve_to_replacement(self):
        graph, system, first, second = self._connected()

        backbone = system.replace_by_backbone_node(system.get_node(1))

        assert first.source is backbone
        assert second.destination is backbone
        assert first.get_destination_for_source(first.destination) is backbone

    def test_replace_by_edge_device_and_back(self, device_emulation):
        _, system, first, second = self._connected()

        device = system.replace_by_edge_device_node(
            system.get_node(2), device_emulation
        )
        assert isinstance(device, EdgeDeviceNode)
        assert device.emulation_node == device_emulation
        assert device.edges == [first]
        assert list(system.edge_device_nodes) == [2]

        edge = system.replace_by_edge_node(device)
        assert isinstance(edge, EdgeNode)
        assert edge.edges == [first]
        assert system.edge_device_nodes == {}
        assert 2 in system.edge_nodes

    def test_replacement_carries_emulation_settings(self, emulation):
        system = AutonomousSystem(7)
        node = system.create_edge_node(1, emulation)

        backbone = system.replace_by_backbone_node(node)

        assert backbone.emulation_node == emulation

    def test_replace_foreign_node_raises(self):
        system = AutonomousSystem(7)
        other = AutonomousSystem(8)
        foreign = other.create_edge_node(1)

        with pytest.raises(ValueError, match="not assigned"):
            system.replace_by_backbone_node(foreign)
        assert other.get_node(1) is foreign

    def test_replace_unregistered_node_raises_runtime_error(self):
        system = AutonomousSystem(7)
        orphan = EdgeNode(5, system)

        with pytest.raises(RuntimeError, match="cannot be deleted"):
            system.replace_by_backbone_node(orphan)
        assert len(system) == 0

    def test_replace_stale_node_raises(self):
        graph, system, first, second = self._connected()
        original = system.get_node(1)
        backbone = system.replace_by_backbone_node(original)
        third = graph.create_edge(backbone, system.get_node(2), 3.0, 100.0)

        with pytest.raises(ValueError, match="stale"):
            system.replace_by_edge_node(original)
        assert system.get_node(1) is backbone
        assert backbone.edges == [first, second, third]

    def test_failed_device_promotion_leaves_node_in_place(self):
        system = AutonomousSystem(7)
        node = system.create_edge_node(1)

        with pytest.raises(ValueError):
            system.replace_by_edge_device_node(node, None)
        assert system.get_node(1) is node


class TestConverters:
    """Conditional promotion helpers."""

    def test_convert_to_backbone_is_noop_for_backbone(self):
        system = AutonomousSystem(7)
        backbone = system.create_backbone_node(1)

        assert convert_to_backbone(backbone) is backbone

    def test_convert_to_backbone_replaces_edge_node(self):
        system = AutonomousSystem(7)
        node = system.create_edge_node(1)

        converted = convert_to_backbone(node)

        assert isinstance(converted, BackboneNode)
        assert system.get_node(1) is converted

    def test_convert_to_edge_node(self):
        system = AutonomousSystem(7)
        backbone = system.create_backbone_node(1)

        converted = convert_to_edge_node(backbone)

        assert isinstance(converted, EdgeNode)
        assert convert_to_edge_node(converted) is converted

    def test_convert_to_edge_device(self, device_emulation):
        system = AutonomousSystem(7)
        node = system.create_edge_node(1)

        device = convert_to_edge_device(node, device_emulation)

        assert isinstance(device, EdgeDeviceNode)
        assert convert_to_edge_device(device, device_emulation) is device
