"""Helpers that move a node to another variant only when needed."""

from __future__ import annotations

from fogtopo.graph.emulation import EdgeEmulationNode
from fogtopo.graph.nodes import BackboneNode, EdgeDeviceNode, EdgeNode, Node


def convert_to_backbone(node: Node) -> BackboneNode:
    """Return ``node`` as a backbone node.

    A backbone node is returned unchanged. Any other variant is replaced in its
    autonomous system and the old object must not be used afterwards.

    Args:
        node: Node to convert.

    Returns:
        Backbone node with the same id and incident edges.
    """
    if isinstance(node, BackboneNode):
        return node
    return node.system.replace_by_backbone_node(node)


def convert_to_edge_node(node: Node) -> EdgeNode:
    """Return ``node`` as an edge node, replacing it if necessary."""
    if isinstance(node, EdgeNode):
        return node
    return node.system.replace_by_edge_node(node)


def convert_to_edge_device(
    node: Node, emulation_node: EdgeEmulationNode
) -> EdgeDeviceNode:
    """Return ``node`` as an edge device node with the given emulation settings.

    An edge device node that already carries ``emulation_node`` is returned
    unchanged; otherwise it is replaced so the new settings take effect.
    """
    if isinstance(node, EdgeDeviceNode) and node.emulation_node == emulation_node:
        return node
    return node.system.replace_by_edge_device_node(node, emulation_node)
