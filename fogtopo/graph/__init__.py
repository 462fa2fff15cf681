"""Graph data model: nodes, edges and autonomous systems."""

from .autonomous_system import AutonomousSystem
from .converters import (
    convert_to_backbone,
    convert_to_edge_device,
    convert_to_edge_node,
)
from .edge import Edge
from .emulation import ContainerImage, EdgeEmulationNode, EmulationNode
from .graph import Graph
from .nodes import BackboneNode, EdgeDeviceNode, EdgeNode, Node, NodeType

__all__ = [
    "AutonomousSystem",
    "BackboneNode",
    "ContainerImage",
    "Edge",
    "EdgeDeviceNode",
    "EdgeEmulationNode",
    "EdgeNode",
    "EmulationNode",
    "Graph",
    "Node",
    "NodeType",
    "convert_to_backbone",
    "convert_to_edge_device",
    "convert_to_edge_node",
]
