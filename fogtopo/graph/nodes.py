"""Node variants of the network graph.

Nodes are created and replaced exclusively by their owning
:class:`~fogtopo.graph.autonomous_system.AutonomousSystem`. Equality and hashing
use the node id only, so a node keeps its identity when its variant changes.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Iterable

from fogtopo.graph.emulation import EdgeEmulationNode, EmulationNode

if TYPE_CHECKING:
    from fogtopo.graph.autonomous_system import AutonomousSystem
    from fogtopo.graph.edge import Edge


class NodeType(str, Enum):
    """Role of a node in the graph."""

    EDGE = "edge"
    BACKBONE = "backbone"
    EDGE_DEVICE = "edge_device"


class Node:
    """Abstract graph vertex owned by exactly one autonomous system.

    Args:
        node_id: Graph-wide unique node id.
        system: Owning autonomous system.
        edges: Incident edges, copied into the node in the given order.
        emulation_node: Optional emulation settings.
    """

    node_type: NodeType

    def __init__(
        self,
        node_id: int,
        system: AutonomousSystem,
        edges: Iterable[Edge] = (),
        emulation_node: EmulationNode | None = None,
    ) -> None:
        if type(self) is Node:
            raise TypeError("Node is abstract; use a concrete node variant")
        self._id = int(node_id)
        self._system = system
        self._edges: list[Edge] = list(edges)
        self._emulation_node = emulation_node

    @property
    def id(self) -> int:
        return self._id

    @property
    def system(self) -> AutonomousSystem:
        """Autonomous system this node belongs to."""
        return self._system

    @property
    def edges(self) -> list[Edge]:
        """Incident edges in insertion order."""
        return self._edges

    @property
    def degree(self) -> int:
        return len(self._edges)

    @property
    def emulation_node(self) -> EmulationNode | None:
        return self._emulation_node

    def _add_edge(self, edge: Edge) -> None:
        self._edges.append(edge)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id}, system={self._system.id})"


class EdgeNode(Node):
    """Node at the edge of the network where devices can attach."""

    node_type = NodeType.EDGE


class BackboneNode(Node):
    """Node forming the backbone of an autonomous system."""

    node_type = NodeType.BACKBONE


class EdgeDeviceNode(Node):
    """Emulated end device; always carries edge emulation settings."""

    node_type = NodeType.EDGE_DEVICE

    def __init__(
        self,
        node_id: int,
        system: AutonomousSystem,
        edges: Iterable[Edge] = (),
        emulation_node: EdgeEmulationNode | None = None,
    ) -> None:
        if not isinstance(emulation_node, EdgeEmulationNode):
            raise ValueError(
                f"Edge device node {node_id} requires EdgeEmulationNode settings"
            )
        super().__init__(node_id, system, edges, emulation_node)

    @property
    def emulation_node(self) -> EdgeEmulationNode:
        return self._emulation_node  # type: ignore[return-value]

