"""Network graph grouped by autonomous system."""

from __future__ import annotations

from fogtopo.graph.autonomous_system import AutonomousSystem
from fogtopo.graph.edge import Edge
from fogtopo.graph.emulation import EdgeEmulationNode, EmulationNode
from fogtopo.graph.nodes import (
    BackboneNode,
    EdgeDeviceNode,
    EdgeNode,
    Node,
)
from fogtopo.log_config import get_logger

logger = get_logger(__name__)


class Graph:
    """Top-level owner of all autonomous systems and edges.

    Autonomous systems are created lazily by id. Node ids are unique across the
    whole graph and indexed to their owning system, edge ids are allocated from
    a single graph-wide counter unless given explicitly.
    """

    def __init__(self) -> None:
        self._systems: dict[int, AutonomousSystem] = {}
        self._node_index: dict[int, AutonomousSystem] = {}
        self._edges: dict[int, Edge] = {}
        self._next_edge_id = 0

    # Autonomous systems

    @property
    def systems(self) -> list[AutonomousSystem]:
        return list(self._systems.values())

    def get_autonomous_system(self, as_id: int) -> AutonomousSystem | None:
        return self._systems.get(as_id)

    def get_or_create_autonomous_system(self, as_id: int) -> AutonomousSystem:
        """Return the system with the given id, creating it if necessary."""
        system = self._systems.get(as_id)
        if system is None:
            system = AutonomousSystem(as_id, node_index=self._node_index)
            self._systems[system.id] = system
            logger.debug(f"Created autonomous system {system.id}")
        return system

    # Nodes

    def create_edge_node(
        self,
        node_id: int,
        system: AutonomousSystem,
        emulation_node: EmulationNode | None = None,
    ) -> EdgeNode:
        """Create an edge node in ``system``.

        Raises:
            ValueError: If the id already exists in the graph or the system is
                not part of this graph.
        """
        self._check_new_node(node_id, system)
        return system.create_edge_node(node_id, emulation_node)

    def create_backbone_node(
        self,
        node_id: int,
        system: AutonomousSystem,
        emulation_node: EmulationNode | None = None,
    ) -> BackboneNode:
        """Create a backbone node in ``system``.

        Raises:
            ValueError: If the id already exists in the graph or the system is
                not part of this graph.
        """
        self._check_new_node(node_id, system)
        return system.create_backbone_node(node_id, emulation_node)

    def create_edge_device_node(
        self,
        node_id: int,
        system: AutonomousSystem,
        emulation_node: EdgeEmulationNode,
    ) -> EdgeDeviceNode:
        """Create an edge device node in ``system``.

        Raises:
            ValueError: If the id already exists in the graph, the system is
                not part of this graph or the emulation settings are missing.
        """
        self._check_new_node(node_id, system)
        return system.create_edge_device_node(node_id, emulation_node)

    def get_node(self, node_id: int) -> Node | None:
        """Return the node with the given id from any system, or None."""
        system = self._node_index.get(node_id)
        if system is None:
            return None
        return system.get_node(node_id)

    def get_edge_node(self, node_id: int) -> EdgeNode | None:
        node = self.get_node(node_id)
        return node if isinstance(node, EdgeNode) else None

    def get_backbone_node(self, node_id: int) -> BackboneNode | None:
        node = self.get_node(node_id)
        return node if isinstance(node, BackboneNode) else None

    def get_edge_device_node(self, node_id: int) -> EdgeDeviceNode | None:
        node = self.get_node(node_id)
        return node if isinstance(node, EdgeDeviceNode) else None

    def has_node(self, node_id: int) -> bool:
        return node_id in self._node_index

    @property
    def nodes(self) -> list[Node]:
        """All nodes of all systems."""
        return [node for system in self._systems.values() for node in system]

    @property
    def edge_nodes(self) -> list[EdgeNode]:
        return [n for n in self.nodes if isinstance(n, EdgeNode)]

    @property
    def backbone_nodes(self) -> list[BackboneNode]:
        return [n for n in self.nodes if isinstance(n, BackboneNode)]

    @property
    def edge_device_nodes(self) -> list[EdgeDeviceNode]:
        return [n for n in self.nodes if isinstance(n, EdgeDeviceNode)]

    # Edges

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def get_edge(self, edge_id: int) -> Edge | None:
        return self._edges.get(edge_id)

    def create_edge(
        self,
        source: Node,
        destination: Node,
        delay: float,
        bandwidth: float,
        edge_id: int | None = None,
    ) -> Edge:
        """Create a bidirectional edge between two registered nodes.

        Args:
            source: One end of the link.
            destination: Other end of the link.
            delay: Latency in milliseconds.
            bandwidth: Bandwidth in Mbit/s.
            edge_id: Explicit id; the next free id is used when omitted.

        Returns:
            The new edge, also appended to both endpoints' incident edges.

        Raises:
            ValueError: If the id is taken or an endpoint is not part of its system.
        """
        for node in (source, destination):
            if self._node_index.get(node.id) is not node.system:
                raise ValueError(f"Node {node.id} is not registered in the graph")
            if node.system.get_node(node.id) is not node:
                raise ValueError(f"Node {node.id} is a stale reference")

        if edge_id is None:
            while self._next_edge_id in self._edges:
                self._next_edge_id += 1
            edge_id = self._next_edge_id
        elif edge_id in self._edges:
            raise ValueError(f"The edge id {edge_id} is already in use")

        edge = Edge(edge_id, source, destination, delay, bandwidth)
        self._edges[edge.id] = edge
        source._add_edge(edge)
        if destination is not source:
            destination._add_edge(edge)
        return edge

    def _check_new_node(self, node_id: int, system: AutonomousSystem) -> None:
        if self._systems.get(system.id) is not system:
            raise ValueError(f"{system!r} is not part of this graph")
        if node_id in self._node_index:
            owner = self._node_index[node_id]
            raise ValueError(f"The node: {node_id} already exists in {owner!r}")

    def summary(self) -> dict[str, int]:
        """Return element counts by category."""
        cross_as = sum(1 for e in self._edges.values() if e.is_cross_as_edge())
        counts = {
            "systems": len(self._systems),
            "edge_nodes": 0,
            "backbone_nodes": 0,
            "edge_device_nodes": 0,
            "edges": len(self._edges),
            "cross_as_edges": cross_as,
        }
        for node in self.nodes:
            counts[f"{node.node_type.value}_nodes"] += 1
        return counts

    def __repr__(self) -> str:
        return (
            f"Graph(systems={len(self._systems)}, nodes={len(self._node_index)}, "
            f"edges={len(self._edges)})"
        )
