"""Bidirectional links between graph nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fogtopo.graph.autonomous_system import AutonomousSystem
    from fogtopo.graph.nodes import Node


class Edge:
    """Bidirectional link between two nodes.

    Latency and bandwidth apply to both directions. The edge stores the id and
    the owning autonomous system of each endpoint instead of the node objects,
    so endpoints are resolved on every access and a node that was replaced by
    another variant is picked up transparently.

    Args:
        edge_id: Graph-wide unique edge id.
        source: One end of the link.
        destination: Other end of the link.
        delay: Latency in milliseconds.
        bandwidth: Bandwidth in Mbit/s.
    """

    def __init__(
        self,
        edge_id: int,
        source: Node,
        destination: Node,
        delay: float,
        bandwidth: float,
    ) -> None:
        self._id = int(edge_id)
        self._source_id = source.id
        self._source_system = source.system
        self._destination_id = destination.id
        self._destination_system = destination.system
        self.delay = float(delay)
        self.bandwidth = float(bandwidth)

    @property
    def id(self) -> int:
        return self._id

    @property
    def source_id(self) -> int:
        return self._source_id

    @property
    def destination_id(self) -> int:
        return self._destination_id

    @property
    def source_system(self) -> AutonomousSystem:
        return self._source_system

    @property
    def destination_system(self) -> AutonomousSystem:
        return self._destination_system

    @property
    def source(self) -> Node:
        """Current node object at the source end."""
        return self._resolve(self._source_id, self._source_system)

    @property
    def destination(self) -> Node:
        """Current node object at the destination end."""
        return self._resolve(self._destination_id, self._destination_system)

    def get_destination_for_source(self, node: Node) -> Node | None:
        """Return the other end of the link for the given node.

        Args:
            node: Node to find the partner for.

        Returns:
            The opposite endpoint, or ``None`` if ``node`` is not part of this edge.
        """
        if node.id == self._source_id:
            return self.destination
        if node.id == self._destination_id:
            return self.source
        return None

    def is_cross_as_edge(self) -> bool:
        """Return True if the endpoints belong to different autonomous systems."""
        return self._source_system is not self._destination_system

    @staticmethod
    def _resolve(node_id: int, system: AutonomousSystem) -> Node:
        node = system.get_node(node_id)
        if node is None:
            raise ValueError(f"The node: {node_id} does not exist in {system!r}")
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Edge(id={self._id}, {self._source_id}<->{self._destination_id}, "
            f"delay={self.delay}, bandwidth={self.bandwidth})"
        )
