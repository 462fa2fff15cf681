"""Autonomous system container.

An autonomous system owns its nodes and is the only place where nodes are
created, promoted to another variant or removed. All variants share a single
id-keyed mapping, so a node id can never be registered under two variants at
once; the per-variant mappings are read-only views derived from it.
"""

from __future__ import annotations

from typing import Iterator, MutableMapping

from fogtopo.graph.emulation import EdgeEmulationNode, EmulationNode
from fogtopo.graph.nodes import BackboneNode, EdgeDeviceNode, EdgeNode, Node
from fogtopo.log_config import get_logger

logger = get_logger(__name__)


class AutonomousSystem:
    """Sub graph of all nodes that belong to one autonomous system.

    Args:
        as_id: Unique autonomous system number.
        node_index: Optional graph-wide mapping of node id to owning system;
            updated whenever this container creates a node.
    """

    def __init__(
        self,
        as_id: int,
        node_index: MutableMapping[int, AutonomousSystem] | None = None,
    ) -> None:
        self._id = int(as_id)
        self._nodes: dict[int, Node] = {}
        self._node_index = node_index

    @property
    def id(self) -> int:
        return self._id

    @property
    def edge_nodes(self) -> dict[int, EdgeNode]:
        """Edge nodes keyed by id."""
        return {k: n for k, n in self._nodes.items() if isinstance(n, EdgeNode)}

    @property
    def backbone_nodes(self) -> dict[int, BackboneNode]:
        """Backbone nodes keyed by id."""
        return {k: n for k, n in self._nodes.items() if isinstance(n, BackboneNode)}

    @property
    def edge_device_nodes(self) -> dict[int, EdgeDeviceNode]:
        """Edge device nodes keyed by id."""
        return {
            k: n for k, n in self._nodes.items() if isinstance(n, EdgeDeviceNode)
        }

    @property
    def nodes(self) -> list[Node]:
        """All nodes of this system regardless of variant."""
        return list(self._nodes.values())

    def get_node(self, node_id: int) -> Node | None:
        """Return the node with the given id or None if it is not in this system."""
        return self._nodes.get(node_id)

    def get_edge_node(self, node_id: int) -> EdgeNode | None:
        node = self._nodes.get(node_id)
        return node if isinstance(node, EdgeNode) else None

    def get_backbone_node(self, node_id: int) -> BackboneNode | None:
        node = self._nodes.get(node_id)
        return node if isinstance(node, BackboneNode) else None

    def get_edge_device_node(self, node_id: int) -> EdgeDeviceNode | None:
        node = self._nodes.get(node_id)
        return node if isinstance(node, EdgeDeviceNode) else None

    def contains_node(self, node: Node) -> bool:
        """Return True if a node with the same id is registered in this system."""
        return node.id in self._nodes

    def create_edge_node(
        self, node_id: int, emulation_node: EmulationNode | None = None
    ) -> EdgeNode:
        """Create and register a new edge node.

        Raises:
            ValueError: If the id is already used in this system.
        """
        return self._register(EdgeNode(node_id, self, (), emulation_node))

    def create_backbone_node(
        self, node_id: int, emulation_node: EmulationNode | None = None
    ) -> BackboneNode:
        """Create and register a new backbone node.

        Raises:
            ValueError: If the id is already used in this system.
        """
        return self._register(BackboneNode(node_id, self, (), emulation_node))

    def create_edge_device_node(
        self, node_id: int, emulation_node: EdgeEmulationNode
    ) -> EdgeDeviceNode:
        """Create and register a new edge device node.

        Raises:
            ValueError: If the id is already used in this system or the
                emulation settings are missing.
        """
        return self._register(EdgeDeviceNode(node_id, self, (), emulation_node))

    def replace_by_edge_node(self, node: Node) -> EdgeNode:
        """Replace ``node`` by an edge node with the same id and edges.

        The old node object must not be used after the call.

        Raises:
            ValueError: If ``node`` belongs to another system or was already
                replaced.
            RuntimeError: If ``node`` cannot be removed from this system.
        """
        self._check_owner(node)
        return self._swap(EdgeNode(node.id, self, node.edges, node.emulation_node))

    def replace_by_backbone_node(self, node: Node) -> BackboneNode:
        """Replace ``node`` by a backbone node with the same id and edges.

        The old node object must not be used after the call.

        Raises:
            ValueError: If ``node`` belongs to another system or was already
                replaced.
            RuntimeError: If ``node`` cannot be removed from this system.
        """
        self._check_owner(node)
        return self._swap(
            BackboneNode(node.id, self, node.edges, node.emulation_node)
        )

    def replace_by_edge_device_node(
        self, node: Node, emulation_node: EdgeEmulationNode
    ) -> EdgeDeviceNode:
        """Replace ``node`` by an edge device node with the same id and edges.

        The old node object must not be used after the call.

        Raises:
            ValueError: If ``node`` belongs to another system, was already
                replaced or the emulation settings are missing.
            RuntimeError: If ``node`` cannot be removed from this system.
        """
        self._check_owner(node)
        return self._swap(EdgeDeviceNode(node.id, self, node.edges, emulation_node))

    def _check_owner(self, node: Node) -> None:
        if node.system is not self:
            raise ValueError(
                f"The node: {node.id} to replace is not assigned to the as: {self._id}"
            )
        current = self._nodes.get(node.id)
        if current is not None and current is not node:
            raise ValueError(
                f"The node: {node.id} is a stale reference; it was replaced in the "
                f"as: {self._id}"
            )

    def _swap(self, replacement: Node):
        # Replacement is fully constructed before the old entry is dropped.
        if self._nodes.pop(replacement.id, None) is None:
            raise RuntimeError(
                f"The node: {replacement.id} to replace cannot be deleted from "
                f"the autonomous system {self._id}"
            )
        self._nodes[replacement.id] = replacement
        logger.debug(
            f"Replaced node {replacement.id} in AS {self._id} by "
            f"{replacement.node_type.value} node"
        )
        return replacement

    def _register(self, node):
        if node.id in self._nodes:
            raise ValueError(
                f"The node: {node.id} already exists in the as: {self._id}"
            )
        self._nodes[node.id] = node
        if self._node_index is not None:
            self._node_index[node.id] = self
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AutonomousSystem):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"AS: {self._id}"
