"""Conversion of the AS graph to networkx and JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import networkx as nx

from fogtopo.config import FormattingConfig
from fogtopo.graph import EmulationNode, Graph, NodeType
from fogtopo.log_config import get_logger

logger = get_logger(__name__)


def to_networkx(graph: Graph, multigraph: bool = False) -> nx.Graph:
    """Convert a graph to a networkx graph keyed by node id.

    Node attributes are ``system`` (AS id), ``node_type`` and, when set,
    ``emulation``. Edge attributes are ``id``, ``delay``, ``bandwidth`` and
    ``cross_as``.

    Args:
        graph: Graph to convert.
        multigraph: Return a ``MultiGraph`` keyed by edge id so that parallel
            links are kept. A simple graph keeps the first link per node pair.

    Returns:
        Undirected networkx graph.
    """
    G: nx.Graph = nx.MultiGraph() if multigraph else nx.Graph()
    G.graph["systems"] = sorted(system.id for system in graph.systems)

    for node in graph.nodes:
        attrs: dict[str, Any] = {
            "system": node.system.id,
            "node_type": node.node_type.value,
        }
        if node.emulation_node is not None:
            attrs["emulation"] = node.emulation_node.to_dict()
        G.add_node(node.id, **attrs)

    for edge in graph.edges:
        attrs = {
            "id": edge.id,
            "delay": edge.delay,
            "bandwidth": edge.bandwidth,
            "cross_as": edge.is_cross_as_edge(),
        }
        if multigraph:
            G.add_edge(edge.source_id, edge.destination_id, key=edge.id, **attrs)
        elif not G.has_edge(edge.source_id, edge.destination_id):
            G.add_edge(edge.source_id, edge.destination_id, **attrs)

    return G


def save_to_json(
    graph: Graph,
    path: Path,
    formatting_config: FormattingConfig | None = None,
) -> None:
    """Save a graph to JSON.

    Args:
        graph: Graph to save.
        path: Output path for JSON file.
        formatting_config: Formatting configuration for JSON output.
    """
    path = Path(path)
    formatting_config = formatting_config or FormattingConfig()
    logger.info(f"Saving graph to JSON: {path}")

    G = to_networkx(graph)
    out: dict[str, Any] = {"systems": G.graph["systems"], "nodes": [], "edges": []}

    for node, data in sorted(G.nodes(data=True)):
        out["nodes"].append({"id": node, **data})

    # Edges are written from the model to keep the source/destination orientation
    for edge in sorted(graph.edges, key=lambda e: e.id):
        out["edges"].append(
            {
                "id": edge.id,
                "source": edge.source_id,
                "target": edge.destination_id,
                "delay": edge.delay,
                "bandwidth": edge.bandwidth,
            }
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(out, f, indent=formatting_config.json_indent)

    file_size_mb = path.stat().st_size / (1024 * 1024)
    logger.info(f"Saved graph: {file_size_mb:.1f} MB")


def load_from_json(path: Path) -> Graph:
    """Load a graph written by :func:`save_to_json`.

    Args:
        path: Input path for JSON file.

    Returns:
        Graph with the saved systems, node variants and edge ids.

    Raises:
        ValueError: If the document references unknown node types or nodes.
    """
    path = Path(path)
    logger.info(f"Loading graph from JSON: {path}")

    with path.open("r") as f:
        data = json.load(f)

    graph = Graph()
    for as_id in data.get("systems", []):
        graph.get_or_create_autonomous_system(int(as_id))

    for node_data in data["nodes"]:
        node_id = int(node_data["id"])
        system = graph.get_or_create_autonomous_system(int(node_data["system"]))
        try:
            node_type = NodeType(node_data["node_type"])
        except ValueError as exc:
            raise ValueError(
                f"Unknown node type for node {node_id}: {node_data['node_type']}"
            ) from exc
        emulation_data = node_data.get("emulation")
        emulation = (
            EmulationNode.from_dict(emulation_data) if emulation_data else None
        )

        if node_type is NodeType.EDGE_DEVICE:
            graph.create_edge_device_node(node_id, system, emulation)
        elif node_type is NodeType.BACKBONE:
            graph.create_backbone_node(node_id, system, emulation)
        else:
            graph.create_edge_node(node_id, system, emulation)

    for edge_data in data["edges"]:
        source = graph.get_node(int(edge_data["source"]))
        destination = graph.get_node(int(edge_data["target"]))
        if source is None or destination is None:
            raise ValueError(
                f"Edge {edge_data.get('id')} references an unknown node"
            )
        graph.create_edge(
            source,
            destination,
            float(edge_data["delay"]),
            float(edge_data["bandwidth"]),
            edge_id=int(edge_data["id"]),
        )

    logger.info(f"Loaded graph: {graph!r}")
    return graph
