"""Reader for CAIDA ITDK style topology datasets.

A dataset consists of three correlated files:

- ``*.nodes.geo``: tab separated geo records, e.g.
  ``node.geo N12:\\tEU\\tDE\\t...\\t52.52\\t13.40``
- ``*.nodes.as``: space separated AS assignments, e.g. ``node.AS N12 3320 refinement``
- ``*.links``: space separated links, e.g. ``link L7:  N12:1.2.3.4 N13 N14``

The files are processed in that order, one at a time. Malformed lines never
abort the read; they are counted in :class:`ReadStats` and reported once all
three phases are done.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable, NamedTuple

from fogtopo.config import ReaderConfig
from fogtopo.graph import EdgeNode, Graph
from fogtopo.log_config import get_logger

logger = get_logger(__name__)

GEO_SUFFIX = ".nodes.geo"
AS_SUFFIX = ".nodes.as"
LINKS_SUFFIX = ".links"

NODE_COLUMNS = 7
AS_COLUMNS = 3
EDGE_COLUMNS = 4

# ``node.geo N12:`` -> the node id starts after ``node.geo N``
GEO_ID_OFFSET = 10
# first column of the node chain in a link line
LINK_CHAIN_START = 3

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class Coordinates(NamedTuple):
    """Position of a node as read from the geo file."""

    x: float
    y: float


@dataclass
class ReadStats:
    """Error tally of one dataset read.

    Attributes:
        ids_no_integer: Node or link ids that are not valid 32-bit integers.
        as_no_integer: AS ids that are not valid 32-bit integers.
        coordinates_no_floats: Geo lines whose coordinates are not numeric.
        no_node_found_for_as: AS assignments without a matching node.
        no_node_found_for_edge: Link pairs with an endpoint that is not an edge node.
        duplicate_nodes: AS assignments for a node id that already exists.
        node_lines_skipped: Geo lines with too few columns.
        as_lines_skipped: AS lines with too few columns.
        link_lines_skipped: Link lines with too few columns.
        unused_coordinates: Staged coordinate entries never consumed by the
            later phases.
    """

    ids_no_integer: int = 0
    as_no_integer: int = 0
    coordinates_no_floats: int = 0
    no_node_found_for_as: int = 0
    no_node_found_for_edge: int = 0
    duplicate_nodes: int = 0
    node_lines_skipped: int = 0
    as_lines_skipped: int = 0
    link_lines_skipped: int = 0
    unused_coordinates: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    @property
    def total_errors(self) -> int:
        """Sum of all error counters (excludes ``unused_coordinates``)."""
        data = self.as_dict()
        data.pop("unused_coordinates")
        return sum(data.values())

    def log(self) -> None:
        """Log every counter at debug level."""
        logger.debug(f"ID out of Integer range: {self.ids_no_integer}")
        logger.debug(f"AS out of Integer range: {self.as_no_integer}")
        logger.debug(f"Coordinates out of Float range: {self.coordinates_no_floats}")
        logger.debug(
            f"Number of times no nodes were found to assign an AS: "
            f"{self.no_node_found_for_as}"
        )
        logger.debug(
            f"Number of times no nodes were found to build an edge: "
            f"{self.no_node_found_for_edge}"
        )
        logger.debug(f"Duplicate node assignments: {self.duplicate_nodes}")
        logger.debug(f"Nodes read without an AS: {self.unused_coordinates}")
        logger.debug(f"Number of node lines skipped: {self.node_lines_skipped}")
        logger.debug(f"Number of AS lines skipped: {self.as_lines_skipped}")
        logger.debug(f"Number of link lines skipped: {self.link_lines_skipped}")

    def summary(self) -> str:
        """Return a human-readable multi-line summary."""
        width = max(len(k) for k in self.as_dict())
        return "\n".join(f"{k.ljust(width)} : {v}" for k, v in self.as_dict().items())


def parse_int(value: str) -> int | None:
    """Parse a signed 32-bit decimal integer.

    Returns:
        The integer, or None if ``value`` is not a plain decimal number or
        does not fit into 32 bits.
    """
    if not _INT_RE.fullmatch(value):
        return None
    number = int(value)
    if number < _INT_MIN or number > _INT_MAX:
        return None
    return number


def strip_token(token: str) -> str:
    """Return the id part of a node or link token.

    Tokens carry a one-letter type marker and an optional ``:`` suffix:
    ``N12`` -> ``12``, ``N12:1.2.3.4`` -> ``12``, ``L7:`` -> ``7``. A token that
    starts with a digit or sign has no marker.
    """
    token = token.split(":", 1)[0]
    if token[:1].isalpha():
        return token[1:]
    return token


def read_geo_lines(
    lines: Iterable[str],
    stats: ReadStats,
    coordinates: dict[int, Coordinates] | None = None,
) -> dict[int, Coordinates]:
    """Stage node coordinates from ``.nodes.geo`` lines.

    Args:
        lines: Lines of the geo file, with or without line terminators.
        stats: Tally updated in place.
        coordinates: Optional map to extend; a new one is created otherwise.

    Returns:
        Mapping from node id to coordinates.
    """
    if coordinates is None:
        coordinates = {}
    for line in lines:
        line = line.rstrip("\r\n")
        values = line.split("\t")
        if len(values) < NODE_COLUMNS:
            logger.debug(
                f"There are not {NODE_COLUMNS} columns in the node line: {line}"
            )
            stats.node_lines_skipped += 1
            continue

        node_str = strip_token(values[0][GEO_ID_OFFSET:].strip())
        node_id = parse_int(node_str)
        if node_id is None:
            logger.debug(f"Failed to parse the id {node_str} to an integer.")
            stats.ids_no_integer += 1
            continue

        try:
            coordinates[node_id] = Coordinates(float(values[5]), float(values[6]))
        except ValueError:
            logger.debug(
                f"Failed to parse coordinates {values[5]} and {values[6]} to floats."
            )
            stats.coordinates_no_floats += 1
    return coordinates


def read_as_lines(lines: Iterable[str], graph: Graph, stats: ReadStats) -> Graph:
    """Create an edge node per ``.nodes.as`` line in its autonomous system.

    Args:
        lines: Lines of the AS file.
        graph: Graph to populate.
        stats: Tally updated in place.

    Returns:
        The populated graph.
    """
    for line in lines:
        line = line.rstrip("\r\n")
        values = line.split(" ")
        if len(values) < AS_COLUMNS:
            stats.as_lines_skipped += 1
            logger.debug(
                f"There are not {AS_COLUMNS} columns in the autonomous system "
                f"line: {line}"
            )
            continue

        node_str = strip_token(values[1])
        node_id = parse_int(node_str)
        if node_id is None:
            logger.debug(f"Failed to parse the id {node_str} to an integer.")
            stats.ids_no_integer += 1
            continue

        as_id = parse_int(values[2])
        if as_id is None:
            logger.debug(
                f"Failed to parse the autonomous system id {values[2]} to an integer."
            )
            stats.as_no_integer += 1
            continue

        if graph.has_node(node_id):
            logger.debug(f"The node {node_id} has already been assigned to an AS.")
            stats.duplicate_nodes += 1
            continue

        graph.create_edge_node(node_id, graph.get_or_create_autonomous_system(as_id))
    return graph


def read_link_lines(
    lines: Iterable[str],
    graph: Graph,
    stats: ReadStats,
    config: ReaderConfig | None = None,
) -> Graph:
    """Create edges for every adjacent node pair of each ``.links`` line.

    A token that is not a valid id ends processing of its line. A pair whose
    endpoints are not both edge nodes is skipped and the chain continues.

    Args:
        lines: Lines of the links file.
        graph: Graph holding the edge nodes created from the AS file.
        stats: Tally updated in place.
        config: Reader parameters; defaults apply when omitted.

    Returns:
        The populated graph.
    """
    config = config or ReaderConfig()
    for line in lines:
        line = line.rstrip("\r\n")
        values = line.split(" ")
        if len(values) < EDGE_COLUMNS:
            logger.debug(
                f"There are not {EDGE_COLUMNS} columns in the link line: {line}"
            )
            stats.link_lines_skipped += 1
            continue

        link_str = strip_token(values[1])
        if parse_int(link_str) is None:
            logger.debug(f"Failed to parse the link id {link_str} to an integer.")
            stats.ids_no_integer += 1
            continue

        ids: list[int] = []
        for token in values[LINK_CHAIN_START:]:
            node_str = strip_token(token)
            node_id = parse_int(node_str)
            if node_id is None:
                logger.debug(
                    f"Failed to parse the link's node id {node_str} to an integer."
                )
                stats.ids_no_integer += 1
                break
            ids.append(node_id)

        for source_id, destination_id in zip(ids, ids[1:]):
            source = graph.get_edge_node(source_id)
            destination = graph.get_edge_node(destination_id)
            if source is None or destination is None:
                logger.debug(
                    f"To create a link {source_id}-{destination_id} source and "
                    f"destination must be found."
                )
                stats.no_node_found_for_edge += 1
                continue

            graph.create_edge(
                source,
                destination,
                latency(source, destination, config),
                config.default_bandwidth,
            )
    return graph


def latency(source: EdgeNode, destination: EdgeNode, config: ReaderConfig) -> float:
    """Return the latency of a link between two nodes in ms.

    The dataset carries no latency information, so this is the configured
    placeholder regardless of the endpoints.
    """
    return config.default_latency


def find_file(files: Iterable[Path | str], suffix: str) -> Path | None:
    """Return the first path whose name ends with ``suffix``, or None."""
    for path in files:
        if str(path).endswith(suffix):
            return Path(path)
    return None


class CaidaFormatReader:
    """Builds a :class:`Graph` from a CAIDA dataset.

    Usage:
        reader = CaidaFormatReader()
        graph = reader.read_graph([geo_path, as_path, links_path])
        print(reader.stats.summary())

    Args:
        config: Reader parameters; defaults apply when omitted.
    """

    def __init__(self, config: ReaderConfig | None = None) -> None:
        self.config = config or ReaderConfig()
        self.stats = ReadStats()
        self.coordinates: dict[int, Coordinates] = {}

    def read_graph(self, files: Iterable[Path | str]) -> Graph:
        """Read the dataset into a new graph.

        Args:
            files: Paths containing a ``.nodes.geo``, a ``.nodes.as`` and a
                ``.links`` file; other paths are ignored.

        Returns:
            The populated graph.

        Raises:
            ValueError: If one of the three files is missing from ``files``.
        """
        files = list(files)
        nodes_file = self._require(files, GEO_SUFFIX)
        as_file = self._require(files, AS_SUFFIX)
        link_file = self._require(files, LINKS_SUFFIX)

        self.stats = ReadStats()
        self.coordinates = {}
        graph = Graph()

        logger.info(f"Reading node coordinates from {nodes_file}")
        with open(nodes_file, "r", encoding=self.config.encoding, newline="") as f:
            read_geo_lines(f, self.stats, self.coordinates)

        logger.info(f"Reading autonomous systems from {as_file}")
        with open(as_file, "r", encoding=self.config.encoding, newline="") as f:
            read_as_lines(f, graph, self.stats)

        logger.info(f"Reading links from {link_file}")
        with open(link_file, "r", encoding=self.config.encoding, newline="") as f:
            read_link_lines(f, graph, self.stats, self.config)

        self.stats.unused_coordinates = len(self.coordinates)
        self.stats.log()

        counts = graph.summary()
        logger.info(
            f"Read graph: {counts['systems']:,} systems, "
            f"{counts['edge_nodes']:,} nodes, {counts['edges']:,} edges "
            f"({self.stats.total_errors:,} input errors)"
        )
        return graph

    @staticmethod
    def _require(files: list[Path | str], suffix: str) -> Path:
        path = find_file(files, suffix)
        if path is None:
            raise ValueError(f"The given files do not contain a {suffix} file.")
        return path


def read_caida_graph(
    files: Iterable[Path | str], config: ReaderConfig | None = None
) -> Graph:
    """Read a CAIDA dataset into a new graph.

    Args:
        files: Paths of the three dataset files.
        config: Reader parameters; defaults apply when omitted.

    Returns:
        The populated graph.
    """
    return CaidaFormatReader(config).read_graph(files)
