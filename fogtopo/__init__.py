"""Network topology reader for fog computing emulation.

Reads CAIDA topology datasets into a strongly typed network graph grouped by
autonomous system.
"""

__version__ = "0.1.0"

from .config import FogTopoConfig
from .graph import AutonomousSystem, Edge, Graph
from .reader import CaidaFormatReader, read_caida_graph
from .serialization import load_from_json, save_to_json, to_networkx

__all__ = [
    "AutonomousSystem",
    "CaidaFormatReader",
    "Edge",
    "FogTopoConfig",
    "Graph",
    "load_from_json",
    "read_caida_graph",
    "save_to_json",
    "to_networkx",
]
