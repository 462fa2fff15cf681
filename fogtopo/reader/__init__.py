"""Readers that build a graph from topology datasets."""

from .caida import CaidaFormatReader, Coordinates, ReadStats, read_caida_graph

__all__ = ["CaidaFormatReader", "Coordinates", "ReadStats", "read_caida_graph"]
