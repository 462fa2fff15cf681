"""Pytest configuration and shared fixtures for fogtopo tests."""

from pathlib import Path

import pytest

from fogtopo.graph import ContainerImage, EdgeEmulationNode, EmulationNode, Graph

GEO_LINES = [
    "node.geo N1:\tEU\tDE\t16\tBerlin\t52.52\t13.40",
    "node.geo N2:\tEU\tDE\t16\tBerlin\t52.50\t13.38",
    "node.geo N3:\tEU\tFR\t11\tParis\t48.85\t2.35",
    "node.geo N4:\tEU\tFR\t11\tParis\t48.86\t2.34",
]

AS_LINES = [
    "node.AS N1 7 refinement",
    "node.AS N2 7 refinement",
    "node.AS N3 9 refinement",
    "node.AS N4 9 refinement",
]

LINK_LINES = [
    "link L1:  N1:10.0.0.1 N2:10.0.0.2",
    "link L2:  N2 N3 N4",
]


def write_dataset(
    directory: Path,
    geo_lines: list[str],
    as_lines: list[str],
    link_lines: list[str],
    stem: str = "sample",
) -> list[Path]:
    """Write the three dataset files and return their paths."""
    paths = []
    for suffix, lines in (
        (".nodes.geo", geo_lines),
        (".nodes.as", as_lines),
        (".links", link_lines),
    ):
        path = directory / f"{stem}{suffix}"
        path.write_text("\n".join(lines) + "\n", encoding="iso-8859-1")
        paths.append(path)
    return paths


@pytest.fixture
def geo_lines():
    """Geo records for nodes 1 to 4."""
    return list(GEO_LINES)


@pytest.fixture
def as_lines():
    """Nodes 1 and 2 in AS 7, nodes 3 and 4 in AS 9."""
    return list(AS_LINES)


@pytest.fixture
def link_lines():
    """Links 1-2, 2-3 (cross-AS) and 3-4."""
    return list(LINK_LINES)


@pytest.fixture
def write_files(tmp_path):
    """Factory writing a dataset into the test directory."""

    def _write(geo, as_, links, stem="sample"):
        return write_dataset(tmp_path, geo, as_, links, stem)

    return _write


@pytest.fixture
def dataset_files(tmp_path):
    """Well-formed dataset with two systems and three links."""
    return write_dataset(tmp_path, GEO_LINES, AS_LINES, LINK_LINES)


@pytest.fixture
def graph():
    """Empty graph."""
    return Graph()


@pytest.fixture
def emulation():
    """Plain emulation settings for edge and backbone nodes."""
    return EmulationNode(
        ip_address="10.0.0.10",
        image=ContainerImage("nginx", "1.25"),
        memory_limit=256 * 1024 * 1024,
        cpu_share=0.5,
    )


@pytest.fixture
def device_emulation():
    """Emulation settings for edge device nodes."""
    return EdgeEmulationNode(
        ip_address="10.0.1.10",
        image=ContainerImage("alpine", "3.19"),
        memory_limit=64 * 1024 * 1024,
        cpu_share=0.25,
        scaling_factor=4,
        average_device_count=12.5,
    )
