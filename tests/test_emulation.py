"""Tests for node emulation settings."""

import pytest

from fogtopo.graph import ContainerImage, EdgeEmulationNode, EmulationNode


def test_container_image_parse():
    assert ContainerImage.parse("alpine:3.19") == ContainerImage("alpine", "3.19")
    assert ContainerImage.parse("nginx") == ContainerImage("nginx", "latest")
    assert str(ContainerImage("nginx", "1.25")) == "nginx:1.25"

    with pytest.raises(ValueError):
        ContainerImage.parse(":1.0")


def test_emulation_round_trip(emulation, device_emulation):
    plain = EmulationNode.from_dict(emulation.to_dict())
    device = EmulationNode.from_dict(device_emulation.to_dict())

    assert plain == emulation
    assert type(plain) is EmulationNode
    assert device == device_emulation
    assert isinstance(device, EdgeEmulationNode)


def test_edge_emulation_validation():
    image = ContainerImage("alpine")

    with pytest.raises(ValueError, match="scaling_factor"):
        EdgeEmulationNode("10.0.0.1", image, scaling_factor=0)
    with pytest.raises(ValueError, match="average_device_count"):
        EdgeEmulationNode("10.0.0.1", image, average_device_count=-1.0)
