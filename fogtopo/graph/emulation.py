"""Emulation attributes attached to graph nodes.

Edge-device nodes always carry an :class:`EdgeEmulationNode`; edge and backbone
nodes may carry a plain :class:`EmulationNode` once the placement stage has
assigned them a container.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContainerImage:
    """Container image reference in ``name:version`` form."""

    name: str
    version: str = "latest"

    def __str__(self) -> str:
        return f"{self.name}:{self.version}"

    @classmethod
    def parse(cls, value: str) -> ContainerImage:
        """Parse ``name[:version]`` into an image reference.

        Args:
            value: Image string such as ``"alpine:3.19"``.

        Returns:
            Parsed image; the version defaults to ``latest``.

        Raises:
            ValueError: If the image name is empty.
        """
        name, _, version = str(value).strip().partition(":")
        if not name:
            raise ValueError(f"Invalid container image: {value!r}")
        return cls(name=name, version=version or "latest")


@dataclass(frozen=True)
class EmulationNode:
    """Emulation settings of a node that runs inside a container.

    Attributes:
        ip_address: Address assigned to the emulated host.
        image: Container image to start.
        memory_limit: Memory limit in bytes.
        cpu_share: Relative CPU share of the container.
    """

    ip_address: str
    image: ContainerImage
    memory_limit: int = 0
    cpu_share: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "ip_address": self.ip_address,
            "image": str(self.image),
            "memory_limit": self.memory_limit,
            "cpu_share": self.cpu_share,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EmulationNode:
        """Build emulation settings from :meth:`to_dict` output."""
        if "scaling_factor" in data:
            return EdgeEmulationNode.from_dict(data)
        return cls(
            ip_address=str(data["ip_address"]),
            image=ContainerImage.parse(data["image"]),
            memory_limit=int(data.get("memory_limit", 0)),
            cpu_share=float(data.get("cpu_share", 1.0)),
        )


@dataclass(frozen=True)
class EdgeEmulationNode(EmulationNode):
    """Emulation settings of an edge-device node.

    Attributes:
        scaling_factor: Number of emulated devices represented by one container.
        average_device_count: Expected number of devices at the attachment point.
    """

    scaling_factor: int = 1
    average_device_count: float = 0.0

    def __post_init__(self) -> None:
        if self.scaling_factor <= 0:
            raise ValueError("scaling_factor must be positive")
        if self.average_device_count < 0:
            raise ValueError("average_device_count must be non-negative")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        data = super().to_dict()
        data["scaling_factor"] = self.scaling_factor
        data["average_device_count"] = self.average_device_count
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EdgeEmulationNode:
        """Build edge-device emulation settings from :meth:`to_dict` output."""
        return cls(
            ip_address=str(data["ip_address"]),
            image=ContainerImage.parse(data["image"]),
            memory_limit=int(data.get("memory_limit", 0)),
            cpu_share=float(data.get("cpu_share", 1.0)),
            scaling_factor=int(data.get("scaling_factor", 1)),
            average_device_count=float(data.get("average_device_count", 0.0)),
        )
