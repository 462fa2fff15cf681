"""Configuration management for the topology reader."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from fogtopo.log_config import get_logger

logger = get_logger(__name__)

# CAIDA datasets are published in ISO-8859-1
DEFAULT_ENCODING = "iso-8859-1"
DEFAULT_BANDWIDTH_MBPS = 1000.0
DEFAULT_LATENCY_MS = 1.0


def _section(parent: dict[str, Any], key: str, label: str) -> dict[str, Any]:
    """Return ``parent[key]`` as a dictionary; absent or null means empty.

    Raises:
        ValueError: If the value is present but not a dictionary.
    """
    value = parent.get(key, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be a dictionary")
    return value


@dataclass
class InputConfig:
    """Input dataset configuration.

    Lists the files of one dataset. The reader matches them by suffix, so the
    order is irrelevant and extra files are ignored.
    """

    files: list[Path] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Accept plain strings as paths."""
        self.files = [Path(p) for p in self.files]


@dataclass
class ReaderConfig:
    """Parameters of the CAIDA reader.

    Attributes:
        encoding: Character encoding of all three input files.
        default_bandwidth: Bandwidth in Mbit/s assigned to every read link.
        default_latency: Latency in ms assigned to every read link. The dataset
            carries no latency information, so a constant placeholder is used.
    """

    encoding: str = DEFAULT_ENCODING
    default_bandwidth: float = DEFAULT_BANDWIDTH_MBPS
    default_latency: float = DEFAULT_LATENCY_MS


@dataclass
class FormattingConfig:
    """Formatting of written artefacts."""

    json_indent: int = 2


@dataclass
class OutputConfig:
    """Output configuration for the persisted graph."""

    formatting: FormattingConfig = field(default_factory=FormattingConfig)


@dataclass
class FogTopoConfig:
    """Complete configuration for reading a topology dataset."""

    input: InputConfig = field(default_factory=InputConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    _source_path: Path | None = field(default=None, repr=False, compare=False)

    @classmethod
    def from_yaml(cls, config_path: Path) -> FogTopoConfig:
        """Read a configuration file.

        Relative entries of ``input.files`` are taken relative to the directory
        of ``config_path``.

        Args:
            config_path: YAML file to read.

        Returns:
            Configuration with defaults filled in for absent keys.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If a section or value is invalid.
        """
        config_path = Path(config_path)
        logger.info(f"Reading config {config_path}")

        if not config_path.exists():
            raise FileNotFoundError(f"Config file does not exist: {config_path}")

        try:
            raw_config = yaml.safe_load(config_path.read_text())
        except yaml.YAMLError as e:
            logger.error(f"Config {config_path} is not valid YAML: {e}")
            raise

        cfg = cls._from_dict({} if raw_config is None else raw_config)
        cfg.input.files = [
            p if p.is_absolute() else config_path.parent / p for p in cfg.input.files
        ]
        cfg._source_path = config_path
        return cfg

    @classmethod
    def _from_dict(cls, config_dict: dict[str, Any]) -> FogTopoConfig:
        """Build a configuration from the parsed YAML document.

        All sections are optional; missing keys fall back to defaults.

        Raises:
            ValueError: If a section has the wrong type or a value is out of range.
        """
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration root must be a dictionary")

        input_dict = _section(config_dict, "input", "'input' configuration section")
        files = input_dict.get("files", [])
        if files is None:
            files = []
        if isinstance(files, str):
            files = [files]
        if not isinstance(files, list):
            raise ValueError("'input.files' must be a list of paths")
        input_cfg = InputConfig(files=[Path(str(p)) for p in files])

        reader_dict = _section(config_dict, "reader", "'reader' configuration section")
        try:
            reader_cfg = ReaderConfig(
                encoding=str(reader_dict.get("encoding", DEFAULT_ENCODING)),
                default_bandwidth=float(
                    reader_dict.get("default_bandwidth", DEFAULT_BANDWIDTH_MBPS)
                ),
                default_latency=float(
                    reader_dict.get("default_latency", DEFAULT_LATENCY_MS)
                ),
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid 'reader' configuration: {exc}") from exc
        if reader_cfg.default_bandwidth <= 0:
            raise ValueError("reader.default_bandwidth must be positive")
        if reader_cfg.default_latency < 0:
            raise ValueError("reader.default_latency must be non-negative")
        try:
            "".encode(reader_cfg.encoding)
        except LookupError as exc:
            raise ValueError(
                f"reader.encoding is not a known codec: {reader_cfg.encoding}"
            ) from exc

        output_dict = _section(config_dict, "output", "'output' configuration section")
        formatting_dict = _section(output_dict, "formatting", "'output.formatting'")
        try:
            formatting_cfg = FormattingConfig(**formatting_dict)
        except TypeError as exc:
            raise ValueError(
                f"Invalid 'output.formatting' configuration: {exc}"
            ) from exc
        output_cfg = OutputConfig(formatting=formatting_cfg)

        return cls(input=input_cfg, reader=reader_cfg, output=output_cfg)

    def validate(self) -> None:
        """Validate that the configured dataset can be read.

        Raises:
            ValueError: If input files are missing.
        """
        logger.info(f"Checking {len(self.input.files)} input file(s)")

        if not self.input.files:
            raise ValueError("No input files configured")

        for path in self.input.files:
            if not path.exists():
                raise ValueError(f"Input file not found: {path}")

        logger.info("All input files present")

    def summary(self) -> str:
        """Return the configuration as a printable text block."""
        lines = [
            "FOGTOPO CONFIGURATION",
            "=" * 60,
            "",
            "INPUT FILES",
            "-" * 30,
            *[f"   {p}" for p in self.input.files],
            "",
            "READER",
            "-" * 30,
            f"   Encoding: {self.reader.encoding}",
            f"   Link Bandwidth: {self.reader.default_bandwidth} Mbit/s",
            f"   Link Latency: {self.reader.default_latency} ms",
            "",
            "=" * 60,
        ]

        return "\n".join(lines)
