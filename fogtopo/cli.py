"""Command line interface for reading topology datasets."""

from __future__ import annotations

import argparse
import sys
import time
from contextlib import contextmanager
from pathlib import Path

from fogtopo.config import FogTopoConfig
from fogtopo.log_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG = Path("config.yml")


@contextmanager
def Timer(description: str):
    """Report the duration of a CLI step on stdout and in the log.

    Args:
        description: Short name of the step, e.g. ``"Read topology dataset"``.

    Yields:
        None. Exceptions raised inside the block are reported and re-raised.
    """
    print(f"🔄 {description}...")
    logger.info(f"{description}: started")
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        elapsed = time.perf_counter() - start
        print(f"❌ {description} (failed after {elapsed:.1f}s)")
        logger.error(f"{description}: failed after {elapsed:.1f}s: {e}")
        raise
    elapsed = time.perf_counter() - start
    print(f"✅ {description} (done in {elapsed:.1f}s)")
    logger.info(f"{description}: done in {elapsed:.1f}s")


def _load_config(config_path: Path) -> FogTopoConfig:
    """Load the YAML configuration for a subcommand.

    A missing default ``config.yml`` is not an error: the defaults are used
    and the input files are expected on the command line.

    Args:
        config_path: Path given on the command line.

    Returns:
        Parsed configuration.

    Raises:
        SystemExit: With code 2 if the file is missing or cannot be parsed.
    """
    try:
        return FogTopoConfig.from_yaml(config_path)
    except FileNotFoundError:
        if config_path == DEFAULT_CONFIG:
            logger.info(f"No {DEFAULT_CONFIG} found, using built-in defaults")
            return FogTopoConfig()
        print(f"❌ Config file does not exist: {config_path}")
        logger.error(f"Config file does not exist: {config_path}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Cannot load config {config_path}: {e}")
        print(f"❌ Invalid configuration: {e}")
        print(f"💡 Check the YAML in {config_path}")
        sys.exit(2)


def _output_path(config_path: Path, output: str | None) -> Path:
    """Resolve where ``read`` writes the JSON graph.

    ``output`` may name a ``.json`` file or a directory; without it the file
    goes to the working directory. The default file name is
    ``<config_stem>_graph.json``.
    """
    file_name = f"{config_path.stem}_graph.json"
    if not output:
        return Path.cwd() / file_name
    path = Path(output)
    if path.suffix.lower() == ".json":
        return path
    return path / file_name


def read_command(args: argparse.Namespace) -> None:
    """Read a CAIDA dataset and write the resulting graph as JSON.

    Exit codes: 2 for configuration problems, 3 for missing or incomplete
    input files, 1 for anything else.

    Args:
        args: Parsed arguments with ``config``, ``input``, ``output`` and
            ``verbose``.
    """
    from fogtopo.reader import CaidaFormatReader
    from fogtopo.serialization import save_to_json

    try:
        config_path = Path(args.config)
        cfg = _load_config(config_path)
        if getattr(args, "input", None):
            cfg.input.files = [Path(p) for p in args.input]
        cfg.validate()
        output_path = _output_path(config_path, getattr(args, "output", None))

        reader = CaidaFormatReader(cfg.reader)
        with Timer("Read topology dataset"):
            graph = reader.read_graph(cfg.input.files)

        counts = graph.summary()
        print(f"📊 Autonomous systems: {counts['systems']:,}")
        print(f"   Edge nodes: {counts['edge_nodes']:,}")
        print(f"   Edges: {counts['edges']:,} ({counts['cross_as_edges']:,} cross-AS)")
        skipped = reader.stats.total_errors
        if skipped:
            print(f"⚠️  {skipped:,} malformed input records skipped")
        if getattr(args, "verbose", False):
            print(reader.stats.summary())

        with Timer(f"Write graph to {output_path}"):
            save_to_json(graph, output_path, cfg.output.formatting)

        print(f"🎉 Graph written to: {output_path}")

    except FileNotFoundError as e:
        logger.error(f"Input file missing: {e}")
        print(f"❌ Input file missing: {e}")
        sys.exit(3)
    except ValueError as e:
        logger.error(f"Invalid input: {e}")
        print(f"❌ {e}")
        print("💡 Provide a .nodes.geo, a .nodes.as and a .links file")
        sys.exit(3)
    except Exception as e:
        logger.error(f"Reading the dataset failed: {e}")
        print("💡 Run with -v for the per-line parse log")
        sys.exit(1)


def info_command(args: argparse.Namespace) -> None:
    """Print the configuration and which dataset files are present.

    Args:
        args: Parsed arguments with ``config``.
    """
    from fogtopo.reader.caida import AS_SUFFIX, GEO_SUFFIX, LINKS_SUFFIX, find_file

    try:
        cfg = _load_config(Path(args.config))
        print(cfg.summary())

        print("\nDataset Files")
        print("=" * 20)
        missing = False
        for path in cfg.input.files:
            exists = path.exists()
            missing = missing or not exists
            print(f"{'✅' if exists else '❌'} {path}")

        for suffix in (GEO_SUFFIX, AS_SUFFIX, LINKS_SUFFIX):
            if find_file(cfg.input.files, suffix) is None:
                missing = True
                print(f"❌ no {suffix} file configured")

        if missing:
            print("\n⚠️  Missing input files - the dataset cannot be read yet")

    except Exception as e:
        print(f"❌ Cannot show configuration: {e}")
        sys.exit(1)


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config",
        nargs="?",
        default=str(DEFAULT_CONFIG),
        help=f"YAML configuration (default: {DEFAULT_CONFIG})",
    )


def main() -> None:
    """Entry point of the ``fogtopo`` command.

    Sets up logging from the global flags and runs the selected subcommand.
    """
    parser = argparse.ArgumentParser(
        prog="fogtopo",
        description="Read CAIDA topology datasets into an AS-grouped network graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at debug level, including every skipped input line",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Print nothing to stdout; logs still go to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    read_parser = subparsers.add_parser(
        "read", help="Read a dataset and write the graph as JSON"
    )
    _add_config_argument(read_parser)
    read_parser.add_argument(
        "-i",
        "--input",
        nargs="+",
        default=None,
        help="Dataset files (.nodes.geo, .nodes.as, .links); replaces input.files",
    )
    read_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help=(
            "Output JSON file or directory. "
            "Defaults to '<config_stem>_graph.json' in CWD."
        ),
    )
    read_parser.set_defaults(func=read_command)

    info_parser = subparsers.add_parser(
        "info", help="Show the configuration and dataset file status"
    )
    _add_config_argument(info_parser)
    info_parser.set_defaults(func=info_command)

    args = parser.parse_args()

    import logging

    from fogtopo.log_config import set_global_log_level

    set_global_log_level(logging.DEBUG if args.verbose else logging.INFO)

    if args.quiet:
        import builtins

        builtins.print = lambda *args, **kwargs: None

    if getattr(args, "func", None) is None:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
