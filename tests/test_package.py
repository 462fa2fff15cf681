"""Test package structure and imports."""

import sys
from pathlib import Path


def test_package_import():
    """Test that the fogtopo package can be imported."""
    import fogtopo

    assert hasattr(fogtopo, "__version__")
    assert fogtopo.__version__ == "0.1.0"


def test_public_api():
    """Test that the documented entry points are exported."""
    import fogtopo

    for name in fogtopo.__all__:
        assert hasattr(fogtopo, name)
    assert callable(fogtopo.read_caida_graph)


def test_cli_module_import():
    """Test that fogtopo.cli can be imported."""
    import fogtopo.cli

    assert hasattr(fogtopo.cli, "main")
    assert callable(fogtopo.cli.main)


def test_log_config_module_import():
    """Test that fogtopo.log_config can be imported."""
    import fogtopo.log_config

    assert callable(fogtopo.log_config.get_logger)
    assert callable(fogtopo.log_config.set_global_log_level)


def test_main_module_calls_cli():
    """Test that __main__ module calls cli.main()."""
    import fogtopo.__main__

    content = Path(fogtopo.__main__.__file__).read_text()

    assert "from fogtopo.cli import main" in content
    assert "main()" in content


def test_python_version_compatibility():
    """Test that package works with supported Python versions."""
    assert sys.version_info >= (3, 11), "Package requires Python 3.11+"
