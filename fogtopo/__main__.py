"""Entry point for ``python -m fogtopo``."""

from fogtopo.cli import main

if __name__ == "__main__":
    main()
