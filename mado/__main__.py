"""Entry point for ``python -m mado``."""

from mado.cli.main import main

if __name__ == "__main__":
    main()
