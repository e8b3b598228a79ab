#!/usr/bin/env python3
"""Entry point for mado CLI when run as python -m mado.cli."""

if __name__ == "__main__":
    from mado.cli.main import main

    main()
