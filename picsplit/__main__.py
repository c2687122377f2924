"""CLI entry point for picsplit package.

Allows running via: python -m picsplit
"""

from __future__ import annotations

from picsplit.cli.main import cli

if __name__ == "__main__":
    cli()
