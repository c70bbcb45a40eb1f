"""
locale-sync - keeps extracted strings, locale files and the generated i18n
module in sync.
"""

import sys

from .main import main as cli_main


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())


__all__ = ["main"]
