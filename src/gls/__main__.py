"""Application entry point for gls.

Runs the click command so that `python -m gls` and the `gls` console
script behave identically.
"""

from __future__ import annotations

from gls.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Main entry point for the gls command."""
    cli(prog_name="gls")


if __name__ == "__main__":
    main()
