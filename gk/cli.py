"""
gk — narzędzie CLI dla GateKeep.

Użycie:
  gk [--verbose] <komenda> [opcje]

Komendy:
  gate      Bramkuje lokalny plik HTML i wypisuje wynik.
  markers   Pokazuje znaczniki bramkowania i rozstrzygnięte akcje.
  fetch     Pobiera stronę z originu przez handler proxy i bramkuje ją.
"""

from __future__ import annotations

import argparse
import sys

from gk._log import setup_logging
from gk.commands import fetch as cmd_fetch
from gk.commands import gate as cmd_gate
from gk.commands import markers as cmd_markers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gk",
        description="GateKeep — bramkowanie treści HTML według stanu zalogowania.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="gk 0.1.0"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Logi diagnostyczne (DEBUG) na stderr.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_gate.add_parser(subparsers)
    cmd_markers.add_parser(subparsers)
    cmd_fetch.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    # Windows: terminal może używać cp1252, a treść HTML i polskie znaki
    # muszą wyjść w UTF-8.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
