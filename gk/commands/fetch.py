"""Komenda: gk fetch — pobiera stronę z originu przez handler proxy."""

from __future__ import annotations

import argparse
import sys

from rich import box
from rich.console import Console
from rich.table import Table

from data_model.common import PageGatePolicy
from proxy.handler import handle_request
from proxy.origin import OriginResponse

from gk.commands.gate import _config_from_args

console = Console(stderr=True)


def _show_headers(response: OriginResponse) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white", expand=False)
    table.add_column("NAGŁÓWEK", no_wrap=True, style="bold cyan")
    table.add_column("WARTOŚĆ",  no_wrap=False, max_width=80)
    for name, value in sorted(response.headers.items()):
        table.add_row(name, value)
    console.print(table)


def run(args: argparse.Namespace) -> None:
    config = _config_from_args(args)
    path: str = args.path
    authenticated: bool = args.authenticated

    console.print(
        f"Pobieranie [bold]{path}[/bold] z [cyan]{config.origin_base_url}[/cyan] "
        f"({'zalogowany' if authenticated else 'niezalogowany'}) …"
    )
    response = handle_request(path, {}, config, authenticate=lambda _headers: authenticated)

    style = "green" if response.status < 400 else "red"
    console.print(f"Status: [{style}]{response.status}[/{style}]")
    if args.show_headers:
        _show_headers(response)

    sys.stdout.write(response.body)
    if response.status >= 500:
        raise SystemExit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "fetch",
        help="Pobiera ścieżkę z originu i bramkuje odpowiedź jak handler brzegowy.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje pełną obsługę żądania tak jak handler brzegowy:
  - ścieżki bypass (fragmenty, nawigacja) → odpowiedź originu + CORS
  - treść inna niż HTML                   → bez zmian
  - HTML                                  → bramkowanie dla danego widza

Origin: GATEKEEP_ORIGIN (plik .env) albo --origin.

Przykłady:
  gk fetch /news/artykul
  gk fetch /news/artykul --auth --show-headers
  gk fetch /fragments/teaser --origin https://main--site--org.aem.live
        """,
    )
    p.add_argument(
        "path",
        metavar="ŚCIEŻKA",
        help="Ścieżka żądania z query stringiem, np. /news?x=1.",
    )
    p.add_argument(
        "--auth",
        dest="authenticated",
        action="store_true",
        help="Traktuj widza jako zalogowanego.",
    )
    p.add_argument(
        "--origin",
        metavar="URL",
        default=None,
        help="Bazowy URL originu (nadpisuje GATEKEEP_ORIGIN).",
    )
    p.add_argument(
        "--policy",
        choices=[policy.value for policy in PageGatePolicy],
        default=None,
        help="Polityka bramki strony.",
    )
    p.add_argument(
        "--show-headers",
        action="store_true",
        help="Wyświetl tabelę nagłówków odpowiedzi.",
    )
    p.set_defaults(func=run)
