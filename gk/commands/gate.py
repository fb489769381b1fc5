"""Komenda: gk gate — bramkuje lokalny plik HTML i zapisuje wynik."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rich.console import Console

from data_model.common import PageGatePolicy
from gating.config import GatingConfig, load_config
from gating.engine import analyze
from gating.errors import ConfigError
from html_parser.substrate import SubstrateKind

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Wspólne dla komend plikowych (gate, markers)
# ---------------------------------------------------------------------------

def _read_html(path: Path) -> str:
    if not path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)
    return path.read_text(encoding="utf-8", errors="replace")


def _config_from_args(args: argparse.Namespace) -> GatingConfig:
    try:
        return load_config(
            page_gate_policy=getattr(args, "policy", None),
            substrate=getattr(args, "substrate", None),
            origin_base_url=getattr(args, "origin", None),
        )
    except ConfigError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)


def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "file",
        metavar="PLIK",
        type=Path,
        help="Ścieżka do dokumentu HTML.",
    )
    auth = p.add_mutually_exclusive_group()
    auth.add_argument(
        "--auth",
        dest="authenticated",
        action="store_true",
        help="Widz zalogowany.",
    )
    auth.add_argument(
        "--anon",
        dest="authenticated",
        action="store_false",
        help="Widz niezalogowany (domyślnie).",
    )
    p.set_defaults(authenticated=False)
    p.add_argument(
        "--policy",
        choices=[policy.value for policy in PageGatePolicy],
        default=None,
        help="Polityka bramki strony (domyślnie: z GATEKEEP_PAGE_POLICY).",
    )
    p.add_argument(
        "--substrate",
        choices=[kind.value for kind in SubstrateKind],
        default=None,
        help="Podłoże markupu: soup (BeautifulSoup) lub scan (skaner tekstowy).",
    )
    p.add_argument(
        "--origin",
        metavar="URL",
        default=None,
        help="Bazowy URL originu dla linków teaserów.",
    )


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    html = _read_html(args.file)
    config = _config_from_args(args)

    result = analyze(html, args.authenticated, config)

    if args.out:
        args.out.write_text(result.html, encoding="utf-8")
        console.print(f"Zapisano [bold]{args.out}[/bold]")
    else:
        sys.stdout.write(result.html)

    who = "zalogowany" if args.authenticated else "niezalogowany"
    if not result.gated:
        console.print(f"[dim]Brak metadanych bramkowania — dokument bez zmian ({who}).[/dim]")
    else:
        console.print(
            f"[green]Bramkowanie ({who}):[/green] "
            f"{len(result.markers)} znaczników, {len(result.actions)} akcji."
        )


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "gate",
        help="Bramkuje lokalny plik HTML dla zalogowanego lub anonimowego widza.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Uruchamia pełny potok bramkowania na lokalnym pliku HTML:
  bramka decyzyjna → ekstrakcja znaczników → rozstrzyganie → przepisanie

Wynik trafia na stdout (albo do pliku --out), podsumowanie na stderr.

Przykłady:
  gk gate strona.html
  gk gate strona.html --auth --policy always-teaser
  gk gate strona.html --substrate scan --out wynik.html
        """,
    )
    _add_common_arguments(p)
    p.add_argument(
        "--out",
        metavar="PLIK",
        type=Path,
        default=None,
        help="Zapisz dokument wynikowy do pliku zamiast na stdout.",
    )
    p.set_defaults(func=run)
