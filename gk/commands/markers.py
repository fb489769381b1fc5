"""Komenda: gk markers — tabela znaczników bramkowania i rozstrzygniętych akcji."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from data_model.actions import RewriteAction
from data_model.common import Span
from data_model.markers import ExtractedMarkers, Marker
from gating.engine import analyze

from gk.commands.gate import _add_common_arguments, _config_from_args, _read_html

console = Console()


def _fmt_span(span: Span | None) -> str:
    if span is None:
        return "-"
    return f"{span[0]}–{span[1]}"


def _marker_rows(markers: ExtractedMarkers) -> list[Marker]:
    rows = [markers.page] if markers.page is not None else []
    return rows + markers.sections + markers.blocks


def _show_markers(markers: ExtractedMarkers) -> None:
    rows = _marker_rows(markers)
    if not rows:
        console.print("[yellow]Brak znaczników.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
        title="Znaczniki",
    )
    table.add_column("POZIOM",     no_wrap=True, style="bold cyan")
    table.add_column("RODZAJ",     no_wrap=True)
    table.add_column("WIDOCZNOŚĆ", no_wrap=True)
    table.add_column("DIALEKT",    no_wrap=True, style="dim")
    table.add_column("SPAN",       justify="right", no_wrap=True)
    table.add_column("TEASER",     no_wrap=False, max_width=50)

    for marker in rows:
        visibility = (
            f"[red]{marker.visibility}[/red]" if marker.is_gated else str(marker.visibility)
        )
        kind = str(marker.block_kind) if marker.block_kind else "-"
        if marker.pair_key:
            kind += f" ({marker.pair_key})"
        table.add_row(
            str(marker.granularity),
            kind,
            visibility,
            str(marker.dialect),
            _fmt_span(marker.span),
            marker.teaser_path or "-",
        )

    console.print(table)


def _show_actions(actions: list[RewriteAction]) -> None:
    if not actions:
        console.print("[dim]Brak akcji — dokument pozostaje bez zmian.[/dim]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        expand=False,
        title="Akcje",
    )
    table.add_column("POZIOM", no_wrap=True, style="bold cyan")
    table.add_column("SPAN",   justify="right", no_wrap=True)
    table.add_column("AKCJA",  no_wrap=False)

    for action in actions:
        table.add_row(str(action.granularity), _fmt_span(action.span), action.describe())

    console.print(table)


def run(args: argparse.Namespace) -> None:
    html = _read_html(args.file)
    config = _config_from_args(args)

    result = analyze(html, args.authenticated, config)
    if not result.gated:
        console.print("[yellow]Dokument nie niesie metadanych bramkowania.[/yellow]")
        return

    console.print(
        f"Podłoże: [cyan]{result.substrate}[/cyan], "
        f"widz: [cyan]{'zalogowany' if args.authenticated else 'niezalogowany'}[/cyan], "
        f"polityka: [cyan]{config.page_gate_policy}[/cyan]"
    )
    _show_markers(result.markers)
    _show_actions(result.actions)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "markers",
        help="Pokazuje znaczniki bramkowania i akcje dla lokalnego pliku HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Ekstrahuje znaczniki (strona / sekcje / bloki) i pokazuje, jakie akcje
przepisania zostałyby zastosowane dla danego widza. Dokument nie jest
zapisywany.

Przykłady:
  gk markers strona.html
  gk markers strona.html --auth
  gk markers strona.html --substrate scan
        """,
    )
    _add_common_arguments(p)
    p.set_defaults(func=run)
