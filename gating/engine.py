"""
gating/engine.py — potok bramkowania dokumentu.

  bramka decyzyjna → ekstrakcja znaczników → rozstrzyganie → przepisanie

Publiczne API:
  gate(html, content_type, authenticated, config)    → str
  analyze(html, authenticated, config)                → GatingResult
  build_substrate(html, kind)                         → MarkupSubstrate
  is_html_content_type(content_type, config)          → bool

Jedno wywołanie = jeden dokument, jedna decyzja o uwierzytelnieniu, jeden
przebieg. Brak stanu współdzielonego między wywołaniami.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from bs4 import ParserRejectedMarkup

from data_model.actions import RewriteAction
from data_model.markers import ExtractedMarkers
from html_parser.scan import ScanSubstrate
from html_parser.soup import SoupSubstrate
from html_parser.substrate import MarkupSubstrate, SubstrateKind

from .config import GatingConfig
from .decision import is_gating_required
from .extractor import extract_markers
from .resolver import resolve
from .rewriter import apply_actions

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GatingResult:
    """
    Pełny wynik przebiegu — do diagnostyki (gk markers) i testów.

    - gated:     czy dokument niósł metadane bramkowania
    - markers:   wyekstrahowane znaczniki (puste gdy gated == False)
    - actions:   rozstrzygnięte akcje przepisania
    - html:      dokument wynikowy
    - substrate: podłoże użyte do ekstrakcji
    """
    gated:     bool
    html:      str
    markers:   ExtractedMarkers = field(default_factory=ExtractedMarkers)
    actions:   list[RewriteAction] = field(default_factory=list)
    substrate: SubstrateKind | None = None

    @property
    def modified(self) -> bool:
        return bool(self.actions)


def build_substrate(html: str, kind: SubstrateKind | str = SubstrateKind.SOUP) -> MarkupSubstrate:
    """
    Tworzy podłoże markupu dla dokumentu.

    Dokument odrzucony przez parser BeautifulSoup jest przetwarzany skanerem
    tekstowym — silnik nie rzuca wyjątków dla żadnego wejścia tekstowego.
    """
    if SubstrateKind(kind) is SubstrateKind.SCAN:
        return ScanSubstrate(html)
    try:
        return SoupSubstrate(html)
    except ParserRejectedMarkup as exc:
        logger.warning("BeautifulSoup odrzucił dokument (%s) — używam skanera tekstowego", exc)
        return ScanSubstrate(html)


def is_html_content_type(content_type: str | None, config: GatingConfig) -> bool:
    lowered = (content_type or "").lower()
    return any(html_type in lowered for html_type in config.html_content_types)


def analyze(html: str, authenticated: bool, config: GatingConfig | None = None) -> GatingResult:
    """Uruchamia pełny potok i zwraca znaczniki, akcje i dokument wynikowy."""
    config = config or GatingConfig()
    if not is_gating_required(html):
        logger.debug("Brak metadanych bramkowania — dokument bez zmian")
        return GatingResult(gated=False, html=html)

    substrate = build_substrate(html, config.substrate)
    markers = extract_markers(substrate)
    actions = resolve(markers, authenticated, config)
    output = apply_actions(html, actions, config.origin_base_url)
    logger.debug(
        "Bramkowanie (%s): %d znaczników, %d akcji", substrate.kind, len(markers), len(actions)
    )
    return GatingResult(
        gated=True,
        html=output,
        markers=markers,
        actions=actions,
        substrate=substrate.kind,
    )


def gate(
    html: str,
    content_type: str | None,
    authenticated: bool,
    config: GatingConfig | None = None,
) -> str:
    """
    Bramkuje dokument HTML dla danego stanu uwierzytelnienia.

    Args:
        html:          treść dokumentu z originu
        content_type:  nagłówek Content-Type odpowiedzi originu
        authenticated: wynik kolaboratora uwierzytelnienia
        config:        konfiguracja (None → wartości domyślne)

    Returns:
        Przepisany dokument; dokument bez zmian gdy typ treści nie jest HTML
        albo dokument nie niesie metadanych bramkowania.
    """
    config = config or GatingConfig()
    if not is_html_content_type(content_type, config):
        return html
    return analyze(html, authenticated, config).html
