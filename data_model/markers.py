"""
data_model/markers.py — znaczniki bramkowania wyciągnięte z dokumentu.

Marker opisuje jedną deklarację widoczności. Pole `span` to region, którym
znacznik rządzi (cała sekcja, cały blok, wnętrze <main>); `meta_span` to
region samych metadanych (np. div .section-metadata zagnieżdżony w sekcji).
W ogólności to dwa różne regiony.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .common import BlockKind, Dialect, Granularity, Span, Visibility


@dataclass(slots=True, frozen=True)
class Marker:
    """
    Pojedynczy znacznik bramkowania.

    - granularity:      strona / sekcja / blok
    - span:             region, który znacznik obejmuje (do przepisania)
    - visibility:       zadeklarowana widoczność
    - teaser_path:      jawnie zadeklarowana ścieżka teasera (None → domyślna)
    - meta_span:        region bloku metadanych (None gdy brak, np. klasa CSS)
    - dialect:          kodowanie deklaracji
    - block_kind:       rodzaj bloku (tylko dla granularity == BLOCK)
    - pair_key:         wspólny token id-<token> (tylko PAIRED_ID)
    - declaration_span: wiersz "teaser | ścieżka" w bloku TEASER_PAIR
    """
    granularity:      Granularity
    span:             Span
    visibility:       Visibility
    teaser_path:      str | None = None
    meta_span:        Span | None = None
    dialect:          Dialect = Dialect.PROTECTED
    block_kind:       BlockKind | None = None
    pair_key:         str | None = None
    declaration_span: Span | None = None

    @property
    def is_gated(self) -> bool:
        return self.visibility is Visibility.GATED


@dataclass(slots=True)
class ExtractedMarkers:
    """Wynik ekstrakcji: znacznik strony (opcjonalny), sekcje i bloki w kolejności dokumentu."""
    page:     Marker | None = None
    sections: list[Marker] = field(default_factory=list)
    blocks:   list[Marker] = field(default_factory=list)

    @property
    def page_active(self) -> bool:
        return self.page is not None and self.page.is_gated

    def __len__(self) -> int:
        return (1 if self.page is not None else 0) + len(self.sections) + len(self.blocks)
