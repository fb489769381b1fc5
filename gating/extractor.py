"""
gating/extractor.py — ekstrakcja znaczników bramkowania z dokumentu.

extract_markers(substrate) → ExtractedMarkers

Trzy granulacje:
  strona  — <meta name="visibility" content="protected"> (+ opcjonalnie
            <meta name="teaser" content="/ścieżka">); obejmuje wnętrze <main>
  sekcja  — każde bezpośrednie dziecko <div> elementu <main> z zagnieżdżonym
            .section-metadata (wiersze klucz | wartość)
  blok    — w obrębie sekcji, w kolejności priorytetu:
              1. teaser-pair:  div.protected z wierszem "teaser | /ścieżka"
              2. paired-id:    pary div.id-<token> (publiczny + .protected)
              3. view-class:   div.logged-in / div.logged-out
            Teaser-pair w sekcji wyłącza skanowanie par id-* w tej sekcji.
            Kontenery wewnątrz już przechwyconego kontenera nie są badane.

Aktywny znacznik strony jest wyłączny — sekcje i bloki nie są wtedy
ekstrahowane. Elementy niezrównoważone (brak zakresu) są pomijane.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from data_model.common import BlockKind, Dialect, Granularity, Span, Visibility, span_contains, spans_overlap
from data_model.constants import (
    GATED_SENTINEL,
    ID_CLASS_PREFIX,
    KEY_PROTECTED,
    KEY_TEASER,
    KEY_VIEW,
    KEY_VISIBILITY,
    NOT_A_PATH,
    PAGE_TEASER_META,
    PAGE_VISIBILITY_META,
    PROTECTED_CLASS,
    SECTION_METADATA_CLASS,
    TEASER_PATH_FRAGMENTS,
    VIEW_LOGGED_IN,
    VIEW_LOGGED_OUT,
)
from data_model.markers import ExtractedMarkers, Marker
from html_parser.scanner import class_tokens
from html_parser.substrate import MarkupSubstrate, SelectorIntent

logger = logging.getLogger(__name__)

_VISIBILITY_KEYS = (KEY_VISIBILITY, KEY_PROTECTED, KEY_VIEW)


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

@dataclass(slots=True, frozen=True)
class MetadataRow:
    """Wiersz metadanych <div><div>klucz</div><div>wartość</div></div>."""
    key:   str
    value: str
    span:  Span | None


def looks_like_path(value: str) -> bool:
    """
    Czy wartość wygląda na ścieżkę teasera.

    Ścieżka zaczyna się od '/' (i ma więcej niż jeden znak) albo zawiera znany
    segment (/fragments/, /teasers/). Literały true/false nigdy nie są ścieżką.
    """
    candidate = value.strip()
    if not candidate or candidate.lower() in NOT_A_PATH:
        return False
    if any(ch.isspace() for ch in candidate):
        return False
    if candidate.startswith("/") and len(candidate) > 1:
        return True
    return any(fragment in candidate for fragment in TEASER_PATH_FRAGMENTS)


def read_rows(substrate: MarkupSubstrate, container: object) -> dict[str, MetadataRow]:
    """
    Czyta wiersze klucz | wartość z kontenera.

    Wierszem jest każdy potomny <div> z co najmniej dwoma dziećmi <div>:
    tekst pierwszego to klucz (lowercase), drugiego — wartość. Przy
    powtórzonym kluczu wygrywa pierwsze wystąpienie; kolejność słownika to
    kolejność dokumentu.
    """
    rows: dict[str, MetadataRow] = {}
    for row in substrate.find_containers(SelectorIntent.DESCENDANT_DIVS, container):
        cells = substrate.find_containers(SelectorIntent.CHILD_DIVS, row)
        if len(cells) < 2:
            continue
        key = substrate.text_of(cells[0]).strip().lower()
        if not key or key in rows:
            continue
        rows[key] = MetadataRow(key, substrate.text_of(cells[1]).strip(), substrate.span_of(row))
    return rows


def _declared_teaser(rows: dict[str, MetadataRow]) -> str | None:
    row = rows.get(KEY_TEASER)
    if row is None or not looks_like_path(row.value):
        return None
    return row.value


def _visibility_from_row(row: MetadataRow) -> tuple[Visibility, Dialect]:
    value = row.value.lower()
    if row.key == KEY_VISIBILITY:
        return (Visibility.GATED if value == GATED_SENTINEL else Visibility.OPEN), Dialect.PROTECTED
    if row.key == KEY_PROTECTED:
        if value == "true":
            return Visibility.GATED, Dialect.PROTECTED
        if value == "false":
            return Visibility.OPEN, Dialect.PROTECTED
        return Visibility.UNSPECIFIED, Dialect.PROTECTED
    if row.key == KEY_VIEW:
        if value == VIEW_LOGGED_IN:
            return Visibility.GATED, Dialect.VIEW
        if value == VIEW_LOGGED_OUT:
            return Visibility.ANONYMOUS, Dialect.VIEW
        return Visibility.UNSPECIFIED, Dialect.VIEW
    return Visibility.UNSPECIFIED, Dialect.PROTECTED


# ---------------------------------------------------------------------------
# Strona
# ---------------------------------------------------------------------------

def _extract_page(substrate: MarkupSubstrate) -> Marker | None:
    visibility_value: str | None = None
    visibility_span: Span | None = None
    teaser: str | None = None

    for meta in substrate.find_containers(SelectorIntent.META):
        attrs = substrate.attributes_of(meta)
        name = attrs.get("name", "").strip().lower()
        if name == PAGE_VISIBILITY_META and visibility_value is None:
            visibility_value = attrs.get("content", "").strip().lower()
            visibility_span = substrate.span_of(meta)
        elif name == PAGE_TEASER_META and teaser is None:
            teaser = attrs.get("content", "").strip()

    if visibility_value is None:
        return None

    mains = substrate.find_containers(SelectorIntent.MAIN)
    inner = substrate.inner_span_of(mains[0]) if mains else None
    if inner is None:
        logger.debug("Znacznik strony bez zrównoważonego <main> — pomijam")
        return None

    if visibility_value == GATED_SENTINEL:
        visibility = Visibility.GATED
    elif visibility_value:
        visibility = Visibility.OPEN
    else:
        visibility = Visibility.UNSPECIFIED

    return Marker(
        granularity=Granularity.PAGE,
        span=inner,
        visibility=visibility,
        teaser_path=teaser if teaser and looks_like_path(teaser) else None,
        meta_span=visibility_span,
    )


# ---------------------------------------------------------------------------
# Sekcje
# ---------------------------------------------------------------------------

def _section_marker(substrate: MarkupSubstrate, section: object, span: Span) -> Marker | None:
    metadata = next(
        (
            div for div in substrate.find_containers(SelectorIntent.DESCENDANT_DIVS, section)
            if SECTION_METADATA_CLASS in class_tokens(substrate.attributes_of(div))
        ),
        None,
    )
    if metadata is None:
        return None

    rows = read_rows(substrate, metadata)
    # Przy obu dialektach w jednych metadanych wygrywa pierwszy wiersz.
    row = next((r for r in rows.values() if r.key in _VISIBILITY_KEYS), None)
    if row is None:
        return None

    visibility, dialect = _visibility_from_row(row)
    return Marker(
        granularity=Granularity.SECTION,
        span=span,
        visibility=visibility,
        teaser_path=_declared_teaser(rows),
        meta_span=substrate.span_of(metadata),
        dialect=dialect,
    )


# ---------------------------------------------------------------------------
# Bloki
# ---------------------------------------------------------------------------

class _BlockScan:
    """Skan bloków jednej sekcji; pamięta przechwycone zakresy."""

    def __init__(self, substrate: MarkupSubstrate, section: object) -> None:
        self.substrate = substrate
        self.captured: list[Span] = []
        self.markers: list[Marker] = []
        self.divs: list[tuple[object, Span, list[str]]] = []
        for div in substrate.find_containers(SelectorIntent.DESCENDANT_DIVS, section):
            span = substrate.span_of(div)
            if span is not None:
                self.divs.append((div, span, class_tokens(substrate.attributes_of(div))))

    def _free(self, span: Span) -> bool:
        return not any(span_contains(c, span) for c in self.captured)

    def _capture(self, marker: Marker) -> None:
        self.markers.append(marker)
        self.captured.append(marker.span)

    def teaser_pairs(self) -> int:
        found = 0
        for div, span, tokens in self.divs:
            if PROTECTED_CLASS not in tokens or not self._free(span):
                continue
            row = read_rows(self.substrate, div).get(KEY_TEASER)
            if row is None or not looks_like_path(row.value):
                continue
            self._capture(Marker(
                granularity=Granularity.BLOCK,
                span=span,
                visibility=Visibility.GATED,
                teaser_path=row.value,
                meta_span=row.span,
                block_kind=BlockKind.TEASER_PAIR,
                declaration_span=row.span,
            ))
            found += 1
        return found

    def paired_ids(self) -> None:
        groups: dict[str, dict[str, Span]] = {}
        for _, span, tokens in self.divs:
            if not self._free(span):
                continue
            key = next(
                (t[len(ID_CLASS_PREFIX):] for t in tokens
                 if t.startswith(ID_CLASS_PREFIX) and len(t) > len(ID_CLASS_PREFIX)),
                None,
            )
            if key is None:
                continue
            slot = "protected" if PROTECTED_CLASS in tokens else "public"
            groups.setdefault(key, {}).setdefault(slot, span)

        for key, members in groups.items():
            public, protected = members.get("public"), members.get("protected")
            if public is None or protected is None:
                logger.debug("Niekompletna para id-%s — brak decyzji", key)
                continue
            if spans_overlap(public, protected):
                logger.debug("Zagnieżdżona para id-%s — pomijam", key)
                continue
            for span, visibility in ((protected, Visibility.GATED), (public, Visibility.OPEN)):
                self._capture(Marker(
                    granularity=Granularity.BLOCK,
                    span=span,
                    visibility=visibility,
                    block_kind=BlockKind.PAIRED_ID,
                    pair_key=key,
                ))

    def view_classes(self) -> None:
        for _, span, tokens in self.divs:
            if VIEW_LOGGED_IN in tokens:
                visibility = Visibility.GATED
            elif VIEW_LOGGED_OUT in tokens:
                visibility = Visibility.ANONYMOUS
            else:
                continue
            if not self._free(span):
                continue
            self._capture(Marker(
                granularity=Granularity.BLOCK,
                span=span,
                visibility=visibility,
                dialect=Dialect.VIEW,
                block_kind=BlockKind.VIEW_CLASS,
            ))


def _extract_blocks(substrate: MarkupSubstrate, section: object) -> list[Marker]:
    scan = _BlockScan(substrate, section)
    if scan.teaser_pairs() == 0:
        scan.paired_ids()
    scan.view_classes()
    return sorted(scan.markers, key=lambda m: m.span[0])


# ---------------------------------------------------------------------------
# Publiczny interfejs
# ---------------------------------------------------------------------------

def extract_markers(substrate: MarkupSubstrate) -> ExtractedMarkers:
    """
    Wyciąga znaczniki strony, sekcji i bloków z dokumentu.

    Returns:
        ExtractedMarkers; przy aktywnym znaczniku strony listy sekcji
        i bloków są puste.
    """
    result = ExtractedMarkers(page=_extract_page(substrate))
    if result.page_active:
        logger.debug("Aktywna bramka strony — sekcje i bloki pominięte")
        return result

    mains = substrate.find_containers(SelectorIntent.MAIN)
    if not mains:
        return result

    for section in substrate.find_containers(SelectorIntent.CHILD_DIVS, mains[0]):
        span = substrate.span_of(section)
        if span is None:
            continue
        marker = _section_marker(substrate, section, span)
        if marker is not None:
            result.sections.append(marker)
        result.blocks.extend(_extract_blocks(substrate, section))

    logger.debug(
        "Znaczniki: strona=%s, sekcje=%d, bloki=%d",
        result.page.visibility if result.page else "-",
        len(result.sections),
        len(result.blocks),
    )
    return result
