"""
Wspólne typy pierwotne używane przez markers i actions.

  Span         — (start, end) offsety w surowym tekście dokumentu
  Granularity  — zasięg reguły: strona / sekcja / blok
  Visibility   — deklarowana widoczność treści
  Dialect      — kodowanie znacznika (protected: true vs view: logged-in)
  BlockKind    — rodzaj znacznika blokowego
  PageGatePolicy — zachowanie bramki strony dla zalogowanych
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Półotwarty zakres [start, end) w tekście dokumentu.
type Span = tuple[int, int]


def span_contains(outer: Span, inner: Span) -> bool:
    """Zwraca True gdy inner leży w całości wewnątrz outer."""
    return outer[0] <= inner[0] and inner[1] <= outer[1]


def spans_overlap(a: Span, b: Span) -> bool:
    return a[0] < b[1] and b[0] < a[1]


# ---------------------------------------------------------------------------
# Enumy
# ---------------------------------------------------------------------------

class Granularity(StrEnum):
    PAGE    = "page"
    SECTION = "section"
    BLOCK   = "block"


class Visibility(StrEnum):
    """
    Widoczność zadeklarowana przez znacznik.

    - GATED:       tylko dla zalogowanych (protected / logged-in)
    - OPEN:        jawnie publiczne (protected: false, publiczny członek pary)
    - ANONYMOUS:   tylko dla niezalogowanych (view: logged-out)
    - UNSPECIFIED: brak rozpoznanej deklaracji
    """
    GATED       = "gated"
    OPEN        = "open"
    ANONYMOUS   = "anonymous"
    UNSPECIFIED = "unspecified"


class Dialect(StrEnum):
    """Kodowanie znacznika: jednowartościowe (protected) lub dwuwartościowe (view)."""
    PROTECTED = "protected"
    VIEW      = "view"


class BlockKind(StrEnum):
    TEASER_PAIR = "teaser-pair"
    PAIRED_ID   = "paired-id"
    VIEW_CLASS  = "view-class"


class PageGatePolicy(StrEnum):
    """
    Zachowanie aktywnej bramki strony (i par id-*) dla zalogowanego widza.

    - ALWAYS_TEASER:                   teaser zawsze, niezależnie od logowania
    - TEASE_ONLY_WHEN_UNAUTHENTICATED: zalogowany dostaje dokument bez zmian
    """
    ALWAYS_TEASER                   = "always-teaser"
    TEASE_ONLY_WHEN_UNAUTHENTICATED = "tease-only-when-unauthenticated"
