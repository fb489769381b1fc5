"""
data_model — struktury danych GateKeep.

Użycie:
  from data_model import Marker, ExtractedMarkers, RewriteAction, ...

Moduły:
  common    — Span, Granularity, Visibility, Dialect, BlockKind, PageGatePolicy
  markers   — Marker, ExtractedMarkers
  actions   — RewriteAction, TeaserFragment, Removal
  constants — konwencje znaczników (nazwy meta, klucze, klasy CSS)
"""

from .common import (
    Span,
    Granularity,
    Visibility,
    Dialect,
    BlockKind,
    PageGatePolicy,
    span_contains,
    spans_overlap,
)
from .markers import (
    Marker,
    ExtractedMarkers,
)
from .actions import (
    Replacement,
    RewriteAction,
    TeaserFragment,
    Removal,
)

__all__ = [
    # common
    "Span",
    "Granularity",
    "Visibility",
    "Dialect",
    "BlockKind",
    "PageGatePolicy",
    "span_contains",
    "spans_overlap",
    # markers
    "Marker",
    "ExtractedMarkers",
    # actions
    "Replacement",
    "RewriteAction",
    "TeaserFragment",
    "Removal",
]
