"""
data_model/actions.py — akcje przepisania dokumentu.

RewriteAction zastępuje (TeaserFragment) albo usuwa (Removal) region `span`
surowego tekstu. Akcje stosuje się od najwyższego offsetu startu, żeby
wcześniejsze zamiany nie przesuwały późniejszych offsetów.
"""

from __future__ import annotations

from dataclasses import dataclass

from .common import Granularity, Span


@dataclass(slots=True, frozen=True)
class TeaserFragment:
    """Zamiana regionu na fragment teasera wskazujący na `path`."""
    path:        str
    granularity: Granularity


@dataclass(slots=True, frozen=True)
class Removal:
    """Usunięcie regionu bez zastępstwa."""


type Replacement = TeaserFragment | Removal


@dataclass(slots=True, frozen=True)
class RewriteAction:
    span:        Span
    replacement: Replacement
    granularity: Granularity

    @property
    def start(self) -> int:
        return self.span[0]

    @property
    def end(self) -> int:
        return self.span[1]

    def describe(self) -> str:
        if isinstance(self.replacement, TeaserFragment):
            return f"teaser → {self.replacement.path}"
        return "usunięcie"
