"""
html_parser/soup.py — podłoże drzewiaste na BeautifulSoup ("html.parser").

Drzewo służy tylko do zapytań. Zakresy elementów w oryginalnym tekście
wylicza się z pozycji źródłowej tagu (sourceline / sourcepos zapisywane przez
html.parser) i skanera równoważącego — dokument nigdy nie jest serializowany
z drzewa, więc treść poza przepisanymi regionami pozostaje nietknięta.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from data_model.common import Span

from .scanner import find_matching_end, tag_at
from .substrate import MarkupSubstrate, SelectorIntent, SubstrateKind

logger = logging.getLogger(__name__)


def _line_starts(text: str) -> list[int]:
    """Offsety początków linii (html.parser liczy linie po '\\n')."""
    starts = [0]
    pos = text.find("\n")
    while pos != -1:
        starts.append(pos + 1)
        pos = text.find("\n", pos + 1)
    return starts


class SoupSubstrate(MarkupSubstrate[Tag]):
    kind = SubstrateKind.SOUP

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.soup = BeautifulSoup(text, "html.parser")
        self._lines = _line_starts(text)
        self._spans: dict[int, Span | None] = {}

    def find_containers(self, intent: SelectorIntent, scope: Tag | None = None) -> list[Tag]:
        root: Tag = scope if scope is not None else self.soup
        match intent:
            case SelectorIntent.MAIN:
                main = self.soup.find("main")
                return [main] if isinstance(main, Tag) else []
            case SelectorIntent.META:
                return list(self.soup.find_all("meta"))
            case SelectorIntent.CHILD_DIVS:
                return list(root.find_all("div", recursive=False))
            case SelectorIntent.DESCENDANT_DIVS:
                return list(root.find_all("div"))
        raise ValueError(f"Nieznana intencja: {intent!r}")

    def text_of(self, node: Tag) -> str:
        return node.get_text()

    def attributes_of(self, node: Tag) -> dict[str, str]:
        # Atrybuty wielowartościowe (class) bs4 zwraca jako listę.
        return {
            name: " ".join(value) if isinstance(value, list) else value
            for name, value in node.attrs.items()
        }

    def _offset_of(self, node: Tag) -> int | None:
        line, column = node.sourceline, node.sourcepos
        if line is None or column is None or not 0 < line <= len(self._lines):
            return None
        return self._lines[line - 1] + column

    def span_of(self, node: Tag) -> Span | None:
        key = id(node)
        if key in self._spans:
            return self._spans[key]

        span: Span | None = None
        start = self._offset_of(node)
        if start is not None:
            opening = tag_at(self.text, start)
            if opening is not None and not opening.closing and opening.name == node.name:
                end = find_matching_end(self.text, start, node.name)
                if end is not None:
                    span = (start, end)
        if span is None:
            logger.debug("Brak zakresu dla <%s> (linia %s) — pomijam", node.name, node.sourceline)
        self._spans[key] = span
        return span
