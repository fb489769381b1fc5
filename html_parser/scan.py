"""html_parser/scan.py — podłoże bez drzewa: równoważenie tagów na surowym tekście."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from data_model.common import Span

from .scanner import TagToken, find_matching_end, iter_tags, parse_attributes, strip_tags
from .substrate import MarkupSubstrate, SelectorIntent, SubstrateKind

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanNode:
    """Element zlokalizowany skanerem: [start, end) całości, open_end = koniec tagu otwierającego."""
    name:      str
    start:     int
    open_end:  int
    end:       int
    attrs_raw: str
    _attrs:    dict[str, str] | None = field(default=None, repr=False)

    @classmethod
    def from_token(cls, token: TagToken, end: int) -> ScanNode:
        return cls(token.name, token.start, token.end, end, token.attrs_raw)


class ScanSubstrate(MarkupSubstrate[ScanNode]):
    """
    Implementacja MarkupSubstrate na samych operacjach podciągów.

    Element, którego nie da się zrównoważyć (find_matching_end → None), nie
    jest zwracany — silnik go nie widzi, więc go nie dotyka.
    """

    kind = SubstrateKind.SCAN

    # ------------------------------------------------------------------
    # Zakres przeszukiwania
    # ------------------------------------------------------------------

    def _inner_range(self, scope: ScanNode | None) -> tuple[int, int]:
        if scope is None:
            return 0, len(self.text)
        if scope.end == scope.open_end:
            return scope.open_end, scope.open_end
        close_start = self.text.rfind("</", scope.open_end, scope.end)
        return scope.open_end, (scope.end if close_start == -1 else close_start)

    def _element(self, token: TagToken) -> ScanNode | None:
        end = find_matching_end(self.text, token.start, token.name)
        if end is None:
            logger.debug("Niezrównoważony <%s> w offsecie %d — pomijam", token.name, token.start)
            return None
        return ScanNode.from_token(token, end)

    # ------------------------------------------------------------------
    # Zapytania
    # ------------------------------------------------------------------

    def _main(self) -> list[ScanNode]:
        for token in iter_tags(self.text):
            if token.name == "main" and not token.closing:
                node = self._element(token)
                return [node] if node is not None else []
        return []

    def _meta(self) -> list[ScanNode]:
        return [
            ScanNode.from_token(t, t.end)
            for t in iter_tags(self.text)
            if t.name == "meta" and not t.closing
        ]

    def _descendant_divs(self, scope: ScanNode | None) -> list[ScanNode]:
        start, end = self._inner_range(scope)
        nodes: list[ScanNode] = []
        for token in iter_tags(self.text, start, end):
            if token.name != "div" or token.closing:
                continue
            node = self._element(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _child_divs(self, scope: ScanNode | None) -> list[ScanNode]:
        start, end = self._inner_range(scope)
        nodes: list[ScanNode] = []
        cursor = start
        while cursor < end:
            token = next(iter_tags(self.text, cursor, end), None)
            if token is None:
                break
            cursor = token.end
            if token.closing or token.is_void:
                continue
            element_end = find_matching_end(self.text, token.start, token.name)
            if token.name == "div":
                if element_end is None:
                    # Niezamknięty <div> obejmuje resztę rodzica, jak w drzewie.
                    logger.debug("Niezrównoważony <div> w offsecie %d — pomijam resztę", token.start)
                    break
                nodes.append(ScanNode.from_token(token, element_end))
                cursor = element_end
            elif element_end is not None and element_end <= end:
                # Inny element zamknięty w zakresie: jego wnętrze to wnuki, nie dzieci.
                cursor = element_end
            # Niezamknięty element inny niż div (np. <p> bez </p>) traktujemy jak pusty.
        return nodes

    def find_containers(self, intent: SelectorIntent, scope: ScanNode | None = None) -> list[ScanNode]:
        match intent:
            case SelectorIntent.MAIN:
                return self._main()
            case SelectorIntent.META:
                return self._meta()
            case SelectorIntent.CHILD_DIVS:
                return self._child_divs(scope)
            case SelectorIntent.DESCENDANT_DIVS:
                return self._descendant_divs(scope)
        raise ValueError(f"Nieznana intencja: {intent!r}")

    # ------------------------------------------------------------------
    # Dostęp do węzła
    # ------------------------------------------------------------------

    def text_of(self, node: ScanNode) -> str:
        start, end = self._inner_range(node)
        return strip_tags(self.text[start:end])

    def attributes_of(self, node: ScanNode) -> dict[str, str]:
        if node._attrs is None:
            node._attrs = parse_attributes(node.attrs_raw)
        return node._attrs

    def span_of(self, node: ScanNode) -> Span | None:
        return (node.start, node.end)
