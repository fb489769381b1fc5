"""
html_parser/substrate.py — wspólny interfejs podłoża markupu.

Silnik bramkowania (ekstrakcja znaczników, przepisywanie) jest napisany raz,
względem MarkupSubstrate. Dwie implementacje:

  SoupSubstrate  (html_parser/soup.py)  drzewo BeautifulSoup ("html.parser")
  ScanSubstrate  (html_parser/scan.py)  równoważenie tagów na surowym tekście

Obie zwracają zakresy (span) jako offsety w ORYGINALNYM tekście, wyliczane
przez html_parser.scanner.find_matching_end. Dzięki temu przepisanie jest
zawsze operacją na podciągach oryginału i wynik jest identyczny bajt w bajt
niezależnie od podłoża.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import ClassVar

from data_model.common import Span

from .scanner import tag_at


class SelectorIntent(StrEnum):
    """Zapytania o kontenery, których potrzebuje silnik."""
    MAIN            = "main"             # pierwszy <main> dokumentu
    META            = "meta"             # wszystkie <meta> dokumentu
    CHILD_DIVS      = "child-divs"       # bezpośrednie dzieci <div> elementu scope
    DESCENDANT_DIVS = "descendant-divs"  # wszystkie potomne <div> elementu scope


class SubstrateKind(StrEnum):
    SOUP = "soup"
    SCAN = "scan"


class MarkupSubstrate[NodeT](ABC):
    """
    Podłoże markupu dla jednego dokumentu.

    Węzły (NodeT) są nieprzezroczyste dla silnika: dostęp wyłącznie przez
    find_containers / text_of / attributes_of / span_of.
    """

    kind: ClassVar[SubstrateKind]

    def __init__(self, text: str) -> None:
        self.text = text

    @abstractmethod
    def find_containers(self, intent: SelectorIntent, scope: NodeT | None = None) -> list[NodeT]:
        """Zwraca węzły pasujące do intencji, w kolejności dokumentu (scope=None → cały dokument)."""

    @abstractmethod
    def text_of(self, node: NodeT) -> str:
        """Tekst węzła bez tagów (bez przycinania białych znaków)."""

    @abstractmethod
    def attributes_of(self, node: NodeT) -> dict[str, str]:
        """Atrybuty węzła; nazwy lowercase, klasa jako jeden napis rozdzielony spacjami."""

    @abstractmethod
    def span_of(self, node: NodeT) -> Span | None:
        """Zakres [start, end) całego elementu w oryginalnym tekście; None gdy niezrównoważony."""

    def inner_span_of(self, node: NodeT) -> Span | None:
        """Zakres treści między tagiem otwierającym a zamykającym."""
        span = self.span_of(node)
        if span is None:
            return None
        start, end = span
        opening = tag_at(self.text, start)
        if opening is None or opening.is_void:
            return None
        close_start = self.text.rfind("</", opening.end, end)
        if close_start == -1:
            return None
        return (opening.end, close_start)
