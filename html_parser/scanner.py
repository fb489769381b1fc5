"""
html_parser/scanner.py — skaner tagów na surowym tekście (bez drzewa DOM).

Publiczne API:
  iter_tags(text, start, end)                  → Iterator[TagToken]
  find_matching_end(text, open_tag_start, tag) → int | None
  parse_attributes(raw)                        → dict[str, str]
  strip_tags(fragment)                         → str

find_matching_end jest jedynym miejscem odpowiedzialnym za poprawność przy
zagnieżdżeniu: liczy otwarcia i zamknięcia elementu o tej samej nazwie
i zwraca offset tuż za tagiem zamykającym, który sprowadza głębokość do zera.
None oznacza "dokument skończył się wcześniej" — wywołujący nie może wtedy
bezpiecznie działać na tym elemencie i zostawia go nietkniętym.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterator

# Komentarz albo tag (otwierający / zamykający). Wartości atrybutów w
# cudzysłowach mogą zawierać '>'; alternatywy są rozłączne, bez backtrackingu.
_TOKEN_RE = re.compile(
    r"<!--.*?-->"
    r"|<(/?)([a-zA-Z][a-zA-Z0-9:-]*)((?:\"[^\"]*\"|'[^']*'|[^'\">])*)>",
    re.DOTALL,
)

_ATTR_RE = re.compile(
    r"""([^\s"'=<>/`]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+)))?"""
)

VOID_ELEMENTS: frozenset[str] = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elementy, których treść nie jest markupem
_RAW_TEXT_ELEMENTS: frozenset[str] = frozenset({"script", "style"})
_RAW_TEXT_CLOSE: dict[str, re.Pattern[str]] = {
    name: re.compile(rf"</{name}", re.IGNORECASE) for name in _RAW_TEXT_ELEMENTS
}


@dataclass(slots=True, frozen=True)
class TagToken:
    """Pojedynczy tag: nazwa (lowercase), offsety [start, end), surowe atrybuty."""
    name:         str
    start:        int
    end:          int
    closing:      bool
    self_closing: bool
    attrs_raw:    str

    @property
    def is_void(self) -> bool:
        return self.self_closing or self.name in VOID_ELEMENTS


def _token_from_match(m: re.Match[str]) -> TagToken | None:
    name = m.group(2)
    if name is None:
        return None  # komentarz
    attrs_raw = m.group(3) or ""
    return TagToken(
        name=name.lower(),
        start=m.start(),
        end=m.end(),
        closing=m.group(1) == "/",
        self_closing=attrs_raw.rstrip().endswith("/"),
        attrs_raw=attrs_raw,
    )


def iter_tags(text: str, start: int = 0, end: int | None = None) -> Iterator[TagToken]:
    """
    Iteruje po tagach w text[start:end] w kolejności dokumentu.

    Komentarze są pomijane, a treść <script>/<style> przeskakiwana w całości
    (tekst "<div" wewnątrz skryptu nie jest tagiem).
    """
    limit = len(text) if end is None else end
    pos = start
    while pos < limit:
        m = _TOKEN_RE.search(text, pos, limit)
        if m is None:
            return
        pos = m.end()
        token = _token_from_match(m)
        if token is None:
            continue
        yield token
        if token.name in _RAW_TEXT_ELEMENTS and not token.closing and not token.self_closing:
            close = _RAW_TEXT_CLOSE[token.name].search(text, pos, limit)
            pos = limit if close is None else close.start()


def tag_at(text: str, offset: int) -> TagToken | None:
    """Zwraca tag zaczynający się dokładnie w `offset` (None gdy go tam nie ma)."""
    m = _TOKEN_RE.match(text, offset)
    if m is None:
        return None
    return _token_from_match(m)


def find_matching_end(text: str, open_tag_start: int, tag: str) -> int | None:
    """
    Zwraca offset tuż za tagiem zamykającym element otwarty w open_tag_start.

    Liczone są tylko tagi o nazwie `tag` (pełna nazwa: <div nie pasuje do
    <divider). Elementy puste (void, <x/>) kończą się na swoim tagu.

    Returns:
        Offset za zamykającym tagiem albo None gdy:
          - w open_tag_start nie ma tagu otwierającego `tag`,
          - dokument kończy się przed zrównoważeniem głębokości.
    """
    tag = tag.lower()
    opening = tag_at(text, open_tag_start)
    if opening is None or opening.closing or opening.name != tag:
        return None
    if opening.is_void:
        return opening.end

    depth = 1
    for token in iter_tags(text, opening.end):
        if token.name != tag:
            continue
        if token.closing:
            depth -= 1
            if depth == 0:
                return token.end
        elif not token.self_closing:
            depth += 1
    return None


def parse_attributes(raw: str) -> dict[str, str]:
    """
    Parsuje surowy napis atrybutów tagu do słownika.

    Obsługuje oba rodzaje cudzysłowów, wartości bez cudzysłowów i atrybuty
    bez wartości (→ ""). Nazwy są zamieniane na lowercase, encje w wartościach
    dekodowane; przy duplikatach wygrywa ostatnie wystąpienie.
    """
    attrs: dict[str, str] = {}
    for m in _ATTR_RE.finditer(raw):
        name = m.group(1).lower()
        value = next((g for g in m.groups()[1:] if g is not None), "")
        attrs[name] = html.unescape(value)
    return attrs


def strip_tags(fragment: str) -> str:
    """Usuwa tagi i komentarze, dekoduje encje. Białe znaki zostają bez zmian."""
    return html.unescape(_TOKEN_RE.sub("", fragment))


def class_tokens(attrs: dict[str, str]) -> list[str]:
    return attrs.get("class", "").split()
