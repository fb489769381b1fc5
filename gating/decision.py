"""
gating/decision.py — tania wstępna bramka decyzyjna.

Wykonywana dla każdego dokumentu HTML, więc najpierw sprawdza zawieranie
dosłownych słów kluczowych (bez regexów), a dopiero potem dokładnie
porównuje atrybuty znaczników <meta> — w dowolnej kolejności atrybutów
i w obu stylach cudzysłowów.
"""

from __future__ import annotations

import re

from data_model.constants import GATE_METAS
from html_parser.scanner import parse_attributes

_GATE_PAIRS: frozenset[tuple[str, str]] = frozenset(GATE_METAS)
_GATE_NAMES: tuple[str, ...] = tuple(sorted({name for name, _ in GATE_METAS}))

_META_RE = re.compile(r"<meta\b((?:\"[^\"]*\"|'[^']*'|[^'\">])*)>", re.IGNORECASE)


def is_gating_required(html: str) -> bool:
    """
    Zwraca True gdy dokument niesie metadane bramkowania.

    Dokument jest bramkowany, gdy zawiera <meta> z parą (name, content)
    z GATE_METAS, np. <meta name="gated" content="true">. Porównanie wartości
    jest niewrażliwe na wielkość liter i białe znaki na brzegach.
    """
    lowered = html.lower()
    if "<meta" not in lowered or not any(name in lowered for name in _GATE_NAMES):
        return False

    for m in _META_RE.finditer(html):
        attrs = parse_attributes(m.group(1))
        name = attrs.get("name", "").strip().lower()
        content = attrs.get("content", "").strip().lower()
        if (name, content) in _GATE_PAIRS:
            return True
    return False
