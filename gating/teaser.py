"""gating/teaser.py — fragmenty teaserów wstawiane w miejsce treści bramkowanej."""

from __future__ import annotations

from html import escape

from data_model.common import Granularity


def render_teaser(path: str, granularity: Granularity, origin: str) -> str:
    """
    Zwraca minimalny fragment z linkiem do teasera.

    Strona i sekcja dostają blok <div> (zastępuje kontener sekcji, więc
    struktura sekcji zostaje zachowana), blok — sam akapit. Tekst linku to
    pełny adres (origin + ścieżka), z którego loader fragmentów pobiera treść.
    Ścieżka i origin są escapowane: wartości pochodzą z dokumentu.
    """
    href = escape(path, quote=True)
    label = escape(f"{origin.rstrip('/')}{path}", quote=True)
    anchor = f'<p><a href="{href}">{label}</a></p>'
    if granularity is Granularity.BLOCK:
        return anchor
    return f"<div>{anchor}</div>"
