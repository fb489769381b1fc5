"""gating/rewriter.py — stosowanie akcji przepisania do surowego tekstu."""

from __future__ import annotations

import logging

from data_model.actions import RewriteAction, TeaserFragment

from .teaser import render_teaser

logger = logging.getLogger(__name__)


def apply_actions(html: str, actions: list[RewriteAction], origin: str) -> str:
    """
    Zwraca nowy dokument z zastosowanymi akcjami.

    Akcje są przetwarzane malejąco po offsecie startu, więc zamiana nie
    przesuwa offsetów akcji jeszcze nieprzetworzonych. Wszystko poza
    zakresami akcji przechodzi bajt w bajt (łącznie z białymi znakami).
    Akcja nachodząca na już zastosowaną jest pomijana.
    """
    if not actions:
        return html

    pieces: list[str] = []
    cursor = len(html)
    for action in sorted(actions, key=lambda a: a.start, reverse=True):
        if action.end > cursor or action.start < 0:
            logger.debug("Pomijam akcję poza zakresem %s", action.span)
            continue
        pieces.append(html[action.end:cursor])
        if isinstance(action.replacement, TeaserFragment):
            pieces.append(render_teaser(action.replacement.path, action.replacement.granularity, origin))
        cursor = action.start
    pieces.append(html[:cursor])
    return "".join(reversed(pieces))
