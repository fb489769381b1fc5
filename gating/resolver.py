"""
gating/resolver.py — rozstrzyganie pierwszeństwa znaczników.

resolve(markers, authenticated, config) → list[RewriteAction]

Kolejność:
  1. Aktywna bramka strony: jedna akcja (teaser w miejsce wnętrza <main>)
     albo (przy polityce TEASE_ONLY_WHEN_UNAUTHENTICATED i zalogowanym
     widzu) brak akcji. Sekcje i bloki nigdy nie są wtedy rozpatrywane.
  2. Sekcje, 3–5. Bloki (teaser-pair, paired-id, view-class).
  6. Akcje nachodzące na siebie: wygrywa pierwsza w kolejności dokumentu.
"""

from __future__ import annotations

import logging

from data_model.actions import Removal, RewriteAction, TeaserFragment
from data_model.common import BlockKind, Granularity, PageGatePolicy, Visibility
from data_model.markers import ExtractedMarkers, Marker

from .config import GatingConfig

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reguły per granulacja
# ---------------------------------------------------------------------------

def _page_action(page: Marker, authenticated: bool, config: GatingConfig) -> RewriteAction | None:
    if authenticated and config.page_gate_policy == PageGatePolicy.TEASE_ONLY_WHEN_UNAUTHENTICATED:
        return None
    path = page.teaser_path or config.default_teaser(Granularity.PAGE)
    return RewriteAction(page.span, TeaserFragment(path, Granularity.PAGE), Granularity.PAGE)


def _section_action(section: Marker, authenticated: bool, config: GatingConfig) -> RewriteAction | None:
    if section.visibility is Visibility.GATED and not authenticated:
        path = section.teaser_path or config.default_teaser(Granularity.SECTION)
        return RewriteAction(section.span, TeaserFragment(path, Granularity.SECTION), Granularity.SECTION)
    if section.visibility is Visibility.ANONYMOUS and authenticated:
        return RewriteAction(section.span, Removal(), Granularity.SECTION)
    return None


def _block_action(block: Marker, authenticated: bool, config: GatingConfig) -> RewriteAction | None:
    match block.block_kind:
        case BlockKind.TEASER_PAIR:
            if not authenticated:
                path = block.teaser_path or config.default_teaser(Granularity.BLOCK)
                return RewriteAction(block.span, TeaserFragment(path, Granularity.BLOCK), Granularity.BLOCK)
            # Zalogowany: znika tylko deklaracja teasera, treść zostaje.
            if block.declaration_span is not None:
                return RewriteAction(block.declaration_span, Removal(), Granularity.BLOCK)
            return None

        case BlockKind.PAIRED_ID:
            always = config.page_gate_policy == PageGatePolicy.ALWAYS_TEASER
            if block.visibility is Visibility.GATED:
                drop = always or not authenticated
            else:
                drop = authenticated and not always
            return RewriteAction(block.span, Removal(), Granularity.BLOCK) if drop else None

        case BlockKind.VIEW_CLASS:
            if (block.visibility is Visibility.GATED and not authenticated) or (
                block.visibility is Visibility.ANONYMOUS and authenticated
            ):
                return RewriteAction(block.span, Removal(), Granularity.BLOCK)
            return None

    return None


def drop_overlaps(actions: list[RewriteAction]) -> list[RewriteAction]:
    """
    Zwraca akcje bez nakładania się zakresów, w kolejności dokumentu.

    Przy nakładaniu wygrywa akcja wcześniejsza (przy równym starcie —
    obejmująca większy region); pozostałe są odrzucane bez błędu.
    """
    kept: list[RewriteAction] = []
    last_end = -1
    for action in sorted(actions, key=lambda a: (a.start, -a.end)):
        if action.start < last_end:
            logger.debug("Odrzucam nakładającą się akcję %s w %s", action.describe(), action.span)
            continue
        kept.append(action)
        last_end = action.end
    return kept


# ---------------------------------------------------------------------------
# Publiczny interfejs
# ---------------------------------------------------------------------------

def resolve(markers: ExtractedMarkers, authenticated: bool, config: GatingConfig) -> list[RewriteAction]:
    """
    Wylicza akcje przepisania dla danego stanu uwierzytelnienia.

    Args:
        markers:       wynik extract_markers
        authenticated: True dla zalogowanego widza
        config:        konfiguracja (domyślne teasery, polityka bramki strony)

    Returns:
        Lista RewriteAction bez nakładających się zakresów, posortowana
        rosnąco po offsecie startu.
    """
    if markers.page_active:
        assert markers.page is not None
        action = _page_action(markers.page, authenticated, config)
        return [action] if action is not None else []

    candidates: list[RewriteAction] = []
    for section in markers.sections:
        if (action := _section_action(section, authenticated, config)) is not None:
            candidates.append(action)
    for block in markers.blocks:
        if (action := _block_action(block, authenticated, config)) is not None:
            candidates.append(action)

    actions = drop_overlaps(candidates)
    logger.debug("Akcje: %d (kandydaci: %d, zalogowany=%s)", len(actions), len(candidates), authenticated)
    return actions
