from __future__ import annotations

from typing import Callable

import pytest

from gating.config import GatingConfig
from gating.engine import build_substrate
from html_parser.substrate import MarkupSubstrate, SubstrateKind


@pytest.fixture(params=list(SubstrateKind), ids=lambda kind: kind.value)
def substrate_kind(request: pytest.FixtureRequest) -> SubstrateKind:
    """Run the test once per markup substrate."""
    return request.param


@pytest.fixture
def config(substrate_kind: SubstrateKind) -> GatingConfig:
    return GatingConfig(substrate=substrate_kind)


@pytest.fixture
def make_substrate(substrate_kind: SubstrateKind) -> Callable[[str], MarkupSubstrate]:
    """Build a substrate of the current kind for a document."""

    def _make(html: str) -> MarkupSubstrate:
        return build_substrate(html, substrate_kind)

    return _make
