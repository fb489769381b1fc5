"""Tests for gating.config."""

from __future__ import annotations

import pytest

from data_model.common import Granularity, PageGatePolicy
from gating.config import DEFAULT_ORIGIN, GatingConfig, load_config
from gating.errors import ConfigError
from html_parser.substrate import SubstrateKind


def test_load_config_returns_defaults_for_empty_environment() -> None:
    config = load_config({})

    assert config == GatingConfig()
    assert config.origin_base_url == DEFAULT_ORIGIN
    assert config.page_gate_policy is PageGatePolicy.TEASE_ONLY_WHEN_UNAUTHENTICATED
    assert config.substrate is SubstrateKind.SOUP
    assert "/fragments/" in config.bypass_path_prefixes
    assert config.html_content_types == ("text/html",)


def test_load_config_parses_every_variable() -> None:
    env = {
        "GATEKEEP_ORIGIN": "https://main--site--org.aem.live/",
        "GATEKEEP_PAGE_TEASER": "/fragments/teasers/page",
        "GATEKEEP_SECTION_TEASER": "/fragments/teasers/section",
        "GATEKEEP_BLOCK_TEASER": "/fragments/teasers/block",
        "GATEKEEP_BYPASS_PATHS": "/fragments/, /nav.plain.html ,,",
        "GATEKEEP_HTML_TYPES": "text/html,Application/XHTML+XML",
        "GATEKEEP_PAGE_POLICY": "Always-Teaser",
        "GATEKEEP_SUBSTRATE": "scan",
        "GATEKEEP_FETCH_TIMEOUT": "2.5",
    }

    config = load_config(env)

    assert config.origin_base_url == "https://main--site--org.aem.live"
    assert config.default_teaser(Granularity.PAGE) == "/fragments/teasers/page"
    assert config.default_teaser(Granularity.SECTION) == "/fragments/teasers/section"
    assert config.default_teaser(Granularity.BLOCK) == "/fragments/teasers/block"
    assert config.bypass_path_prefixes == ("/fragments/", "/nav.plain.html")
    assert config.html_content_types == ("text/html", "application/xhtml+xml")
    assert config.page_gate_policy is PageGatePolicy.ALWAYS_TEASER
    assert config.substrate is SubstrateKind.SCAN
    assert config.fetch_timeout == pytest.approx(2.5)


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("GATEKEEP_PAGE_POLICY", "sometimes"),
        ("GATEKEEP_SUBSTRATE", "lxml"),
        ("GATEKEEP_FETCH_TIMEOUT", "soon"),
        ("GATEKEEP_FETCH_TIMEOUT", "0"),
        ("GATEKEEP_ORIGIN", "ftp://example.com"),
    ],
)
def test_load_config_rejects_invalid_values(name: str, value: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_config({name: value})

    assert name in str(excinfo.value)


def test_overrides_take_precedence_and_none_is_ignored() -> None:
    env = {"GATEKEEP_PAGE_POLICY": "always-teaser", "GATEKEEP_SUBSTRATE": "scan"}

    config = load_config(env, page_gate_policy="tease-only-when-unauthenticated", substrate=None)

    assert config.page_gate_policy is PageGatePolicy.TEASE_ONLY_WHEN_UNAUTHENTICATED
    assert config.substrate is SubstrateKind.SCAN


def test_invalid_override_names_the_flag() -> None:
    with pytest.raises(ConfigError, match="--policy"):
        load_config({}, page_gate_policy="never")


def test_unknown_override_field_is_rejected() -> None:
    with pytest.raises(ConfigError):
        load_config({}, colour="blue")
