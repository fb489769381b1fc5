"""End-to-end tests for gating.engine (gate / analyze)."""

from __future__ import annotations

from dataclasses import replace

import pytest

from data_model.common import Granularity, PageGatePolicy
from gating.config import GatingConfig
from gating.engine import analyze, build_substrate, gate, is_html_content_type
from html_parser.scan import ScanSubstrate
from html_parser.substrate import SubstrateKind

from tests._fixtures.documents import document, row, section, tag_balance, teaser_anchor

PAGE_HEAD = (
    '<meta name="visibility" content="protected">\n'
    '<meta name="teaser" content="/fragments/teasers/t1">'
)
NESTED_VIDEO = (
    '<div class="video logged-in">'
    '<div><div class="embed"><div>logged-in members: play</div></div>'
    '<div class="logged-in-caption"><div>caption</div></div></div>'
    "</div>"
)
TEASER_ROW = row("teaser", "/fragments/teasers/cards")
CARDS = f'<div class="cards protected">{TEASER_ROW}<div><div>Card</div><div>Members</div></div></div>'
PUBLIC_MEMBER = '<div class="promo id-offer"><p>Join now</p></div>'
PROTECTED_MEMBER = '<div class="promo id-offer protected"><p>Member price</p></div>'


def _mixed_document() -> str:
    return document("\n".join([
        section("<h1>Welcome</h1>"),
        section("<p>Premium analysis</p>", ("protected", "true")),
        section("<p>Create an account</p>", ("view", "logged-out")),
        section(CARDS),
        section(PUBLIC_MEMBER + PROTECTED_MEMBER),
        section(NESTED_VIDEO),
    ]))


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def test_page_gate_replaces_whole_main_content(config: GatingConfig) -> None:
    html = document(section("<p>Everything</p>") + section("<p>More</p>"), head=PAGE_HEAD)

    result = gate(html, "text/html", False, config)

    expected_main = f"<main><div>{teaser_anchor('/fragments/teasers/t1')}</div></main>"
    assert expected_main in result
    assert result == html[: html.index("<main>")] + expected_main + html[html.index("</main>") + len("</main>"):]


@pytest.mark.parametrize(
    ("policy", "teased"),
    [(PageGatePolicy.TEASE_ONLY_WHEN_UNAUTHENTICATED, False), (PageGatePolicy.ALWAYS_TEASER, True)],
)
def test_page_gate_for_authenticated_viewer_follows_policy(
    config: GatingConfig, policy: PageGatePolicy, teased: bool
) -> None:
    html = document(section("<p>Everything</p>"), head=PAGE_HEAD)

    result = gate(html, "text/html", True, replace(config, page_gate_policy=policy))

    assert (result != html) is teased
    assert ("<p>Everything</p>" in result) is not teased


def test_logged_out_section_is_removed_only_for_authenticated_viewer(config: GatingConfig) -> None:
    signup = section("<p>Create an account</p>", ("view", "logged-out"))
    html = document(section("<p>Intro</p>") + "\n" + signup)

    assert gate(html, "text/html", False, config) == html
    assert gate(html, "text/html", True, config) == html.replace(signup, "")


def test_nested_logged_in_block_is_removed_as_one_unit(config: GatingConfig) -> None:
    html = document(section("<p>Watch</p>" + NESTED_VIDEO))

    result = gate(html, "text/html", False, config)

    assert result == html.replace(NESTED_VIDEO, "")
    assert tag_balance(result) == {}
    assert gate(html, "text/html", True, config) == html


@pytest.mark.parametrize("authenticated", [False, True])
def test_document_without_gating_meta_is_returned_unchanged(config: GatingConfig, authenticated: bool) -> None:
    html = document(section("<p>Premium</p>", ("protected", "true")) + NESTED_VIDEO, head="<title>x</title>")

    assert gate(html, "text/html", authenticated, config) == html


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def test_non_html_content_is_passed_through(config: GatingConfig) -> None:
    html = _mixed_document()

    assert gate(html, "application/json", False, config) == html
    assert gate(html, None, False, config) == html
    assert gate(html, "text/html; charset=utf-8", False, config) != html


def test_is_html_content_type() -> None:
    config = GatingConfig()

    assert is_html_content_type("TEXT/HTML; charset=UTF-8", config)
    assert not is_html_content_type("text/plain", config)
    assert not is_html_content_type("", config)


@pytest.mark.parametrize("authenticated", [False, True])
@pytest.mark.parametrize("policy", list(PageGatePolicy))
def test_output_keeps_tags_balanced(config: GatingConfig, authenticated: bool, policy: PageGatePolicy) -> None:
    html = _mixed_document()

    result = gate(html, "text/html", authenticated, replace(config, page_gate_policy=policy))

    assert tag_balance(html) == {}
    assert tag_balance(result) == {}


def test_tag_balance_counts_every_element_name() -> None:
    assert tag_balance("<div><p>x</div>") == {"p": 1}
    assert tag_balance("<p>a</p></span>") == {"span": -1}
    assert tag_balance('<p>a<br><img src="x" /></p><!-- <div> -->') == {}


def test_mixed_document_for_anonymous_viewer(config: GatingConfig) -> None:
    result = analyze(_mixed_document(), False, config)

    assert result.gated and result.modified
    assert "<h1>Welcome</h1>" in result.html
    assert "Premium analysis" not in result.html
    assert "Create an account" in result.html
    assert teaser_anchor("/fragments/teasers/cards") in result.html
    assert "Members" not in result.html
    assert "Join now" in result.html and "Member price" not in result.html
    assert "play" not in result.html
    assert [a.granularity for a in result.actions] == [
        Granularity.SECTION, Granularity.BLOCK, Granularity.BLOCK, Granularity.BLOCK,
    ]


def test_mixed_document_for_authenticated_viewer(config: GatingConfig) -> None:
    html = _mixed_document()

    result = analyze(html, True, config)

    assert "Premium analysis" in result.html
    assert "Create an account" not in result.html
    assert TEASER_ROW not in result.html and "Members" in result.html
    assert "Member price" in result.html and "Join now" not in result.html
    assert NESTED_VIDEO in result.html


def test_active_page_gate_produces_only_page_actions(config: GatingConfig) -> None:
    html = document(section(NESTED_VIDEO, ("protected", "true")), head=PAGE_HEAD)

    result = analyze(html, False, config)

    assert result.markers.sections == [] and result.markers.blocks == []
    assert [a.granularity for a in result.actions] == [Granularity.PAGE]


def test_incomplete_pair_is_left_alone(config: GatingConfig) -> None:
    html = document(section(PROTECTED_MEMBER))

    for authenticated in (False, True):
        assert analyze(html, authenticated, config).actions == []


@pytest.mark.parametrize("authenticated", [False, True])
def test_section_dialects_are_equivalent(config: GatingConfig, authenticated: bool) -> None:
    teaser = ("teaser", "/fragments/teasers/s")
    body = "<p>Premium analysis</p>"
    variants = [
        document(section(body, ("protected", "true"), teaser)),
        document(section(body, ("visibility", "protected"), teaser)),
        document(section(body, ("view", "logged-in"), teaser)),
    ]

    outputs = [gate(html, "text/html", authenticated, config) for html in variants]

    if authenticated:
        assert outputs == variants
    else:
        assert outputs[0] == outputs[1] == outputs[2]
        assert body not in outputs[0]


def test_view_dialect_section_without_teaser_hides_content(config: GatingConfig) -> None:
    html = document(section("<p>Premium analysis</p>", ("view", "logged-in")))

    result = gate(html, "text/html", False, config)

    assert "Premium analysis" not in result
    assert teaser_anchor(config.default_section_teaser) in result


@pytest.mark.parametrize("authenticated", [False, True])
def test_section_dialects_without_teaser_are_equivalent(config: GatingConfig, authenticated: bool) -> None:
    body = "<p>Premium analysis</p>"
    variants = [
        document(section(body, ("protected", "true"))),
        document(section(body, ("visibility", "protected"))),
        document(section(body, ("view", "logged-in"))),
    ]

    outputs = [gate(html, "text/html", authenticated, config) for html in variants]

    if authenticated:
        assert outputs == variants
    else:
        assert outputs[0] == outputs[1] == outputs[2]
        assert teaser_anchor(config.default_section_teaser) in outputs[0]


def test_substrates_produce_identical_output() -> None:
    html = _mixed_document()

    for authenticated in (False, True):
        soup = analyze(html, authenticated, GatingConfig(substrate=SubstrateKind.SOUP))
        scan = analyze(html, authenticated, GatingConfig(substrate=SubstrateKind.SCAN))
        assert soup.html == scan.html
        assert soup.actions == scan.actions


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------

def test_unbalanced_regions_are_left_untouched(config: GatingConfig) -> None:
    good = '<div class="logged-in">secret</div>'
    html = document(section(good) + '\n<div>\n<div class="logged-in">also secret</div>')

    result = gate(html, "text/html", False, config)

    assert result == html.replace(good, "", 1)
    assert "also secret" in result


@pytest.mark.parametrize(
    "html",
    [
        '<meta name="gated" content="true"><main><div class="logged-in"><p>unterminated',
        '<meta name="gated" content="true"><<<>>><div <main>',
        '<meta name="gated" content="true"><main></div></div><div class="logged-in">',
    ],
)
def test_garbage_input_never_raises(config: GatingConfig, html: str) -> None:
    for authenticated in (False, True):
        assert isinstance(gate(html, "text/html", authenticated, config), str)


def test_build_substrate_by_kind() -> None:
    assert isinstance(build_substrate("<p></p>", SubstrateKind.SCAN), ScanSubstrate)
    assert build_substrate("<p></p>", "soup").kind is SubstrateKind.SOUP
