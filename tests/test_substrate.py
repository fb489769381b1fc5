"""Tests for the markup substrates (BeautifulSoup tree and raw-text scan)."""

from __future__ import annotations

from typing import Callable

from html_parser.scan import ScanSubstrate
from html_parser.soup import SoupSubstrate
from html_parser.substrate import MarkupSubstrate, SelectorIntent, SubstrateKind

from tests._fixtures.documents import document, section

MainFn = Callable[[str], MarkupSubstrate]


SAMPLE = document(
    section('<div class="cards protected"><div><div>Teaser</div><div>/fragments/x</div></div></div>')
    + "\n<section><div>grandchild</div></section>\n"
    + section("<p>Hello &amp; <b>welcome</b></p>")
)


def _spans(substrate: MarkupSubstrate, nodes: list) -> list:
    return [substrate.span_of(node) for node in nodes]


def test_main_inner_span_covers_main_content(make_substrate: MainFn) -> None:
    substrate = make_substrate(SAMPLE)

    mains = substrate.find_containers(SelectorIntent.MAIN)

    assert len(mains) == 1
    start, end = substrate.inner_span_of(mains[0])
    assert SAMPLE[start - len("<main>"):start] == "<main>"
    assert SAMPLE[end:end + len("</main>")] == "</main>"


def test_child_divs_are_direct_children_only(make_substrate: MainFn) -> None:
    substrate = make_substrate(SAMPLE)
    main = substrate.find_containers(SelectorIntent.MAIN)[0]

    children = substrate.find_containers(SelectorIntent.CHILD_DIVS, main)

    assert len(children) == 2
    texts = [substrate.text_of(child) for child in children]
    assert "grandchild" not in "".join(texts)
    for child in children:
        start, end = substrate.span_of(child)
        assert SAMPLE[start:end].startswith("<div>")
        assert SAMPLE[start:end].endswith("</div>")


def test_text_and_attributes(make_substrate: MainFn) -> None:
    substrate = make_substrate(SAMPLE)
    main = substrate.find_containers(SelectorIntent.MAIN)[0]

    divs = substrate.find_containers(SelectorIntent.DESCENDANT_DIVS, main)
    cards = next(d for d in divs if "cards" in substrate.attributes_of(d).get("class", ""))
    last = substrate.find_containers(SelectorIntent.CHILD_DIVS, main)[-1]

    assert substrate.attributes_of(cards)["class"] == "cards protected"
    assert substrate.text_of(last).strip() == "Hello & welcome"


def test_meta_nodes_are_found(make_substrate: MainFn) -> None:
    substrate = make_substrate(SAMPLE)

    metas = substrate.find_containers(SelectorIntent.META)

    assert [substrate.attributes_of(m).get("name") for m in metas] == ["gated"]
    start, end = substrate.span_of(metas[0])
    assert SAMPLE[start:end] == '<meta name="gated" content="true">'


def test_substrates_agree_on_spans() -> None:
    soup = SoupSubstrate(SAMPLE)
    scan = ScanSubstrate(SAMPLE)
    soup_main = soup.find_containers(SelectorIntent.MAIN)[0]
    scan_main = scan.find_containers(SelectorIntent.MAIN)[0]

    assert soup.span_of(soup_main) == scan.span_of(scan_main)
    for intent in (SelectorIntent.CHILD_DIVS, SelectorIntent.DESCENDANT_DIVS):
        assert _spans(soup, soup.find_containers(intent, soup_main)) == _spans(
            scan, scan.find_containers(intent, scan_main)
        )


def test_unbalanced_div_has_no_span(make_substrate: MainFn) -> None:
    html = document('<div class="broken"><div>inner</div>')
    substrate = make_substrate(html)
    main = substrate.find_containers(SelectorIntent.MAIN)[0]

    spans = [
        span for span in _spans(substrate, substrate.find_containers(SelectorIntent.DESCENDANT_DIVS, main))
        if span is not None
    ]

    assert [html[s:e] for s, e in spans] == ["<div>inner</div>"]


def test_unclosed_child_div_hides_following_siblings(make_substrate: MainFn) -> None:
    html = document('<div class="broken">\n<div class="later">x</div>')
    substrate = make_substrate(html)
    main = substrate.find_containers(SelectorIntent.MAIN)[0]

    children = substrate.find_containers(SelectorIntent.CHILD_DIVS, main)

    assert all(substrate.span_of(child) is None for child in children)


def test_substrate_kind() -> None:
    assert SoupSubstrate("<p></p>").kind is SubstrateKind.SOUP
    assert ScanSubstrate("<p></p>").kind is SubstrateKind.SCAN
