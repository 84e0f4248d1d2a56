"""
Tests for scoring measurements and candidate discovery/selection.
"""

from html_readability.candidates import (
    collapse_redundant_paragraph_divs, determine_top_candidate, find_candidates,
    get_article_content_element_hint, strip_unlikely_candidates,
)
from html_readability.dom import build_document
from html_readability.patterns import READABILITY_STYLED_CSS_CLASS
from html_readability.scoring import ScoringContext, get_segments_count

LONG_TEXT = "This paragraph is long enough to be counted by the scorer"


def test_segments_count():
    assert get_segments_count("") == 1
    assert get_segments_count("a,b,c") == 3
    assert get_segments_count("no commas") == 1


def test_links_density():
    """Link density stays in [0, 1] and is 0 for elements without text."""
    document = build_document(
        '<div id="half"><a href="#">abcde</a>fghij</div>'
        '<div id="empty"><a href="#"></a></div>'
        '<div id="all"><a href="#">only</a><a href="#">links</a></div>'
    )
    context = ScoringContext()

    assert context.links_density(document.find(id="half")) == 0.5
    assert context.links_density(document.find(id="empty")) == 0.0
    assert context.links_density(document.find(id="all")) == 1.0


def test_class_weight():
    document = build_document(
        '<div id="sidebar" class="article">a</div>'
        '<div class="comment">b</div>'
        '<div class="post" id="main-content">c</div>'
    )
    divs = document.find_all("div")
    context = ScoringContext()

    assert context.class_weight(divs[0]) == 0
    assert context.class_weight(divs[1]) == -25
    assert context.class_weight(divs[2]) == 50
    assert ScoringContext(dont_weight_classes=True).class_weight(divs[2]) == 0


def test_strip_unlikely_candidates():
    document = build_document(
        '<div class="sidebar"><p>Sidebar text</p></div>'
        '<div class="sidebar main-column"><p>Kept text</p></div>'
        '<div id="footer">Footer</div>'
        '<a class="comment" href="#">anchors are never stripped</a>'
    )

    removed = strip_unlikely_candidates(document)

    assert removed == 2
    text = document.get_text()
    assert "Sidebar text" not in text
    assert "Footer" not in text
    assert "Kept text" in text
    assert "anchors are never stripped" in text


def test_strip_keeps_document_root():
    """An unlikely-looking class on <html> still lets the stripper work inside it."""
    document = build_document(
        '<html class="has-sidebar"><body>'
        '<div class="article-body"><p>Article text</p></div>'
        '<div class="sidebar"><p>Sidebar text</p></div>'
        '</body></html>'
    )

    removed = strip_unlikely_candidates(document)

    assert removed == 1
    assert document.find("html") is not None
    text = document.get_text()
    assert "Article text" in text
    assert "Sidebar text" not in text


def test_strip_turns_text_divs_into_paragraphs():
    document = build_document('<div id="plain">Just <b>inline</b> text</div>')

    strip_unlikely_candidates(document)

    element = document.find(id="plain")
    assert element.name == "p"


def test_strip_wraps_text_next_to_blocks():
    """Bare text beside block children is wrapped in a styled inline paragraph."""
    document = build_document('<div id="mixed">Loose text<p>A paragraph</p></div>')

    strip_unlikely_candidates(document)

    mixed = document.find(id="mixed")
    assert mixed.name == "div"
    wrapped = mixed.find("p", class_=READABILITY_STYLED_CSS_CLASS)
    assert wrapped is not None
    assert wrapped.get_text() == "Loose text"
    assert wrapped["style"] == "display: inline;"


def test_collapse_redundant_paragraph_divs():
    document = build_document(
        '<div id="outer"><div id="wrapper">\n<p id="para">Text</p>\n</div></div>'
    )

    collapse_redundant_paragraph_divs(document)

    assert document.find(id="wrapper") is None
    assert document.find(id="para").parent["id"] == "outer"


def test_find_candidates_scores_parent_and_grandparent():
    # 42 characters, one comma: 1 + 2 segments + 0 = 3 points
    text = "x" * 30 + ", " + "y" * 10
    document = build_document(
        f'<div id="outer"><div id="inner"><p>{text}</p><p>too short</p></div></div>'
    )
    context = ScoringContext()

    candidates = find_candidates(document, context)

    outer = document.find(id="outer")
    inner = document.find(id="inner")
    assert candidates == [inner, outer]
    assert context.get_score(inner) == 3
    assert context.get_score(outer) == 1


def test_find_candidates_length_bonus_is_capped():
    text = "word " * 100  # 499 characters after trimming
    document = build_document(f'<div id="inner"><p>{text}</p></div>')
    context = ScoringContext()

    find_candidates(document, context)

    assert context.get_score(document.find(id="inner")) == 1 + 1 + 3


def test_find_candidates_never_scores_the_root():
    document = build_document(f"<html><body><p>{LONG_TEXT}</p></body></html>")
    context = ScoringContext()

    candidates = find_candidates(document, context)

    assert [c.name for c in candidates] == ["body"]
    assert not context.has_score(document.find("html"))


def test_find_candidates_with_hint():
    """A hinted element is the only candidate; paragraphs are not scored."""
    document = build_document(
        f"<article><p>Hinted</p></article><div id='other'><p>{LONG_TEXT}</p></div>"
    )
    context = ScoringContext()

    candidates = find_candidates(document, context, "article")

    assert candidates == [document.find("article")]
    assert not context.has_score(document.find(id="other"))


def test_article_content_element_hint():
    assert get_article_content_element_hint("https://www.theverge.com/2020/1/1/story") == "article"
    assert get_article_content_element_hint("http://example.com/story") is None
    assert get_article_content_element_hint(None) is None


def test_determine_top_candidate_weights_link_density():
    document = build_document(
        '<div id="links"><a href="#">aaaaaaaaaa</a></div>'
        '<div id="text">plain text</div>'
    )
    links = document.find(id="links")
    text = document.find(id="text")
    context = ScoringContext()
    context.set_score(links, 10)
    context.set_score(text, 5)

    top = determine_top_candidate(document, context, [links, text])

    assert top is text
    assert context.get_score(links) == 0


def test_determine_top_candidate_first_wins_ties():
    document = build_document('<div id="a">one</div><div id="b">two</div>')
    first, second = document.find(id="a"), document.find(id="b")
    context = ScoringContext()
    context.set_score(first, 7)
    context.set_score(second, 7)

    assert determine_top_candidate(document, context, [first, second]) is first


def test_determine_top_candidate_falls_back_to_body_contents():
    document = build_document("<html><body><span>a</span><span>b</span></body></html>")
    context = ScoringContext()

    top = determine_top_candidate(document, context, [])

    assert top.name == "div"
    assert top.parent is None
    assert [span.get_text() for span in top.find_all("span")] == ["a", "b"]
    assert document.body.find("span") is None
