"""
Tests for the sibling merger.
"""

from html_readability.dom import build_document
from html_readability.merger import create_article_content_element
from html_readability.scoring import ScoringContext

LONG_PARAGRAPH = (
    "This sibling paragraph is long enough to be pulled into the article, "
    "and it has no links at all."
)

SIBLINGS_HTML = f"""
<div id="wrap">
  <p id="intro">Too short to keep</p>
  <div id="top" class="story">Top candidate</div>
  <p id="long">{LONG_PARAGRAPH}</p>
  <p id="short">A short closing line.</p>
  <p id="linky"><a href="#">{LONG_PARAGRAPH}</a></p>
  <div id="low">Low scoring block</div>
  <div id="same" class="story">Same class as the winner</div>
  <section id="sec" class="extra">Section <b>content</b></section>
</div>
"""


def _merge():
    document = build_document(SIBLINGS_HTML)
    context = ScoringContext()
    context.set_score(document.find(id="top"), 100)
    context.set_score(document.find(id="low"), 5)
    context.set_score(document.find(id="same"), 5)
    context.set_score(document.find(id="sec"), 30)
    content = create_article_content_element(document, context, document.find(id="top"))
    return document, content


def test_merge_picks_related_siblings():
    """Threshold is max(10, 0.2 * 100) = 20; same-class siblings get a 20 point bonus."""
    _, content = _merge()

    ids = [child["id"] for child in content.find_all(recursive=False)]

    assert content["id"] == "readability-content"
    assert ids == ["top", "long", "short", "same", "sec"]


def test_merge_rewraps_other_tags_as_div():
    document, content = _merge()

    rewrapped = content.find(id="sec")
    assert rewrapped.name == "div"
    assert rewrapped["class"] == "extra"
    assert rewrapped.find("b").get_text() == "content"
    assert document.find("section") is None


def test_merge_leaves_rejected_siblings_in_place():
    document, _ = _merge()

    wrap = document.find(id="wrap")
    assert [child["id"] for child in wrap.find_all(recursive=False)] == ["intro", "linky", "low"]


def test_merge_detached_candidate():
    document = build_document("<p>x</p>")
    top = document.new_tag("div")
    top.string = "all of the body"

    content = create_article_content_element(document, ScoringContext(), top)

    assert content.find("div") is top
