"""
End-to-end tests for the single-page transcoder.
"""

import re

import pytest

from html_readability.dom import build_document
from html_readability.exceptions import TranscodingInputError
from html_readability.schemas import (
    AttributeTransformationResult, DomSerializationParams, TranscoderOptions, TranscodingInput,
)
from html_readability.styles import ReadingMargin, ReadingSize, ReadingStyle
from html_readability.transcoder import Transcoder
from html_readability.urls import resolve_element_url

PARAGRAPH = (
    "Paragraph {n} of the story carries plenty of ordinary words, "
    "so the scorer treats it as real article prose worth keeping."
)


def _paragraphs(count, template=PARAGRAPH):
    return "".join(f"<p>{template.format(n=n)}</p>" for n in range(1, count + 1))


ARTICLE_HTML = f"""<html>
<head><title>A Reasonably Long Article Title Here</title></head>
<body>
  <div id="header"><a href="/">Home</a> <a href="/about">About</a></div>
  <div class="article-body">{_paragraphs(5)}</div>
  <div id="footer">Copyright notice</div>
</body>
</html>"""


def test_article_body_is_extracted():
    transcoder = Transcoder()

    transcoded = transcoder.transcode_to_document(ARTICLE_HTML)

    assert transcoded.content_extracted
    assert transcoded.content_element["id"] == "readability-content"
    article = transcoded.content_element.find("div", class_="article-body")
    assert article is not None
    assert len(article.find_all("p")) == 5
    assert "Copyright notice" not in transcoded.content_element.get_text()
    assert transcoded.extracted_title == "A Reasonably Long Article Title Here"


def test_transcode_serializes_scaffold():
    result = Transcoder().transcode(TranscodingInput(html_content=ARTICLE_HTML))

    assert result.content_extracted
    assert result.title_extracted
    assert result.extracted_title == "A Reasonably Long Article Title Here"
    assert result.next_page_url is None

    markup = result.extracted_content
    assert markup.startswith("<!DOCTYPE html>")
    assert "<h1>A Reasonably Long Article Title Here</h1>" in markup

    document = build_document(markup)
    assert document.body["class"] == "style-newspaper"
    assert document.body["style"] == "display: block;"
    overlay = document.body.find("div", recursive=False)
    assert overlay["id"] == "readOverlay"
    inner = overlay.find("div", recursive=False)
    assert inner["id"] == "readInner"
    assert inner["class"] == "margin-wide size-medium"
    assert inner.find("div", recursive=False)["id"] == "readability-content"


def test_reading_options_change_classes():
    transcoder = Transcoder(
        reading_style=ReadingStyle.TERMINAL,
        reading_margin=ReadingMargin.X_NARROW,
        reading_size=ReadingSize.X_LARGE,
    )

    document = transcoder.transcode_to_document(ARTICLE_HTML).document

    assert document.body["class"] == "style-terminal"
    assert document.find(id="readOverlay")["class"] == "style-terminal"
    assert document.find(id="readInner")["class"] == "margin-x-narrow size-x-large"


def test_serialization_params():
    params = DomSerializationParams(
        dont_include_doctype_meta_element=True,
        dont_include_generator_meta_element=True,
    )

    result = Transcoder().transcode(TranscodingInput(html_content=ARTICLE_HTML, dom_serialization_params=params))

    assert "DOCTYPE" not in result.extracted_content
    assert "Generator" not in result.extracted_content
    assert "HandheldFriendly" in result.extracted_content


def test_empty_input_rejected():
    with pytest.raises(TranscodingInputError):
        Transcoder().transcode_to_document("")


def _spy_runs(transcoder, monkeypatch):
    runs = []
    original = transcoder.transcode_to_document

    def spy(html_content, url=None, relaxed=False):
        runs.append(relaxed)
        return original(html_content, url, relaxed)

    monkeypatch.setattr(transcoder, "transcode_to_document", spy)
    return runs


def test_short_content_retried_exactly_once(monkeypatch):
    transcoder = Transcoder()
    runs = _spy_runs(transcoder, monkeypatch)

    transcoded = transcoder.transcode_to_document("<html><body><p>Short text.</p></body></html>")

    assert runs == [False, True]
    assert transcoded.content_element is not None


def test_no_retry_when_stripping_disabled(monkeypatch):
    transcoder = Transcoder(dont_strip_unlikelys=True)
    runs = _spy_runs(transcoder, monkeypatch)

    transcoder.transcode_to_document("<html><body><p>Short text.</p></body></html>")

    assert runs == [False]


def test_no_retry_for_long_content(monkeypatch):
    transcoder = Transcoder()
    runs = _spy_runs(transcoder, monkeypatch)

    transcoder.transcode_to_document(ARTICLE_HTML)

    assert runs == [False]


def test_relaxed_run_recovers_stripped_article():
    """Content living in an unlikely-looking container comes back on the relaxed run."""
    html = f'<html><body><div class="extra-content">{_paragraphs(4)}</div></body></html>'

    transcoded = Transcoder().transcode_to_document(html)

    assert transcoded.content_extracted
    assert "Paragraph 4 of the story" in transcoded.content_element.get_text()


def test_no_content():
    transcoded = Transcoder().transcode_to_document("<html><body> </body></html>")

    assert not transcoded.content_extracted
    assert transcoded.extracted_title is None


def test_content_element_hint():
    html = f"""<html><body>
      <article>{_paragraphs(4, "Hinted paragraph {n} is the one the site keeps its article text in, always.")}</article>
      <div class="story-body">{_paragraphs(8)}</div>
    </body></html>"""

    transcoded = Transcoder().transcode_to_document(html, "https://www.theverge.com/2024/1/1/some-story")

    text = transcoded.content_element.get_text()
    assert transcoded.content_element.find("article") is not None
    assert "Hinted paragraph 1" in text
    assert "Paragraph 1 of the story" not in text


def test_custom_content_element_hint():
    html = f"""<html><body>
      <section>{_paragraphs(4, "Section paragraph {n} holds the article on this site, as configured here.")}</section>
      <div class="story-body">{_paragraphs(8)}</div>
    </body></html>"""
    transcoder = Transcoder(article_content_element_hints=[(re.compile(r"^https?://example\.org/"), "section")])

    transcoded = transcoder.transcode_to_document(html, "http://example.org/news/1")

    assert transcoded.content_element.find("section") is not None
    assert "Paragraph 1 of the story" not in transcoded.content_element.get_text()


def test_urls_resolved_and_rewritten():
    html = f"""<html><body><div class="article-body">
      {_paragraphs(5)}
      <p><img src="/images/photo.jpg"></p>
      <p>See <a href="../other.html">the other story</a> for a longer account of what happened there.</p>
    </div></body></html>"""

    def proxy_images(transformation_input):
        return AttributeTransformationResult(
            transformed_value="http://proxy.example/?u=" + transformation_input.attribute_value,
            original_value_attribute_name="data-original-src",
        )

    transcoder = Transcoder(image_source_transformer=proxy_images)
    transcoded = transcoder.transcode_to_document(html, "http://x.com/news/2024/story.html")

    image = transcoded.content_element.find("img")
    assert image["src"] == "http://proxy.example/?u=http://x.com/images/photo.jpg"
    assert image["data-original-src"] == "http://x.com/images/photo.jpg"
    assert transcoded.content_element.find("a")["href"] == "http://x.com/news/other.html"


def test_resolve_element_url():
    article_url = "http://x.com/a/b.html?page=1"

    assert resolve_element_url("mailto:me@x.com", article_url) == "mailto:me@x.com"
    assert resolve_element_url("?page=2", article_url) == "http://x.com/a/b.html?page=2"
    assert resolve_element_url("c.html", article_url) == "http://x.com/a/c.html"
    assert resolve_element_url("http://y.com/d", article_url) == "http://y.com/d"
    assert resolve_element_url("c.html", "relative/base") == "c.html"


def test_next_page_url_detected():
    html = f"""<html><body>
      <div class="article-body">{_paragraphs(5)}</div>
      <div class="pagination"><a href="/stories/article/2">Next</a></div>
    </body></html>"""

    result = Transcoder().transcode(TranscodingInput(html_content=html, url="http://x.com/stories/article.html"))

    assert result.next_page_url == "http://x.com/stories/article/2"


def test_malformed_link_does_not_break_transcoding():
    html = f"""<html><body>
      <div class="article-body">{_paragraphs(5)}</div>
      <a href="http://[bad/2">Next</a>
    </body></html>"""

    result = Transcoder().transcode(TranscodingInput(html_content=html, url="http://x.com/stories/article.html"))

    assert result.content_extracted
    assert result.next_page_url is None


def test_from_options(monkeypatch):
    monkeypatch.setenv("READABILITY_DONT_WEIGHT_CLASSES", "true")
    monkeypatch.setenv("READABILITY_READING_STYLE", "Novel")

    transcoder = Transcoder.from_options(TranscoderOptions.from_env())

    assert transcoder.dont_weight_classes
    assert not transcoder.dont_strip_unlikelys
    assert transcoder.reading_style is ReadingStyle.NOVEL


def test_transcoder_is_reusable():
    transcoder = Transcoder()

    first = transcoder.transcode_to_document(ARTICLE_HTML)
    second = transcoder.transcode_to_document(ARTICLE_HTML)

    assert first.content_element.get_text() == second.content_element.get_text()
