"""
Tests for multi-page stitching, using an in-memory fetcher.
"""

import pytest

from html_readability.dom import build_document
from html_readability.exceptions import FetchError, TranscodingInputError
from html_readability.fetcher import BaseUrlFetcher
from html_readability.schemas import WebTranscodingInput
from html_readability.web_transcoder import WebTranscoder

FIRST_PAGE_URL = "http://x.com/stories/article.html"


def page_url(number):
    if number == 1:
        return FIRST_PAGE_URL
    return f"http://x.com/stories/article/{number}"


def make_page(number, next_number=None, text_page=None):
    """Article page whose paragraphs name the page they belong to."""
    text_page = text_page or number
    paragraphs = "".join(
        f"<p>This is paragraph {i} of page {text_page}, and it carries enough words "
        f"to count as real article prose for the scorer.</p>"
        for i in range(1, 5)
    )
    next_link = f'<p><a href="{page_url(next_number)}">Next</a></p>' if next_number else ""
    return (
        "<html><head><title>Stitched Article Title Is Long Enough</title></head><body>"
        f'<div class="article-body">{paragraphs}</div>{next_link}'
        "</body></html>"
    )


class FakeFetcher(BaseUrlFetcher):
    def __init__(self, pages):
        self.pages = pages
        self.fetched = []

    def fetch(self, url):
        self.fetched.append(url)
        if url not in self.pages:
            raise FetchError(f"404 for {url}", url=url)
        return self.pages[url]


def _transcode(pages, **kwargs):
    fetcher = FakeFetcher(pages)
    web_transcoder = WebTranscoder(url_fetcher=fetcher, **kwargs)
    result = web_transcoder.transcode(WebTranscodingInput(url=FIRST_PAGE_URL))
    return result, fetcher


def test_pages_are_stitched():
    pages = {
        page_url(1): make_page(1, 2),
        page_url(2): make_page(2, 3),
        page_url(3): make_page(3),
    }

    result, fetcher = _transcode(pages)

    assert fetcher.fetched == [page_url(1), page_url(2), page_url(3)]
    assert result.content_extracted
    assert result.extracted_title == "Stitched Article Title Is Long Enough"
    assert result.pages_count == 3

    document = build_document(result.extracted_content)
    inner = document.find(id="readInner")
    page_divs = inner.find_all("div", class_="page", recursive=False)
    assert [div["id"] for div in page_divs] == [
        "readability-page-1", "readability-page-2", "readability-page-3",
    ]
    assert "paragraph 1 of page 2," in page_divs[1].get_text()
    assert page_divs[1].find("p", class_="page-separator")["title"] == "Page 2"
    # Only the first page keeps its title header
    assert len(document.find_all("h1")) == 1


def test_single_page_not_relabelled():
    result, fetcher = _transcode({page_url(1): make_page(1)})

    document = build_document(result.extracted_content)
    assert fetcher.fetched == [page_url(1)]
    assert result.pages_count == 1
    assert document.find(id="readability-content") is not None
    assert document.find(id="readability-page-1") is None


def test_fetch_failure_keeps_assembled_pages():
    result, fetcher = _transcode({page_url(1): make_page(1, 2)})

    assert fetcher.fetched == [page_url(1), page_url(2)]
    assert result.content_extracted
    assert result.pages_count == 1
    assert "paragraph 1 of page 1," in result.extracted_content


def test_duplicate_page_is_dropped():
    pages = {
        page_url(1): make_page(1, 2),
        # Same text as page 1: a "continue reading" link back to content we have
        page_url(2): make_page(2, 3, text_page=1),
        page_url(3): make_page(3),
    }

    result, fetcher = _transcode(pages)

    assert fetcher.fetched == [page_url(1), page_url(2)]
    assert result.pages_count == 1


def test_visited_page_not_appended_twice():
    pages = {
        page_url(1): make_page(1, 2),
        page_url(2): make_page(2, 3),
        page_url(3): make_page(3, 2),
    }

    result, fetcher = _transcode(pages)

    assert fetcher.fetched == [page_url(1), page_url(2), page_url(3)]
    assert result.pages_count == 3


def test_page_cap():
    pages = {page_url(n): make_page(n, n + 1) for n in range(1, 41)}

    result, fetcher = _transcode(pages)

    assert len(fetcher.fetched) == 30
    assert result.pages_count == 30
    document = build_document(result.extracted_content)
    view_next = document.find("a", string="View Next Page")
    assert view_next["href"] == page_url(31)
    assert document.find(id="readability-page-30") is not None
    assert document.find(id="readability-page-31") is None


def test_without_page_separator():
    pages = {page_url(1): make_page(1, 2), page_url(2): make_page(2)}

    result, _ = _transcode(pages, page_separator_builder=None)

    assert result.pages_count == 2
    assert "page-separator" not in result.extracted_content


def test_custom_page_separator():
    pages = {page_url(1): make_page(1, 2), page_url(2): make_page(2)}

    result, _ = _transcode(pages, page_separator_builder=lambda n: f"<hr class='break-{n}'>")

    document = build_document(result.extracted_content)
    assert document.find("hr", class_="break-2") is not None


def test_nothing_fetched():
    result, _ = _transcode({page_url(1): ""})

    assert not result.content_extracted
    assert not result.title_extracted
    assert result.extracted_content is None


def test_first_page_fetch_error_propagates():
    with pytest.raises(FetchError):
        _transcode({})


def test_empty_url_rejected():
    with pytest.raises(TranscodingInputError):
        WebTranscoder(url_fetcher=FakeFetcher({})).transcode(WebTranscodingInput(url=""))
