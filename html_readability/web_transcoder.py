"""
Web transcoder: fetches an article and stitches its pages together.

The first page is transcoded normally. While a next-page link is found,
the linked page is fetched, transcoded, checked against the content
assembled so far (repeated "continue reading" links lead back to pages we
already have) and appended as div#readability-page-N.page. Pages are
fetched one after another in link order, since the duplicate check needs
everything appended before it.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from .dom import find_by_id, get_inner_html, parse_fragment, serialize_document
from .exceptions import FetchError, TranscodingInputError
from .fetcher import BaseUrlFetcher, UrlFetcher
from .patterns import INNER_DIV_ID, MAX_PAGES, PAGE_CSS_CLASS, PAGE_ID_PREFIX
from .schemas import WebTranscodingInput, WebTranscodingResult
from .transcoder import Transcoder
from .logger import get_module_logger

logger = get_module_logger("web_transcoder")

PageSeparatorBuilder = Callable[[int], str]

# Shorter first paragraphs are too generic to prove a duplicate
MIN_DUPLICATE_CHECK_MARKUP_LENGTH = 100

TRAILING_SLASH = re.compile(r"/$")


def default_page_separator_builder(page_number: int) -> str:
    return f"<p class='page-separator' title='Page {page_number}'>&sect;</p>"


@dataclass
class _StitchingState:
    """Page counter and visit list of one transcode() call."""
    page_number: int = 1
    parsed_pages: list[str] = field(default_factory=list)
    appended: int = 0


class WebTranscoder:
    """Downloads a (possibly multi-page) article and makes it readable."""

    def __init__(
        self,
        transcoder: Optional[Transcoder] = None,
        url_fetcher: Optional[BaseUrlFetcher] = None,
        page_separator_builder: Optional[PageSeparatorBuilder] = default_page_separator_builder
    ):
        self.transcoder = transcoder or Transcoder()
        self.url_fetcher = url_fetcher or UrlFetcher()
        self.page_separator_builder = page_separator_builder

    def transcode(self, web_transcoding_input: WebTranscodingInput) -> WebTranscodingResult:
        """
        Fetch the article at the input URL, following next-page links.

        Raises:
            TranscodingInputError: If the URL is empty
            FetchError: If the first page can't be downloaded
        """
        url = web_transcoding_input.url
        if not url:
            raise TranscodingInputError("url can't be empty", argument="url")

        # The first page goes on the visit list before anything else, so it
        # can't be appended to itself
        state = _StitchingState(parsed_pages=[TRAILING_SLASH.sub("", url)])

        html_content = self.url_fetcher.fetch(url)
        if not html_content:
            logger.warning(f"Nothing fetched from {url}")
            return WebTranscodingResult(content_extracted=False, title_extracted=False)

        transcoded = self.transcoder.transcode_to_document(html_content, url)
        document = transcoded.document

        if transcoded.next_page_url:
            self._append_next_page(document, transcoded.next_page_url, state)

        if state.appended > 0:
            # Give the first page the same addressing as the appended ones
            first_page = find_by_id(document, INNER_DIV_ID).find("div", recursive=False)
            first_page["id"] = f"{PAGE_ID_PREFIX}1"
            first_page["class"] = PAGE_CSS_CLASS
            logger.info(f"Stitched {state.appended + 1} pages")

        extracted_content = serialize_document(document, web_transcoding_input.dom_serialization_params)

        return WebTranscodingResult(
            content_extracted=transcoded.content_extracted,
            title_extracted=transcoded.extracted_title is not None,
            extracted_content=extracted_content,
            extracted_title=transcoded.extracted_title,
            pages_count=state.appended + 1,
        )

    def _append_next_page(self, document: BeautifulSoup, url: str, state: _StitchingState) -> None:
        state.page_number += 1
        content_div = find_by_id(document, INNER_DIV_ID)

        if state.page_number > MAX_PAGES:
            logger.info(f"Reached {MAX_PAGES} pages, linking to the rest")
            for node in parse_fragment(
                f"<div style='text-align: center'><a href='{url}'>View Next Page</a></div>"
            ):
                content_div.append(node)
            return

        try:
            next_content = self.url_fetcher.fetch(url)
        except FetchError as e:
            logger.warning(f"Stopping at page {state.page_number}: {e.message}")
            return

        if not next_content:
            return

        next_document = self.transcoder.transcode_to_document(next_content, url)
        next_inner = find_by_id(next_document.document, INNER_DIV_ID)

        header = next_inner.find("h1", recursive=False)
        if header is not None:
            header.extract()

        if self._is_duplicate(content_div, next_inner):
            logger.warning(f"Page {url} repeats content we already have, skipping")
            state.parsed_pages.append(url)
            return

        next_div = document.new_tag("div")
        if self.page_separator_builder is not None:
            for node in parse_fragment(self.page_separator_builder(state.page_number)):
                next_div.append(node)

        next_div["id"] = f"{PAGE_ID_PREFIX}{state.page_number}"
        next_div["class"] = PAGE_CSS_CLASS
        for node in list(next_inner.contents):
            next_div.append(node.extract())

        content_div.append(next_div)
        state.parsed_pages.append(url)
        state.appended += 1
        logger.info(f"Appended page {state.page_number}: {url}")

        next_page_url = next_document.next_page_url
        if next_page_url and next_page_url not in state.parsed_pages:
            self._append_next_page(document, next_page_url, state)

    @staticmethod
    def _is_duplicate(content_div: Tag, next_inner: Tag) -> bool:
        """The new page's first paragraph already appears in the assembled text."""
        first_paragraph = next_inner.find("p")
        if first_paragraph is None or len(get_inner_html(first_paragraph)) <= MIN_DUPLICATE_CHECK_MARKUP_LENGTH:
            return False

        existing_text = content_div.get_text()
        paragraph_text = first_paragraph.get_text()
        if not existing_text or not paragraph_text:
            return False

        return paragraph_text.lower() in existing_text.lower()
