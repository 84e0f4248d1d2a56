"""
Article title extraction.

The <title> of a page usually carries the site name as well
("Story headline - Site Name", "Site: Headline"). We try to cut the site
name off, fall back to a lone h1/h2 when the title is too short or too long,
and go back to the full document title whenever the cut leaves too few
words to be trusted.
"""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from .dom import get_inner_text, get_or_create_body
from .patterns import (
    ARTICLE_TITLE_COLON_1, ARTICLE_TITLE_COLON_2, ARTICLE_TITLE_DASH_1, ARTICLE_TITLE_DASH_2,
    ARTICLE_TITLE_DASH_3, MAX_ARTICLE_TITLE_LENGTH, MIN_ARTICLE_TITLE_LENGTH,
    MIN_ARTICLE_TITLE_WORDS_COUNT_1, MIN_ARTICLE_TITLE_WORDS_COUNT_2, TITLE_WHITESPACES,
)


def _words_count(text: str) -> int:
    # Single-space split, so leading/trailing spaces count as (empty) words
    return len(text.split(" "))


def get_document_title(document: BeautifulSoup) -> str:
    # Inline <svg> graphics carry their own <title>, so the head wins
    title_element = document.head.find("title") if document.head is not None else None
    if title_element is None:
        title_element = document.find("title")
    if title_element is None:
        return ""
    return title_element.get_text()


def select_title_part(document_title: str) -> Optional[str]:
    """
    Cut the site name off a "Headline - Site" / "Site: Headline" title.

    The text before the last separator is tried first; when it has fewer
    than 3 words the text after the first separator is used instead.
    Returns None when the title has no separator.
    """
    if ARTICLE_TITLE_DASH_1.search(document_title):
        title = ARTICLE_TITLE_DASH_2.sub(r"\1", document_title)
        if _words_count(title) < MIN_ARTICLE_TITLE_WORDS_COUNT_1:
            title = ARTICLE_TITLE_DASH_3.sub(r"\1", document_title)
        return title

    if ": " in document_title:
        title = ARTICLE_TITLE_COLON_1.sub(r"\1", document_title)
        if _words_count(title) < MIN_ARTICLE_TITLE_WORDS_COUNT_1:
            title = ARTICLE_TITLE_COLON_2.sub(r"\1", document_title)
        return title

    return None


def extract_article_title(document: BeautifulSoup, dont_normalize_spaces: bool = False) -> Optional[str]:
    """Work out the article title, or None when there is nothing to show."""
    body = get_or_create_body(document)
    document_title = get_document_title(document)

    current_title = select_title_part(document_title)
    if current_title is None:
        current_title = document_title
        if not MIN_ARTICLE_TITLE_LENGTH <= len(current_title) <= MAX_ARTICLE_TITLE_LENGTH:
            headers = body.find_all("h1")
            if not headers:
                # No level one headers, give level two a chance
                headers = body.find_all("h2")
            if len(headers) == 1:
                current_title = get_inner_text(headers[0], dont_normalize_spaces)

    current_title = (current_title or "").strip()

    if document_title and _words_count(current_title) <= MIN_ARTICLE_TITLE_WORDS_COUNT_2:
        current_title = document_title

    return current_title or None


def create_article_title_element(document: BeautifulSoup, title: Optional[str]) -> Optional[Tag]:
    if not title:
        return None
    title_element = document.new_tag("h1")
    title_element.string = title
    return title_element


def extract_title(document: BeautifulSoup) -> Optional[str]:
    """Read the title back from the first h1 of a transcoded document."""
    first_h1 = document.find("h1")
    if first_h1 is None:
        return None

    title = TITLE_WHITESPACES.sub(" ", first_h1.get_text()).strip()
    return title or None
