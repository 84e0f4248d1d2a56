"""
Pagination detector.

Finds the link to the next page of a multi-page article. Every anchor in
the body is scored on its text, class/id, ancestors, descendants and href
shape; the best href scoring at least MIN_NEXT_PAGE_LINK_SCORE wins.
Links are compared against a "base URL": the current URL with file
extensions, page numbers and index tokens removed.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin, urlsplit

from bs4 import Tag

from .dom import get_attribute, get_class, get_id, get_inner_text
from .patterns import (
    ANY_LETTER, CMS_JUNK_TOKENS, EXTRANEOUS, FIRST_OR_LAST, INTEGER_TEXT, MAILTO_HREF,
    MIN_NEXT_PAGE_LINK_SCORE, NEGATIVE_LINK_PARENT, NEGATIVE_WEIGHT, NEXT_LINK, NEXT_STORY_LINK,
    NON_ALPHA, PAGE, PAGE_NUMBER_SEGMENT, PAGE_WORD_HREF, PAGING_HREF, POSITIVE_WEIGHT, PREV_LINK,
    PURE_PAGE_NUMBER_SEGMENT, SECTION_HREF, TRAILING_PAGE_NUMBER,
)
from .logger import get_module_logger

logger = get_module_logger("pagination")

FRAGMENT = re.compile(r"#.*$")
TRAILING_SLASH = re.compile(r"/$")
DIGIT = re.compile(r"\d")


@dataclass
class _LinkCandidate:
    href: str
    text: str
    score: float = 0.0


def find_base_url(url: str) -> str:
    """
    Normalize a page URL for next-page comparisons.

    Path segments are processed from the last one backwards. File
    extensions and CMS junk are stripped everywhere; the last two segments
    also lose trailing page numbers and are dropped when they are a bare
    page number or too short; a final "index" is dropped.

    Examples:
        http://x.com/articles/3/page2.html → http://x.com/articles/3/page
        http://x.com/story/index.html      → http://x.com/story
    """
    parts = urlsplit(url)
    if not (parts.scheme and parts.netloc):
        return url

    url_slashes = list(reversed(((parts.path or "/") + "/").split("/")))
    # Always the empty piece after the trailing slash, so it never has letters
    first_segment_has_letters = ANY_LETTER.search(url_slashes[0]) is not None

    cleaned_segments = []
    for i, segment in enumerate(url_slashes):
        # Split off anything that looks like a file type
        if "." in segment:
            possible_type = segment.split(".")[1]
            if not NON_ALPHA.search(possible_type):
                segment = segment.split(".")[0]

        for token in CMS_JUNK_TOKENS:
            segment = segment.replace(token, "")

        if i < 2 and PAGE_NUMBER_SEGMENT.search(segment):
            segment = TRAILING_PAGE_NUMBER.sub("", segment)

        delete = (
            (i < 2 and PURE_PAGE_NUMBER_SEGMENT.search(segment) is not None)
            or (i == 0 and segment.lower() == "index")
            or (i < 2 and len(segment) < 3 and not first_segment_has_letters)
        )
        if not delete:
            cleaned_segments.append(segment)

    cleaned_segments.reverse()
    return f"{parts.scheme}://{parts.netloc}{'/'.join(cleaned_segments)}"


def _parse_int(text: str) -> Optional[int]:
    if not INTEGER_TEXT.fullmatch(text):
        return None
    return int(text.strip())


def _class_and_id(element: Tag) -> str:
    return f"{get_class(element)} {get_id(element)}"


def _score_link(link: _LinkCandidate, anchor: Tag, link_text: str, base_url: str) -> None:
    href = link.href

    # Could still be the link, but the odds are lower
    if base_url.lower() not in href.lower():
        link.score -= 25

    link_data = f"{link_text} {_class_and_id(anchor)}"

    if NEXT_LINK.search(link_data) and not NEXT_STORY_LINK.search(link_data):
        link.score += 50

    if PAGE.search(link_data):
        link.score += 25

    # "last" is fine next to a "next"; on its own it's bad
    if FIRST_OR_LAST.search(link_data) and not NEXT_LINK.search(link.text):
        link.score -= 65

    if NEGATIVE_WEIGHT.search(link_data) or EXTRANEOUS.search(link_data):
        link.score -= 50

    if PREV_LINK.search(link_data):
        link.score -= 200

    positive_node_match = False
    negative_node_match = False
    for parent in anchor.parents:
        parent_class_and_id = _class_and_id(parent)

        if not positive_node_match and (PAGE.search(parent_class_and_id) or NEXT_LINK.search(parent_class_and_id)):
            positive_node_match = True
            link.score += 25

        if (not negative_node_match
                and (NEGATIVE_WEIGHT.search(parent_class_and_id) or NEGATIVE_LINK_PARENT.search(parent_class_and_id))
                and not POSITIVE_WEIGHT.search(parent_class_and_id)):
            negative_node_match = True
            link.score -= 25

    positive_descendant_match = False
    negative_descendant_match = False
    for descendant in anchor.find_all(True):
        descendant_data = (
            f"{get_inner_text(descendant)} {_class_and_id(descendant)} {get_attribute(descendant, 'alt')}"
        )

        if not positive_descendant_match and NEXT_LINK.search(descendant_data):
            positive_descendant_match = True
            link.score += 12.5

        if not negative_descendant_match and PREV_LINK.search(descendant_data):
            negative_descendant_match = True
            link.score -= 100

    # /page/2/, /pagenum/2, ?p=3, ?page=11, ?pagination=34
    if PAGING_HREF.search(href) or PAGE_WORD_HREF.search(href) or SECTION_HREF.search(href):
        link.score += 25

    if EXTRANEOUS.search(href):
        link.score -= 15

    # Numbered links, with a bias towards lower page numbers
    number = _parse_int(link_text)
    if number is not None:
        if number == 1:
            link.score -= 10
        else:
            link.score += max(0, 10 - number)


def find_next_page_link(body: Tag, url: str) -> Optional[str]:
    """
    Look for a link to the next page of the article.

    Args:
        body: Document body (links should already be absolute)
        url: URL of the current page

    Returns:
        Absolute URL of the next page, or None when no link scores at least
        MIN_NEXT_PAGE_LINK_SCORE
    """
    base_url = find_base_url(url)
    base_host = urlsplit(base_url).hostname
    possible_pages: dict[str, _LinkCandidate] = {}

    for anchor in body.find_all("a"):
        href = get_attribute(anchor, "href")
        if not href or MAILTO_HREF.search(href):
            continue

        href = TRAILING_SLASH.sub("", FRAGMENT.sub("", href))
        if not href or href == base_url or href == url:
            continue

        try:
            href_parts = urlsplit(href)
        except ValueError:
            logger.debug(f"Skipping malformed link: {href}")
            continue

        # Different domain
        if href_parts.scheme and href_parts.netloc and href_parts.hostname != base_host:
            continue

        link_text = get_inner_text(anchor)
        if EXTRANEOUS.search(link_text):
            continue

        # Without a digit past the base URL it can't be a next page link
        if not DIGIT.search(href.replace(base_url, "")):
            continue

        link = possible_pages.get(href)
        if link is None:
            link = possible_pages[href] = _LinkCandidate(href=href, text=link_text)
        else:
            link.text += " | " + link_text

        _score_link(link, anchor, link_text, base_url)

    top_page = None
    for link in possible_pages.values():
        if link.score >= MIN_NEXT_PAGE_LINK_SCORE and (top_page is None or link.score > top_page.score):
            top_page = link

    if top_page is None:
        return None

    logger.debug(f"Next page link: {top_page.href} (score {top_page.score})")
    return urljoin(base_url, TRAILING_SLASH.sub("", top_page.href))
