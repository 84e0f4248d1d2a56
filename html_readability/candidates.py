"""
Candidate discovery: from a prepared document to the top candidate element.

Stages, in pipeline order:
  1. strip_unlikely_candidates      - drop comment/sidebar/footer-looking subtrees,
                                      turn text-only divs into paragraphs
  2. collapse_redundant_paragraph_divs - hoist <p> out of divs that hold nothing else
  3. find_candidates                - score the parents/grandparents of paragraphs
  4. determine_top_candidate        - weight by link density and pick the winner

Scores live in the ScoringContext passed in by the caller.
"""

from typing import Iterable, Optional, Pattern

from bs4 import BeautifulSoup, Tag

from .dom import (
    get_class, get_id, get_inner_html, get_or_create_body, is_text_node,
    rename, single_child_element, traverse_elements,
)
from .patterns import (
    ARTICLE_CONTENT_ELEMENT_HINTS, DIV_TO_P_ELEMENTS_PATTERN, MAX_POINTS_FOR_SEGMENTS_COUNT,
    MIN_PARAGRAPH_LENGTH, OK_MAYBE_ITS_A_CANDIDATE, PARAGRAPH_SEGMENT_LENGTH,
    READABILITY_STYLED_CSS_CLASS, READABILITY_STYLED_STYLE, UNLIKELY_CANDIDATES,
)
from .scoring import ScoringContext, get_segments_count
from .logger import get_module_logger

logger = get_module_logger("candidates")

# Tags never removed as unlikely candidates (html is the document root)
UNLIKELY_EXEMPT_TAGS = ("html", "body", "a")

# Scores are never handed to these (the document root)
ROOT_NAMES = ("html", "[document]")


def strip_unlikely_candidates(document: BeautifulSoup) -> int:
    """
    Remove subtrees whose class/id look like page furniture, and normalize divs.

    A div with no block-level markup inside becomes a <p>. A div that does
    contain blocks gets each of its bare text children wrapped in a styled
    inline <p>, so the text can be scored like any other paragraph.

    Returns:
        Number of removed subtrees
    """
    removed = 0

    def visit(element: Tag) -> bool:
        nonlocal removed
        match_string = f"{get_class(element)} {get_id(element)}"

        if (element.name not in UNLIKELY_EXEMPT_TAGS
                and UNLIKELY_CANDIDATES.search(match_string)
                and not OK_MAYBE_ITS_A_CANDIDATE.search(match_string)
                and element.parent is not None):
            logger.debug(f"Removing unlikely candidate: {element.name} '{match_string.strip()}'")
            element.extract()
            removed += 1
            return False

        if element.name == "div":
            if not DIV_TO_P_ELEMENTS_PATTERN.search(get_inner_html(element)):
                rename(element, "p")
            else:
                _wrap_text_children(document, element)

        return True

    traverse_elements(document, visit)
    return removed


def _wrap_text_children(document: BeautifulSoup, element: Tag) -> None:
    """Replace each non-blank text child with an inline paragraph holding the raw text."""
    for child in list(element.contents):
        if not is_text_node(child) or not child.strip():
            continue

        paragraph = document.new_tag("p")
        paragraph["class"] = READABILITY_STYLED_CSS_CLASS
        paragraph["style"] = READABILITY_STYLED_STYLE
        # Raw text, whitespace included
        paragraph.string = str(child)
        child.replace_with(paragraph)


def collapse_redundant_paragraph_divs(document: BeautifulSoup) -> None:
    """Replace every div whose only child is a <p> with that paragraph."""

    def visit(element: Tag) -> bool:
        if element.name != "div" or element.parent is None:
            return True

        paragraph = single_child_element(element, "p")
        if paragraph is None:
            return True

        element.replace_with(paragraph.extract())
        # The paragraph's children still need a visit
        for child in reversed([c for c in paragraph.contents if isinstance(c, Tag)]):
            traverse_elements(child, visit)
        return False

    traverse_elements(document, visit)


def get_article_content_element_hint(
    url: Optional[str],
    hints: Iterable[tuple[Pattern, str]] = ARTICLE_CONTENT_ELEMENT_HINTS
) -> Optional[str]:
    """Tag name known to hold the article for this URL, if any."""
    if not url:
        return None

    url = url.strip()
    for url_pattern, tag_name in hints:
        if url_pattern.search(url):
            return tag_name
    return None


def find_candidates(
    document: BeautifulSoup,
    context: ScoringContext,
    article_content_element_hint: Optional[str] = None
) -> list:
    """
    Score paragraph containers and return the Candidate Set.

    Every paragraph of at least MIN_PARAGRAPH_LENGTH characters is worth
    1 point, plus one per comma segment, plus one per 100 characters (up to
    3). Its parent gets the full score and its grandparent half of it.

    When a hint names the element that holds the article, the first such
    element is the sole candidate and scoring is skipped.
    """
    if article_content_element_hint:
        hinted = document.find(article_content_element_hint)
        if hinted is not None:
            logger.debug(f"Using content element hint: <{article_content_element_hint}>")
            context.add_candidate(hinted)
            return context.candidates

    for paragraph in document.find_all("p"):
        inner_text = context.inner_text(paragraph)
        if len(inner_text) < MIN_PARAGRAPH_LENGTH:
            continue

        parent = paragraph.parent
        grand_parent = parent.parent if parent is not None else None

        score = 1
        score += get_segments_count(inner_text, ",")
        score += min(len(inner_text) // PARAGRAPH_SEGMENT_LENGTH, MAX_POINTS_FOR_SEGMENTS_COUNT)

        if parent is not None and parent.name not in ROOT_NAMES:
            context.add_candidate(parent)
            context.add_points(parent, score)

        if grand_parent is not None and grand_parent.name not in ROOT_NAMES:
            context.add_candidate(grand_parent)
            context.add_points(grand_parent, score // 2)

    logger.debug(f"Found {len(context.candidates)} candidates")
    return context.candidates


def determine_top_candidate(
    document: BeautifulSoup,
    context: ScoringContext,
    candidates: list
) -> Tag:
    """
    Pick the candidate with the highest link-density-weighted score.

    Each candidate's score is overwritten with score * (1 - link density).
    Ties go to the candidate seen first. Without a usable winner (none at
    all, or the body itself) a new detached div takes over all of the
    body's children; its parent is None.
    """
    top_candidate = None
    top_score = 0.0

    for candidate in candidates:
        score = (1.0 - context.links_density(candidate)) * context.get_score(candidate)
        context.set_score(candidate, score)

        if top_candidate is None or score > top_score:
            top_candidate = candidate
            top_score = score

    if top_candidate is None or top_candidate.name == "body":
        logger.debug("No usable top candidate, falling back to the whole body")
        top_candidate = document.new_tag("div")
        body = get_or_create_body(document)
        for child in list(body.contents):
            top_candidate.append(child.extract())

    return top_candidate
