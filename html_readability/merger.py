"""
Sibling merger: builds the article content container around the top candidate.

Content is often split across siblings of the best element (a preamble,
paragraphs separated by ads we removed, ...). Siblings that score well
enough, share the winner's class, or read like real prose paragraphs are
pulled into the container alongside the winner.
"""

from bs4 import BeautifulSoup, Tag

from .dom import child_elements, get_class, get_id
from .patterns import (
    CONTENT_DIV_ID, END_OF_SENTENCE, MAX_SIBLING_PARAGRAPH_LINKS_DENSITY,
    MIN_SIBLING_PARAGRAPH_LENGTH, MIN_SIBLING_SCORE_THRESHOLD, SIBLING_SCORE_THRESHOLD_COEFFICIENT,
)
from .scoring import ScoringContext
from .logger import get_module_logger

logger = get_module_logger("merger")

# Appended as they are; anything else is rewrapped in a div
KEPT_SIBLING_TAGS = ("div", "p")

LINKS_DENSITY_EPSILON = 1e-6


def create_article_content_element(
    document: BeautifulSoup,
    context: ScoringContext,
    top_candidate: Tag
) -> Tag:
    """Return a new div#readability-content holding the winner and related siblings."""
    article_content = document.new_tag("div", attrs={"id": CONTENT_DIV_ID})

    parent = top_candidate.parent
    if parent is None:
        # Detached winner built from the whole body: no siblings to look at
        article_content.append(top_candidate)
        return article_content

    top_score = context.get_score(top_candidate)
    threshold = max(MIN_SIBLING_SCORE_THRESHOLD, SIBLING_SCORE_THRESHOLD_COEFFICIENT * top_score)
    top_class = get_class(top_candidate)

    appended = 0
    for sibling in child_elements(parent):
        if not _should_append(context, sibling, top_candidate, top_score, top_class, threshold):
            continue

        if sibling.name in KEPT_SIBLING_TAGS:
            article_content.append(sibling.extract())
        else:
            # A form, td or similar: make it a div so cleaning treats it like the rest
            article_content.append(_rewrap_as_div(document, sibling))
        appended += 1

    logger.debug(f"Merged {appended} elements (threshold {threshold:.2f})")
    return article_content


def _should_append(
    context: ScoringContext,
    sibling: Tag,
    top_candidate: Tag,
    top_score: float,
    top_class: str,
    threshold: float
) -> bool:
    if sibling is top_candidate:
        return True

    content_bonus = 0.0
    if top_class and get_class(sibling) == top_class:
        content_bonus += top_score * SIBLING_SCORE_THRESHOLD_COEFFICIENT

    if context.get_score(sibling) + content_bonus >= threshold:
        return True

    if sibling.name != "p":
        return False

    inner_text = context.inner_text(sibling)
    if not inner_text:
        return False

    links_density = context.links_density(sibling)
    if len(inner_text) >= MIN_SIBLING_PARAGRAPH_LENGTH:
        return links_density < MAX_SIBLING_PARAGRAPH_LINKS_DENSITY

    # Short paragraph: only if it has no links and ends a sentence
    return links_density < LINKS_DENSITY_EPSILON and END_OF_SENTENCE.search(inner_text) is not None


def _rewrap_as_div(document: BeautifulSoup, element: Tag) -> Tag:
    div = document.new_tag("div")
    if get_id(element):
        div["id"] = get_id(element)
    if get_class(element):
        div["class"] = get_class(element)
    for child in list(element.contents):
        div.append(child.extract())
    element.extract()
    return div
