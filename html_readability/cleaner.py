"""
Cleaning pipeline for the article content container.

The passes run in a fixed order; later passes (conditional cleaning in
particular) depend on junk already being gone:

  1. strip inline styles (except on paragraphs we styled ourselves)
  2. collapse runs of <br>
  3. remove forms and non-video objects
  4. remove a lone h1 / a lone h2 (it duplicates the article title)
  5. remove iframes
  6. remove headers with a negative class weight or many links
  7. conditionally remove "fishy" tables, lists and divs
  8. remove empty paragraphs
  9. remove <br> directly before a paragraph
"""

from bs4 import Tag

from .dom import (
    get_attribute, get_class, get_inner_html, is_text_node, remove_elements,
    single_child_element, traverse_elements,
)
from .patterns import (
    CLASS_WEIGHT_THRESHOLD, LIKELY_PARAGRAPH_DIV, LIS_COUNT_THRESHOLD, MAX_DENSITY_FOR_ELEMENTS_WITH_GREATER_CLASS_WEIGHT,
    MAX_DENSITY_FOR_ELEMENTS_WITH_SMALLER_CLASS_WEIGHT, MAX_EMBEDS_COUNT, MAX_HEADER_LINKS_DENSITY,
    MAX_IMAGES_IN_SHORT_SEGMENTS_COUNT, MIN_COMMA_SEGMENTS, MIN_INNER_TEXT_LENGTH,
    MIN_INNER_TEXT_LENGTH_IN_ELEMENTS_WITH_EMBED, READABILITY_STYLED_CSS_CLASS, VIDEO,
)
from .scoring import ScoringContext, get_segments_count
from .logger import get_module_logger

logger = get_module_logger("cleaner")

EMBED_TAGS = ("object", "embed")
LIST_TAGS = ("ul", "ol")


def prepare_article_content(content: Tag, context: ScoringContext) -> None:
    """Run every cleaning pass over the content container, in order."""
    clean_styles(content)
    kill_breaks(content)

    clean(content, "form")
    clean(content, "object")

    # A single h1/h2 is most likely the article title, which we render ourselves
    if len(content.find_all("h1")) == 1:
        clean(content, "h1")
    if len(content.find_all("h2")) == 1:
        clean(content, "h2")

    clean(content, "iframe")
    clean_headers(content, context)

    # Last, as the passes above may have removed what made these look fishy
    for tag_name in ("table", "ul", "div"):
        clean_conditionally(content, context, tag_name)

    remove_empty_paragraphs(content, context)
    remove_breaks_before_paragraphs(content)


def clean_styles(root: Tag) -> None:
    """Drop the style attribute everywhere except on our own styled paragraphs."""

    def visit(element: Tag) -> bool:
        if READABILITY_STYLED_CSS_CLASS not in get_class(element) and "style" in element.attrs:
            del element["style"]
        return True

    traverse_elements(root, visit)


def _is_break_filler(node) -> bool:
    if isinstance(node, Tag):
        return node.name == "br"
    # &nbsp; arrives as \xa0, which str.strip() treats as whitespace
    return is_text_node(node) and not node.strip()


def kill_breaks(root: Tag) -> None:
    """Collapse each run of <br> (and the whitespace around it) into a single <br>."""
    for br in root.find_all("br"):
        if br.parent is None:
            continue  # swallowed by an earlier run

        filler = []
        sibling = br.next_sibling
        while sibling is not None and _is_break_filler(sibling):
            filler.append(sibling)
            sibling = sibling.next_sibling

        for node in filler:
            node.extract()


def clean(root: Tag, tag_name: str) -> None:
    """
    Remove every `tag_name` element under root.

    Objects and embeds pointing at a known video host are kept, since
    people usually want to see those.
    """
    is_embed = tag_name in EMBED_TAGS

    to_remove = []
    for element in root.find_all(tag_name):
        if is_embed and _is_video(element):
            continue
        to_remove.append(element)

    remove_elements(to_remove)


def _is_video(element: Tag) -> bool:
    attributes = "|".join(get_attribute(element, name) for name in element.attrs)
    return bool(VIDEO.search(attributes) or VIDEO.search(get_inner_html(element)))


def clean_headers(root: Tag, context: ScoringContext) -> None:
    """Remove h1-h6 with a negative class weight or a link density above 0.33."""
    to_remove = []
    for level in range(1, 7):
        for header in root.find_all(f"h{level}"):
            if (context.class_weight(header) < 0
                    or context.links_density(header) > MAX_HEADER_LINKS_DENSITY):
                to_remove.append(header)

    remove_elements(to_remove)


def element_looks_like_paragraph_div(element: Tag) -> bool:
    """A div with a paragraph-ish class whose only child is a <p>."""
    if element.name != "div":
        return False

    if not LIKELY_PARAGRAPH_DIV.search(get_class(element)):
        return False

    return single_child_element(element, "p") is not None


def is_fishy(element: Tag, context: ScoringContext) -> bool:
    """
    Decide whether a table/list/div is junk.

    "Fishy" weighs the class/id weight and score against counts of
    paragraphs, images, list items, inputs and embeds, text length and
    link density.
    """
    weight = context.class_weight(element)
    score = context.get_score(element)

    if weight + score < 0:
        return True

    if element_looks_like_paragraph_div(element):
        return False

    inner_text = context.inner_text(element)

    # Plenty of commas reads like prose
    if get_segments_count(inner_text, ",") >= MIN_COMMA_SEGMENTS:
        return False

    ps_count = len(element.find_all("p"))
    imgs_count = len(element.find_all("img"))
    lis_count = len(element.find_all("li"))
    inputs_count = len(element.find_all("input"))
    # Video embeds don't count against the element
    embeds_count = sum(
        1 for embed in element.find_all("embed")
        if not VIDEO.search(get_attribute(embed, "src"))
    )

    links_density = context.links_density(element)
    inner_text_length = len(inner_text)

    return (
        imgs_count > ps_count
        or (lis_count - LIS_COUNT_THRESHOLD > ps_count and element.name not in LIST_TAGS)
        or inputs_count > ps_count // 3
        or (inner_text_length < MIN_INNER_TEXT_LENGTH
            and (imgs_count == 0 or imgs_count > MAX_IMAGES_IN_SHORT_SEGMENTS_COUNT))
        or (weight < CLASS_WEIGHT_THRESHOLD
            and links_density > MAX_DENSITY_FOR_ELEMENTS_WITH_SMALLER_CLASS_WEIGHT)
        or (weight >= CLASS_WEIGHT_THRESHOLD
            and links_density > MAX_DENSITY_FOR_ELEMENTS_WITH_GREATER_CLASS_WEIGHT)
        or embeds_count > MAX_EMBEDS_COUNT
        or (embeds_count == MAX_EMBEDS_COUNT
            and inner_text_length < MIN_INNER_TEXT_LENGTH_IN_ELEMENTS_WITH_EMBED)
    )


def clean_conditionally(root: Tag, context: ScoringContext, tag_name: str) -> None:
    """Remove the `tag_name` elements under root that look fishy."""
    to_remove = [element for element in root.find_all(tag_name) if is_fishy(element, context)]
    if to_remove:
        logger.debug(f"Conditionally removing {len(to_remove)} <{tag_name}> elements")
    remove_elements(to_remove)


def remove_empty_paragraphs(root: Tag, context: ScoringContext) -> None:
    """Remove paragraphs without text, images, embeds or objects."""
    to_remove = [
        paragraph for paragraph in root.find_all("p")
        if not context.inner_text(paragraph)
        and not paragraph.find(["img", "embed", "object"])
    ]
    remove_elements(to_remove)


def remove_breaks_before_paragraphs(root: Tag) -> None:
    """Remove a <br> that directly precedes a paragraph (whitespace in between is fine)."""
    for paragraph in root.find_all("p"):
        sibling = paragraph.previous_sibling
        while sibling is not None and is_text_node(sibling) and not sibling.strip():
            sibling = sibling.previous_sibling
        if isinstance(sibling, Tag) and sibling.name == "br":
            sibling.extract()
