"""
Tree helpers on top of BeautifulSoup.

Everything the extraction stages need from the parsed tree lives here:
building a document, reading text and markup, attribute access,
pre-order traversal and serialization. Documents are parsed with
multi_valued_attributes=None so "class" stays the raw attribute string,
which is what the class/id keyword patterns are written against.
"""

import copy
from typing import Callable, Iterable, Optional

from bs4 import BeautifulSoup, Doctype, NavigableString, Tag
from bs4.element import PreformattedString

from .patterns import NORMALIZE_SPACES
from .schemas import DomSerializationParams
from .logger import get_module_logger

logger = get_module_logger("dom")

# Parser fallback chain: html5lib implements the WHATWG algorithm and copes
# with the worst tag soup; lxml is faster but less faithful; html.parser is
# always available.
PARSER_CHAIN = ("html5lib", "lxml", "html.parser")


def build_document(html: str) -> BeautifulSoup:
    """Parse markup into a mutable tree, trying each parser in turn."""
    last_error = None
    for features in PARSER_CHAIN:
        try:
            return BeautifulSoup(html, features, multi_valued_attributes=None)
        except Exception as e:
            logger.warning(f"{features} parsing failed: {e}")
            last_error = e
    raise last_error


def parse_fragment(markup: str) -> list:
    """Parse a markup fragment and return its top-level nodes, detached."""
    fragment = build_document(markup)
    if fragment.body is None:
        nodes = list(fragment.contents)
    else:
        # html5lib hoists leading head-only tags (meta, link) into <head>
        head_nodes = list(fragment.head.contents) if fragment.head is not None else []
        nodes = head_nodes + list(fragment.body.contents)
    return [node.extract() for node in nodes]


def get_or_create_body(document: BeautifulSoup) -> Tag:
    """Return the document body, synthesizing html/body if the parse lost them."""
    body = document.body
    if body is not None:
        return body

    html_element = document.find("html")
    if html_element is None:
        html_element = document.new_tag("html")
        document.append(html_element)

    body = document.new_tag("body")
    html_element.append(body)
    return body


def get_or_create_head(document: BeautifulSoup) -> Tag:
    head = document.head
    if head is not None:
        return head

    head = document.new_tag("head")
    get_or_create_body(document).insert_before(head)
    return head


def get_attribute(element: Tag, name: str, default: str = "") -> str:
    value = element.get(name)
    if value is None:
        return default
    if isinstance(value, list):
        return " ".join(value)
    return value


def set_attribute(element: Tag, name: str, value: Optional[str]) -> None:
    """Set an attribute; None removes it."""
    if value is None:
        if name in element.attrs:
            del element[name]
        return
    element[name] = value


def get_class(element: Tag) -> str:
    return get_attribute(element, "class")


def get_id(element: Tag) -> str:
    return get_attribute(element, "id")


def get_inner_text(node, dont_normalize_spaces: bool = False) -> str:
    """
    Text content of a node, trimmed.

    Runs of two or more whitespace characters collapse to a single space
    unless dont_normalize_spaces is set.
    """
    if isinstance(node, Tag):
        text = node.get_text()
    elif isinstance(node, NavigableString):
        text = str(node)
    else:
        raise TypeError(f"Nodes of type '{type(node).__name__}' are not supported.")

    text = (text or "").strip()
    if dont_normalize_spaces:
        return text
    return NORMALIZE_SPACES.sub(" ", text)


def get_inner_html(element: Tag) -> str:
    return element.decode_contents()


def set_inner_html(element: Tag, markup: str) -> None:
    """Replace an element's children with the parsed markup."""
    nodes = parse_fragment(markup)
    element.clear()
    for node in nodes:
        element.append(node)


def rename(element: Tag, name: str) -> None:
    element.name = name


def is_text_node(node) -> bool:
    """Plain text node (comments, doctypes and CDATA don't count)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def child_elements(element: Tag) -> list:
    return [child for child in element.contents if isinstance(child, Tag)]


def significant_children(element: Tag) -> list:
    """Child nodes, ignoring whitespace-only text between tags."""
    return [
        child for child in element.contents
        if isinstance(child, Tag) or (is_text_node(child) and child.strip())
    ]


def single_child_element(element: Tag, name: str) -> Optional[Tag]:
    """The only significant child if it is an element called `name`, else None."""
    children = significant_children(element)
    if len(children) == 1 and isinstance(children[0], Tag) and children[0].name == name:
        return children[0]
    return None


def traverse_elements(root: Tag, visit: Callable[[Tag], bool]) -> None:
    """
    Depth-first, pre-order walk over the elements under (and including) root.

    visit() returns False when it removed the element, in which case the
    element's descendants are skipped. Children are read after visit() runs,
    so nodes it inserts are walked too. An explicit stack keeps deep trees
    clear of the recursion limit.
    """
    stack = [root]
    while stack:
        element = stack.pop()
        if visit(element) is False:
            continue
        stack.extend(reversed(child_elements(element)))


def remove_elements(elements: Iterable[Tag]) -> None:
    for element in elements:
        element.extract()


def find_by_id(root: Tag, element_id: str) -> Optional[Tag]:
    return root.find(id=element_id)


def serialize_document(
    document: BeautifulSoup,
    params: Optional[DomSerializationParams] = None
) -> str:
    """Serialize a document to markup according to the serialization params."""
    from . import __version__

    params = params or DomSerializationParams()
    # Work on a copy so serializing twice doesn't stack meta elements
    document = copy.copy(document)
    head = get_or_create_head(document)

    meta_elements = []
    if not params.dont_include_content_type_meta_element:
        meta_elements.append({"http-equiv": "Content-Type", "content": "text/html; charset=utf-8"})
    if not params.dont_include_mobile_specific_meta_elements:
        meta_elements.append({"name": "HandheldFriendly", "content": "true"})
        meta_elements.append({"name": "viewport", "content": "width=device-width"})
    if not params.dont_include_generator_meta_element:
        meta_elements.append({"name": "Generator", "content": f"html_readability {__version__}"})

    for position, attrs in enumerate(meta_elements):
        head.insert(position, document.new_tag("meta", attrs=attrs))

    for node in list(document.contents):
        if isinstance(node, Doctype):
            node.extract()
    if not params.dont_include_doctype_meta_element:
        document.insert(0, Doctype("html"))

    if params.pretty_print:
        return document.prettify()
    return document.decode()
