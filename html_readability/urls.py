"""
Absolute-URL resolution for image sources and anchor targets.

Relative img[src] and a[href] values are resolved against the page URL so
the extracted article still works once it is moved out of its page. Callers
may plug in rewrite hooks (e.g. to proxy images) that see every resolved
value.
"""

from typing import Callable, Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup

from .dom import get_attribute, set_attribute
from .patterns import MAILTO_HREF
from .schemas import AttributeTransformationInput, AttributeTransformationResult

AttributeTransformer = Callable[[AttributeTransformationInput], AttributeTransformationResult]


def is_absolute_url(url: Optional[str]) -> bool:
    if not url:
        return False
    parts = urlsplit(url.strip())
    return bool(parts.scheme and parts.netloc)


def resolve_element_url(url: str, article_url: str) -> str:
    """Resolve a single attribute value against the article URL."""
    if url is None:
        raise ValueError("url can't be None")

    if MAILTO_HREF.search(url):
        return url

    if not is_absolute_url(article_url):
        return url

    base = urlsplit(article_url.strip())

    # A bare query string is attached to the page URL without its own query
    if url.startswith("?"):
        return f"{base.scheme}://{base.netloc}{base.path or '/'}{url}"

    try:
        return urljoin(article_url.strip(), url)
    except ValueError:
        return url


def resolve_elements_urls(
    document: BeautifulSoup,
    tag_name: str,
    attribute_name: str,
    url: str,
    transformer: Optional[AttributeTransformer] = None
) -> None:
    """Resolve `attribute_name` of every `tag_name` element, then apply the hook."""
    if not url:
        raise ValueError("url can't be empty")

    for element in document.find_all(tag_name):
        if element.get(attribute_name) is None:
            continue

        attribute_value = resolve_element_url(get_attribute(element, attribute_name), url)
        if not attribute_value:
            continue

        if transformer is not None:
            result = transformer(AttributeTransformationInput(
                attribute_value=attribute_value,
                element=element
            ))
        else:
            result = AttributeTransformationResult(transformed_value=attribute_value)

        set_attribute(element, attribute_name, result.transformed_value)

        if result.original_value_attribute_name:
            set_attribute(element, result.original_value_attribute_name, attribute_value)
