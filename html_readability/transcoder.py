"""
Single-page transcoder: markup in, readable article document out.

Pipeline (one run):
  1. Sanitize and parse the markup, then preprocess the tree
  2. Resolve img[src] / a[href] against the page URL (rewrite hooks apply)
  3. Detect the next-page link
  4. Extract the article title
  5. Strip unlikely candidates, collapse redundant divs, score, select,
     merge siblings and clean
  6. Glue title and content into the reading scaffold

When the content comes out shorter than MIN_ARTICLE_CONTENT_LENGTH the
whole pipeline is re-run once with unlikely-candidate stripping disabled
(relaxed mode).
"""

from typing import Iterable, Optional, Pattern

from bs4 import BeautifulSoup, Tag

from .candidates import (
    collapse_redundant_paragraph_divs, determine_top_candidate, find_candidates,
    get_article_content_element_hint, strip_unlikely_candidates,
)
from .cleaner import prepare_article_content
from .dom import build_document, get_or_create_body, get_or_create_head, serialize_document
from .exceptions import TranscodingInputError
from .merger import create_article_content_element
from .pagination import find_next_page_link
from .patterns import ARTICLE_CONTENT_ELEMENT_HINTS, INNER_DIV_ID, MIN_ARTICLE_CONTENT_LENGTH, OVERLAY_DIV_ID
from .preprocessor import Preprocessor
from .schemas import TranscodedDocument, TranscoderOptions, TranscodingInput, TranscodingResult
from .scoring import ScoringContext
from .styles import (
    DEFAULT_READING_MARGIN, DEFAULT_READING_SIZE, DEFAULT_READING_STYLE, ReadingMargin, ReadingSize,
    ReadingStyle, reading_margin_class, reading_size_class, reading_style_class,
)
from .title import create_article_title_element, extract_article_title, extract_title
from .urls import AttributeTransformer, resolve_elements_urls
from .logger import get_module_logger

logger = get_module_logger("transcoder")


class Transcoder:
    """
    Extracts the main article content from an HTML page.

    A Transcoder holds configuration only. Per-run state (scores,
    candidates, relaxed mode) is created for each call, so one instance can
    be reused for any number of documents.
    """

    def __init__(
        self,
        dont_strip_unlikelys: bool = False,
        dont_normalize_spaces_in_text_content: bool = False,
        dont_weight_classes: bool = False,
        reading_style: ReadingStyle = DEFAULT_READING_STYLE,
        reading_margin: ReadingMargin = DEFAULT_READING_MARGIN,
        reading_size: ReadingSize = DEFAULT_READING_SIZE,
        image_source_transformer: Optional[AttributeTransformer] = None,
        anchor_href_transformer: Optional[AttributeTransformer] = None,
        article_content_element_hints: Optional[Iterable[tuple[Pattern, str]]] = None
    ):
        self.dont_strip_unlikelys = dont_strip_unlikelys
        self.dont_normalize_spaces_in_text_content = dont_normalize_spaces_in_text_content
        self.dont_weight_classes = dont_weight_classes
        self.reading_style = reading_style
        self.reading_margin = reading_margin
        self.reading_size = reading_size
        self.image_source_transformer = image_source_transformer
        self.anchor_href_transformer = anchor_href_transformer

        # Caller hints are checked before the built-in ones
        self.article_content_element_hints = (
            tuple(article_content_element_hints or ()) + ARTICLE_CONTENT_ELEMENT_HINTS
        )

        self.preprocessor = Preprocessor()

    @classmethod
    def from_options(cls, options: TranscoderOptions, **kwargs) -> "Transcoder":
        """Build a transcoder from a TranscoderOptions model (e.g. TranscoderOptions.from_env())."""
        return cls(
            dont_strip_unlikelys=options.dont_strip_unlikelys,
            dont_normalize_spaces_in_text_content=options.dont_normalize_spaces_in_text_content,
            dont_weight_classes=options.dont_weight_classes,
            reading_style=options.reading_style,
            reading_margin=options.reading_margin,
            reading_size=options.reading_size,
            **kwargs
        )

    def transcode(self, transcoding_input: TranscodingInput) -> TranscodingResult:
        """
        Extract the article from a page and serialize it.

        Args:
            transcoding_input: Markup, page URL and serialization params

        Returns:
            TranscodingResult with the readable document markup and title
        """
        transcoded = self.transcode_to_document(transcoding_input.html_content, transcoding_input.url)

        extracted_content = serialize_document(
            transcoded.document,
            transcoding_input.dom_serialization_params
        )

        return TranscodingResult(
            content_extracted=transcoded.content_extracted,
            title_extracted=transcoded.extracted_title is not None,
            extracted_content=extracted_content,
            extracted_title=transcoded.extracted_title,
            next_page_url=transcoded.next_page_url,
        )

    def transcode_to_document(
        self,
        html_content: str,
        url: Optional[str] = None,
        relaxed: bool = False
    ) -> TranscodedDocument:
        """
        Run the pipeline and return the rebuilt document tree.

        Args:
            html_content: Page markup
            url: Page URL, used to resolve relative links and find the next page
            relaxed: Skip unlikely-candidate stripping (the fallback run)

        Raises:
            TranscodingInputError: If html_content is empty
        """
        if not html_content:
            raise TranscodingInputError("html_content can't be empty", argument="html_content")

        logger.info(f"Transcoding {url or 'document'}{' (relaxed)' if relaxed else ''}")

        sanitized, warnings = self.preprocessor.sanitize_html(html_content)
        for warning in warnings:
            logger.debug(warning)

        document = build_document(sanitized)
        self.preprocessor.process(document)

        next_page_url = None
        if url:
            resolve_elements_urls(document, "img", "src", url, self.image_source_transformer)
            resolve_elements_urls(document, "a", "href", url, self.anchor_href_transformer)
            next_page_url = find_next_page_link(get_or_create_body(document), url)

        context = ScoringContext(
            dont_normalize_spaces=self.dont_normalize_spaces_in_text_content,
            dont_weight_classes=self.dont_weight_classes,
        )

        title = extract_article_title(document, self.dont_normalize_spaces_in_text_content)
        title_element = create_article_title_element(document, title)
        content_element = self.extract_article_content(document, context, url, relaxed)

        self.glue_document(document, title_element, content_element)

        content_length = len(context.inner_text(content_element))
        if not relaxed and not self.dont_strip_unlikelys and content_length < MIN_ARTICLE_CONTENT_LENGTH:
            logger.info(
                f"Only {content_length} characters of content, "
                f"retrying without stripping unlikely candidates"
            )
            return self.transcode_to_document(html_content, url, relaxed=True)

        content_extracted = len(content_element.contents) > 0
        extracted_title = extract_title(document)

        logger.info(
            f"Complete: content {'found' if content_extracted else 'not found'}, "
            f"{content_length} characters"
        )

        return TranscodedDocument(
            document=document,
            content_element=content_element,
            content_extracted=content_extracted,
            extracted_title=extracted_title,
            next_page_url=next_page_url,
        )

    def extract_article_content(
        self,
        document: BeautifulSoup,
        context: ScoringContext,
        url: Optional[str] = None,
        relaxed: bool = False
    ) -> Tag:
        """Find, merge and clean the article content; returns div#readability-content."""
        if not (relaxed or self.dont_strip_unlikelys):
            strip_unlikely_candidates(document)

        collapse_redundant_paragraph_divs(document)

        hint = get_article_content_element_hint(url, self.article_content_element_hints)
        candidates = find_candidates(document, context, hint)
        top_candidate = determine_top_candidate(document, context, candidates)

        article_content = create_article_content_element(document, context, top_candidate)
        prepare_article_content(article_content, context)

        return article_content

    def glue_document(
        self,
        document: BeautifulSoup,
        title_element: Optional[Tag],
        content_element: Tag
    ) -> None:
        """
        Replace the body with the reading scaffold.

        body.style-* > div#readOverlay.style-* > div#readInner.margin-*.size-*
        > [h1 title] + div#readability-content
        """
        get_or_create_head(document)
        body = get_or_create_body(document)
        body.clear()

        style_class = reading_style_class(self.reading_style)
        body["class"] = style_class
        body["style"] = "display: block;"

        overlay = document.new_tag("div", attrs={"id": OVERLAY_DIV_ID, "class": style_class})
        inner = document.new_tag("div", attrs={
            "id": INNER_DIV_ID,
            "class": f"{reading_margin_class(self.reading_margin)} {reading_size_class(self.reading_size)}",
        })

        if title_element is not None:
            inner.append(title_element)
        inner.append(content_element)

        overlay.append(inner)
        body.append(overlay)
