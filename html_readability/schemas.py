"""
Pydantic schemas for transcoder inputs, options and results.

Data flow:
  TranscodingInput → Transcoder → TranscodedDocument (tree) → TranscodingResult (markup)
  WebTranscodingInput → WebTranscoder → WebTranscodingResult
"""

import os
from typing import Optional

from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, ConfigDict, Field

from .styles import (
    ReadingStyle, ReadingMargin, ReadingSize,
    DEFAULT_READING_STYLE, DEFAULT_READING_MARGIN, DEFAULT_READING_SIZE,
    parse_reading_option,
)


class DomSerializationParams(BaseModel):
    """Controls how the output document is turned back into markup."""
    pretty_print: bool = False
    dont_include_content_type_meta_element: bool = False
    dont_include_mobile_specific_meta_elements: bool = False
    dont_include_doctype_meta_element: bool = False
    dont_include_generator_meta_element: bool = False


# --- URL rewrite hooks (img[src], a[href]) ---

class AttributeTransformationInput(BaseModel):
    """What a rewrite hook receives: the resolved absolute value and its element."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    attribute_value: str
    element: Tag


class AttributeTransformationResult(BaseModel):
    """What a rewrite hook returns."""
    transformed_value: str
    # When set, the pre-rewrite value is kept on the element under this attribute
    original_value_attribute_name: Optional[str] = None


# --- Options ---

def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


class TranscoderOptions(BaseModel):
    """Algorithm and presentation switches for a Transcoder."""
    dont_strip_unlikelys: bool = False            # skip unlikely-candidate stripping (relaxed mode)
    dont_normalize_spaces_in_text_content: bool = False
    dont_weight_classes: bool = False             # class/id weight always 0 while cleaning
    reading_style: ReadingStyle = DEFAULT_READING_STYLE
    reading_margin: ReadingMargin = DEFAULT_READING_MARGIN
    reading_size: ReadingSize = DEFAULT_READING_SIZE

    @classmethod
    def from_env(cls) -> "TranscoderOptions":
        """Build options from READABILITY_* environment variables."""
        values = {
            "dont_strip_unlikelys": _env_flag("READABILITY_DONT_STRIP_UNLIKELYS"),
            "dont_normalize_spaces_in_text_content": _env_flag("READABILITY_DONT_NORMALIZE_SPACES"),
            "dont_weight_classes": _env_flag("READABILITY_DONT_WEIGHT_CLASSES"),
        }
        # Reading options are only overridden when the variable is set
        for field, enum_cls, variable in (
            ("reading_style", ReadingStyle, "READABILITY_READING_STYLE"),
            ("reading_margin", ReadingMargin, "READABILITY_READING_MARGIN"),
            ("reading_size", ReadingSize, "READABILITY_READING_SIZE"),
        ):
            raw = os.getenv(variable)
            if raw:
                values[field] = parse_reading_option(enum_cls, raw)
        return cls(**values)


# --- Single page ---

class TranscodingInput(BaseModel):
    """Markup to process, plus the URL it came from (used to resolve relative links)."""
    html_content: str
    url: Optional[str] = None
    dom_serialization_params: DomSerializationParams = Field(default_factory=DomSerializationParams)


class TranscodedDocument(BaseModel):
    """In-memory result of one pipeline run: the rebuilt tree and what was found."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: BeautifulSoup
    content_element: Tag                  # div#readability-content inside the document
    content_extracted: bool
    extracted_title: Optional[str] = None
    next_page_url: Optional[str] = None


class TranscodingResult(BaseModel):
    """Serialized output of Transcoder.transcode()."""
    content_extracted: bool
    title_extracted: bool
    extracted_content: Optional[str] = None
    extracted_title: Optional[str] = None
    next_page_url: Optional[str] = None


# --- Multi-page (web) ---

class WebTranscodingInput(BaseModel):
    """URL of the first page of an article."""
    url: str
    dom_serialization_params: DomSerializationParams = Field(default_factory=DomSerializationParams)


class WebTranscodingResult(BaseModel):
    """Serialized output of WebTranscoder.transcode(), all pages stitched together."""
    content_extracted: bool
    title_extracted: bool
    extracted_content: Optional[str] = None
    extracted_title: Optional[str] = None
    pages_count: int = 0
