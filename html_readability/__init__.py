"""
html_readability

Extracts the readable article from a cluttered HTML page and rebuilds it
as a clean reading document.
- Transcoder: single-page pipeline (preprocess, score, merge, clean, title)
- WebTranscoder: fetches an article and stitches its pages together
- UrlFetcher: HTTP fetch collaborator with cookies and charset detection

Public API surface:
  Transcoders    — Transcoder, WebTranscoder
  Fetchers       — BaseUrlFetcher, UrlFetcher
  Data models    — TranscodingInput, TranscodingResult, WebTranscodingInput,
                   WebTranscodingResult, TranscoderOptions, DomSerializationParams,
                   AttributeTransformationInput, AttributeTransformationResult
  Reading styles — ReadingStyle, ReadingMargin, ReadingSize
  Error types    — ReadabilityError, TranscodingInputError, FetchError,
                   UnsupportedContentEncodingError
"""

# --- Transcoders ---
from .transcoder import Transcoder
from .web_transcoder import WebTranscoder, default_page_separator_builder

# --- Fetch collaborator ---
from .fetcher import BaseUrlFetcher, UrlFetcher

# --- Data models ---
from .schemas import (
    AttributeTransformationInput, AttributeTransformationResult, DomSerializationParams,
    TranscoderOptions, TranscodingInput, TranscodingResult, WebTranscodingInput, WebTranscodingResult,
)
from .styles import ReadingMargin, ReadingSize, ReadingStyle

# --- Exceptions ---
from .exceptions import FetchError, ReadabilityError, TranscodingInputError, UnsupportedContentEncodingError

# --- Convenience functions ---
from .main import transcode_file, transcode_html, transcode_url

__version__ = "0.1.0"
__all__ = [
    "Transcoder",
    "WebTranscoder",
    "default_page_separator_builder",
    "BaseUrlFetcher",
    "UrlFetcher",
    "AttributeTransformationInput",
    "AttributeTransformationResult",
    "DomSerializationParams",
    "TranscoderOptions",
    "TranscodingInput",
    "TranscodingResult",
    "WebTranscodingInput",
    "WebTranscodingResult",
    "ReadingMargin",
    "ReadingSize",
    "ReadingStyle",
    "ReadabilityError",
    "TranscodingInputError",
    "FetchError",
    "UnsupportedContentEncodingError",
    "transcode_file",
    "transcode_html",
    "transcode_url",
]
