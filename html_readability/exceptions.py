"""
Custom exceptions for the html_readability package.

Error philosophy:
  - TranscodingInputError → FAIL HARD: rejected before any processing.
  - FetchError → ENDS ONE PAGE CHAIN: while stitching, pages already
    assembled are kept and the error is logged as a warning.
  - UnsupportedContentEncodingError → FAIL HARD inside the fetcher.

Extraction heuristics never raise. A poor page yields an empty or
low-confidence result, reported through content_extracted/title_extracted.
"""

from typing import Optional


class ReadabilityError(Exception):
    """Base exception for all html_readability errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- FAIL HARD: precondition failures ---

class TranscodingInputError(ReadabilityError, ValueError):
    """Raised when the markup (or URL) handed to a transcoder is empty."""

    def __init__(self, message: str, argument: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.argument = argument  # name of the offending argument


# --- Fetch collaborator ---

class FetchError(ReadabilityError):
    """
    Raised when a page can't be downloaded.

    The web transcoder treats this as the end of the current page chain;
    it is only propagated to the caller for the first page.
    """

    def __init__(self, message: str, url: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.url = url


class UnsupportedContentEncodingError(ReadabilityError):
    """Raised when a response uses a Content-Encoding we can't decompress."""

    def __init__(self, message: str, content_encoding: str, details: Optional[dict] = None):
        super().__init__(message, details)
        self.content_encoding = content_encoding
