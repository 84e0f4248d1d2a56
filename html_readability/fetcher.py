"""
Fetch collaborator: downloads pages for the web transcoder.

UrlFetcher wraps one httpx.Client, so cookies set by the first page are
sent with the following ones (some sites gate page 2 behind a cookie).
Responses are decoded with the charset from the Content-Type header, else
the one declared in a <meta> tag, else the fallback encoding.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from .exceptions import FetchError, UnsupportedContentEncodingError
from .preprocessor import Preprocessor
from .logger import get_module_logger

logger = get_module_logger("fetcher")

# Browser-like headers so sites don't serve us a bot page
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate",
}

SUPPORTED_CONTENT_ENCODINGS = ("gzip", "deflate", "identity")

DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


class BaseUrlFetcher(ABC):
    """Anything that can turn a URL into page markup."""

    @abstractmethod
    def fetch(self, url: str) -> str:
        """
        Download a page.

        Returns:
            Page markup ("" when the server sent nothing)

        Raises:
            FetchError: If the page can't be downloaded
        """
        pass


class UrlFetcher(BaseUrlFetcher):
    """HTTP fetcher with a persistent cookie jar."""

    def __init__(
        self,
        fallback_encoding: str = "utf-8",
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None
    ):
        self.fallback_encoding = fallback_encoding
        self.client = client or httpx.Client(
            headers=DEFAULT_HEADERS,
            follow_redirects=True,
            timeout=timeout,
        )

    def fetch(self, url: str) -> str:
        if not url:
            raise ValueError("url can't be empty")

        logger.info(f"Fetching {url}")

        try:
            with self.client.stream("GET", url) as response:
                response.raise_for_status()
                self._check_content_encoding(response)
                raw_bytes = response.read()
                header_charset = response.charset_encoding
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

        encoding = self._detect_encoding(raw_bytes, header_charset)
        logger.debug(f"Fetched {len(raw_bytes)} bytes from {url} ({encoding})")
        return raw_bytes.decode(encoding, errors="replace")

    def _check_content_encoding(self, response: httpx.Response) -> None:
        content_encoding = response.headers.get("Content-Encoding", "")
        for encoding in content_encoding.split(","):
            encoding = encoding.strip().lower()
            if encoding and encoding not in SUPPORTED_CONTENT_ENCODINGS:
                raise UnsupportedContentEncodingError(
                    f"Unsupported content encoding: {content_encoding}",
                    content_encoding=content_encoding,
                    details={"url": str(response.url)},
                )

    def _detect_encoding(self, raw_bytes: bytes, header_charset: Optional[str]) -> str:
        return (
            Preprocessor.normalize_charset(header_charset)
            or Preprocessor.detect_charset_from_bytes(raw_bytes, default=None)
            or self.fallback_encoding
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "UrlFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
