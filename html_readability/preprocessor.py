"""
Preprocessor: normalizes a freshly parsed document before extraction.

- Sanitizes the raw markup string (NULL bytes, control characters)
- Removes comments, scripts, noscripts, external stylesheets, styles, navs
  and stale in-page anchors
- Makes sure html/body exist
- Rewrites the body markup: runs of <br> become paragraph breaks and
  <font> becomes <span>

Design principle: NEVER FAIL on bad HTML. A document without a body gets
an empty one.

Pipeline position: Stage 1 (Preprocessor → Candidate stripping → Scoring →
Selection → Sibling merge → Cleaning → Title).
"""

import codecs
import re
from typing import Optional

from bs4 import BeautifulSoup, Comment

from .dom import get_attribute, get_inner_html, get_or_create_body, remove_elements, set_inner_html
from .patterns import REPLACE_DOUBLE_BRS, REPLACE_FONTS
from .logger import get_module_logger

logger = get_module_logger("preprocessor")

# Scripts and stylesheets that belong to the reader itself are kept
READABILITY_MARKER = "readability"

SCRIPT_START = re.compile(r"<script", re.IGNORECASE)
SCRIPT_END = re.compile(r"</script>", re.IGNORECASE)


def remove_script_tags(html_content: str) -> str:
    """
    Remove <script>...</script> blocks from a markup string.

    Works on the raw string, before any parsing. A script that is never
    closed swallows the rest of the markup.
    """
    if html_content is None:
        raise ValueError("html_content can't be None")

    result = []
    position = 0
    while True:
        start = SCRIPT_START.search(html_content, position)
        if start is None:
            result.append(html_content[position:])
            break
        result.append(html_content[position:start.start()])
        end = SCRIPT_END.search(html_content, start.start())
        if end is None:
            break
        position = end.end()
    return "".join(result)


class Preprocessor:
    """Rule-based document cleanup that runs before candidate scoring."""

    # WHATWG encoding spec: browsers silently remap these charsets.
    # https://encoding.spec.whatwg.org/#names-and-labels
    WHATWG_CHARSET_MAP = {
        "iso-8859-1": "windows-1252",
        "iso8859-1": "windows-1252",
        "iso88591": "windows-1252",
        "latin-1": "windows-1252",
        "latin1": "windows-1252",
        "us-ascii": "windows-1252",
        "ascii": "windows-1252",
        "iso-8859-9": "windows-1254",
        "iso-8859-11": "windows-874",
    }

    @staticmethod
    def normalize_charset(charset: Optional[str]) -> Optional[str]:
        """Map a charset label to the codec a browser would use, or None if Python doesn't know it."""
        if not charset:
            return None
        charset = charset.strip().strip("\"'").lower()
        charset = Preprocessor.WHATWG_CHARSET_MAP.get(charset, charset)
        try:
            codecs.lookup(charset)
        except LookupError:
            logger.warning(f"Unknown charset: {charset}")
            return None
        return charset

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes, default: Optional[str] = "utf-8") -> Optional[str]:
        """
        Detect charset from raw HTML bytes by scanning the first 2048 bytes
        for <meta charset=...> or <meta http-equiv="Content-Type" content="...; charset=...">.

        Returns the browser-equivalent charset, or `default` when none is declared.
        """
        # Declarations must appear within the first 1024 bytes; 2048 for safety
        head_str = raw_bytes[:2048].decode("ascii", errors="ignore")

        charset = None

        # Modern form first: <meta charset="...">
        m = re.search(r"<meta[^>]+charset=[\"']?\s*([^\s\"';>]+)", head_str, re.IGNORECASE)
        if m:
            charset = m.group(1)

        # Legacy: <meta http-equiv="Content-Type" content="...; charset=...">
        if not charset:
            m = re.search(
                r"<meta[^>]+content=[\"'][^\"']*charset=([^\s\"';>]+)",
                head_str, re.IGNORECASE
            )
            if m:
                charset = m.group(1)

        return Preprocessor.normalize_charset(charset) or default

    def sanitize_html(self, html: str) -> tuple[str, list[str]]:
        """
        Fix string-level problems that confuse parsers.

        Returns:
            Tuple of (sanitized HTML, list of warnings)
        """
        warnings = []
        sanitized = html

        # NULL bytes crash many parsers and are never valid in HTML text content
        if "\x00" in sanitized:
            sanitized = sanitized.replace("\x00", "")
            warnings.append("Removed NULL bytes")

        sanitized = sanitized.replace("\r\n", "\n").replace("\r", "\n")

        # Control characters other than tab/newline
        control_chars = "".join(chr(c) for c in range(32) if c not in (9, 10, 13))
        if any(c in sanitized for c in control_chars):
            sanitized = sanitized.translate(str.maketrans("", "", control_chars))
            warnings.append("Removed control characters")

        logger.debug(f"Sanitization complete. {len(warnings)} fixes applied.")
        return sanitized, warnings

    def process(self, document: BeautifulSoup) -> None:
        """Prepare a parsed document in place."""
        comments = document.find_all(string=lambda text: isinstance(text, Comment))
        for comment in comments:
            comment.extract()

        # A totally hosed document may have lost its body during parsing
        body = get_or_create_body(document)

        remove_elements([
            script for script in document.find_all("script")
            if READABILITY_MARKER not in get_attribute(script, "src")
        ])

        remove_elements(document.find_all("noscript"))

        remove_elements([
            link for link in document.find_all("link")
            if get_attribute(link, "rel").strip().lower() == "stylesheet"
            and READABILITY_MARKER not in get_attribute(link, "href")
        ])

        for name in ("style", "nav"):
            remove_elements(document.find_all(name))

        # In-page anchors (<a name="...">) only get in the way of link density
        remove_elements([
            anchor for anchor in document.find_all("a")
            if anchor.get("name") is not None and anchor.get("href") is None
        ])

        body_html = get_inner_html(body)
        body_html = REPLACE_DOUBLE_BRS.sub("</p><p>", body_html)
        body_html = REPLACE_FONTS.sub(r"<\1span>", body_html)
        set_inner_html(body, body_html)

        logger.debug(f"Removed {len(comments)} comments, body rewritten")
