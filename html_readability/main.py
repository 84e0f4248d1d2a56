"""
Convenience entry points.

Wire up a Transcoder (or WebTranscoder) with default or environment-driven
options and run it on a string, a file or a URL.
"""

from pathlib import Path
from typing import Optional, Union

from .fetcher import UrlFetcher
from .preprocessor import Preprocessor
from .schemas import (
    DomSerializationParams, TranscoderOptions, TranscodingInput, TranscodingResult,
    WebTranscodingInput, WebTranscodingResult,
)
from .transcoder import Transcoder
from .web_transcoder import WebTranscoder
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")


def _build_transcoder(options: Optional[TranscoderOptions], log_level: Optional[int]) -> Transcoder:
    if log_level is not None:
        setup_logger(level=log_level)
    return Transcoder.from_options(options or TranscoderOptions.from_env())


def transcode_html(
    html: str,
    url: Optional[str] = None,
    options: Optional[TranscoderOptions] = None,
    dom_serialization_params: Optional[DomSerializationParams] = None,
    log_level: Optional[int] = None
) -> TranscodingResult:
    """Convenience function to transcode a markup string."""
    transcoder = _build_transcoder(options, log_level)
    return transcoder.transcode(TranscodingInput(
        html_content=html,
        url=url,
        dom_serialization_params=dom_serialization_params or DomSerializationParams(),
    ))


def transcode_file(
    file_path: Union[str, Path],
    url: Optional[str] = None,
    options: Optional[TranscoderOptions] = None,
    dom_serialization_params: Optional[DomSerializationParams] = None,
    log_level: Optional[int] = None
) -> TranscodingResult:
    """Transcode an HTML file, decoding it with the charset its <meta> declares."""
    file_path = Path(file_path)

    # Read raw bytes so the declared charset can be found before decoding
    raw_bytes = file_path.read_bytes()
    declared_charset = Preprocessor.detect_charset_from_bytes(raw_bytes)
    html = raw_bytes.decode(declared_charset, errors="replace")
    logger.debug(f"Read {file_path.name} as {declared_charset}")

    return transcode_html(html, url, options, dom_serialization_params, log_level)


def transcode_url(
    url: str,
    options: Optional[TranscoderOptions] = None,
    dom_serialization_params: Optional[DomSerializationParams] = None,
    log_level: Optional[int] = None
) -> WebTranscodingResult:
    """Fetch an article (all of its pages) and transcode it."""
    transcoder = _build_transcoder(options, log_level)
    with UrlFetcher() as url_fetcher:
        web_transcoder = WebTranscoder(transcoder=transcoder, url_fetcher=url_fetcher)
        return web_transcoder.transcode(WebTranscodingInput(
            url=url,
            dom_serialization_params=dom_serialization_params or DomSerializationParams(),
        ))
