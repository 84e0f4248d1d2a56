#!/usr/bin/env python3
"""
CLI script to fetch an article by URL and stitch all of its pages together.

The readable document goes to --output (or stdout); progress and the page
count are reported on stderr.
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from html_readability.main import transcode_url
from html_readability.schemas import DomSerializationParams, TranscoderOptions
from html_readability.exceptions import ReadabilityError


def main():
    parser = argparse.ArgumentParser(description="Fetch an article and make it readable")
    parser.add_argument("url", help="URL of the first page of the article")
    parser.add_argument("--output", "-o", help="Output HTML file")
    parser.add_argument("--pretty", "-p", action="store_true", help="Pretty-print the output markup")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    params = DomSerializationParams(pretty_print=args.pretty)
    log_level = logging.DEBUG if args.verbose else None

    try:
        result = transcode_url(args.url, options=TranscoderOptions.from_env(),
                               dom_serialization_params=params, log_level=log_level)
    except ReadabilityError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not result.content_extracted:
        print("✗ No article content found", file=sys.stderr)

    print(f"✓ {result.extracted_title or '(no title)'} - {result.pages_count} page(s)", file=sys.stderr)

    if result.extracted_content is None:
        sys.exit(1)

    if args.output:
        Path(args.output).write_text(result.extracted_content, encoding="utf-8")
        print(f"Saved to: {args.output}", file=sys.stderr)
    else:
        print(result.extracted_content)


if __name__ == "__main__":
    main()
