#!/usr/bin/env python3
"""
CLI script to run the single-page transcoder on HTML files.

Each input file is turned into a readable document. With --output-dir the
documents are written next to each other as <name>.readable.html; a JSON
summary (content/title found, next page link) is printed either way.

Options not given on the command line come from READABILITY_* environment
variables (a .env file is honoured).
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from html_readability.main import transcode_file
from html_readability.schemas import DomSerializationParams, TranscoderOptions
from html_readability.exceptions import ReadabilityError


def main():
    parser = argparse.ArgumentParser(description="Extract readable articles from HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument("--url", "-u", help="URL the files were downloaded from (resolves relative links)")
    parser.add_argument("--output-dir", "-o", help="Directory for the readable documents")
    parser.add_argument("--pretty", "-p", action="store_true", help="Pretty-print the output markup")
    parser.add_argument("--relaxed", action="store_true", help="Don't strip unlikely candidates")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    options = TranscoderOptions.from_env()
    if args.relaxed:
        options.dont_strip_unlikelys = True

    params = DomSerializationParams(pretty_print=args.pretty)
    log_level = logging.DEBUG if args.verbose else None

    output_dir = Path(args.output_dir) if args.output_dir else None
    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    results = []

    for filepath in args.files:
        path = Path(filepath)
        print(f"Transcoding: {path.name}")

        try:
            result = transcode_file(path, url=args.url, options=options,
                                    dom_serialization_params=params, log_level=log_level)
        except (ReadabilityError, OSError) as e:
            results.append({
                "file": path.name,
                "status": "error",
                "error": str(e)
            })
            print(f"  ✗ Error: {e}")
            continue

        entry = {
            "file": path.name,
            "status": "success",
            "content_extracted": result.content_extracted,
            "title": result.extracted_title,
            "next_page_url": result.next_page_url,
        }

        if output_dir:
            output_path = output_dir / f"{path.stem}.readable.html"
            output_path.write_text(result.extracted_content, encoding="utf-8")
            entry["output"] = str(output_path)

        results.append(entry)
        mark = "✓" if result.content_extracted else "✗ no content"
        print(f"  {mark} {result.extracted_title or '(no title)'}")

    # ensure_ascii=False preserves unicode characters in the JSON
    print("\n" + json.dumps(results, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
