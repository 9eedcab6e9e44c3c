"""Run task extraction on an email body stored in a text file.

Usage::

    python scripts/extract_email.py email.txt --subject "Q3 report" --language he

Prints the ExtractionResult as JSON. Needs ANTHROPIC_API_KEY in the
environment or .env.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from mailtasks.extraction.extractor import build_extractor


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract tasks from an email body.")
    parser.add_argument("path", help="Path to a UTF-8 text file with the email body")
    parser.add_argument("--subject", default="")
    parser.add_argument("--language", choices=["he", "en"], default=None)
    parser.add_argument("--timeout", type=float, default=120.0, help="Seconds before giving up")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


async def _run(body: str, subject: str, language: str | None, timeout: float) -> dict:
    extractor = build_extractor()
    result = await asyncio.wait_for(
        extractor.extract(body, subject=subject, language=language),
        timeout=timeout,
    )
    return result.to_dict()


if __name__ == "__main__":
    args = _build_arg_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    body = Path(args.path).read_text(encoding="utf-8")
    try:
        output = asyncio.run(_run(body, args.subject, args.language, args.timeout))
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(2)
    except TimeoutError:
        print(f"ERROR: extraction did not finish within {args.timeout}s", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, ensure_ascii=False, indent=2))
