# ============================================================================
# email_body_parser/cli.py - CLI
# ============================================================================

import argparse
import json
import logging
import sys
from pathlib import Path

from . import create_body_parser
from .config import config


def main(argv=None) -> int:
    """Command line interface for body parsing and verification code extraction."""
    parser = argparse.ArgumentParser(description="Extract the display body and verification code from a raw email")
    parser.add_argument("file", type=Path, help="Input raw email file (.eml)")
    parser.add_argument("--subject", type=str, default="",
                        help="Subject to search (defaults to the message's Subject header)")
    parser.add_argument("--log-level", type=str, default=config.DEFAULT_LOG_LEVEL,
                        choices=config.VALID_LOG_LEVELS,
                        help="Set logging level")
    parser.add_argument("--output", type=Path, help="Output JSON file")
    parser.add_argument("--preview-code", action="store_true",
                        help="Fall back to the loose preview extractor when no code is found")
    parser.add_argument("--include-html", action="store_true",
                        help="Include the full html body in the output")
    args = parser.parse_args(argv)

    log_level = getattr(logging, args.log_level.upper())
    summarizer = create_body_parser(log_level=log_level)

    try:
        raw = args.file.read_bytes().decode('utf-8', errors='replace')
        summary = summarizer.summarize(raw, args.subject, include_preview_code=args.preview_code)

        result = summary.to_dict()
        if not args.include_html:
            result.pop('html')

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(result, f, indent=2, ensure_ascii=False)
            print(f"Results saved to: {args.output}")
        else:
            print(json.dumps(result, indent=2, ensure_ascii=False))

    except OSError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())


# ============================================================================
# Usage Examples
# ============================================================================

"""
# Print text, preview and verification code:
python -m email_body_parser.cli message.eml

# Override the subject and keep the html body:
python -m email_body_parser.cli message.eml --subject "Your login code" --include-html

# Allow the loose list-preview extractor as a fallback:
python -m email_body_parser.cli message.eml --preview-code --output summary.json

# Programmatic usage:
from email_body_parser import parse_email_body, extract_verification_code

body = parse_email_body(raw_text)
code = extract_verification_code(subject="Sign in", text=body.text, html=body.html)
"""
