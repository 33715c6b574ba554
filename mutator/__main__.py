#!/usr/bin/env python3
r"""Mutator CLI.

Commands:
    python -m mutator --version     Show version
    python -m mutator info          Show detailed version and system info
    python -m mutator scrub FILE    Mask sensitive keys in a JSON/YAML document

Examples:
    # Mask the default "password" key
    python -m mutator scrub credentials.json

    # Mask several keys with a custom mask, write the result to a file
    python -m mutator scrub app.yaml --key token --key secret --mask "[REDACTED]" -o out.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger("mutator")

DEFAULT_KEYS = ["password"]


def cmd_info(args: argparse.Namespace) -> int:
    """Show detailed version and system information."""
    from ._version import print_version_info

    print_version_info()
    return 0


def cmd_scrub(args: argparse.Namespace) -> int:
    """Load a document, mask the requested keys and print it as JSON."""
    from .defaults import MaskHook
    from .engine import Mutator
    from .loaders import load_document
    from .utils import ConfigurationError

    settings = args.settings
    try:
        filepath = Path(args.file)
        if not filepath.is_file():
            raise ConfigurationError(
                f"File not found: {filepath}",
                ["Check the path passed to 'scrub'"],
                {"path": str(filepath)},
            )
        document = load_document(filepath)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    hook = MaskHook(args.mask if args.mask is not None else settings.mask)
    mutator = Mutator(settings.match_type, check_types=settings.check_types)
    for key in args.keys or DEFAULT_KEYS:
        mutator.hook.add(key, hook)

    mutator.execute(document)
    result = json.dumps(document, indent=2, ensure_ascii=False, default=str)

    if args.output:
        Path(args.output).write_text(result + "\n", encoding="utf-8")
        logger.info("Wrote scrubbed document to %s", args.output)
    else:
        print(result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    from ._version import __version__

    parser = argparse.ArgumentParser(
        prog="python -m mutator",
        description="Mutator - in-place field and key redaction",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m mutator --version              Show version
  python -m mutator info                   Show detailed system info
  python -m mutator scrub creds.json       Mask "password" keys
        """,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"mutator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show detailed version and system information",
        description="Display version, Python, platform, and dependency information.",
    )
    info_parser.set_defaults(func=cmd_info)

    # scrub command
    scrub_parser = subparsers.add_parser(
        "scrub",
        help="Mask sensitive keys in a document",
        description="Load a JSON/YAML document, mask matching keys, print JSON.",
    )
    scrub_parser.add_argument(
        "file",
        help="Path to the document (json, yaml, yml)",
    )
    scrub_parser.add_argument(
        "--key",
        "-k",
        dest="keys",
        action="append",
        help="Key to mask; repeat for several keys (default: password)",
    )
    scrub_parser.add_argument(
        "--mask",
        "-m",
        help="Replacement for masked values (default: $MUTATOR_MASK or ********)",
    )
    scrub_parser.add_argument(
        "--output",
        "-o",
        help="Write the result to this file instead of stdout",
    )
    scrub_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    scrub_parser.set_defaults(func=cmd_scrub)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for mutator."""
    from .config import MutatorSettings, configure_logging
    from .utils import ConfigurationError

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        args.settings = MutatorSettings.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    verbose = getattr(args, "verbose", False)
    configure_logging("DEBUG" if verbose else args.settings.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
