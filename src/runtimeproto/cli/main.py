"""Main CLI entry point for runtimeproto."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..exceptions import RuntimeProtoError
from ..generator import to_proto_schema
from .load import load_model

_log = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the runtimeproto CLI.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        prog="runtimeproto",
        description="runtimeproto: .proto schemas from runtime schema graphs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  runtimeproto models.py:Person                     Print Person's .proto schema
  runtimeproto models.py:Person -o person.proto     Write it to a file
  runtimeproto myapp.models:Order --package orders  Use a dotted module path
        """,
    )

    parser.add_argument(
        "target",
        metavar="TARGET",
        help="Model to convert, as FILE.py:Model or module:Model",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        type=Path,
        help="Write the schema to FILE instead of stdout",
    )
    parser.add_argument("--package", help="Proto package name")
    parser.add_argument("--language-package", help="Language package option value")
    parser.add_argument("--outer-classname", help="Outer class name option value")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"runtimeproto {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        model = load_model(args.target)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading {args.target}: {e}", file=sys.stderr)
        return 1

    try:
        proto = to_proto_schema(
            model,
            package_name=args.package,
            language_package=args.language_package,
            outer_classname=args.outer_classname,
        )
    except RuntimeProtoError as e:
        print(f"Error generating schema: {e}", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(proto)
    else:
        args.output.write_text(proto, encoding="utf-8")
        _log.info("Wrote %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
