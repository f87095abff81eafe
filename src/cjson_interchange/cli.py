"""cjson CLI: canonicalize, digest and check JSON documents."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

from cjson_interchange.errors import InterchangeError


def _read_input(path: Optional[Path]) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _canonical_bytes(path: Optional[Path], max_depth: Optional[int]) -> bytes:
    from cjson_interchange.interchange import Json

    return Json.canonicalize(Json.from_slice(_read_input(path)), max_depth=max_depth)


def main():
    """Main CLI entry point for cjson commands."""
    try:
        cjson_version = get_version("cjson-interchange")
    except PackageNotFoundError:
        cjson_version = "dev"

    parser = argparse.ArgumentParser(
        prog="cjson",
        description="cjson: canonical JSON bytes for hashing and signing"
    )
    parser.add_argument("--version", action="version", version=f"cjson {cjson_version}")
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum array/object nesting (defaults to $CJSON_MAX_DEPTH or 128)"
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    canon_parser = subparsers.add_parser(
        "canonicalize",
        help="Write the canonical form of a JSON document",
        parents=[parent_parser]
    )
    canon_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to JSON document (reads stdin if omitted)"
    )
    canon_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Write canonical bytes here instead of stdout"
    )

    digest_parser = subparsers.add_parser(
        "digest",
        help="Print sha256 of the canonical form",
        parents=[parent_parser]
    )
    digest_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to JSON document (reads stdin if omitted)"
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Exit 1 unless the document is already byte-for-byte canonical",
        parents=[parent_parser]
    )
    check_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Path to JSON document (reads stdin if omitted)"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "canonicalize":
            data = _canonical_bytes(args.path, args.max_depth)
            if args.output:
                args.output.write_bytes(data)
            else:
                sys.stdout.buffer.write(data)
                sys.stdout.buffer.flush()
        elif args.command == "digest":
            from cjson_interchange.interchange import Json
            from cjson_interchange.kernel.hash_utils import canonical_digest

            raw = Json.from_slice(_read_input(args.path))
            print(canonical_digest(raw, max_depth=args.max_depth))
        elif args.command == "check":
            from cjson_interchange.interchange import Json

            original = _read_input(args.path)
            data = Json.canonicalize(Json.from_slice(original), max_depth=args.max_depth)
            if data == original:
                print("Status: OK")
            else:
                print("Status: NOT CANONICAL")
                sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except InterchangeError as e:
        print(f"Error: [{e.code.value}] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
