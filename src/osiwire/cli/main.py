"""Main CLI entry point for osiwire."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..codec.decoder import decode
from ..codec.registry import default_registry
from ..exceptions import OsiwireError
from ..framing.basic import decode_framed
from ..protobuf.convert import to_proto_schema
from .describe import describe_type, list_types

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osiwire",
        description="osiwire: tagged-field codec for the osi3 vehicle schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  osiwire --list                                  List registered message types
  osiwire --describe osi3.VehicleClass            Show a type's field catalog
  osiwire --proto osi3.Traffic > traffic.proto    Export proto2 schema text
  osiwire --decode osi3.Traffic traffic.bin       Decode a message to JSON
  osiwire --decode osi3.Traffic frame.bin --framed --crc crc32
        """,
    )

    command = parser.add_mutually_exclusive_group()
    command.add_argument("--list", action="store_true", help="List registered message types")
    command.add_argument("--describe", metavar="TYPE", help="Show the field catalog of TYPE")
    command.add_argument("--proto", metavar="TYPE", help="Print proto2 schema text for TYPE")
    command.add_argument(
        "--decode",
        nargs=2,
        metavar=("TYPE", "FILE"),
        help="Decode FILE as TYPE and print it as JSON",
    )

    parser.add_argument(
        "--framed",
        action="store_true",
        help="With --decode: FILE holds a length-prefixed frame",
    )
    parser.add_argument(
        "--crc",
        choices=["crc16", "crc32", "none"],
        default="crc32",
        help="With --decode --framed: CRC trailer type (default: crc32)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"osiwire {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the osiwire CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    registry = default_registry()

    try:
        if args.list:
            list_types(registry)
            return 0

        if args.describe:
            describe_type(registry, args.describe)
            return 0

        if args.proto:
            sys.stdout.write(to_proto_schema(args.proto, registry))
            return 0

        if args.decode:
            type_name, file_name = args.decode
            file_path = Path(file_name)
            if not file_path.exists():
                print(f"Error: File not found: {file_path}", file=sys.stderr)
                return 1

            data = file_path.read_bytes()
            logger.debug("Read %d bytes from %s", len(data), file_path)
            if args.framed:
                crc = None if args.crc == "none" else args.crc
                message = decode_framed(type_name, data, crc=crc, registry=registry)
            else:
                message = decode(type_name, data, registry=registry)
            print(message.model_dump_json(exclude_none=True, indent=2))
            return 0
    except OsiwireError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
