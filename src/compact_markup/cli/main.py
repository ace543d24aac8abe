"""Main CLI entry point for the compact-markup command-line tool.

Provides pack, unpack, inspect and roundtrip commands over markup files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from compact_markup import __version__
from compact_markup.api import MarkupCodec
from compact_markup.shared import (
    CompactMarkupError,
    ConfigError,
    ParseError,
    PipelineConfig,
    configure_logging,
    get_logger,
)
from compact_markup.tree import Document, render
from compact_markup.vocabulary import ExtensionRegistry, VocabularyKind

PACKED_SUFFIX = ".cmk"
MARKUP_ENCODING = "latin-1"

logger = get_logger(__name__, None, "cli")


def load_config(args: argparse.Namespace) -> PipelineConfig:
    """Build the pipeline configuration from --config and command flags."""
    config = PipelineConfig()
    if args.config:
        config = PipelineConfig.from_json(args.config.read_text())

    overrides: Dict[str, Any] = {}
    if getattr(args, "no_compress", False):
        overrides["compression__enabled"] = False
    if getattr(args, "level", None) is not None:
        overrides["compression__level"] = args.level
    if getattr(args, "strict_strings", False):
        overrides["codec__string_errors"] = "strict"
    if overrides:
        config = config.override(**overrides)
    return config


def read_markup(path: Path) -> str:
    with path.open(encoding=MARKUP_ENCODING, newline="") as file:
        return file.read()


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="compact-markup",
        description="Convert markup documents to and from a compact binary form"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON pipeline configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only report errors"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Pack command
    pack_parser = subparsers.add_parser("pack", help="Encode a markup file")
    pack_parser.add_argument("input", type=Path, help="Markup file to encode")
    pack_parser.add_argument(
        "--output", "-o",
        type=Path,
        help=f"Output file (default: input with {PACKED_SUFFIX} suffix)"
    )
    pack_parser.add_argument(
        "--level",
        type=int,
        choices=range(10),
        metavar="0-9",
        help="Compression level"
    )
    pack_parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Write the raw codec stream"
    )
    pack_parser.add_argument(
        "--strict-strings",
        action="store_true",
        help="Fail instead of truncating characters above U+00FF"
    )
    pack_parser.add_argument(
        "--show-extensions",
        action="store_true",
        help="Print table entries for custom identifiers"
    )

    # Unpack command
    unpack_parser = subparsers.add_parser("unpack", help="Decode a packed file")
    unpack_parser.add_argument("input", type=Path, help="Packed file to decode")
    unpack_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output markup file (default: stdout)"
    )
    unpack_parser.add_argument(
        "--no-compress",
        action="store_true",
        help="Input is a raw codec stream"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show document statistics")
    inspect_parser.add_argument("input", type=Path, help="Markup or packed file")
    inspect_parser.add_argument(
        "--packed",
        action="store_true",
        help="Input is a packed file"
    )
    inspect_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)"
    )

    # Roundtrip command
    roundtrip_parser = subparsers.add_parser(
        "roundtrip", help="Check that a markup file survives pack and unpack"
    )
    roundtrip_parser.add_argument("input", type=Path, help="Markup file to check")

    return parser


def format_statistics(stats: Dict[str, Any], format_type: str) -> str:
    """Format document statistics for output."""
    if format_type == "json":
        return json.dumps(stats, indent=2)

    lines = [
        f"Root nodes:        {stats['root_nodes']}",
        f"Total nodes:       {stats['total_nodes']}",
        f"Elements:          {stats['elements']}",
        f"Text nodes:        {stats['text_nodes']}",
        f"Comments:          {stats['comments']}",
    ]
    if "encoded_size" in stats:
        lines.append(f"Encoded size:      {stats['encoded_size']} bytes")
        lines.append(f"Packed size:       {stats['packed_size']} bytes")
    for key, label in (("custom_elements", "Custom elements"),
                       ("custom_attributes", "Custom attributes")):
        if stats[key]:
            lines.append(f"{label + ':':<19}{', '.join(stats[key])}")
    return "\n".join(lines)


def cmd_pack(args: argparse.Namespace, config: PipelineConfig) -> int:
    """Handle pack command."""
    extensions = ExtensionRegistry()
    codec = MarkupCodec(config, extensions)
    output = args.output or args.input.with_suffix(PACKED_SUFFIX)

    result = codec.pack_file(args.input, output)
    if not args.quiet:
        print(
            f"Packed {args.input} -> {output} "
            f"({result.metrics.input_size} -> {result.metrics.output_size} bytes)",
            file=sys.stderr,
        )

    if args.show_extensions:
        for kind in VocabularyKind:
            listing = extensions.generate_listing(kind)
            if listing:
                print(f"# {kind.name.lower()} extensions")
                print(listing)
    return 0


def cmd_unpack(args: argparse.Namespace, config: PipelineConfig) -> int:
    """Handle unpack command."""
    codec = MarkupCodec(config)
    if args.output:
        codec.unpack_file(args.input, args.output)
        if not args.quiet:
            print(f"Unpacked {args.input} -> {args.output}", file=sys.stderr)
    else:
        markup = codec.unpack_to_markup(args.input.read_bytes())
        # Bypass the locale encoding so bytes come out exactly as they went in
        sys.stdout.flush()
        sys.stdout.buffer.write(markup.encode(MARKUP_ENCODING))
        sys.stdout.buffer.flush()
    return 0


def cmd_inspect(args: argparse.Namespace, config: PipelineConfig) -> int:
    """Handle inspect command."""
    codec = MarkupCodec(config)
    if args.packed:
        document = codec.unpack(args.input.read_bytes())
    else:
        document = codec.parse(read_markup(args.input))

    stats = document.statistics()
    encoded = codec.encode(document).data
    stats["encoded_size"] = len(encoded)
    stats["packed_size"] = len(codec.pack(document))
    print(format_statistics(stats, args.format))
    return 0


def check_roundtrip(codec: MarkupCodec, text: str) -> List[str]:
    """Return the round-trip properties that ``text`` violates."""
    problems = []
    document = codec.parse(text)
    encoded = codec.encode(document).data
    decoded: Document = codec.unpack(codec.pack(document))

    if decoded != document:
        problems.append("decoded tree differs from parsed tree")
    if codec.encode(decoded).data != encoded:
        problems.append("re-encoding the decoded tree changed the byte stream")
    try:
        reparsed = codec.parse(render(decoded))
    except ParseError as e:
        problems.append(f"rendered markup cannot be parsed again: {e}")
    else:
        if reparsed != document:
            problems.append("re-parsing the rendered markup changed the tree")
    return problems


def cmd_roundtrip(args: argparse.Namespace, config: PipelineConfig) -> int:
    """Handle roundtrip command."""
    codec = MarkupCodec(config)
    problems = check_roundtrip(codec, read_markup(args.input))
    if problems:
        for problem in problems:
            print(f"✗ {args.input}: {problem}")
        return 1
    print(f"✓ {args.input}")
    return 0


COMMANDS = {
    "pack": cmd_pack,
    "unpack": cmd_unpack,
    "inspect": cmd_inspect,
    "roundtrip": cmd_roundtrip,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except (OSError, ConfigError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    # Set up logging verbosity
    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging(config.global_.logging_level)

    try:
        return COMMANDS[args.command](args, config)
    except CompactMarkupError as e:
        logger.debug("Command failed", extra={"command": args.command}, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
