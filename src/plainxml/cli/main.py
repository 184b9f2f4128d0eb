"""Main CLI entry point for the plainxml command-line tool.

Provides query, render and export commands over a single XML file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from plainxml import __version__
from plainxml.api import XmlDoc
from plainxml.shared import DocumentConfig, PlainXmlError
from plainxml.shared.config import ConfigError
from plainxml.shared.logging import get_logger

logger = get_logger(__name__, None, "cli")


def load_config(config_path: Optional[Path]) -> DocumentConfig:
    """Load a DocumentConfig from a JSON file, or return the defaults."""
    if config_path is None:
        return DocumentConfig()
    with config_path.open(encoding="utf-8") as f:
        return DocumentConfig.from_json(f.read())


def load_document(args: argparse.Namespace) -> XmlDoc:
    """Parse the input file with the namespace options from the command line."""
    config = load_config(args.config)
    if not (args.verbose or args.quiet):
        logging.getLogger("plainxml").setLevel(config.logging_level)
    doc = XmlDoc(config)
    namespace = args.namespace or config.default_namespace
    prefix = getattr(args, "prefix", None) or config.default_namespace_prefix
    doc.set_default_namespace(namespace, prefix if namespace else None)
    logger.debug("Loading document", extra={"file": str(args.file)})
    return doc.parse(args.file.read_bytes())


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="plainxml",
        description="Query, re-render and export XML documents as plain records"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    def add_common(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument("file", type=Path, help="XML file to read")
        subparser.add_argument(
            "--namespace", "-n",
            help="Default namespace for unqualified names"
        )
        subparser.add_argument(
            "--config", "-c",
            type=Path,
            help="Configuration file path (JSON)"
        )

    # Query command
    query_parser = subparsers.add_parser("query", help="Print nodes matching a path")
    add_common(query_parser)
    query_parser.add_argument(
        "path",
        help="Slash-delimited path; use {namespace}name or a default namespace"
    )
    query_parser.add_argument(
        "--values",
        action="store_true",
        help="Print text values instead of node records"
    )
    query_parser.add_argument(
        "--no-trim",
        action="store_true",
        help="Keep leading and trailing whitespace of values"
    )

    # Render command
    render_parser = subparsers.add_parser("render", help="Re-serialize the document")
    add_common(render_parser)
    render_parser.add_argument(
        "--prefix", "-p",
        help="Prefix for the default namespace"
    )
    render_parser.add_argument(
        "--indent", "-i",
        type=int,
        help="Indent by this many spaces"
    )
    render_parser.add_argument(
        "--trim",
        action="store_true",
        default=None,
        help="Trim whitespace around text values"
    )
    render_parser.add_argument(
        "--omit-single-prefix",
        action="store_true",
        default=None,
        help="Render without prefixes when there is a single namespace"
    )

    # Export command
    export_parser = subparsers.add_parser(
        "export", help="Print the parsed document as JSON"
    )
    add_common(export_parser)

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def cmd_query(args: argparse.Namespace) -> int:
    """Handle the query command."""
    doc = load_document(args)
    trim = not args.no_trim
    result: List[Any]
    if args.values:
        result = doc.all_values(path=args.path, trim=trim)
    else:
        result = [node.to_dict() for node in doc.all(path=args.path)]
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    """Handle the render command."""
    doc = load_document(args)
    print(doc.to_xml(
        indent=args.indent,
        trim=args.trim,
        omit_single_prefix=args.omit_single_prefix,
    ))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Handle the export command."""
    doc = load_document(args)
    print(json.dumps(doc.export(), indent=2, ensure_ascii=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    handlers = {
        "query": cmd_query,
        "render": cmd_render,
        "export": cmd_export,
    }
    try:
        return handlers[args.command](args)
    except (PlainXmlError, ConfigError, json.JSONDecodeError, OSError) as e:
        logger.error(
            "Command failed",
            extra={"command": args.command, "file": str(args.file)},
            exc_info=args.verbose
        )
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
