"""protog command line.

Builds a schema description from command-line definitions, renders it and
either prints the document or writes ``<output>/<name>.proto``.

Usage::

    protog Greet.v1 -m HelloRequest[data:string]
    protog Greet.v1 -m HelloRequest[data:string] -s Greeter[SayHello:HelloRequest:] -d
    python -m protog Greet.v1 -O go_package:greet/v1 -o ./proto -f
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from pydantic import ValidationError

from protog import __version__
from protog.config import Config
from protog.encoder import EncodeError, Renderer
from protog.grammar import GrammarError, build_description
from protog.utils import (
    OutputExistsError,
    print_document,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    proto_filename,
    write_proto,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protog",
        description="protog is a protobuf file generator for the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  protog Greet.v1 -m HelloRequest[data:string]\n"
            "  protog Greet.v1 -s Greeter[SayHello:HelloRequest:+Chunk] -d\n"
            "  protog Greet.v1 -O go_package:greet/v1 -o ./proto -f\n"
        ),
    )

    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Package name; also names the output file (lower-cased, .proto)",
    )
    parser.add_argument(
        "--message", "-m",
        action="append",
        default=[],
        metavar="Name[field:type,...]",
        help="Message definition (repeatable)",
    )
    parser.add_argument(
        "--service", "-s",
        action="append",
        default=[],
        metavar="Name[method:in:out,...]",
        help="Service definition; prefix a type with + to stream it (repeatable)",
    )
    parser.add_argument(
        "--option", "-O",
        action="append",
        default=[],
        metavar="name:value",
        help="File option (repeatable)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory for the generated proto (default: .)",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        default=None,
        help="Overwrite the file if it already exists",
    )
    parser.add_argument(
        "--dryrun", "-d",
        action="store_true",
        help="Print the generated proto to stdout instead of writing it",
    )
    parser.add_argument(
        "--syntax",
        default=None,
        help="Syntax declaration (default: proto3)",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        default=None,
        help="Render without line breaks or indentation",
    )
    parser.add_argument(
        "--no-indent",
        dest="indent",
        action="store_false",
        default=None,
        help="Do not tab-indent fields and methods",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    """Start from the environment and apply explicit command-line flags."""
    config = Config.from_env()
    if args.output is not None:
        config.output_dir = Path(args.output)
    if args.force is not None:
        config.force = args.force
    if args.syntax is not None:
        config.syntax = args.syntax
    if args.compact is not None:
        config.render.compact = args.compact
    if args.indent is not None:
        config.render.indent = args.indent
    config.dryrun = args.dryrun
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``protog`` and ``python -m protog``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.name is None:
        parser.print_usage()
        return
    if not args.name.strip():
        print_error("Error: proto name missing")
        sys.exit(1)

    try:
        config = config_from_args(args)
    except ValidationError as exc:
        print_error(f"Error: invalid configuration: {_describe_validation(exc)}")
        sys.exit(1)
    renderer = Renderer(indent=config.render.indent, compact=config.render.compact)

    try:
        description = build_description(
            args.name,
            syntax=config.syntax,
            messages=args.message,
            services=args.service,
            options=args.option,
        )
        content = renderer.render(description)
    except (GrammarError, EncodeError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if config.dryrun:
        print_document(content)
        return

    target = Path(config.output_dir) / proto_filename(args.name)
    if config.force and target.exists():
        print_warning(f"Overwriting {target}")

    try:
        path = asyncio.run(
            write_proto(content, config.output_dir, args.name, force=config.force)
        )
    except (OutputExistsError, OSError) as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    print_success(f"Wrote {path}")
    print_summary_table(
        {
            "Package": args.name,
            "Messages": str(len(description.get("message", {}))),
            "Services": str(len(description.get("service", {}))),
            "Bytes": str(len(content)),
        },
        title="protog",
    )


def _describe_validation(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "value"
    return f"{location}: {error['msg']}"


if __name__ == "__main__":
    main()
