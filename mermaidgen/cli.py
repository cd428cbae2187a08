"""CLI entrypoints for mermaidgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .generator import DiagramGenerator
from .logging import configure_logging
from .output import OutputError
from .parsers import ParseError, discover_parsers, parser_for


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    # Subcommands suppress their defaults so options given before the command survive.
    verbose_default: object = argparse.SUPPRESS if suppress_default else False
    log_file_default: object = argparse.SUPPRESS if suppress_default else None
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=verbose_default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=log_file_default,
        help="Also write a detailed (DEBUG) log of the run to this file.",
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mermaidgen",
        description="Generate Mermaid class diagrams from source declarations.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a class diagram for every source file under a directory.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Path to the directory containing source files (defaults to current directory).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file for the diagram (defaults to stdout).",
    )
    generate_parser.add_argument(
        "--title",
        default=None,
        help="Diagram title (defaults to the configured title or the directory name).",
    )
    generate_parser.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=None,
        help="Number of files to parse in parallel.",
    )

    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the declaration tree of one source file as JSON.",
    )
    _add_logging_options(dump_parser, suppress_default=True)
    dump_parser.add_argument("file", help="Source file to parse.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for mermaidgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    try:
        configure_logging(verbose=bool(args.verbose), log_file=log_file)
    except OSError as exc:
        parser.exit(1, f"Cannot open log file {log_file}: {exc}\n")

    if args.command == "generate":
        generator = DiagramGenerator(jobs=args.jobs)
        try:
            generator.run(args.directory, args.output, title=args.title)
        except (FileNotFoundError, NotADirectoryError, PermissionError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except ValueError as exc:
            parser.exit(1, f"{exc}\n")
        except OutputError as exc:
            parser.exit(1, f"{exc}\n")
    elif args.command == "dump":
        path = Path(args.file).expanduser()
        try:
            config = load_config(path.parent)
            parsers = discover_parsers(config.parsers.enabled or None, config=config)
        except (ConfigError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        source_parser = parser_for(path, parsers)
        if source_parser is None:
            parser.exit(1, f"No parser supports {path}\n")
        try:
            tree = source_parser.parse(path)
        except ParseError as exc:
            parser.exit(1, f"{exc}\n")
        print(json.dumps(tree.to_dict(), indent=2))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
