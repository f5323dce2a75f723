"""CLI entrypoints for dbusgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .introspect import IntrospectionError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .printer import GenerationError


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbusgen",
        description="Generate typed Python client bindings from D-Bus introspection XML.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a bindings module from introspection files.",
    )
    _add_logging_options(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        help="Introspection XML files to read.",
    )
    generate_parser.add_argument(
        "-p",
        "--package",
        default=None,
        help="Name of the generated unit (defaults to the output file stem).",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="File to write; the module is printed to stdout when omitted.",
    )
    generate_parser.add_argument(
        "--only",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Generate only interfaces matching the pattern (repeatable).",
    )
    generate_parser.add_argument(
        "--except",
        dest="exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip interfaces matching the pattern (repeatable).",
    )
    generate_parser.add_argument(
        "--strip-prefix",
        default=None,
        help="Interface name prefix dropped from generated class names.",
    )
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .dbusgen.yml or its directory (defaults to the current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP generation service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for dbusgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "generate":
        orchestrator = Orchestrator()
        try:
            outcome = orchestrator.run(
                args.sources,
                package=args.package,
                output=args.output,
                only=args.only,
                exclude=args.exclude,
                strip_prefix=args.strip_prefix,
                config_path=args.config,
            )
        except (ConfigError, IntrospectionError) as exc:
            parser.exit(1, f"{exc}\n")
        except GenerationError as exc:
            parser.exit(1, f"dbusgen generate failed: {exc}\nRun with --verbose for more details.\n")
        if outcome.path is None:
            sys.stdout.write(outcome.source)
        else:
            print(f"Bindings for {len(outcome.interfaces)} interface(s) written to {_relativize(outcome.path)}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
