"""CLI entrypoints for nsdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .formatting import UnknownDocFormatError
from .logging import configure_logging
from .models import MetadataError
from .orchestrator import Orchestrator


def _add_verbosity_options(
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
        help="Only report warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nsdoc",
        description="Render API metadata into linked HTML documentation.",
    )
    _add_verbosity_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Render HTML pages for an extracted API description.",
    )
    _add_verbosity_options(build_parser, suppress_default=True)
    build_parser.add_argument(
        "metadata",
        help="Path to the API metadata file (.json, .yml or .yaml).",
    )
    build_parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to .nsdoc.yml or its directory (defaults to the current directory).",
    )
    build_parser.add_argument(
        "-o",
        "--output-dir",
        default=None,
        help="Directory for the generated pages (overrides output_dir in the config).",
    )
    build_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write debug logs to this file.",
    )

    formats_parser = subparsers.add_parser(
        "formats",
        help="List the registered doc formats.",
    )
    _add_verbosity_options(formats_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for nsdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(args.verbose),
        quiet=bool(args.quiet),
        log_file=Path(log_file) if log_file else None,
    )

    orchestrator = Orchestrator()

    if args.command == "build":
        try:
            outcome = orchestrator.run_build(
                args.metadata,
                config_path=args.config,
                output_dir=args.output_dir,
            )
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        except (ConfigError, MetadataError, UnknownDocFormatError) as exc:
            parser.exit(1, f"nsdoc build failed: {exc}\n")
        rel_path = _relativize(outcome.output_dir)
        print(f"Documented {outcome.namespaces} namespaces in {rel_path}")
    elif args.command == "formats":
        for tag in orchestrator.registry.tags():
            print(tag)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
