"""CLI entrypoint for wpmoo-pipeline tasks."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .compiler import CompileError
from .config import ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .stages import StreamUnsupportedError

TASK_HELP = {
    "styles": "Compile the main stylesheet bundle.",
    "pico:scope": "Rewrite the vendored Pico stylesheet into the wpmoo namespace.",
    "licenses": "Copy third-party licenses into the distribution root.",
    "clean": "Remove the previous bundle and its source map.",
    "build": "Clean, compile the bundle and copy licenses.",
    "watch": "Build, then rebuild on change and serve with live reload.",
    "default": "Same as build.",
}


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--root",
        default=default("."),
        help="Project root holding .wpmoo-pipeline.yml (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=default(None),
        help="Also write logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wpmoo-pipeline",
        description="Build the WPMoo UI stylesheet bundle and scoped vendor styles.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="task")
    for name, help_text in TASK_HELP.items():
        task_parser = subparsers.add_parser(name, help=help_text)
        _add_common_options(task_parser, suppress_default=True)
    parser.set_defaults(task="default")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wpmoo-pipeline tasks."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = configure_logging(verbose=bool(args.verbose), log_file=log_file)

    try:
        config = load_config(Path(args.root))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    logger.debug("Running %s in %s", args.task, config.root)
    orchestrator = Orchestrator(config)
    try:
        orchestrator.run_task(args.task)
    except KeyboardInterrupt:
        parser.exit(0, "\nStopped.\n")
    except CompileError as exc:
        parser.exit(1, f"{args.task} failed: {exc}\n")
    except StreamUnsupportedError as exc:
        parser.exit(1, f"{args.task} failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"{args.task} failed: {exc}\nRun with --verbose for more details.\n")


if __name__ == "__main__":
    main(sys.argv[1:])
