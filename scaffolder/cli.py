"""CLI entrypoints for platform-scaffolder generators."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from .config import ConfigError, ScaffolderDefaults
from .errors import AnswerError, ScaffolderError
from .generators import Generator, discover_generators
from .logging import configure_logging
from .prompting import AnswerCollector
from .runner import GeneratorRunner, RunReport


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_generator_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        dest="root_dir",
        help="Repository root directory (answers the root directory prompt).",
    )
    parser.add_argument(
        "-s",
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Answer a prompt up front. Repeatable; repeat a key to give a list.",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; use defaults for unanswered questions.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file.",
    )


def _build_parser(generators: Mapping[str, Generator]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="platform-scaffolder",
        description="Platform scaffolder (Quarkus/Maven/Graal native/GitHub Actions).",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List available generators.")
    _add_verbose_option(list_parser, suppress_default=True)

    for name, generator in generators.items():
        generator_parser = subparsers.add_parser(name, help=generator.description)
        _add_verbose_option(generator_parser, suppress_default=True)
        _add_generator_options(generator_parser)

    return parser


def parse_assignments(raw_values: Sequence[str]) -> Dict[str, Any]:
    """Parse ``key=value`` (or ``key:value``) items; repeated keys collect into a list."""
    result: Dict[str, Any] = {}
    for raw in raw_values:
        text = str(raw).strip()
        key: Optional[str] = None
        value: Optional[str] = None
        for separator in ("=", ":"):
            if separator in text:
                key, value = (part.strip() for part in text.split(separator, 1))
                break
        if not key or value is None:
            raise ValueError(f"Invalid --set value: {raw!r}. Expected KEY=VALUE.")
        key = key.replace("-", "_")
        if key in result:
            existing = result[key]
            result[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            result[key] = value
    return result


def main(argv: list[str] | None = None, *, environ: Mapping[str, str] | None = None) -> int:
    """CLI entrypoint for platform-scaffolder."""
    defaults = ScaffolderDefaults.from_env(os.environ if environ is None else environ)
    generators = discover_generators(defaults)
    parser = _build_parser(generators)
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "list":
        for name, generator in generators.items():
            print(f"{name:<10} {generator.description}")
        return 0

    generator = generators[args.command]
    try:
        presets = parse_assignments(args.assignments)
    except ValueError as exc:
        parser.exit(2, f"{exc}\n")
    if args.root_dir:
        presets["root_dir"] = args.root_dir

    collector = AnswerCollector(interactive=not args.no_input and sys.stdin.isatty())
    try:
        answers = collector.collect(generator.prompts(), presets)
        report = GeneratorRunner().run(generator, answers)
    except AnswerError as exc:
        parser.exit(2, f"{exc}\n")
    except (ScaffolderError, ConfigError) as exc:
        parser.exit(1, f"{args.command} failed: {exc}\n")

    _print_report(report)
    return 0 if report.ok else 1


def _print_report(report: RunReport) -> None:
    for change in report.changes:
        print(f"[OK] {change.message}")
    for failure in report.failures:
        print(f"[FAILED] {failure.step}: {failure.error}", file=sys.stderr)
    if report.skipped:
        print(f"{len(report.skipped)} remaining step(s) not run.", file=sys.stderr)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
