import argparse
import os

from prwatch import __version__
from prwatch.errors import PrwatchError
from prwatch.logging import get_logger
from prwatch.orchestrator import ANALYSES, run

log = get_logger("prwatch.cli") #Example of a log: 2025-01-01 00:00:00,000 | INFO | loaded configuration from config.yaml


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prwatch", description="Relate open GitHub PRs to the issues they close")
    parser.add_argument("--config", dest="config_path", help="Path to a config YAML file")
    parser.add_argument("--env", dest="env_name", help="Named environment to resolve config.<env>.yaml")
    parser.add_argument("--version", action="store_true", help="Print version and exit")

    sub = parser.add_subparsers(dest="command", metavar="{" + ",".join(ANALYSES) + "}")
    for command, analysis in ANALYSES.items():
        cmd = sub.add_parser(command, help=analysis.help)
        cmd.add_argument("--owner", required=True, help="repository owner")
        cmd.add_argument("--name", required=True, help="repository name")
        cmd.add_argument(
            "--max",
            dest="max_items",
            type=_non_negative_int,
            default=0,
            help="maximum number of PRs to process, rounded to the page size (default: all)",
        )
    return parser


def main(argv: list[str] | None = None) -> int: #examples of argv: ['stale-prs', '--owner', 'octo', '--name', 'repo'], ['--version']
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"prwatch {__version__}")
        return 0

    if args.command is None:
        parser.error("missing subcommand")

    if args.config_path:
        os.environ["PRWATCH_CONFIG_PATH"] = args.config_path
    if args.env_name:
        os.environ["PRWATCH_ENV"] = args.env_name

    try:
        report = run(args.command, args.owner, args.name, args.max_items)
    except PrwatchError as exc:
        log.error("%s", exc)
        return 1
    print(report)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
