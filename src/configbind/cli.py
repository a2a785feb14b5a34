"""configbind CLI: check and show data source configuration.

Usage:
    configbind check                        # validate ./application.yaml
    configbind check --config app.yaml      # validate a specific file
    configbind check --env                  # validate MY_DATASOURCE_* env vars
    configbind show                         # print bound settings
"""

import argparse
import json
import logging
import sys

import yaml

from .binder import ConfigBinder
from .container import load_source
from .datasource import DATASOURCE_SCHEMA, PROPERTIES_PREFIX, DataSource
from .sources import PrefixedSource


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _bind(args: argparse.Namespace):
    source = load_source(args.config, use_env=args.env)
    binder = ConfigBinder(list_delimiter=args.delimiter)
    return binder.bind(PrefixedSource(source, args.prefix), DATASOURCE_SCHEMA)


def cmd_check(args: argparse.Namespace) -> int:
    """Validate configuration; exit 1 and list problems if invalid."""
    try:
        result = _bind(args)
    except (ValueError, yaml.YAMLError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if not result.ok:
        print(f"❌ {len(result.failures)} configuration problem(s):")
        for failure in result.failures:
            print(f"  {args.prefix}.{failure.key} [{failure.kind.value}] {failure.message}")
        return 1

    print("OK")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print the bound data source settings as JSON."""
    try:
        result = _bind(args)
    except (ValueError, yaml.YAMLError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    if not result.ok:
        for failure in result.failures:
            print(f"  {args.prefix}.{failure.key}: {failure.message}", file=sys.stderr)
        return 1

    data_source = DataSource.from_properties(result.value)
    print(json.dumps(data_source.settings(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="configbind",
        description="Bind and validate data source configuration",
    )
    parser.add_argument("--log-level", type=str, default="warning",
                        choices=["debug", "info", "warning", "error"])
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, help_text in (
        ("check", "Validate configuration"),
        ("show", "Print bound configuration"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--config", "-c", type=str, default=None,
                         help="YAML config file (default: $CONFIGBIND_CONFIG or ./application.yaml)")
        sub.add_argument("--env", action="store_true",
                         help="Read settings from environment variables instead of a file")
        sub.add_argument("--prefix", type=str, default=PROPERTIES_PREFIX,
                         help=f"Key prefix (default: {PROPERTIES_PREFIX})")
        sub.add_argument("--delimiter", type=str, default=",",
                         help="Separator for single-string list values")

    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)

    if args.command == "check":
        sys.exit(cmd_check(args))
    elif args.command == "show":
        sys.exit(cmd_show(args))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
