"""oxalis-config CLI: inspect and check the access point configuration.

Usage:
    oxalis-config show                  # Resolved properties, hidden ones omitted
    oxalis-config show --format yaml    # Same, as YAML
    oxalis-config check                 # Load and verify, exit 1 on error
    oxalis-config backend               # Which statistics repository is used
    oxalis-config backend --dialect Oracle
"""

import argparse
import logging
import sys
from typing import Optional

import yaml

from .config import GlobalConfiguration, HomeDirectoryLocator
from .container import RepositorySelector
from .errors import ConfigError


def _load_config(args: argparse.Namespace) -> GlobalConfiguration:
    return GlobalConfiguration.from_home(locator=HomeDirectoryLocator(override=args.home))


def _format_properties(values: dict[str, Optional[str]]) -> str:
    lines = []
    for key, value in values.items():
        if value is None:
            lines.append(f"# {key} is not set")
        else:
            lines.append(f"{key}={value}")
    return "\n".join(lines)


def cmd_show(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    config = _load_config(args)
    values = config.as_dict(include_hidden=args.include_hidden)

    print(f"# Oxalis home: {config.home_directory}")
    if args.format == "yaml":
        print(yaml.safe_dump(values, sort_keys=False, default_flow_style=False).rstrip())
    else:
        print(_format_properties(values))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Load and verify the configuration, including typed values."""
    config = _load_config(args)
    # Touch every typed accessor so malformed numbers and enums surface now
    _ = (config.connect_timeout, config.read_timeout, config.pki_version)
    print(f"✅ Configuration OK ({config.home_directory})")
    return 0


def cmd_backend(args: argparse.Namespace) -> int:
    """Show which repository implementation a dialect maps to."""
    dialect = args.dialect
    if dialect is None:
        dialect = _load_config(args).jdbc_dialect

    selection = RepositorySelector().select(dialect)
    if selection.fallback:
        print(f"⚠️  No binding for dialect {dialect!r}")
        print(f"   Falling back to {selection.dialect}: {selection.describe()}")
    else:
        print(f"{selection.dialect}: {selection.describe()}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="oxalis-config",
        description="Inspect and verify the Oxalis global configuration",
    )
    parser.add_argument("--home", type=str, default=None,
                        help="Oxalis home directory (default: $OXALIS_HOME or ~/.oxalis)")
    parser.add_argument("--log-level", type=str, default="warning",
                        choices=["debug", "info", "warning", "error"])
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show
    show_parser = subparsers.add_parser("show", help="Print the resolved configuration")
    show_parser.add_argument("--format", choices=["properties", "yaml"], default="properties")
    show_parser.add_argument("--include-hidden", action="store_true",
                             help="Also print passwords and other hidden properties")

    # check
    subparsers.add_parser("check", help="Load and verify the configuration")

    # backend
    backend_parser = subparsers.add_parser(
        "backend", help="Show the statistics repository selected for a dialect"
    )
    backend_parser.add_argument("--dialect", type=str, default=None,
                                help="Dialect to resolve (default: oxalis.jdbc.dialect)")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "show": cmd_show,
        "check": cmd_check,
        "backend": cmd_backend,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        sys.exit(command(args))
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
