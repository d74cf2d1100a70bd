"""
Loadchain config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables.
"""

from __future__ import annotations

import argparse
import sys

import yaml

from loadchain.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from loadchain.core.config import ConfigManager

SUMMARY = "Show current configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'build.devtool')",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = ConfigManager(get_repo_root(args))
        config_data = manager.load_config(validate=True)

        if args.key:
            missing = object()
            value = manager.get(args.key, missing)
            if value is missing:
                formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="config_key_not_found")
                return 1
            data = {args.key: value}
        else:
            data = config_data

        if formatter.json_mode:
            formatter.json_output(data)
        else:
            formatter.text(
                yaml.safe_dump(data, default_flow_style=False, sort_keys=True, allow_unicode=True).rstrip()
            )
        return 0

    except Exception as e:
        formatter.error(e, error_code="config_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
