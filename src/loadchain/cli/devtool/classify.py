"""
Loadchain devtool classify command.

SUMMARY: Classify a devtool setting into a source map policy
"""

from __future__ import annotations

import argparse
import sys

from loadchain.cli import OutputFormatter, add_json_flag
from loadchain.core.devtool import classify_devtool, is_use_simple_source_map, is_use_source_map

SUMMARY = "Classify a devtool setting into a source map policy"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("devtool", help="Devtool value (e.g. 'cheap-module-source-map')")
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    devtool = args.devtool
    result = {
        "devtool": devtool,
        "sourceMap": is_use_source_map(devtool),
        "simpleSourceMap": is_use_simple_source_map(devtool),
        "policy": classify_devtool(devtool).value,
    }
    formatter.success(result, f"{devtool}: {result['policy']}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
