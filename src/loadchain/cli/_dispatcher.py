"""
Auto-discovery CLI dispatcher for Loadchain.

Each subpackage of ``loadchain.cli`` is a domain (``uses``, ``devtool``,
``config``); each public module inside it is a command exposing ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Callable
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from loadchain.core.utils.profiling import Profiler, enable_profiler, span

logger = logging.getLogger(__name__)

_CLI_DIR = Path(__file__).parent
_PACKAGE = "loadchain.cli"


def _is_command_file(path: Path) -> bool:
    return path.suffix == ".py" and not path.name.startswith("_")


@lru_cache(maxsize=1)
def discover_domains() -> dict[str, Path]:
    """Map domain name to directory for every folder holding at least one command."""
    return {
        item.name: item
        for item in sorted(_CLI_DIR.iterdir())
        if item.is_dir()
        and not item.name.startswith("_")
        and any(_is_command_file(f) for f in item.iterdir())
    }


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> dict[str, dict[str, Any]]:
    """Import the command modules of ``domain`` keyed by file stem.

    Modules that fail to import are logged and left out so one broken
    command does not take the whole CLI down.
    """
    commands: dict[str, dict[str, Any]] = {}
    for item in sorted((_CLI_DIR / domain).glob("*.py")):
        if not _is_command_file(item):
            continue
        dotted = f"{_PACKAGE}.{domain}.{item.stem}"
        try:
            with span("cli.discover.import", module=dotted):
                module = importlib.import_module(dotted)
        except ImportError as exc:
            logger.warning("Skipping command %s: %s", dotted, exc)
            continue
        commands[item.stem] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", f"{domain} {item.stem}"),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }
    return commands


def _domain_help(domain: str) -> str:
    try:
        package = importlib.import_module(f"{_PACKAGE}.{domain}")
    except ImportError:
        package = None
    doc = (getattr(package, "__doc__", None) or "").strip()
    return doc.splitlines()[0] if doc else f"{domain.title()} commands"


def build_parser() -> argparse.ArgumentParser:
    """Build the root parser with one subparser per discovered domain/command."""
    parser = argparse.ArgumentParser(
        prog="loadchain",
        description="Loadchain - compile loader use chains into build engine descriptors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_get_version()}")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print span timings to stderr after the command finishes.",
    )
    domains = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")

    for domain in discover_domains():
        commands = discover_commands(domain)
        if not commands:
            continue
        domain_parser = domains.add_parser(domain, help=_domain_help(domain))
        subcommands = domain_parser.add_subparsers(dest="command", title="commands", metavar="<command>")
        domain_parser.set_defaults(_domain_parser=domain_parser)

        for name, info in commands.items():
            dashed = name.replace("_", "-")
            cmd_parser = subcommands.add_parser(
                dashed,
                aliases=[name] if dashed != name else [],
                help=info["summary"],
            )
            if info["register_args"]:
                info["register_args"](cmd_parser)
            if info["main"]:
                cmd_parser.set_defaults(_func=info["main"])

    return parser


def _get_version() -> str:
    from loadchain import __version__

    return __version__


def _strip_profile_flag(argv: list[str]) -> tuple[list[str], bool]:
    """Remove ``--profile`` when it is a global flag, i.e. given before the domain."""
    domain_at = next((i for i, a in enumerate(argv) if not a.startswith("-")), len(argv))
    kept = [a for i, a in enumerate(argv) if not (a == "--profile" and i < domain_at)]
    return kept, len(kept) != len(argv)


def _print_profile(profiler: Profiler) -> None:
    print("[loadchain][profile] span totals (ms):", file=sys.stderr)
    for line in profiler.format_summary():
        print(line, file=sys.stderr)


def _dispatch(argv: list[str]) -> int:
    with span("cli.parser.build"):
        parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        parser.print_help()
        return 0

    func: Callable[[argparse.Namespace], int] | None = getattr(args, "_func", None)
    if func is None:
        args._domain_parser.print_help()
        return 0

    with span("cli.command", domain=args.domain, command=getattr(args, "command", None)):
        return int(func(args) or 0)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``loadchain`` console script; returns the exit code."""
    argv, profile_enabled = _strip_profile_flag(list(sys.argv[1:] if argv is None else argv))
    profiler = Profiler() if profile_enabled else None

    with enable_profiler(profiler) if profiler else nullcontext():
        with span("cli.total"):
            result = _dispatch(argv)

    if profiler is not None:
        _print_profile(profiler)
    return result


if __name__ == "__main__":
    sys.exit(main())
