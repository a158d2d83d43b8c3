"""flsorter CLI - sort FL Studio plugins into groups.

Usage:
    flsorter generate PATH    # Generate plugin groups from a folder of VST files
    flsorter list [NAME]      # List plugin groups
    flsorter new PLUGIN...    # Create a new plugin group
    flsorter sort             # Sort grouped plugins into the plugin database
    flsorter unsort           # Remove sorted plugins from the plugin database
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .commands import cmd_generate, cmd_list, cmd_new, cmd_sort, cmd_unsort
from .config import Config
from .errors import FlSorterError
from .models import GroupCategory

console = Console()
err_console = Console(stderr=True)

_CATEGORY_CHOICES = [c.value for c in GroupCategory]


def setup_logging(verbose: bool = False) -> None:
    """Send flsorter log records to stderr through rich."""
    handler = RichHandler(console=err_console, show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("flsorter")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flsorter",
        description="Sort FL Studio plugins into groups in the plugin database",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config-dir", type=Path, help="Config directory (default: ~/.config/flsorter)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    sub = parser.add_subparsers(dest="subcmd")

    # generate
    p_generate = sub.add_parser("generate", help="Generate a plugin group from a folder containing VST files")
    p_generate.add_argument("path", type=Path, help="Path to a folder containing VST files")
    p_generate.add_argument("-n", "--name", help="Name of the plugin group to generate")
    p_generate.add_argument("-f", "--file-name", help="Name of the file to save generated plugin groups to")
    p_generate.add_argument("--recurse", action="store_true",
                            help="Include all plugins in subdirectories in the plugin group")
    p_generate.add_argument("-t", "--type", choices=_CATEGORY_CHOICES,
                            help="Save every plugin as this type instead of asking")
    p_generate.set_defaults(func=cmd_generate)

    # list
    p_list = sub.add_parser("list", help="List plugin groups")
    p_list.add_argument("name", nargs="?", help="Show the plugins of this group")
    p_list.set_defaults(func=cmd_list)

    # new
    p_new = sub.add_parser("new", help="Create a new plugin group")
    p_new.add_argument("plugins", nargs="+", help="Plugins the plugin group should contain")
    p_new.add_argument("-n", "--name", required=True, help="Name of the plugin group")
    p_new.add_argument("-t", "--type", required=True, choices=_CATEGORY_CHOICES,
                       help="Type of the plugin group")
    p_new.add_argument("-f", "--file-name", help="Name of the plugin group file")
    p_new.add_argument("--force", action="store_true", help="Overwrite without asking")
    p_new.set_defaults(func=cmd_new)

    # sort
    p_sort = sub.add_parser("sort", help="Sort plugins defined by plugin group files into the plugin database")
    p_sort.set_defaults(func=cmd_sort)

    # unsort
    p_unsort = sub.add_parser("unsort", help="Remove any folders and plugin files created when sorting")
    p_unsort.set_defaults(func=cmd_unsort)

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    setup_logging(args.verbose)

    try:
        config = Config.load(args.config_dir)
        return args.func(args, config)
    except FlSorterError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        return 1


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
