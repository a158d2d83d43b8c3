"""CLI command handlers.

Each handler takes the parsed arguments and the loaded Config and returns
an exit code:
- generate: create groups from a folder of plugin binaries
- list: show defined groups
- new: create a group from plugin names
- sort / unsort: copy plugins into / remove them from the plugin database
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt
from rich.table import Table

from .config import Config
from .models import GroupCategory, PluginGroup, category_info
from .registry import default_identifier
from .scan import find_plugin_names, split_plugins
from .sorter import SortResult, UnsortResult, UnsortStatus, sort_all, unsort_all

console = Console()


def _plural(count: int, word: str) -> str:
    return f"{word}{'' if count == 1 else 's'}"


# --- generate ---

def parse_selection(text: str, count: int) -> List[int]:
    """Parse '1,3-4' / 'a' / '' into zero-based indexes.

    Raises ValueError for numbers outside 1..count or unparseable input.
    """
    text = text.strip().lower()
    if not text:
        return []
    if text in ("a", "all"):
        return list(range(count))

    indexes: List[int] = []
    for part in text.replace(" ", "").split(","):
        if not part:
            continue
        if "-" in part:
            start_s, _, end_s = part.partition("-")
            start, end = int(start_s), int(end_s)
        else:
            start = end = int(part)
        if start < 1 or end > count or start > end:
            raise ValueError(f"selection out of range: {part}")
        indexes.extend(range(start - 1, end))

    return sorted(set(indexes))


def _prompt_effects(plugin_names: List[str]) -> List[int]:
    table = Table(title="Plugins found")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Plugin")
    for i, name in enumerate(plugin_names, start=1):
        table.add_row(str(i), escape(name))
    console.print(table)

    while True:
        answer = Prompt.ask(
            "Select the plugins that are effects (e.g. 1,3-5; a: all; blank: none)",
            default="",
            show_default=False,
            console=console,
        )
        try:
            return parse_selection(answer, len(plugin_names))
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")


def _save_generated(
    config: Config,
    category: GroupCategory,
    identifier: str,
    group: PluginGroup,
) -> None:
    config.registry(category).save(identifier, group)
    count = len(group.plugins)
    console.print(
        f"[green]Saved[/green] [bold cyan]{count}[/bold cyan] "
        f"[green]{category_info(category).display_name} {_plural(count, 'plugin')} to[/green] "
        f"[bold cyan]{escape(identifier)}.json[/bold cyan]"
    )


def cmd_generate(args: argparse.Namespace, config: Config) -> int:
    """Generate plugin groups from a folder containing VST files."""
    folder = Path(args.path)
    if not folder.is_dir():
        console.print(f"[red]Not a directory: {escape(str(folder))}[/red]")
        return 1

    plugin_names = find_plugin_names(folder, recurse=args.recurse)
    if not plugin_names:
        console.print(f"[red]No plugins found in {escape(str(folder))}[/red]")
        return 1

    dir_name = folder.resolve().name
    group_name = args.name or dir_name
    identifier = args.file_name or default_identifier(dir_name)

    if args.type:
        category = GroupCategory(args.type)
        _save_generated(config, category, identifier, PluginGroup(group_name, plugin_names))
        return 0

    effects, generators = split_plugins(plugin_names, _prompt_effects(plugin_names))

    if effects:
        _save_generated(config, GroupCategory.EFFECT, identifier, PluginGroup(group_name, effects))
    if generators:
        _save_generated(config, GroupCategory.GENERATOR, identifier, PluginGroup(group_name, generators))

    return 0


# --- list ---

def _print_duplicates(config: Config) -> None:
    for category in GroupCategory:
        for dup in config.registry(category).duplicates:
            console.print(
                f"[yellow]Ignored[/yellow] [bold]{escape(dup.dropped_identifier)}.json[/bold] "
                f"[yellow]({category_info(category).display_name}): '{escape(dup.name)}' is also defined in[/yellow] "
                f"[bold]{escape(dup.kept_identifier)}.json[/bold]"
            )


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    """List plugin groups, or the plugins of one group."""
    rows = []
    for category in GroupCategory:
        registry = config.registry(category)
        for identifier, group in registry.groups.items():
            rows.append((category, identifier, group))

    if not rows:
        console.print("[bright_red]There are no plugin groups defined[/bright_red]")
        return 0

    _print_duplicates(config)

    name: Optional[str] = getattr(args, "name", None)
    if name:
        matches = [r for r in rows if r[2].name == name or r[1] == name]
        if not matches:
            console.print(f"[red]No plugin group named '{escape(name)}'.[/red]")
            return 1

        for category, identifier, group in matches:
            console.print(
                f"[bold cyan]{escape(group.name)}[/bold cyan] "
                f"({category_info(category).display_name.upper()}, {escape(identifier)}.json)"
            )
            console.print("\n[bold underline blue]Plugins[/bold underline blue]")
            if not group.plugins:
                console.print("[dim]No plugins defined[/dim]")
            for plugin in group.plugins:
                console.print(f"[green]{escape(plugin)}[/green]")
            console.print()
        return 0

    table = Table(title="Plugin Groups")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Plugins", justify="right")
    table.add_column("File", style="dim")

    rows.sort(key=lambda r: (r[2].name.lower(), r[0].value))
    for category, identifier, group in rows:
        table.add_row(
            escape(group.name),
            category_info(category).display_name.upper(),
            str(len(group.plugins)),
            f"{escape(identifier)}.json",
        )

    console.print(table)
    return 0


# --- new ---

def cmd_new(args: argparse.Namespace, config: Config) -> int:
    """Create a new plugin group."""
    category = GroupCategory(args.type)
    registry = config.registry(category)
    identifier = args.file_name or default_identifier(args.name)

    if registry.exists(identifier) and not args.force:
        overwrite = Confirm.ask(
            "That plugin group already exists. Do you want to overwrite it?",
            default=False,
            console=console,
        )
        if not overwrite:
            return 0

    path = registry.save(identifier, PluginGroup(args.name, list(args.plugins)))
    console.print(
        f"[green]Saved[/green] [bold cyan]{escape(args.name)}[/bold cyan] "
        f"[green]to[/green] [bold cyan]{escape(path.name)}[/bold cyan]"
    )
    return 0


# --- sort / unsort ---

def _print_sort_result(result: SortResult) -> None:
    for group_name in result.skipped_groups:
        console.print(
            f"[green]Skipping '[/green][bold cyan]{escape(group_name)}[/bold cyan]"
            f"[green]' because no plugins are defined[/green]"
        )
    for missing in result.missing:
        console.print(
            f"[yellow]Skipping '[/yellow][bold blue]{escape(missing.plugin)}[/bold blue]"
            f"[yellow]' because it is not installed[/yellow]"
        )

    type_name = category_info(result.category).display_name
    console.print(
        f"[green]Successfully sorted[/green] [bold cyan]{result.plugin_count}[/bold cyan] "
        f"[green]{type_name} {_plural(result.plugin_count, 'plugin')} into[/green] "
        f"[bold cyan]{result.folder_count}[/bold cyan] "
        f"[green]{_plural(result.folder_count, 'folder')}[/green]"
    )


def cmd_sort(args: argparse.Namespace, config: Config) -> int:
    """Sort plugins defined by plugin group files into the plugin database."""
    if config.effects.is_empty() and config.generators.is_empty():
        console.print("[red]There are no plugin groups to sort.[/red]")
        return 1

    for result in sort_all(config):
        if result.ran:
            _print_sort_result(result)
    return 0


def _print_unsort_result(result: UnsortResult) -> None:
    type_name = category_info(result.category).display_name
    status = result.status

    if status is UnsortStatus.NO_GROUPS:
        console.print(
            f"[green]Skipped[/green] [bold cyan]{type_name}[/bold cyan]"
            f"[green]s because there are no plugin groups.[/green]"
        )
    elif status is UnsortStatus.NOTHING_REMOVED:
        console.print(
            f"[green]Found no[/green] [bold cyan]{type_name}[/bold cyan] "
            f"[green]plugins to unsort.[/green]"
        )
    else:
        console.print(
            f"[green]Successfully unsorted[/green] [bold cyan]{result.removed_count}[/bold cyan] "
            f"[green]{type_name} {_plural(result.removed_count, 'plugin')}.[/green]"
        )


def cmd_unsort(args: argparse.Namespace, config: Config) -> int:
    """Remove any folders and plugin files created when sorting."""
    for result in unsort_all(config):
        _print_unsort_result(result)
    return 0
