"""Group registry.

Loads plugin group definitions for one category from a directory of
``<identifier>.json`` files and saves new or updated groups back to it.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .errors import FileOperationError, ParseError
from .models import DEFINITION_SUFFIX, GroupCategory, PluginGroup, validate_group_name

logger = logging.getLogger(__name__)


def default_identifier(name: str) -> str:
    """File identifier used when none is given: 'Reverb Rack' -> 'reverb_rack'."""
    return name.lower().replace(" ", "_")


@dataclass(frozen=True)
class DuplicateGroup:
    """Two definition files declared the same group name."""
    name: str
    kept_identifier: str
    dropped_identifier: str


def _read_group(path: Path) -> PluginGroup:
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"could not read file ({exc})", path) from exc

    try:
        data = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise ParseError(str(exc), path) from exc

    try:
        return PluginGroup.from_dict(data)
    except ParseError as exc:
        raise ParseError(str(exc), path) from exc


class GroupRegistry:
    """Plugin groups of one category, keyed by definition file identifier.

    Groups are kept in lexicographic identifier order. At most one group per
    name is kept; when two files declare the same name the one whose
    identifier sorts later wins.
    """

    def __init__(
        self,
        category: GroupCategory,
        directory: Path,
        groups: Optional[Dict[str, PluginGroup]] = None,
    ):
        self.category = GroupCategory(category)
        self.directory = Path(directory)
        self.groups: Dict[str, PluginGroup] = dict(sorted((groups or {}).items()))
        self.duplicates: List[DuplicateGroup] = []

    @classmethod
    def load(cls, category: GroupCategory, directory: Path) -> "GroupRegistry":
        """Load every definition file in ``directory`` (non-recursive).

        Raises ParseError on the first malformed file; nothing is returned
        for a partially loaded directory.
        """
        directory = Path(directory)
        registry = cls(category, directory)

        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise FileOperationError(f"failed to list group directory {directory} ({exc})", directory) from exc

        for path in entries:
            if path.suffix != DEFINITION_SUFFIX or not path.is_file():
                continue
            registry.groups[path.stem] = _read_group(path)

        registry._drop_duplicate_names()
        return registry

    def _drop_duplicate_names(self) -> None:
        """Keep only the last group (in identifier order) for each name."""
        by_name: Dict[str, str] = {}
        kept: Dict[str, PluginGroup] = {}

        for identifier, group in sorted(self.groups.items()):
            previous = by_name.get(group.name)
            if previous is not None:
                logger.warning(
                    "A plugin group with the name '%s' already exists. "
                    "Overwriting with the group defined in %s%s",
                    group.name,
                    identifier,
                    DEFINITION_SUFFIX,
                )
                del kept[previous]
                self.duplicates.append(DuplicateGroup(group.name, identifier, previous))

            by_name[group.name] = identifier
            kept[identifier] = group

        self.groups = kept

    def group_path(self, identifier: str) -> Path:
        return self.directory / f"{identifier}{DEFINITION_SUFFIX}"

    def exists(self, identifier: str) -> bool:
        """Check whether a definition file with this identifier exists."""
        return self.group_path(identifier).is_file()

    def get(self, identifier: str) -> Optional[PluginGroup]:
        return self.groups.get(identifier)

    def save(self, identifier: str, group: PluginGroup) -> Path:
        """Write ``group`` to ``<identifier>.json``, overwriting any existing file.

        Raises ParseError if the group name can't be used as a folder name.
        """
        validate_group_name(group.name)
        path = self.group_path(identifier)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(group.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            raise FileOperationError(
                f"failed to write '{group.name}' to {path} ({exc})", path
            ) from exc

        self.groups[identifier] = group
        self._drop_duplicate_names()
        return path

    def identifiers(self) -> List[str]:
        return list(self.groups)

    def is_empty(self) -> bool:
        return not self.groups

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[PluginGroup]:
        return iter(list(self.groups.values()))
