"""flsorter - sort FL Studio plugins into groups.

Plugin groups are declared as JSON files in the config directory and
materialized by copying each plugin's installed .fst file into a folder
of the FL Studio plugin database:

- flsorter generate   - Create groups from a folder of VST files
- flsorter list       - Show defined groups
- flsorter new        - Create a group from plugin names
- flsorter sort       - Copy grouped plugins into the plugin database
- flsorter unsort     - Remove sorted plugins again
"""

__version__ = "0.1.0"

from .errors import ConfigError, FileOperationError, FlSorterError, ParseError, ValidationError
from .models import CATEGORY_INFO, GroupCategory, PluginGroup
from .registry import GroupRegistry
from .database import InstalledPluginIndex, PluginDatabase
from .sorter import SortResult, UnsortResult, sort_category, unsort_category
from .config import Config, UserConfig

__all__ = [
    "__version__",
    "FlSorterError",
    "ValidationError",
    "ParseError",
    "FileOperationError",
    "ConfigError",
    "CATEGORY_INFO",
    "GroupCategory",
    "PluginGroup",
    "GroupRegistry",
    "InstalledPluginIndex",
    "PluginDatabase",
    "SortResult",
    "UnsortResult",
    "sort_category",
    "unsort_category",
    "Config",
    "UserConfig",
]
