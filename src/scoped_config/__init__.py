"""scoped-config: Layered JSON configuration for command-line tools.

This library merges configuration from two scopes into one effective view:
- Global (typically ~/.mytool/config.json)
- Project (typically .mytool/config.json, overrides global)

Only registered top-level keys are accepted. Each key declares whether it
deep merges across scopes or is replaced whole. The reserved ``extensions``
key is open: extensions may nest any settings beneath it.

Public API:
    ConfigManager: Load, read and mutate configuration
    ConfigPaths: Dataclass defining paths to both config scopes
    Scope: Enum for GLOBAL/PROJECT scopes
    KeyRegistry, KeySpec, MergePolicy, DEFAULT_REGISTRY: Top-level key table
    deep_merge, merge_scopes: Merge functions
    get_path, set_path, remove_path: Dotted-path access
    config_get, config_set, config_remove, ConfigResult: Non-raising wrappers
    MISSING: Sentinel for "nothing set"
    ConfigError and subclasses: Exception types

Example:
    ```python
    from scoped_config import ConfigManager, ConfigPaths, Scope

    # Application injects paths (policy)
    paths = ConfigPaths.for_app(".mytool")

    # Library provides mechanism
    config = ConfigManager(paths)

    # Read merged settings
    model = config.get("model", default="gpt-4o-mini")

    # Write to specific scope
    config.set(Scope.PROJECT, "extensions.agentA.timeout", 3000)
    ```
"""

from .api import ConfigResult
from .api import config_get
from .api import config_remove
from .api import config_set
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import ConfigParseError
from .exceptions import ConfigPathError
from .exceptions import ConfigValidationError
from .manager import ConfigManager
from .merge import deep_merge
from .merge import merge_scopes
from .models import MISSING
from .models import ConfigPaths
from .models import Scope
from .paths import get_path
from .paths import parse_path
from .paths import remove_path
from .paths import set_path
from .registry import DEFAULT_REGISTRY
from .registry import EXTENSIONS_KEY
from .registry import KeyRegistry
from .registry import KeySpec
from .registry import MergePolicy

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "Scope",
    "MISSING",
    "KeyRegistry",
    "KeySpec",
    "MergePolicy",
    "DEFAULT_REGISTRY",
    "EXTENSIONS_KEY",
    "deep_merge",
    "merge_scopes",
    "parse_path",
    "get_path",
    "set_path",
    "remove_path",
    "ConfigResult",
    "config_get",
    "config_set",
    "config_remove",
    "ConfigError",
    "ConfigFileError",
    "ConfigParseError",
    "ConfigPathError",
    "ConfigValidationError",
]
