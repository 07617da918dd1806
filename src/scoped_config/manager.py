"""Configuration manager for two-scope settings system."""

import copy
import logging
from pathlib import Path
from typing import Any

from .exceptions import ConfigFileError
from .exceptions import ConfigValidationError
from .fileio import atomic_write_json
from .fileio import read_json_object
from .merge import merge_scopes
from .models import MISSING
from .models import ConfigPaths
from .models import Scope
from .paths import get_path
from .paths import remove_path
from .paths import set_path
from .registry import DEFAULT_REGISTRY
from .registry import KeyRegistry

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration across global/project scopes.

    Each scope is one JSON file. Loading reads and validates both files and
    merges them into an effective configuration that all reads go through.
    Mutations target exactly one scope: the change is applied to a copy of
    that scope's raw config, written atomically, and only then adopted and
    re-merged.

    Resolution order (highest to lowest priority):
    1. Project settings (repository)
    2. Global settings (per user)
    3. Registry defaults

    Args:
        paths: Configuration file paths for both scopes
        registry: Table of valid top-level keys and their merge policies
    """

    def __init__(self, paths: ConfigPaths, registry: KeyRegistry = DEFAULT_REGISTRY):
        self.paths = paths
        self.registry = registry
        self._raw: dict[Scope, dict[str, Any]] | None = None
        self._effective: dict[str, Any] | None = None

    # ===== Lifecycle =====

    @property
    def is_loaded(self) -> bool:
        return self._raw is not None

    def load(self) -> dict[str, Any]:
        """Read, validate and merge every scope.

        Returns:
            Copy of the effective configuration

        Raises:
            ConfigParseError: If a scope file is not a valid JSON object
            ConfigFileError: If a scope file exists but cannot be read
            ConfigValidationError: If a scope file has an unrecognized top-level key
        """
        _, effective = self._load_state()
        return copy.deepcopy(effective)

    def reload(self) -> dict[str, Any]:
        """Discard loaded state and load again from disk."""
        return self.load()

    # ===== Reads =====

    def get(self, path: str, default: Any = None) -> Any:
        """Get a value from the effective configuration.

        Args:
            path: Dotted path, e.g. "commit.maxLength"
            default: Returned when nothing is set at path

        Returns:
            Copy of the value at path, or default
        """
        _, effective = self._ensure_loaded()
        value = get_path(effective, path, self.registry)
        if value is MISSING:
            return default
        return copy.deepcopy(value)

    def has(self, path: str) -> bool:
        """Check whether the effective configuration sets a value at path."""
        _, effective = self._ensure_loaded()
        return get_path(effective, path, self.registry) is not MISSING

    def get_effective(self) -> dict[str, Any]:
        """Get merged settings from all scopes.

        Merge order (later overrides earlier):
        1. Registry defaults
        2. Global settings
        3. Project settings (highest priority)

        Returns:
            Copy of the effective configuration
        """
        _, effective = self._ensure_loaded()
        return copy.deepcopy(effective)

    get_merged_settings = get_effective

    def get_scope(self, scope: Scope | str) -> dict[str, Any]:
        """Get the raw settings of one scope, as stored in its file."""
        scope = self._coerce_scope(scope)
        raw, _ = self._ensure_loaded()
        return copy.deepcopy(raw[scope])

    # ===== Mutations =====

    def set(self, scope: Scope | str, path: str, value: Any) -> None:
        """Set a value at a dotted path in one scope.

        Args:
            scope: Target scope
            path: Dotted path, e.g. "extensions.agentA.timeout"
            value: Any JSON-serializable value

        Raises:
            ConfigValidationError: If the path root is not a registered key or
                the value is not JSON-serializable
            ConfigPathError: If the path is malformed
            ConfigFileError: If the scope has no file or the write fails
        """
        scope = self._coerce_scope(scope)
        raw, _ = self._ensure_loaded()

        updated = set_path(raw[scope], path, value, self.registry)
        self._commit(raw, scope, updated)
        logger.info(f"Set '{path}' in {scope.value} scope")

    def remove(self, scope: Scope | str, path: str) -> bool:
        """Remove the value at a dotted path from one scope.

        Args:
            scope: Target scope
            path: Dotted path

        Returns:
            True if removed, False if not found (the file is not rewritten)
        """
        scope = self._coerce_scope(scope)
        raw, _ = self._ensure_loaded()

        updated, removed = remove_path(raw[scope], path, self.registry)
        if not removed:
            return False

        self._commit(raw, scope, updated)
        logger.info(f"Removed '{path}' from {scope.value} scope")
        return True

    def persist(self, scope: Scope | str) -> None:
        """Write one scope's raw settings to its file.

        Raises:
            ConfigFileError: If the scope has no file or the write fails
        """
        scope = self._coerce_scope(scope)
        raw, _ = self._ensure_loaded()
        atomic_write_json(self._require_path(scope), raw[scope], scope.value)

    def scope_to_path(self, scope: Scope | str) -> Path | None:
        """Get path for a given scope.

        Public accessor for scope-to-path mapping.

        Args:
            scope: Scope enum value or its name

        Returns:
            Path for the given scope, or None if the scope is disabled
        """
        return self._scope_to_path(self._coerce_scope(scope))

    # ===== Private Helpers =====

    def _load_state(self) -> tuple[dict[Scope, dict[str, Any]], dict[str, Any]]:
        """Read and validate every scope, then adopt the raw configs and their merge."""
        self._raw = None
        self._effective = None

        raw: dict[Scope, dict[str, Any]] = {}
        for scope in Scope.ordered():
            path = self._scope_to_path(scope)
            data = read_json_object(path, scope.value) if path is not None else {}
            self.registry.validate_top_level(data, scope.value)
            raw[scope] = data

        effective = self._merge(raw)
        self._raw = raw
        self._effective = effective
        logger.debug(f"Loaded configuration from {', '.join(s.value for s in Scope.ordered())} scopes")
        return raw, effective

    def _ensure_loaded(self) -> tuple[dict[Scope, dict[str, Any]], dict[str, Any]]:
        if self._raw is None or self._effective is None:
            return self._load_state()
        return self._raw, self._effective

    def _merge(self, raw: dict[Scope, dict[str, Any]]) -> dict[str, Any]:
        return merge_scopes([raw[scope] for scope in Scope.ordered()], self.registry)

    def _commit(self, current: dict[Scope, dict[str, Any]], scope: Scope, updated: dict[str, Any]) -> None:
        """Persist a scope's new raw config, then adopt it and re-merge.

        Nothing in memory changes unless the write succeeded.
        """
        atomic_write_json(self._require_path(scope), updated, scope.value)

        raw = dict(current)
        raw[scope] = updated
        self._effective = self._merge(raw)
        self._raw = raw

    def _coerce_scope(self, scope: Scope | str) -> Scope:
        if isinstance(scope, Scope):
            return scope
        try:
            return Scope(scope)
        except ValueError:
            valid = ", ".join(s.value for s in Scope)
            raise ConfigValidationError(f"Unknown scope '{scope}'. Valid scopes: {valid}") from None

    def _scope_to_path(self, scope: Scope) -> Path | None:
        """Convert Scope enum to Path.

        Args:
            scope: Scope enum value

        Returns:
            Path for the given scope
        """
        scope_map = {
            Scope.GLOBAL: self.paths.global_path,
            Scope.PROJECT: self.paths.project_path,
        }
        return scope_map[scope]

    def _require_path(self, scope: Scope) -> Path:
        path = self._scope_to_path(scope)
        if path is None:
            raise ConfigFileError(f"No {scope.value} config file is available here", scope=scope.value)
        return path
