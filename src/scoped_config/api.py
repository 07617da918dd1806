"""Result-returning wrappers for callers such as a CLI or bridge layer.

These never raise for configuration problems; every ConfigError becomes a
failed ConfigResult carrying the error kind and message.
"""

from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigError
from .manager import ConfigManager
from .models import MISSING
from .models import Scope
from .paths import get_path


@dataclass(frozen=True)
class ConfigResult:
    """Outcome of a configuration operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Value read (config_get) or removal flag (config_remove)
        found: For config_get, whether anything is set at the path
        error_kind: "validation", "parse", "path" or "io" on failure
        message: Error message on failure
    """

    ok: bool
    value: Any = None
    found: bool = False
    error_kind: str | None = None
    message: str | None = None

    @classmethod
    def failure(cls, error: ConfigError) -> "ConfigResult":
        return cls(ok=False, error_kind=error.kind, message=str(error))

    def to_dict(self) -> dict[str, Any]:
        if not self.ok:
            return {"ok": False, "error": {"kind": self.error_kind, "message": self.message}}
        return {"ok": True, "found": self.found, "value": self.value}


def config_get(manager: ConfigManager, path: str) -> ConfigResult:
    """Read a dotted path from the effective configuration."""
    try:
        value = get_path(manager.get_effective(), path, manager.registry)
    except ConfigError as e:
        return ConfigResult.failure(e)

    if value is MISSING:
        return ConfigResult(ok=True, found=False)
    return ConfigResult(ok=True, value=value, found=True)


def config_set(manager: ConfigManager, scope: Scope | str, path: str, value: Any) -> ConfigResult:
    """Write a value at a dotted path in one scope."""
    try:
        manager.set(scope, path, value)
    except ConfigError as e:
        return ConfigResult.failure(e)
    return ConfigResult(ok=True, value=value, found=True)


def config_remove(manager: ConfigManager, scope: Scope | str, path: str) -> ConfigResult:
    """Remove a dotted path from one scope."""
    try:
        removed = manager.remove(scope, path)
    except ConfigError as e:
        return ConfigResult.failure(e)
    return ConfigResult(ok=True, value=removed, found=removed)
