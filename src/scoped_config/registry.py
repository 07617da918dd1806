"""Registry of recognized top-level configuration keys.

The registry is a static table: which top-level keys may appear in a scope
file, how each key merges across scopes, and what value a key takes when no
scope sets it. One entry is "open": the extensions namespace, beneath which
third-party code may nest anything without validation.
"""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigValidationError
from .models import MISSING

EXTENSIONS_KEY = "extensions"


def _freeze(value: Any) -> Any:
    """Read-only deep copy of a JSON value: objects become mappingproxies, arrays tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class MergePolicy(Enum):
    """How values for a key combine across scopes."""

    OBJECT = "object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class KeySpec:
    """Declaration of one top-level key.

    Attributes:
        name: Top-level key name
        policy: Cross-scope merge policy
        default: Value used when no scope sets the key (MISSING for none), stored read-only
        open: Everything beneath the key is exempt from validation
        description: Human-readable summary for help output
    """

    name: str
    policy: MergePolicy = MergePolicy.SCALAR
    default: Any = MISSING
    open: bool = False
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "default", _freeze(self.default))

    def default_value(self) -> Any:
        """Get a fresh, mutable copy of the default."""
        return _thaw(self.default)


class KeyRegistry:
    """Immutable table of valid top-level keys.

    Args:
        specs: Key declarations, in the order keys should appear in merged output
    """

    def __init__(self, specs: Iterable[KeySpec]):
        table: dict[str, KeySpec] = {}
        for spec in specs:
            if spec.name in table:
                raise ValueError(f"Duplicate key in registry: '{spec.name}'")
            if spec.open and spec.policy is not MergePolicy.OBJECT:
                raise ValueError(f"Open key '{spec.name}' must use object merge policy")
            table[spec.name] = spec
        self._specs: Mapping[str, KeySpec] = MappingProxyType(table)

    def __contains__(self, key: object) -> bool:
        return key in self._specs

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"KeyRegistry({list(self._specs)})"

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._specs)

    def spec_for(self, key: str) -> KeySpec:
        """Get the declaration for a key.

        Raises:
            ConfigValidationError: If the key is not registered
        """
        try:
            return self._specs[key]
        except KeyError:
            raise ConfigValidationError(f"Unknown configuration key '{key}'", key=key) from None

    def is_valid_top_level_key(self, key: str) -> bool:
        return key in self._specs

    def is_extension_key(self, key: str) -> bool:
        """Check whether everything beneath key is exempt from validation."""
        spec = self._specs.get(key)
        return spec is not None and spec.open

    def merge_policy_for(self, key: str) -> MergePolicy:
        return self.spec_for(key).policy

    def default_value(self, key: str) -> Any:
        """Get the default for a key, or MISSING if it has none."""
        return self.spec_for(key).default_value()

    def defaults(self) -> dict[str, Any]:
        """Get defaults for every key that declares one."""
        return {name: spec.default_value() for name, spec in self._specs.items() if spec.default is not MISSING}

    def validate_top_level(self, data: Mapping[str, Any], scope: str | None = None) -> None:
        """Check every top-level key of a raw config against the registry.

        Args:
            data: Raw configuration object from one scope
            scope: Scope name for error messages

        Raises:
            ConfigValidationError: On the first unrecognized key
        """
        for key in data:
            if key not in self._specs:
                where = f" in {scope} scope" if scope else ""
                raise ConfigValidationError(
                    f"Unknown configuration key '{key}'{where}. Valid keys: {', '.join(self._specs)}",
                    scope=scope,
                    key=key,
                )


DEFAULT_REGISTRY = KeyRegistry(
    [
        KeySpec("provider", description="Language model provider name"),
        KeySpec("model", description="Model identifier passed to the provider"),
        KeySpec("apiBaseUrl", description="Override for the provider API endpoint"),
        KeySpec("language", description="Language for generated commit messages and branch names"),
        KeySpec("commit", MergePolicy.OBJECT, description="Commit message generation options"),
        KeySpec("branch", MergePolicy.OBJECT, description="Branch name generation options"),
        KeySpec("ignore", description="Path globs left out of diffs sent for generation"),
        KeySpec(
            EXTENSIONS_KEY,
            MergePolicy.OBJECT,
            default={},
            open=True,
            description="Free-form settings owned by extensions",
        ),
    ]
)
