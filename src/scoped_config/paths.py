"""Dotted-path access into configuration objects.

Paths look like ``commit.maxLength`` or ``extensions.agentA.timeout``. The
first segment must be a registered top-level key; segments beneath the
extensions namespace are not checked. Write operations return a new root
and leave their input untouched.
"""

import copy
from typing import Any

from .exceptions import ConfigPathError
from .exceptions import ConfigValidationError
from .models import MISSING
from .registry import DEFAULT_REGISTRY
from .registry import KeyRegistry


def parse_path(path: str, registry: KeyRegistry = DEFAULT_REGISTRY) -> list[str]:
    """Split a dotted path and validate its root segment.

    Args:
        path: Dotted path string
        registry: Key table used to validate the first segment

    Returns:
        List of path segments

    Raises:
        ConfigPathError: If the path is empty or has an empty segment
        ConfigValidationError: If the first segment is not a registered key
    """
    if not isinstance(path, str):
        raise ConfigPathError(f"Config path must be a string, got {type(path).__name__}")
    if not path:
        raise ConfigPathError("Config path must not be empty")

    segments = path.split(".")
    if any(not segment for segment in segments):
        raise ConfigPathError(f"Config path '{path}' contains an empty segment")

    root = segments[0]
    if not registry.is_valid_top_level_key(root):
        raise ConfigValidationError(
            f"Unknown configuration key '{root}' in path '{path}'. Valid keys: {', '.join(registry.keys)}",
            key=root,
        )
    return segments


def get_path(root: dict[str, Any], path: str, registry: KeyRegistry = DEFAULT_REGISTRY) -> Any:
    """Resolve a dotted path.

    Returns:
        The value at path, or MISSING if any segment is absent or a
        non-object is reached before the last segment
    """
    current: Any = root
    for segment in parse_path(path, registry):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def set_path(root: dict[str, Any], path: str, value: Any, registry: KeyRegistry = DEFAULT_REGISTRY) -> dict[str, Any]:
    """Assign a value at a dotted path, creating intermediate objects.

    Any existing non-object along the way is replaced by a fresh object.

    Returns:
        New root containing the assignment
    """
    segments = parse_path(path, registry)
    result = copy.deepcopy(root)

    current = result
    for segment in segments[:-1]:
        child = current.get(segment)
        if not isinstance(child, dict):
            child = {}
            current[segment] = child
        current = child

    current[segments[-1]] = copy.deepcopy(value)
    return result


def remove_path(
    root: dict[str, Any], path: str, registry: KeyRegistry = DEFAULT_REGISTRY
) -> tuple[dict[str, Any], bool]:
    """Delete the leaf at a dotted path.

    A path whose parent does not exist is a no-op, not an error.

    Returns:
        Tuple of (new root, whether a key was removed)
    """
    segments = parse_path(path, registry)
    result = copy.deepcopy(root)

    parent: Any = result
    for segment in segments[:-1]:
        if not isinstance(parent, dict) or segment not in parent:
            return result, False
        parent = parent[segment]

    if not isinstance(parent, dict) or segments[-1] not in parent:
        return result, False

    del parent[segments[-1]]
    return result, True
