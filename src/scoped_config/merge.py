"""Cross-scope merging of raw configuration objects."""

import copy
import logging
from collections.abc import Sequence
from typing import Any

from .models import MISSING
from .registry import DEFAULT_REGISTRY
from .registry import KeyRegistry
from .registry import MergePolicy

logger = logging.getLogger(__name__)


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries with overlay precedence.

    Recursively merges nested dictionaries. Non-dict values in overlay
    completely replace corresponding values in base.

    Args:
        base: Base dictionary
        overlay: Overlay dictionary (takes precedence)

    Returns:
        New merged dictionary (base and overlay are not modified)

    Examples:
        >>> base = {"a": 1, "b": {"c": 2, "d": 3}}
        >>> overlay = {"b": {"c": 20}, "e": 5}
        >>> deep_merge(base, overlay)
        {'a': 1, 'b': {'c': 20, 'd': 3}, 'e': 5}

        >>> deep_merge({}, {"a": 1})
        {'a': 1}
    """
    result = copy.deepcopy(base)

    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            # Overlay wins - replace completely
            result[key] = copy.deepcopy(value)

    return result


def merge_scopes(layers: Sequence[dict[str, Any]], registry: KeyRegistry = DEFAULT_REGISTRY) -> dict[str, Any]:
    """Merge raw configs into one effective configuration.

    Each top-level key is merged by its registry policy. Object-policy keys
    deep merge when both sides hold objects; a non-object on either side is
    treated as a whole-value replacement for that subtree. Scalar-policy
    keys take the value from the highest-precedence layer that sets them.
    Keys no layer sets fall back to the registry default, if any.

    Args:
        layers: Raw configs ordered lowest precedence first (global, project)
        registry: Key table supplying policy and defaults

    Returns:
        New effective configuration, keys in registry order

    Raises:
        ConfigValidationError: If any layer holds an unregistered top-level key
    """
    for layer in layers:
        registry.validate_top_level(layer)

    merged: dict[str, Any] = {}
    for key in registry.keys:
        present = [layer[key] for layer in layers if key in layer]
        if not present:
            default = registry.default_value(key)
            if default is not MISSING:
                merged[key] = default
            continue

        if registry.merge_policy_for(key) is MergePolicy.SCALAR:
            merged[key] = copy.deepcopy(present[-1])
            continue

        value: Any = MISSING
        for incoming in present:
            if isinstance(value, dict) and isinstance(incoming, dict):
                value = deep_merge(value, incoming)
            else:
                value = copy.deepcopy(incoming)
        merged[key] = value

    logger.debug(f"Merged {len(layers)} scope(s) into {len(merged)} top-level key(s)")
    return merged
