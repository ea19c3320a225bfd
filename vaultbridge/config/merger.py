"""Merge logic for bridge configuration and property overlays."""

from typing import Any, Mapping


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override wins on conflicts.

    Args:
        base: Base configuration
        override: Configuration to merge on top

    Returns:
        New merged dictionary

    Example:
        base = {"backends": {"consul": {"role": "ro", "enabled": False}}}
        override = {"backends": {"consul": {"enabled": True}}}
        result = {"backends": {"consul": {"role": "ro", "enabled": True}}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def flatten(properties: Mapping[str, Any], prefix: str = "") -> dict:
    """
    Flatten nested mappings into dotted keys.

    Example:
        flatten({"spring": {"cloud": {"consul": {"host": "c1"}}}})
        # {"spring.cloud.consul.host": "c1"}
    """
    result = {}
    for key, value in properties.items():
        name = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            result.update(flatten(value, name))
        else:
            result[name] = value
    return result


def apply_overlay(properties: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict:
    """
    Overlay resolved secret properties onto an effective property set.

    Both sides are flattened to dotted keys; the overlay takes precedence,
    None values included.
    """
    result = flatten(properties)
    result.update(flatten(overlay))
    return result
