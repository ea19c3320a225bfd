"""Property transformers - pure functions from one mapping to another."""

from typing import Any, Callable, Mapping

PropertyTransformer = Callable[[Mapping[str, Any]], dict]


def fan_out(source_key: str, *target_keys: str) -> PropertyTransformer:
    """
    Copy one input key to several output keys.

    The source key itself is never forwarded. A missing source key
    yields None for every target.

    Example:
        transform = fan_out("token", "a.acl-token", "b.acl-token")
        transform({"token": "abc"})
        # {"a.acl-token": "abc", "b.acl-token": "abc"}
    """
    targets = tuple(target_keys)

    def transform(data: Mapping[str, Any]) -> dict:
        value = data.get(source_key)
        return {target: value for target in targets}

    return transform


def rename(
    key_mapping: Mapping[str, str], forward_unmapped: bool = False
) -> PropertyTransformer:
    """
    Rename keys according to ``key_mapping``.

    Args:
        key_mapping: Maps input keys to output keys
        forward_unmapped: Copy keys missing from the mapping unchanged

    Returns:
        Transformer producing keys in input order
    """
    mapping = dict(key_mapping)

    def transform(data: Mapping[str, Any]) -> dict:
        result = {}
        for key, value in data.items():
            if key in mapping:
                result[mapping[key]] = value
            elif forward_unmapped:
                result[key] = value
        return result

    return transform


def compose(*transformers: PropertyTransformer) -> PropertyTransformer:
    """Chain transformers left to right."""
    chain = tuple(transformers)

    def transform(data: Mapping[str, Any]) -> dict:
        result = dict(data)
        for step in chain:
            result = step(result)
        return result

    return transform
