"""Recursive merge of payload fragments.

Values fall into three kinds: mappings, sequences and scalars. Merging two
values of the same container kind combines them; anything else is a
conflict that the right-hand value wins.

    mapping + mapping    -> key-wise recursive merge, left keys first
    sequence + sequence  -> concatenation
    anything else        -> right-hand value
"""

from typing import Any, Mapping


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy(item) for key, item in value.items()}
    if _is_sequence(value):
        return [_copy(item) for item in value]
    return value


def merge_values(left: Any, right: Any) -> Any:
    """Merge two values.

    Args:
        left: Earlier value.
        right: Later value, which wins on scalar conflict.

    Returns:
        A new value; neither argument is modified.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = _copy(left)
        for key, value in right.items():
            if key in merged:
                merged[key] = merge_values(merged[key], value)
            else:
                merged[key] = _copy(value)
        return merged

    if _is_sequence(left) and _is_sequence(right):
        return _copy(left) + _copy(right)

    return _copy(right)


def merge_recursive(*mappings: Mapping[str, Any]) -> dict:
    """Merge mappings from left to right.

    Example:
        >>> merge_recursive(
        ...     {"to": [{"email": "ops@example.com"}], "subject": "Hi"},
        ...     {"to": [{"email": "ada@example.com"}], "subject": "Hello"},
        ... )
        {'to': [{'email': 'ops@example.com'}, {'email': 'ada@example.com'}], 'subject': 'Hello'}

    Args:
        *mappings: Mappings in increasing order of precedence.

    Returns:
        A new dict.
    """
    merged: dict = {}
    for mapping in mappings:
        merged = merge_values(merged, mapping)
    return merged
