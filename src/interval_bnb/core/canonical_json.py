"""
Canonical JSON Serialization

Deterministic JSON output with sorted keys, used when a run's result
is written to a file. Infinite bounds are kept as JSON Infinity.
"""

import json
from typing import Any


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    Args:
        obj: Object to serialize (usually a to_canonical() dict)
        indent: Indentation level (None for compact)

    Returns:
        JSON string; identical inputs give identical strings
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        default=str
    )
