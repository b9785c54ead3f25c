"""Logic for deep merging configuration dictionaries."""

from typing import Any

ADDITIVE_MAPPINGS = frozenset({"externals"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Objects are merged recursively.
    - Arrays in 'update' replace 'base' arrays.
    - 'externals' is additive: user entries are added to (or override) the
      base mapping, and a null user value removes an entry.
    """
    result = base.copy()
    for key, value in update.items():
        if (
            key in ADDITIVE_MAPPINGS
            and isinstance(value, dict)
            and isinstance(result.get(key), dict)
        ):
            merged = dict(result[key])
            for source, global_name in value.items():
                if global_name is None:
                    merged.pop(source, None)
                else:
                    merged[source] = global_name
            result[key] = merged
        elif key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            # Default: Replacement (scalars and arrays)
            result[key] = value
    return result
