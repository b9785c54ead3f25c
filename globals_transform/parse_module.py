"""Parser adapter producing ESTree dictionaries from module source text."""

from typing import Any

import esprima  # type: ignore[import-untyped]
from esprima.error_handler import Error as EsprimaError  # type: ignore[import-untyped]

from globals_transform.errors import SourceParseError
from globals_transform.nodes import Node

# esprima spells a few ESTree properties differently on its node objects.
RENAMED_FIELDS = {"isAsync": "async"}


def parse_module(source: str, filename: str | None = None) -> Node:
    """Parse ``source`` with the module goal into an ESTree ``Program`` dict."""
    try:
        tree = esprima.parseModule(source)
    except EsprimaError as e:
        raise SourceParseError(filename, str(e)) from e
    return to_estree(tree)


def to_estree(value: Any) -> Any:
    """Convert esprima node objects into plain dictionaries, recursively."""
    if isinstance(value, list):
        return [to_estree(item) for item in value]
    if isinstance(value, dict):
        return {key: to_estree(item) for key, item in value.items()}
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if hasattr(value, "__dict__"):
        return {
            RENAMED_FIELDS.get(key, key): to_estree(item)
            for key, item in vars(value).items()
        }
    return value
