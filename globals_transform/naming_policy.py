"""Naming policies mapping a module and export name to a global path."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from globals_transform.errors import ConfigurationError
from globals_transform.global_path import GlobalPath

if TYPE_CHECKING:
    from globals_transform.transform_context import TransformContext

NAMED_SUFFIX = "Named"

NamingFunction = Callable[
    ["TransformContext", str, Union[str, None], bool], Union[GlobalPath, str]
]


@dataclass(frozen=True)
class FixedRoot:
    """Every module lives under one namespace root named by a string."""

    root: str

    def root_for(self, export_name: str | None, is_wildcard: bool) -> str:
        """Named and wildcard reads live under the alternate ``<root>Named`` root."""
        if export_name or is_wildcard:
            return self.root + NAMED_SUFFIX
        return self.root


@dataclass(frozen=True)
class ComputedPath:
    """A caller-supplied function computes the whole path."""

    function: NamingFunction


NamingPolicy = Union[FixedRoot, ComputedPath]


def naming_policy_from_option(value: object) -> NamingPolicy:
    """Tag a ``namespace_root`` option value once, when options are built."""
    if isinstance(value, (FixedRoot, ComputedPath)):
        return value
    if isinstance(value, str):
        if not value:
            msg = "namespace_root must not be empty"
            raise ConfigurationError(msg)
        return FixedRoot(value)
    if callable(value):
        return ComputedPath(value)
    msg = f"namespace_root must be a string or a callable, got {type(value).__name__}"
    raise ConfigurationError(msg)


def load_naming_function(import_path: str) -> NamingFunction:
    """Import a naming function from a ``package.module:function`` string."""
    module_name, sep, attr = import_path.partition(":")
    if not sep or not module_name or not attr:
        msg = (
            "naming_policy must look like 'package.module:function', "
            f"got {import_path!r}"
        )
        raise ConfigurationError(msg)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import naming policy module {module_name!r}: {e}"
        raise ConfigurationError(msg) from e
    function = getattr(module, attr, None)
    if not callable(function):
        msg = f"Naming policy {import_path!r} is not a callable"
        raise ConfigurationError(msg)
    return function
