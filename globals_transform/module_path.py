"""Utilities for turning module specifiers into root-relative module paths."""

import os
import posixpath


def strip_extensions(name: str) -> str:
    """Remove every suffix from a file name: ``foo.soy.js`` -> ``foo``.

    A leading dot (hidden files) is not treated as a suffix separator.
    """
    stem, ext = os.path.splitext(name)
    while ext:
        name = stem
        stem, ext = os.path.splitext(name)
    return name


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def resolve_module_path(filename: str, raw_path: str, root: str) -> str:
    """Resolve ``raw_path`` against the directory of ``filename``.

    The result is relative to ``root``, uses ``/`` separators and has the
    extensions of its last segment stripped. Pure string computation.
    """
    base_dir = posixpath.dirname(to_posix(filename))
    resolved = posixpath.normpath(posixpath.join(base_dir, to_posix(raw_path)))
    relative = posixpath.relpath(resolved, to_posix(root))
    head, tail = posixpath.split(relative)
    tail = strip_extensions(tail)
    return posixpath.join(head, tail) if head else tail


def module_segments(module_path: str) -> list[str]:
    """Split a root-relative module path into its segments."""
    return [part for part in module_path.split("/") if part and part != "."]
