"""Shared fixtures for the transform tests."""

from collections.abc import Callable
from typing import Any

import pytest

from globals_transform.transform_options import TransformOptions
from globals_transform.transform_source import transform_source

ROOT = "/project"
FILENAME = "/project/foo/bar.js"


@pytest.fixture
def options() -> TransformOptions:
    """Options with a fixed ``myGlobal`` namespace root."""
    return TransformOptions.from_config({"namespace_root": "myGlobal"})


@pytest.fixture
def transform(options: TransformOptions) -> Callable[..., str]:
    """Transform source as if it lived at /project/foo/bar.js."""

    def _transform(source: str, **overrides: Any) -> str:
        opts = overrides.pop("options", options)
        filename = overrides.pop("filename", FILENAME)
        return transform_source(source, opts, filename=filename, root=ROOT, **overrides)

    return _transform


def wrapped(*lines: str) -> str:
    """Build the expected output of one wrapped file from its body lines."""
    if not lines:
        return "(function () {}).call(this);\n"
    body = "\n".join(f"  {line}" for line in lines)
    return f"(function () {{\n{body}\n}}).call(this);\n"
