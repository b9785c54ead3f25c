"""Logic for naming the global location of a module or one of its exports."""

import logging
import posixpath

from globals_transform.errors import ConfigurationError
from globals_transform.global_path import ExternalRead, GlobalPath
from globals_transform.module_path import module_segments, resolve_module_path
from globals_transform.naming_policy import ComputedPath, FixedRoot
from globals_transform.transform_context import TransformContext

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "default"


def name_global(
    context: TransformContext,
    raw_module_path: str,
    export_name: str | None = None,
    is_wildcard: bool = False,
) -> GlobalPath | ExternalRead:
    """Name the global that holds a module's default export or a named export.

    ``raw_module_path`` is resolved against the directory of the current file.
    Without ``export_name`` (or with the name ``default``) the module's default
    location is returned; a wildcard without a name designates the module's
    own location under the named root.
    """
    filename = context.require_filename()
    if export_name == DEFAULT_EXPORT_NAME:
        export_name = None

    external = _lookup_external(context, filename, raw_module_path)
    if external is not None:
        return ExternalRead(external, None if is_wildcard else export_name)

    policy = context.options.naming_policy
    if isinstance(policy, FixedRoot):
        module_path = resolve_module_path(filename, raw_module_path, context.root)
        segments = [policy.root_for(export_name, is_wildcard)]
        segments.extend(module_segments(module_path))
        if export_name:
            segments.append(export_name)
        return GlobalPath(tuple(segments))
    if isinstance(policy, ComputedPath):
        return _computed_path(policy, context, raw_module_path, export_name, is_wildcard)
    msg = f"Unsupported naming policy: {policy!r}"
    raise ConfigurationError(msg)


def current_module_global(
    context: TransformContext,
    export_name: str | None = None,
    is_wildcard: bool = False,
) -> GlobalPath:
    """Name a global owned by the file being transformed.

    The file is named the way a sibling would import it, so relative and
    absolute filenames resolve to the same root-relative module path.
    """
    own_path = "./" + posixpath.basename(context.filename_no_ext())
    path = name_global(context, own_path, export_name, is_wildcard)
    if not isinstance(path, GlobalPath):
        msg = f"{context.filename} is listed as an external module and cannot export"
        raise ConfigurationError(msg)
    return path


def _lookup_external(
    context: TransformContext, filename: str, raw_module_path: str
) -> str | None:
    externals = context.options.externals
    if not externals:
        return None
    if raw_module_path in externals:
        return externals[raw_module_path]
    # Also accept root-relative module paths as keys, e.g. "vendor/jquery".
    module_path = resolve_module_path(filename, raw_module_path, context.root)
    return externals.get(module_path)


def _computed_path(
    policy: ComputedPath,
    context: TransformContext,
    raw_module_path: str,
    export_name: str | None,
    is_wildcard: bool,
) -> GlobalPath:
    result = policy.function(context, raw_module_path, export_name, is_wildcard)
    if isinstance(result, GlobalPath):
        return result
    if isinstance(result, str):
        return GlobalPath.from_dotted(result)
    msg = (
        "Naming policy must return a GlobalPath or a dotted string, "
        f"got {type(result).__name__}"
    )
    raise ConfigurationError(msg)
