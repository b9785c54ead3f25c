"""Source-to-source entry point: parse, transform and print one file."""

import logging

from globals_transform.codegen import generate
from globals_transform.parse_module import parse_module
from globals_transform.transform_context import TransformContext
from globals_transform.transform_options import TransformOptions
from globals_transform.transform_program import transform_program

logger = logging.getLogger(__name__)


def transform_source(
    source: str,
    options: TransformOptions,
    filename: str | None = None,
    root: str | None = None,
    context: TransformContext | None = None,
) -> str:
    """Transform module source text into a script using the shared namespace.

    With ``transform_only_modules`` a file without imports or exports is
    returned byte-identical.
    """
    program = parse_module(source, filename)
    transformed = transform_program(program, options, filename, root, context)
    if transformed is program:
        logger.info("Left %s unchanged (no module syntax)", filename or "<source>")
        return source
    logger.info("Transformed %s", filename or "<source>")
    return generate(transformed)
