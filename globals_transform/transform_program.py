"""Transforms one parsed module into a script writing to the shared namespace."""

import logging
from typing import Any

from globals_transform.module_constructs import has_module_syntax
from globals_transform.nodes import Node
from globals_transform.program_wrapper import wrap_in_closure
from globals_transform.statement_rewriter import StatementRewriter
from globals_transform.transform_context import TransformContext
from globals_transform.transform_options import TransformOptions

logger = logging.getLogger(__name__)


def transform_program(
    program: Node,
    options: TransformOptions,
    filename: str | None = None,
    root: str | None = None,
    context: TransformContext | None = None,
) -> Node:
    """Return a new Program whose module constructs are global reads/writes.

    A ``context`` may be reused across files; it is reset here first. The
    input tree is not mutated. With ``transform_only_modules`` a program
    without imports or exports is returned as is.
    """
    if context is None:
        context = TransformContext(options, filename, root)
    else:
        context.options = options
        context.filename = filename
    context.reset(root=root)

    body: list[Node] = program.get("body") or []
    if options.transform_only_modules and not has_module_syntax(body):
        logger.debug("No module syntax in %s, leaving it untouched", filename)
        return program

    rewriter = StatementRewriter(context)
    new_body: list[Node] = []
    for statement in body:
        replacements = rewriter.rewrite(statement)
        if replacements is None:
            new_body.append(statement)
        else:
            new_body.extend(replacements)

    result: dict[str, Any] = {**program, "body": [wrap_in_closure(new_body)]}
    result["sourceType"] = "script"
    return result
