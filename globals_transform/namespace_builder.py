"""Logic for creating the namespace objects a global path assigns into."""

import logging

from globals_transform import nodes
from globals_transform.global_path import GlobalPath, segments_expression
from globals_transform.transform_context import TransformContext

logger = logging.getLogger(__name__)


def ensure_created(
    context: TransformContext,
    global_path: GlobalPath,
    statements: list[nodes.Node],
    fully_qualified: bool = False,
) -> None:
    """Append ``prefix = prefix || {};`` for each prefix not yet created.

    Prefixes are walked root to leaf, so a parent is always created before its
    children. Each prefix is created at most once per file.
    """
    for prefix in global_path.prefixes(fully_qualified=fully_qualified):
        if prefix in context.created_globals:
            continue
        context.created_globals.add(prefix)
        statements.append(
            nodes.assignment_statement(
                segments_expression(prefix),
                nodes.logical_or(segments_expression(prefix), nodes.empty_object()),
            )
        )
        logger.debug("Creating namespace %s", ".".join(prefix))
