"""Rewrite rules turning import/export constructs into global reads and writes."""

import logging
from collections.abc import Callable

from globals_transform import nodes
from globals_transform.global_path import ExternalRead, GlobalPath
from globals_transform.module_constructs import (
    ConstructKind,
    SpecifierKind,
    classify,
    declared_names,
    specifier_kind,
)
from globals_transform.namespace_builder import ensure_created
from globals_transform.path_namer import current_module_global, name_global
from globals_transform.transform_context import TransformContext
from globals_transform.transform_options import EXPORT_ALL_DROP

logger = logging.getLogger(__name__)

Node = nodes.Node

DECLARATION_AS_EXPRESSION = {
    "FunctionDeclaration": "FunctionExpression",
    "ClassDeclaration": "ClassExpression",
}


def _name_of(node: Node) -> str:
    """Return the name of an identifier (or string literal) in a specifier."""
    if node.get("type") == "Identifier":
        return node["name"]
    return str(node.get("value"))


class StatementRewriter:
    """Produces the replacement statements for one module construct at a time.

    All state lives on the context, which the caller resets per file.
    """

    def __init__(self, context: TransformContext) -> None:
        """Bind the rewriter to the per-file context."""
        self.context = context
        self._handlers: dict[ConstructKind, Callable[[Node], list[Node]]] = {
            ConstructKind.IMPORT_BINDINGS: self._import_bindings,
            ConstructKind.SIDE_EFFECT_IMPORT: self._side_effect_import,
            ConstructKind.EXPORT_ALL: self._export_all,
            ConstructKind.DEFAULT_EXPORT: self._default_export,
            ConstructKind.NAMED_EXPORT_DECLARATION: self._named_export_declaration,
            ConstructKind.NAMED_EXPORT_LOCAL: self._named_export_local,
            ConstructKind.NAMED_EXPORT_FROM: self._named_export_from,
        }

    def rewrite(self, node: Node) -> list[Node] | None:
        """Return the replacement sequence, or None if ``node`` is not a construct.

        Raises MissingFileIdentityError before building anything when the
        current filename is unknown.
        """
        kind = classify(node)
        if kind is None:
            return None
        self.context.require_filename(kind.value)
        replacements = self._handlers[kind](node)
        logger.debug(
            "Rewrote %s into %d statement(s)", kind.value, len(replacements)
        )
        return replacements

    def _import_bindings(self, node: Node) -> list[Node]:
        source = node["source"]["value"]
        replacements = []
        for specifier in node["specifiers"]:
            kind = specifier_kind(specifier)
            if kind is SpecifierKind.NAMESPACE:
                path = name_global(self.context, source, None, True)
            elif kind is SpecifierKind.NAMED:
                path = name_global(self.context, source, _name_of(specifier["imported"]))
            else:
                path = name_global(self.context, source)
            replacements.append(
                nodes.var_declaration(specifier["local"], path.to_expression())
            )
        return replacements

    def _side_effect_import(self, node: Node) -> list[Node]:
        return []

    def _export_all(self, node: Node) -> list[Node]:
        source = node["source"]["value"]
        if self.context.options.export_all == EXPORT_ALL_DROP:
            logger.warning(
                "Dropping 'export * from \"%s\"' in %s", source, self.context.filename
            )
            return []

        replacements: list[Node] = []
        source_path = name_global(self.context, source, None, True)
        target_path = current_module_global(self.context, None, True)
        if isinstance(source_path, GlobalPath):
            ensure_created(self.context, source_path, replacements, fully_qualified=True)
        ensure_created(self.context, target_path, replacements, fully_qualified=True)
        replacements.append(_copy_keys(source_path, target_path))
        return replacements

    def _default_export(self, node: Node) -> list[Node]:
        declaration = node["declaration"]
        replacements = []
        if declaration.get("type") in DECLARATION_AS_EXPRESSION:
            if declaration.get("id"):
                replacements.append(declaration)
                value = nodes.identifier(declaration["id"]["name"])
            else:
                value = {
                    **declaration,
                    "type": DECLARATION_AS_EXPRESSION[declaration["type"]],
                }
        else:
            value = declaration

        path = current_module_global(self.context)
        ensure_created(self.context, path, replacements)
        replacements.append(nodes.assignment_statement(path.to_expression(), value))
        return replacements

    def _named_export_declaration(self, node: Node) -> list[Node]:
        declaration = node["declaration"]
        replacements = [declaration]
        for name in declared_names(declaration):
            self._assign_export(name, nodes.identifier(name), replacements)
        return replacements

    def _named_export_local(self, node: Node) -> list[Node]:
        replacements: list[Node] = []
        for specifier in node["specifiers"]:
            local = nodes.identifier(_name_of(specifier["local"]))
            self._assign_export(_name_of(specifier["exported"]), local, replacements)
        return replacements

    def _named_export_from(self, node: Node) -> list[Node]:
        source = node["source"]["value"]
        replacements: list[Node] = []
        for specifier in node["specifiers"]:
            path = name_global(self.context, source, _name_of(specifier["local"]))
            self._assign_export(
                _name_of(specifier["exported"]), path.to_expression(), replacements
            )
        return replacements

    def _assign_export(
        self, exported_name: str, value: Node, replacements: list[Node]
    ) -> None:
        path = current_module_global(self.context, exported_name)
        ensure_created(self.context, path, replacements)
        replacements.append(nodes.assignment_statement(path.to_expression(), value))


def _copy_keys(source: GlobalPath | ExternalRead, target: GlobalPath) -> Node:
    """Build ``Object.keys(source).forEach(function (key) {...}, this);``.

    The callback receives ``this`` explicitly so both paths still resolve
    against the shared root inside it.
    """
    copy_key = nodes.assignment_statement(
        nodes.computed_member(target.to_expression(), nodes.identifier("key")),
        nodes.computed_member(source.to_expression(), nodes.identifier("key")),
    )
    keys = nodes.call(
        nodes.member(nodes.identifier("Object"), "keys"), [source.to_expression()]
    )
    return nodes.expression_statement(
        nodes.call(
            nodes.member(keys, "forEach"),
            [
                nodes.function_expression([nodes.identifier("key")], [copy_key]),
                nodes.this_expression(),
            ],
        )
    )
