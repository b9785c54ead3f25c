"""Classification of the import/export constructs a module may contain."""

from enum import Enum

from globals_transform.nodes import Node

MODULE_DECLARATION_TYPES = frozenset(
    {
        "ImportDeclaration",
        "ExportAllDeclaration",
        "ExportDefaultDeclaration",
        "ExportNamedDeclaration",
    }
)


class ConstructKind(Enum):
    """The closed set of module constructs, one rewrite rule each."""

    IMPORT_BINDINGS = "import_bindings"
    SIDE_EFFECT_IMPORT = "side_effect_import"
    EXPORT_ALL = "export_all"
    DEFAULT_EXPORT = "default_export"
    NAMED_EXPORT_DECLARATION = "named_export_declaration"
    NAMED_EXPORT_LOCAL = "named_export_local"
    NAMED_EXPORT_FROM = "named_export_from"


class SpecifierKind(Enum):
    """Binding forms inside one import declaration."""

    DEFAULT = "ImportDefaultSpecifier"
    NAMED = "ImportSpecifier"
    NAMESPACE = "ImportNamespaceSpecifier"


def is_module_declaration(node: Node) -> bool:
    return node.get("type") in MODULE_DECLARATION_TYPES


def classify(node: Node) -> ConstructKind | None:
    """Return the construct kind of a top-level statement, or None."""
    node_type = node.get("type")
    if node_type == "ImportDeclaration":
        if node.get("specifiers"):
            return ConstructKind.IMPORT_BINDINGS
        return ConstructKind.SIDE_EFFECT_IMPORT
    if node_type == "ExportAllDeclaration":
        return ConstructKind.EXPORT_ALL
    if node_type == "ExportDefaultDeclaration":
        return ConstructKind.DEFAULT_EXPORT
    if node_type == "ExportNamedDeclaration":
        if node.get("declaration"):
            return ConstructKind.NAMED_EXPORT_DECLARATION
        if node.get("source"):
            return ConstructKind.NAMED_EXPORT_FROM
        return ConstructKind.NAMED_EXPORT_LOCAL
    return None


def has_module_syntax(body: list[Node]) -> bool:
    """Check whether any top-level statement is an import or export."""
    return any(is_module_declaration(statement) for statement in body)


def specifier_kind(specifier: Node) -> SpecifierKind:
    return SpecifierKind(specifier["type"])


def bound_names(pattern: Node | None) -> list[str]:
    """List the names a binding pattern declares, in source order."""
    if pattern is None:
        return []
    pattern_type = pattern.get("type")
    if pattern_type == "Identifier":
        return [pattern["name"]]
    if pattern_type == "ObjectPattern":
        names: list[str] = []
        for prop in pattern.get("properties") or []:
            if prop.get("type") == "RestElement":
                names.extend(bound_names(prop.get("argument")))
            else:
                names.extend(bound_names(prop.get("value")))
        return names
    if pattern_type == "ArrayPattern":
        names = []
        for element in pattern.get("elements") or []:
            names.extend(bound_names(element))
        return names
    if pattern_type == "AssignmentPattern":
        return bound_names(pattern.get("left"))
    if pattern_type == "RestElement":
        return bound_names(pattern.get("argument"))
    return []


def declared_names(declaration: Node) -> list[str]:
    """List the names a declaration introduces (variables, function or class)."""
    if declaration.get("type") == "VariableDeclaration":
        names: list[str] = []
        for declarator in declaration.get("declarations") or []:
            names.extend(bound_names(declarator.get("id")))
        return names
    identifier = declaration.get("id")
    return [identifier["name"]] if identifier else []
