"""Builders for the ESTree nodes the rewriter emits.

Nodes are plain dictionaries carrying a ``type`` key, the same shape the parser
adapter produces, so parsed and synthesized nodes mix freely in one tree.
"""

import re
from typing import Any

Node = dict[str, Any]

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_identifier_name(name: str) -> bool:
    """Check whether a name can appear after a dot in member access."""
    return bool(IDENTIFIER_RE.match(name))


def identifier(name: str) -> Node:
    return {"type": "Identifier", "name": name}


def string_literal(value: str) -> Node:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return {"type": "Literal", "value": value, "raw": f'"{escaped}"'}


def this_expression() -> Node:
    return {"type": "ThisExpression"}


def member(obj: Node, prop: str) -> Node:
    """Build ``obj.prop``, falling back to ``obj["prop"]`` for unsafe names."""
    if is_identifier_name(prop):
        return {
            "type": "MemberExpression",
            "computed": False,
            "object": obj,
            "property": identifier(prop),
        }
    return {
        "type": "MemberExpression",
        "computed": True,
        "object": obj,
        "property": string_literal(prop),
    }


def computed_member(obj: Node, prop: Node) -> Node:
    return {"type": "MemberExpression", "computed": True, "object": obj, "property": prop}


def assignment(left: Node, right: Node) -> Node:
    return {"type": "AssignmentExpression", "operator": "=", "left": left, "right": right}


def logical_or(left: Node, right: Node) -> Node:
    return {"type": "LogicalExpression", "operator": "||", "left": left, "right": right}


def empty_object() -> Node:
    return {"type": "ObjectExpression", "properties": []}


def call(callee: Node, arguments: list[Node]) -> Node:
    return {"type": "CallExpression", "callee": callee, "arguments": arguments}


def expression_statement(expression: Node) -> Node:
    return {"type": "ExpressionStatement", "expression": expression}


def block(body: list[Node]) -> Node:
    return {"type": "BlockStatement", "body": body}


def function_expression(params: list[Node], body: list[Node]) -> Node:
    return {
        "type": "FunctionExpression",
        "id": None,
        "params": params,
        "body": block(body),
        "generator": False,
        "expression": False,
        "async": False,
    }


def var_declaration(local: Node, init: Node) -> Node:
    """Build ``var local = init;``."""
    return {
        "type": "VariableDeclaration",
        "kind": "var",
        "declarations": [{"type": "VariableDeclarator", "id": local, "init": init}],
    }


def assignment_statement(left: Node, right: Node) -> Node:
    return expression_statement(assignment(left, right))
