"""Wraps a file's statements in a closure invoked against the shared root."""

from globals_transform import nodes


def wrap_in_closure(body: list[nodes.Node]) -> nodes.Node:
    """Build ``(function () { ...body }).call(this);``.

    Former top-level bindings become locals of the closure while ``this``
    inside it still refers to the shared root.
    """
    closure = nodes.function_expression([], body)
    return nodes.expression_statement(
        nodes.call(nodes.member(closure, "call"), [nodes.this_expression()])
    )
