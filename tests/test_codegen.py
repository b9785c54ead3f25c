"""Tests for the ESTree code printer."""

import pytest

from globals_transform import nodes
from globals_transform.codegen import generate
from globals_transform.parse_module import parse_module


def binary(operator: str, left: nodes.Node, right: nodes.Node) -> nodes.Node:
    return {"type": "BinaryExpression", "operator": operator, "left": left, "right": right}


def test_wrapper_shape() -> None:
    """Verify the closure call prints with parentheses around the function."""
    closure = nodes.function_expression([], [])
    statement = nodes.expression_statement(
        nodes.call(nodes.member(closure, "call"), [nodes.this_expression()])
    )
    assert generate(statement) == "(function () {}).call(this);\n"


def test_precedence_parentheses() -> None:
    """Verify that looser operands are parenthesized."""
    a, b, c = (nodes.identifier(n) for n in "abc")
    assert generate(binary("*", binary("+", a, b), c)) == "(a + b) * c"
    assert generate(binary("+", a, binary("*", b, c))) == "a + b * c"
    assert generate(binary("-", a, binary("-", b, c))) == "a - (b - c)"
    assert generate(binary("-", binary("-", a, b), c)) == "a - b - c"


def test_unary_of_logical() -> None:
    """Verify that unary operators wrap looser arguments."""
    expr = {
        "type": "UnaryExpression",
        "operator": "!",
        "prefix": True,
        "argument": nodes.logical_or(nodes.identifier("a"), nodes.identifier("b")),
    }
    assert generate(expr) == "!(a || b)"


def test_statement_starting_with_object() -> None:
    """Verify that expression statements never start with a brace."""
    statement = nodes.expression_statement(
        nodes.call(nodes.member(nodes.empty_object(), "toString"), [])
    )
    assert generate(statement) == "({}.toString());\n"


def test_string_literal_escaping() -> None:
    """Verify that synthesized string literals are quoted safely."""
    assert generate(nodes.string_literal('a"b\\c')) == '"a\\"b\\\\c"'


def test_unknown_node_type_fails() -> None:
    """Verify that unsupported nodes are reported."""
    with pytest.raises(ValueError, match="Cannot print"):
        generate({"type": "JSXElement"})


@pytest.mark.parametrize(
    "source",
    [
        "var a = 2;\n",
        "function foo(a, b) {\n  return a + b;\n}\n",
        "for (var i = 0; i < 10; i++) {\n  total += i;\n}\n",
        "if (a) {\n  b();\n} else if (c) {\n  d();\n} else {\n  e();\n}\n",
        "var o = { a: 1, b: [1, 2], c };\n",
        "var f = (a) => a * 2;\n",
        "var s = `a${b}c`;\n",
        "class A extends B {\n  constructor() {\n    super();\n  }\n}\n",
        "try {\n  a();\n} catch (e) {\n  b(e);\n} finally {\n  c();\n}\n",
        "switch (a) {\n  case 1:\n    b();\n    break;\n  default:\n    c();\n}\n",
        "while (a) {\n  a--;\n}\n",
        "x = a ? b : c;\n",
        "new Foo(a, ...rest);\n",
        "var re = /ab+c/gi;\n",
        "label: for (var k in obj) {\n  continue label;\n}\n",
        'import a, {b as c} from "./d";\n',
        'export {a as b} from "./c";\n',
        "export default foo;\n",
    ],
)
def test_round_trip(source: str) -> None:
    """Verify that canonically formatted source prints back unchanged."""
    assert generate(parse_module(source)) == source


@pytest.mark.parametrize(
    "source",
    [
        "for (;;) {}\n",
        'for (var a = ("x" in o);;) {}\n',
        'for (a = ("x" in o); a; a = "y" in o) {}\n',
        'for (f("; )");;) {}\n',
        'var b = "x" in o;\n',
    ],
)
def test_for_header(source: str) -> None:
    """Verify ``for`` headers keep literals intact and guard ``in`` in the init."""
    assert generate(parse_module(source)) == source
