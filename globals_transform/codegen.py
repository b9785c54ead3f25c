"""Code printer turning ESTree dictionaries back into JavaScript source.

The printer emits a canonical layout (two-space indentation, one statement per
line) and inserts parentheses from operator precedence, so synthesized trees
print correctly without carrying parenthesization hints.
"""

import json
from collections.abc import Callable
from typing import Any

Node = dict[str, Any]

INDENT = "  "

# Higher binds tighter.
PREC_SEQUENCE = 0
PREC_YIELD = 1
PREC_ASSIGNMENT = 2
PREC_CONDITIONAL = 3
PREC_UNARY = 15
PREC_UPDATE = 16
PREC_NEW = 17
PREC_CALL = 18
PREC_MEMBER = 19
PREC_PRIMARY = 20

BINARY_PRECEDENCE = {
    "||": 4,
    "&&": 5,
    "|": 6,
    "^": 7,
    "&": 8,
    "==": 9,
    "!=": 9,
    "===": 9,
    "!==": 9,
    "<": 10,
    ">": 10,
    "<=": 10,
    ">=": 10,
    "instanceof": 10,
    "in": 10,
    "<<": 11,
    ">>": 11,
    ">>>": 11,
    "+": 12,
    "-": 12,
    "*": 13,
    "/": 13,
    "%": 13,
    "**": 14,
}

WORD_UNARY_OPERATORS = frozenset({"typeof", "void", "delete"})

FUNCTION_LIKE = frozenset({"FunctionExpression", "ClassExpression"})


def generate(node: Node) -> str:
    """Print a Program (or any statement or expression node) as source text."""
    printer = CodePrinter()
    if node.get("type") == "Program":
        return printer.program(node)
    if node.get("type") in printer.expression_types():
        return printer.expression(node)
    return printer.statement(node, 0) + "\n"


def precedence(node: Node) -> int:
    """Return the binding strength of an expression node."""
    node_type = node.get("type")
    if node_type == "SequenceExpression":
        return PREC_SEQUENCE
    if node_type == "YieldExpression":
        return PREC_YIELD
    if node_type in ("AssignmentExpression", "ArrowFunctionExpression"):
        return PREC_ASSIGNMENT
    if node_type == "ConditionalExpression":
        return PREC_CONDITIONAL
    if node_type in ("BinaryExpression", "LogicalExpression"):
        return BINARY_PRECEDENCE.get(node["operator"], PREC_CONDITIONAL + 1)
    if node_type in ("UnaryExpression", "AwaitExpression"):
        return PREC_UNARY
    if node_type == "UpdateExpression":
        return PREC_UPDATE
    if node_type == "NewExpression":
        return PREC_NEW
    if node_type in ("CallExpression", "TaggedTemplateExpression"):
        return PREC_CALL
    if node_type == "MemberExpression":
        return PREC_MEMBER
    return PREC_PRIMARY


def _is_async(node: Node) -> bool:
    return bool(node.get("async") or node.get("isAsync"))


def _starts_with_brace_or_keyword(node: Node) -> bool:
    """Check whether an expression statement would begin ambiguously.

    Expression statements may not start with ``{``, ``function`` or ``class``.
    Callee and member objects that are function or class expressions are
    parenthesized by the printer already.
    """
    node_type = node.get("type")
    if node_type in (
        "ObjectExpression",
        "ObjectPattern",
        "FunctionExpression",
        "ClassExpression",
    ):
        return True
    if node_type == "CallExpression":
        callee = node["callee"]
        return callee.get("type") not in FUNCTION_LIKE and _starts_with_brace_or_keyword(
            callee
        )
    if node_type == "MemberExpression":
        obj = node["object"]
        return obj.get("type") not in FUNCTION_LIKE and _starts_with_brace_or_keyword(obj)
    if node_type == "TaggedTemplateExpression":
        return _starts_with_brace_or_keyword(node["tag"])
    if node_type in ("AssignmentExpression", "BinaryExpression", "LogicalExpression"):
        return precedence(node["left"]) >= precedence(
            node
        ) and _starts_with_brace_or_keyword(node["left"])
    if node_type == "ConditionalExpression":
        return _starts_with_brace_or_keyword(node["test"])
    if node_type == "SequenceExpression":
        return _starts_with_brace_or_keyword(node["expressions"][0])
    if node_type == "UpdateExpression" and not node.get("prefix"):
        return _starts_with_brace_or_keyword(node["argument"])
    return False


class CodePrinter:
    """Prints statements and expressions; one instance per output."""

    def __init__(self) -> None:
        """Build the dispatch tables."""
        self._no_in = False
        self._statements: dict[str, Callable[[Node, int], str]] = {
            "ExpressionStatement": self._expression_statement,
            "VariableDeclaration": self._variable_declaration,
            "FunctionDeclaration": self._function,
            "ClassDeclaration": self._class,
            "BlockStatement": self._block,
            "EmptyStatement": lambda node, level: ";",
            "DebuggerStatement": lambda node, level: "debugger;",
            "ReturnStatement": self._return,
            "ThrowStatement": self._throw,
            "BreakStatement": self._jump,
            "ContinueStatement": self._jump,
            "IfStatement": self._if,
            "ForStatement": self._for,
            "ForInStatement": self._for_in_of,
            "ForOfStatement": self._for_in_of,
            "WhileStatement": self._while,
            "DoWhileStatement": self._do_while,
            "LabeledStatement": self._labeled,
            "SwitchStatement": self._switch,
            "TryStatement": self._try,
            "WithStatement": self._with,
            "ImportDeclaration": self._import,
            "ExportAllDeclaration": self._export_all,
            "ExportDefaultDeclaration": self._export_default,
            "ExportNamedDeclaration": self._export_named,
        }
        self._expressions: dict[str, Callable[[Node, int], str]] = {
            "Identifier": lambda node, level: node["name"],
            "Literal": self._literal,
            "ThisExpression": lambda node, level: "this",
            "Super": lambda node, level: "super",
            "Import": lambda node, level: "import",
            "TemplateLiteral": self._template,
            "TaggedTemplateExpression": self._tagged_template,
            "ArrayExpression": self._array,
            "ArrayPattern": self._array,
            "ObjectExpression": self._object,
            "ObjectPattern": self._object,
            "Property": self._property,
            "FunctionExpression": self._function,
            "ArrowFunctionExpression": self._arrow,
            "ClassExpression": self._class,
            "MemberExpression": self._member,
            "CallExpression": self._call,
            "NewExpression": self._new,
            "SequenceExpression": self._sequence,
            "UnaryExpression": self._unary,
            "UpdateExpression": self._update,
            "AwaitExpression": self._await,
            "YieldExpression": self._yield,
            "BinaryExpression": self._binary,
            "LogicalExpression": self._binary,
            "AssignmentExpression": self._assignment,
            "AssignmentPattern": self._assignment_pattern,
            "ConditionalExpression": self._conditional,
            "SpreadElement": self._spread,
            "RestElement": self._spread,
            "MetaProperty": lambda node, level: (
                f"{node['meta']['name']}.{node['property']['name']}"
            ),
        }

    def expression_types(self) -> frozenset[str]:
        return frozenset(self._expressions)

    # -----------------------------
    # Program and statements
    # -----------------------------

    def program(self, node: Node) -> str:
        lines = [self.statement(statement, 0) for statement in node.get("body") or []]
        return "\n".join(lines) + "\n" if lines else ""

    def statement(self, node: Node, level: int) -> str:
        """Print a statement without leading indentation."""
        handler = self._statements.get(node.get("type", ""))
        if handler is None:
            msg = f"Cannot print statement of type {node.get('type')!r}"
            raise ValueError(msg)
        return handler(node, level)

    def _body(self, statements: list[Node], level: int) -> str:
        if not statements:
            return "{}"
        inner = INDENT * (level + 1)
        lines = [inner + self.statement(s, level + 1) for s in statements]
        return "{\n" + "\n".join(lines) + "\n" + INDENT * level + "}"

    def _block(self, node: Node, level: int) -> str:
        return self._body(node.get("body") or [], level)

    def _nested(self, node: Node, level: int) -> str:
        """Print the body of a control statement, after its header."""
        if node.get("type") == "BlockStatement":
            return " " + self._block(node, level)
        return "\n" + INDENT * (level + 1) + self.statement(node, level + 1)

    def _expression_statement(self, node: Node, level: int) -> str:
        expression = node["expression"]
        if node.get("directive") is not None and expression.get("type") == "Literal":
            return self._literal(expression, level) + ";"
        text = self.expression(expression, level)
        if _starts_with_brace_or_keyword(expression):
            text = f"({text})"
        return text + ";"

    def _variable_declaration(self, node: Node, level: int, semicolon: bool = True) -> str:
        declarators = []
        for declarator in node["declarations"]:
            text = self.expression(declarator["id"], level)
            if declarator.get("init") is not None:
                text += " = " + self._operand(declarator["init"], PREC_ASSIGNMENT, level)
            declarators.append(text)
        text = f"{node['kind']} " + ", ".join(declarators)
        return text + ";" if semicolon else text

    def _return(self, node: Node, level: int) -> str:
        if node.get("argument") is None:
            return "return;"
        return f"return {self.expression(node['argument'], level)};"

    def _throw(self, node: Node, level: int) -> str:
        return f"throw {self.expression(node['argument'], level)};"

    def _jump(self, node: Node, level: int) -> str:
        keyword = "break" if node["type"] == "BreakStatement" else "continue"
        if node.get("label"):
            return f"{keyword} {node['label']['name']};"
        return keyword + ";"

    def _if(self, node: Node, level: int) -> str:
        consequent = node["consequent"]
        alternate = node.get("alternate")
        if (
            alternate is not None
            and consequent.get("type") == "IfStatement"
            and consequent.get("alternate") is None
        ):
            # Keep a trailing else from binding to the inner if.
            consequent = {"type": "BlockStatement", "body": [consequent]}
        text = f"if ({self.expression(node['test'], level)})"
        text += self._nested(consequent, level)
        if alternate is None:
            return text
        text += " else" if consequent.get("type") == "BlockStatement" else (
            "\n" + INDENT * level + "else"
        )
        if alternate.get("type") == "IfStatement":
            return text + " " + self._if(alternate, level)
        return text + self._nested(alternate, level)

    def _for(self, node: Node, level: int) -> str:
        init = node.get("init")
        # An `in` operator in the init would read as a for-in head.
        no_in, self._no_in = self._no_in, True
        try:
            if init is None:
                init_text = ""
            elif init.get("type") == "VariableDeclaration":
                init_text = self._variable_declaration(init, level, semicolon=False)
            else:
                init_text = self.expression(init, level)
        finally:
            self._no_in = no_in
        test = self.expression(node["test"], level) if node.get("test") else ""
        update = self.expression(node["update"], level) if node.get("update") else ""
        header = f"for ({init_text};"
        header += f" {test};" if test else ";"
        header += f" {update})" if update else ")"
        return header + self._nested(node["body"], level)

    def _for_in_of(self, node: Node, level: int) -> str:
        left = node["left"]
        if left.get("type") == "VariableDeclaration":
            left_text = self._variable_declaration(left, level, semicolon=False)
        else:
            left_text = self.expression(left, level)
        keyword = "in" if node["type"] == "ForInStatement" else "of"
        right = self.expression(node["right"], level)
        return f"for ({left_text} {keyword} {right})" + self._nested(node["body"], level)

    def _while(self, node: Node, level: int) -> str:
        test = self.expression(node["test"], level)
        return f"while ({test})" + self._nested(node["body"], level)

    def _do_while(self, node: Node, level: int) -> str:
        body = self._nested(node["body"], level)
        if node["body"].get("type") != "BlockStatement":
            body += "\n" + INDENT * level
        else:
            body += " "
        return f"do{body}while ({self.expression(node['test'], level)});"

    def _labeled(self, node: Node, level: int) -> str:
        return f"{node['label']['name']}: " + self.statement(node["body"], level)

    def _switch(self, node: Node, level: int) -> str:
        lines = [f"switch ({self.expression(node['discriminant'], level)}) {{"]
        for case in node.get("cases") or []:
            if case.get("test") is None:
                lines.append(INDENT * (level + 1) + "default:")
            else:
                test = self.expression(case["test"], level + 1)
                lines.append(INDENT * (level + 1) + f"case {test}:")
            for statement in case.get("consequent") or []:
                lines.append(INDENT * (level + 2) + self.statement(statement, level + 2))
        lines.append(INDENT * level + "}")
        return "\n".join(lines)

    def _try(self, node: Node, level: int) -> str:
        text = "try " + self._block(node["block"], level)
        handler = node.get("handler")
        if handler is not None:
            if handler.get("param") is not None:
                text += f" catch ({self.expression(handler['param'], level)})"
            else:
                text += " catch"
            text += " " + self._block(handler["body"], level)
        if node.get("finalizer") is not None:
            text += " finally " + self._block(node["finalizer"], level)
        return text

    def _with(self, node: Node, level: int) -> str:
        obj = self.expression(node["object"], level)
        return f"with ({obj})" + self._nested(node["body"], level)

    # -----------------------------
    # Module declarations
    # -----------------------------

    def _import(self, node: Node, level: int) -> str:
        source = self._literal(node["source"], level)
        specifiers = node.get("specifiers") or []
        if not specifiers:
            return f"import {source};"
        parts = []
        named = []
        for specifier in specifiers:
            local = specifier["local"]["name"]
            if specifier["type"] == "ImportDefaultSpecifier":
                parts.append(local)
            elif specifier["type"] == "ImportNamespaceSpecifier":
                parts.append(f"* as {local}")
            else:
                imported = specifier["imported"]["name"]
                named.append(imported if imported == local else f"{imported} as {local}")
        if named:
            parts.append("{" + ", ".join(named) + "}")
        return f"import {', '.join(parts)} from {source};"

    def _export_all(self, node: Node, level: int) -> str:
        return f"export * from {self._literal(node['source'], level)};"

    def _export_default(self, node: Node, level: int) -> str:
        declaration = node["declaration"]
        if declaration.get("type") in ("FunctionDeclaration", "ClassDeclaration"):
            return "export default " + self.statement(declaration, level)
        return f"export default {self._operand(declaration, PREC_ASSIGNMENT, level)};"

    def _export_named(self, node: Node, level: int) -> str:
        if node.get("declaration"):
            return "export " + self.statement(node["declaration"], level)
        names = []
        for specifier in node.get("specifiers") or []:
            local = specifier["local"]["name"]
            exported = specifier["exported"]["name"]
            names.append(local if local == exported else f"{local} as {exported}")
        text = "export {" + ", ".join(names) + "}"
        if node.get("source"):
            text += f" from {self._literal(node['source'], level)}"
        return text + ";"

    # -----------------------------
    # Expressions
    # -----------------------------

    def expression(self, node: Node, level: int = 0) -> str:
        handler = self._expressions.get(node.get("type", ""))
        if handler is None:
            msg = f"Cannot print expression of type {node.get('type')!r}"
            raise ValueError(msg)
        return handler(node, level)

    def _operand(self, node: Node, minimum: int, level: int) -> str:
        """Print ``node``, parenthesized if it binds looser than ``minimum``."""
        text = self.expression(node, level)
        if precedence(node) < minimum:
            return f"({text})"
        return text

    def _callee(self, node: Node, level: int) -> str:
        text = self.expression(node, level)
        node_type = node.get("type")
        if node_type in FUNCTION_LIKE or precedence(node) < PREC_CALL:
            return f"({text})"
        if node_type == "Literal" and isinstance(node.get("value"), (int, float)):
            return f"({text})"
        return text

    def _literal(self, node: Node, level: int) -> str:
        raw = node.get("raw")
        if raw is not None:
            return raw
        value = node.get("value")
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            return json.dumps(value)
        return repr(value)

    def _template(self, node: Node, level: int) -> str:
        parts = ["`"]
        quasis = node.get("quasis") or []
        expressions = node.get("expressions") or []
        for i, quasi in enumerate(quasis):
            parts.append(quasi["value"]["raw"])
            if i < len(expressions):
                parts.append("${" + self.expression(expressions[i], level) + "}")
        parts.append("`")
        return "".join(parts)

    def _tagged_template(self, node: Node, level: int) -> str:
        return self._callee(node["tag"], level) + self._template(node["quasi"], level)

    def _array(self, node: Node, level: int) -> str:
        elements = []
        for element in node.get("elements") or []:
            if element is None:
                elements.append("")
            else:
                elements.append(self._operand(element, PREC_ASSIGNMENT, level))
        if elements and elements[-1] == "":
            elements.append("")
        return "[" + ", ".join(elements) + "]"

    def _object(self, node: Node, level: int) -> str:
        properties = node.get("properties") or []
        if not properties:
            return "{}"
        return "{ " + ", ".join(self.expression(p, level) for p in properties) + " }"

    def _property_key(self, node: Node, level: int) -> str:
        key = self.expression(node["key"], level)
        if node.get("computed"):
            return f"[{key}]"
        return key

    def _property(self, node: Node, level: int) -> str:
        value = node["value"]
        if node.get("kind") in ("get", "set"):
            return f"{node['kind']} " + self._method(node, level)
        if node.get("method"):
            return self._method(node, level)
        if node.get("shorthand"):
            return self.expression(value, level)
        key = self._property_key(node, level)
        return f"{key}: {self._operand(value, PREC_ASSIGNMENT, level)}"

    def _method(self, node: Node, level: int) -> str:
        function = node["value"]
        prefix = ""
        if _is_async(function):
            prefix += "async "
        if function.get("generator"):
            prefix += "*"
        params = self._params(function, level)
        return f"{prefix}{self._property_key(node, level)}({params}) " + self._block(
            function["body"], level
        )

    def _params(self, node: Node, level: int) -> str:
        return ", ".join(self.expression(p, level) for p in node.get("params") or [])

    def _function(self, node: Node, level: int) -> str:
        text = "async function" if _is_async(node) else "function"
        if node.get("generator"):
            text += "*"
        if node.get("id"):
            text += " " + node["id"]["name"]
        elif not node.get("generator"):
            text += " "
        text += f"({self._params(node, level)}) " + self._block(node["body"], level)
        return text

    def _arrow(self, node: Node, level: int) -> str:
        text = "async " if _is_async(node) else ""
        text += f"({self._params(node, level)}) => "
        body = node["body"]
        if body.get("type") == "BlockStatement":
            return text + self._block(body, level)
        body_text = self._operand(body, PREC_ASSIGNMENT, level)
        if body.get("type") == "ObjectExpression":
            body_text = f"({body_text})"
        return text + body_text

    def _class(self, node: Node, level: int) -> str:
        text = "class"
        if node.get("id"):
            text += " " + node["id"]["name"]
        if node.get("superClass"):
            text += " extends " + self._callee(node["superClass"], level)
        members = node["body"].get("body") or []
        if not members:
            return text + " {}"
        inner = INDENT * (level + 1)
        lines = [inner + self._class_member(m, level + 1) for m in members]
        return text + " {\n" + "\n".join(lines) + "\n" + INDENT * level + "}"

    def _class_member(self, node: Node, level: int) -> str:
        prefix = "static " if node.get("static") or node.get("isStatic") else ""
        if node.get("kind") in ("get", "set"):
            prefix += f"{node['kind']} "
        return prefix + self._method(node, level)

    def _member(self, node: Node, level: int) -> str:
        obj = self._callee(node["object"], level)
        if node.get("computed"):
            return f"{obj}[{self.expression(node['property'], level)}]"
        return f"{obj}.{node['property']['name']}"

    def _arguments(self, node: Node, level: int) -> str:
        args = node.get("arguments") or []
        return ", ".join(self._operand(a, PREC_ASSIGNMENT, level) for a in args)

    def _call(self, node: Node, level: int) -> str:
        return f"{self._callee(node['callee'], level)}({self._arguments(node, level)})"

    def _new(self, node: Node, level: int) -> str:
        callee = node["callee"]
        callee_text = self._callee(callee, level)
        if _contains_call(callee) and not callee_text.startswith("("):
            callee_text = f"({callee_text})"
        return f"new {callee_text}({self._arguments(node, level)})"

    def _sequence(self, node: Node, level: int) -> str:
        return ", ".join(
            self._operand(e, PREC_ASSIGNMENT, level) for e in node["expressions"]
        )

    def _unary(self, node: Node, level: int) -> str:
        operator = node["operator"]
        argument = self._operand(node["argument"], PREC_UNARY, level)
        if operator in WORD_UNARY_OPERATORS:
            return f"{operator} {argument}"
        if operator in ("-", "+") and argument.startswith(operator):
            return f"{operator} {argument}"
        return operator + argument

    def _update(self, node: Node, level: int) -> str:
        argument = self._operand(node["argument"], PREC_UPDATE, level)
        if node.get("prefix"):
            return node["operator"] + argument
        return argument + node["operator"]

    def _await(self, node: Node, level: int) -> str:
        return "await " + self._operand(node["argument"], PREC_UNARY, level)

    def _yield(self, node: Node, level: int) -> str:
        keyword = "yield*" if node.get("delegate") else "yield"
        if node.get("argument") is None:
            return keyword
        return f"{keyword} {self._operand(node['argument'], PREC_YIELD, level)}"

    def _binary(self, node: Node, level: int) -> str:
        operator = node["operator"]
        prec = precedence(node)
        right_associative = operator == "**"
        left_min = prec + 1 if right_associative else prec
        right_min = prec if right_associative else prec + 1
        left = self._operand(node["left"], left_min, level)
        if right_associative and node["left"].get("type") == "UnaryExpression":
            left = f"({self.expression(node['left'], level)})"
        right = self._operand(node["right"], right_min, level)
        text = f"{left} {operator} {right}"
        if operator == "in" and self._no_in:
            return f"({text})"
        return text

    def _assignment(self, node: Node, level: int) -> str:
        left = self.expression(node["left"], level)
        right = self._operand(node["right"], PREC_ASSIGNMENT, level)
        return f"{left} {node['operator']} {right}"

    def _assignment_pattern(self, node: Node, level: int) -> str:
        left = self.expression(node["left"], level)
        return f"{left} = {self._operand(node['right'], PREC_ASSIGNMENT, level)}"

    def _conditional(self, node: Node, level: int) -> str:
        test = self._operand(node["test"], PREC_CONDITIONAL + 1, level)
        consequent = self._operand(node["consequent"], PREC_ASSIGNMENT, level)
        alternate = self._operand(node["alternate"], PREC_ASSIGNMENT, level)
        return f"{test} ? {consequent} : {alternate}"

    def _spread(self, node: Node, level: int) -> str:
        return "..." + self._operand(node["argument"], PREC_ASSIGNMENT, level)


def _contains_call(node: Node) -> bool:
    """Check whether a ``new`` callee chain contains a call, e.g. ``a().b``."""
    node_type = node.get("type")
    if node_type == "CallExpression":
        return True
    if node_type == "MemberExpression":
        return _contains_call(node["object"])
    return False
