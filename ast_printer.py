"""
Renders an AST back to Street source text

Parsing the output yields a tree equal to the input. Binary expressions
are always parenthesised, so precedence never has to be reconstructed.
"""

import math
from typing import List

from ast_nodes import *
from values import format_number

INDENT = "    "

# Nodes that can stand as an operand, callee or member base without parentheses
_ATOMS = (Identifier, NumericLiteral, StringLiteral, MemberExpr, CallExpr, BinaryExpr)

# Reads back as infinity, the value of any literal too long for a float
OVERFLOW_DIGITS = "1" + "0" * 309

def unparse(node: ASTNode, depth: int = 0) -> str:
    if isinstance(node, Program):
        return _statements(node.body, depth)
    if isinstance(node, (VarDeclaration, FunctionDeclaration, IfStatement, ForStatement)):
        return _statement(node, depth)
    return _expression(node, depth)

def _statements(body: List[Statement], depth: int) -> str:
    return "\n".join(INDENT * depth + _statement(stmt, depth) for stmt in body)

def _block(body: List[Statement], depth: int) -> str:
    if not body:
        return "{}"
    return "{\n" + _statements(body, depth + 1) + "\n" + INDENT * depth + "}"

def _statement(stmt: Statement, depth: int) -> str:
    if isinstance(stmt, VarDeclaration):
        keyword = "const" if stmt.constant else "let"
        if stmt.value is None:
            return f"{keyword} {stmt.identifier};"
        return f"{keyword} {stmt.identifier} = {_expression(stmt.value, depth)};"

    if isinstance(stmt, FunctionDeclaration):
        return f"fn {stmt.name}({', '.join(stmt.parameters)}) {_block(stmt.body, depth)}"

    if isinstance(stmt, IfStatement):
        text = f"if ({_expression(stmt.test, depth)}) {_block(stmt.body, depth)}"
        if len(stmt.alternate) == 1 and isinstance(stmt.alternate[0], IfStatement):
            return text + " else " + _statement(stmt.alternate[0], depth)
        if stmt.alternate:
            text += " else " + _block(stmt.alternate, depth)
        return text

    if isinstance(stmt, ForStatement):
        init = _statement(stmt.init, depth)
        test = _expression(stmt.test, depth)
        update = _expression(stmt.update, depth)
        return f"for ({init} {test}; {update}) {_block(stmt.body, depth)}"

    return _expression(stmt, depth) + ";"

def _operand(expr: Expression, depth: int) -> str:
    text = _expression(expr, depth)
    return text if isinstance(expr, _ATOMS) else f"({text})"

def _expression(expr: Expression, depth: int) -> str:
    if isinstance(expr, Identifier):
        return expr.symbol
    if isinstance(expr, NumericLiteral):
        return _number(expr.value)
    if isinstance(expr, StringLiteral):
        return f'"{expr.value}"'
    if isinstance(expr, BinaryExpr):
        return f"({_operand(expr.left, depth)} {expr.operator} {_operand(expr.right, depth)})"
    if isinstance(expr, AssignmentExpr):
        return f"{_operand(expr.assigne, depth)} = {_expression(expr.value, depth)}"
    if isinstance(expr, CallExpr):
        args = ", ".join(_expression(arg, depth) for arg in expr.args)
        return f"{_operand(expr.caller, depth)}({args})"
    if isinstance(expr, MemberExpr):
        base = _operand(expr.object, depth)
        if expr.computed:
            return f"{base}[{_expression(expr.property, depth)}]"
        return f"{base}.{_expression(expr.property, depth)}"
    if isinstance(expr, ObjectLiteral):
        if not expr.properties:
            return "{}"
        return "{ " + ", ".join(_property(prop, depth) for prop in expr.properties) + " }"
    if isinstance(expr, TryCatchStatement):
        return f"try {_block(expr.body, depth)} catch {_block(expr.alternate, depth)}"
    raise TypeError(f"cannot unparse {expr!r}")

def _number(value: float) -> str:
    if math.isinf(value):
        return OVERFLOW_DIGITS if value > 0 else "-" + OVERFLOW_DIGITS
    return format_number(value)

def _property(prop: Property, depth: int) -> str:
    if prop.value is None:
        return prop.key
    return f"{prop.key}: {_expression(prop.value, depth)}"
