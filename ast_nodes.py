"""
Abstract Syntax Tree node definitions for the Street scripting language
"""

from abc import ABC
from typing import List, Optional

from source_map import Span

# Base classes
class ASTNode(ABC):
    """Base class for all AST nodes

    ``kind`` names the node class and is what the evaluator dispatches on.
    Two nodes are equal when they have the same kind and equal fields; spans
    are ignored so that trees parsed from different texts can be compared.
    """
    def __init__(self, span: Optional[Span] = None):
        self.span = span

    @property
    def kind(self) -> str:
        return type(self).__name__

    def fields(self) -> dict:
        return {name: value for name, value in vars(self).items() if name != 'span'}

    def __eq__(self, other):
        if not isinstance(other, ASTNode):
            return NotImplemented
        return self.kind == other.kind and self.fields() == other.fields()

    def __repr__(self):
        inner = ", ".join(f"{name}={value!r}" for name, value in self.fields().items())
        return f"{self.kind}({inner})"

    __hash__ = None

class Statement(ASTNode):
    """Base class for all statements"""

class Expression(Statement):
    """Base class for all expressions; any expression can stand as a statement"""

# Expressions
class AssignmentExpr(Expression):
    def __init__(self, assigne: Expression, value: Expression, span: Optional[Span] = None):
        super().__init__(span)
        self.assigne = assigne
        self.value = value

class BinaryExpr(Expression):
    def __init__(self, left: Expression, right: Expression, operator: str, span: Optional[Span] = None):
        super().__init__(span)
        self.left = left
        self.right = right
        self.operator = operator

class CallExpr(Expression):
    def __init__(self, caller: Expression, args: List[Expression], span: Optional[Span] = None):
        super().__init__(span)
        self.caller = caller
        self.args = args

class MemberExpr(Expression):
    """obj.prop (computed=False) or obj[expr] (computed=True)"""
    def __init__(self, object: Expression, property: Expression, computed: bool,
                 span: Optional[Span] = None):
        super().__init__(span)
        self.object = object
        self.property = property
        self.computed = computed

class Identifier(Expression):
    def __init__(self, symbol: str, span: Optional[Span] = None):
        super().__init__(span)
        self.symbol = symbol

class NumericLiteral(Expression):
    def __init__(self, value: float, span: Optional[Span] = None):
        super().__init__(span)
        self.value = value

class StringLiteral(Expression):
    def __init__(self, value: str, span: Optional[Span] = None):
        super().__init__(span)
        self.value = value

class Property(ASTNode):
    """Object literal entry; value is None for the shorthand {key}"""
    def __init__(self, key: str, value: Optional[Expression] = None, span: Optional[Span] = None):
        super().__init__(span)
        self.key = key
        self.value = value

class ObjectLiteral(Expression):
    def __init__(self, properties: List[Property], span: Optional[Span] = None):
        super().__init__(span)
        self.properties = properties

# Statements
class VarDeclaration(Statement):
    def __init__(self, identifier: str, constant: bool, value: Optional[Expression] = None,
                 span: Optional[Span] = None):
        super().__init__(span)
        self.identifier = identifier
        self.constant = constant
        self.value = value

class FunctionDeclaration(Statement):
    def __init__(self, name: str, parameters: List[str], body: List[Statement],
                 span: Optional[Span] = None):
        super().__init__(span)
        self.name = name
        self.parameters = parameters
        self.body = body

class IfStatement(Statement):
    def __init__(self, test: Expression, body: List[Statement], alternate: List[Statement] = None,
                 span: Optional[Span] = None):
        super().__init__(span)
        self.test = test
        self.body = body
        self.alternate = alternate or []

class ForStatement(Statement):
    def __init__(self, init: VarDeclaration, test: Expression, update: Expression,
                 body: List[Statement], span: Optional[Span] = None):
        super().__init__(span)
        self.init = init
        self.test = test
        self.update = update
        self.body = body

class TryCatchStatement(Statement):
    def __init__(self, body: List[Statement], alternate: List[Statement], span: Optional[Span] = None):
        super().__init__(span)
        self.body = body
        self.alternate = alternate

class Program(ASTNode):
    """Root node containing all statements"""
    def __init__(self, body: List[Statement], span: Optional[Span] = None):
        super().__init__(span)
        self.body = body
