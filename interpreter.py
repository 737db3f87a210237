"""
Tree-walking interpreter for the Street scripting language
"""

import logging
import math
from typing import List, Optional

from ast_nodes import *
from environment import Environment, create_global_env
from errors import (
    InterpreterError, InternalError, InvalidAssignmentTargetError, TypeMismatchError,
    NotCallableError, NonObjectMemberAccessError, DivisionByZeroError,
)
from parser import parse
from values import (
    NumberVal, StringVal, ObjectVal, FunctionVal, NativeFnVal,
    MK_NULL, MK_BOOL, MK_NUMBER, MK_STRING, MK_OBJECT,
    is_truthy, to_display, values_equal,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

class Interpreter:
    """Evaluates AST nodes against a chain of environments

    Every node kind has exactly one rule in ``evaluate``. The interpreter
    owns one global environment, pre-populated with the native registry,
    which ``interpret`` and ``run`` use for top-level programs.
    """

    def __init__(self, natives: Optional[dict] = None):
        if natives is None:
            from natives import create_natives
            natives = create_natives()
        self.globals = create_global_env(natives)

    def run(self, source: str, file_path: str = "<string>"):
        """Parse and evaluate source in the global environment"""
        return self.interpret(parse(source, file_path))

    def interpret(self, program: Program):
        logger.debug("Evaluating program with %d top-level statements", len(program.body))
        return self.evaluate(program, self.globals)

    def evaluate(self, node: ASTNode, env: Environment):
        """Dispatch on node kind"""
        if isinstance(node, NumericLiteral):
            return MK_NUMBER(node.value)
        elif isinstance(node, StringLiteral):
            return MK_STRING(node.value)
        elif isinstance(node, Identifier):
            return env.lookup(node.symbol, node.span)
        elif isinstance(node, ObjectLiteral):
            return self.eval_object_expr(node, env)
        elif isinstance(node, CallExpr):
            return self.eval_call_expr(node, env)
        elif isinstance(node, BinaryExpr):
            return self.eval_binary_expr(node, env)
        elif isinstance(node, AssignmentExpr):
            return self.eval_assignment(node, env)
        elif isinstance(node, MemberExpr):
            return self.eval_member_expr(node, env)
        elif isinstance(node, Program):
            return self.eval_body(node.body, env)
        elif isinstance(node, VarDeclaration):
            return self.eval_var_declaration(node, env)
        elif isinstance(node, FunctionDeclaration):
            return self.eval_function_declaration(node, env)
        elif isinstance(node, IfStatement):
            return self.eval_if_statement(node, env)
        elif isinstance(node, ForStatement):
            return self.eval_for_statement(node, env)
        elif isinstance(node, TryCatchStatement):
            return self.eval_try_catch_statement(node, env)
        else:
            raise InternalError.unknown_node(getattr(node, 'kind', type(node).__name__),
                                             getattr(node, 'span', None))

    def eval_body(self, statements: List[Statement], env: Environment):
        """Evaluate statements in order; the last value wins"""
        result = MK_NULL()
        for statement in statements:
            result = self.evaluate(statement, env)
        return result

    # Statements
    def eval_var_declaration(self, stmt: VarDeclaration, env: Environment):
        value = self.evaluate(stmt.value, env) if stmt.value is not None else MK_NULL()
        return env.declare(stmt.identifier, value, stmt.constant, stmt.span)

    def eval_function_declaration(self, stmt: FunctionDeclaration, env: Environment):
        function = FunctionVal(stmt.name, stmt.parameters, stmt.body, env)
        return env.declare(stmt.name, function, False, stmt.span)

    def eval_if_statement(self, stmt: IfStatement, env: Environment):
        if is_truthy(self.evaluate(stmt.test, env)):
            return self.eval_body(stmt.body, Environment(env))
        if stmt.alternate:
            return self.eval_body(stmt.alternate, Environment(env))
        return MK_NULL()

    def eval_for_statement(self, stmt: ForStatement, env: Environment):
        """init once, then test / body / update until test is falsy"""
        loop_env = Environment(env)
        self.evaluate(stmt.init, loop_env)

        result = MK_NULL()
        while is_truthy(self.evaluate(stmt.test, loop_env)):
            result = self.eval_body(stmt.body, Environment(loop_env))
            self.evaluate(stmt.update, loop_env)
        return result

    def eval_try_catch_statement(self, stmt: TryCatchStatement, env: Environment):
        # The catch block has no access to the error
        try:
            return self.eval_body(stmt.body, Environment(env))
        except InterpreterError as error:
            logger.debug("try block failed, running catch block: %s", error)
            return self.eval_body(stmt.alternate, Environment(env))

    # Expressions
    def eval_object_expr(self, expr: ObjectLiteral, env: Environment):
        obj = MK_OBJECT()
        for prop in expr.properties:
            if prop.value is None:
                value = env.lookup(prop.key, prop.span)
            else:
                value = self.evaluate(prop.value, env)
            obj.properties[prop.key] = value
        return obj

    def eval_assignment(self, expr: AssignmentExpr, env: Environment):
        value = self.evaluate(expr.value, env)
        target = expr.assigne

        if isinstance(target, Identifier):
            return env.assign(target.symbol, value, target.span)

        if isinstance(target, MemberExpr):
            obj = self.evaluate(target.object, env)
            key = self.member_key(target, env)
            if not isinstance(obj, ObjectVal):
                raise NonObjectMemberAccessError.create(obj.type, target.span)
            obj.properties[key] = value
            return value

        raise InvalidAssignmentTargetError.create(target.kind, target.span)

    def eval_binary_expr(self, expr: BinaryExpr, env: Environment):
        """Both operands are always evaluated, left first"""
        left = self.evaluate(expr.left, env)
        right = self.evaluate(expr.right, env)
        operator = expr.operator

        if operator == "&&":
            return MK_BOOL(is_truthy(left) and is_truthy(right))
        if operator == "|":
            return MK_BOOL(is_truthy(left) or is_truthy(right))
        if operator == "==":
            return MK_BOOL(values_equal(left, right))
        if operator == "!=":
            return MK_BOOL(not values_equal(left, right))

        if operator == "+" and (isinstance(left, StringVal) or isinstance(right, StringVal)):
            return MK_STRING(to_display(left) + to_display(right))

        if isinstance(left, NumberVal) and isinstance(right, NumberVal):
            return self.eval_numeric_binary_expr(left.value, right.value, expr)

        raise TypeMismatchError.invalid_operands(operator, left.type, right.type, expr.span)

    def eval_numeric_binary_expr(self, left: float, right: float, expr: BinaryExpr):
        operator = expr.operator

        if operator == "+":
            return MK_NUMBER(left + right)
        elif operator == "-":
            return MK_NUMBER(left - right)
        elif operator == "*":
            return MK_NUMBER(left * right)
        elif operator == "/":
            if right == 0:
                raise DivisionByZeroError.create(operator, expr.span)
            return MK_NUMBER(left / right)
        elif operator == "%":
            if right == 0:
                raise DivisionByZeroError.create(operator, expr.span)
            if math.isinf(left):
                return MK_NUMBER(math.nan)
            # Sign follows the dividend, as in C
            return MK_NUMBER(math.fmod(left, right))
        elif operator == "<":
            return MK_BOOL(left < right)
        elif operator == ">":
            return MK_BOOL(left > right)

        raise TypeMismatchError.invalid_operands(operator, "number", "number", expr.span)

    def member_key(self, expr: MemberExpr, env: Environment) -> str:
        if expr.computed:
            return to_display(self.evaluate(expr.property, env))
        return expr.property.symbol

    def eval_member_expr(self, expr: MemberExpr, env: Environment):
        """Missing keys read as null; only non-object bases are an error"""
        obj = self.evaluate(expr.object, env)
        key = self.member_key(expr, env)

        if isinstance(obj, ObjectVal):
            return obj.properties.get(key, MK_NULL())
        if isinstance(obj, (FunctionVal, NativeFnVal)):
            return MK_NULL()

        raise NonObjectMemberAccessError.create(obj.type, expr.span)

    def eval_call_expr(self, expr: CallExpr, env: Environment):
        function = self.evaluate(expr.caller, env)
        args = [self.evaluate(arg, env) for arg in expr.args]

        if isinstance(function, NativeFnVal):
            result = function.call(args, env)
            return MK_NULL() if result is None else result

        if isinstance(function, FunctionVal):
            scope = Environment(function.declaration_env)
            for i, parameter in enumerate(function.parameters):
                scope.declare(parameter, args[i] if i < len(args) else MK_NULL())
            return self.eval_body(function.body, scope)

        raise NotCallableError.create(function.type, expr.caller.span)

def evaluate(node: ASTNode, env: Environment):
    """Evaluate one node in env with no native registry attached"""
    return Interpreter(natives={}).evaluate(node, env)
