"""
Error handling for the Street scripting language
Diagnostics, error codes and the exception hierarchy shared by every stage
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional

from source_map import Span, get_source_map

class Severity(Enum):
    """Error severity levels"""
    ERROR = "error"

@dataclass
class LabeledSpan:
    """A span with an optional label"""
    span: Span
    label: Optional[str] = None
    is_primary: bool = False

class ErrorCode:
    """Error code constants"""
    # Lexical errors (STR1xxx)
    UNEXPECTED_CHARACTER = "STR1001"

    # Parser errors (STR2xxx)
    UNEXPECTED_TOKEN = "STR2001"
    EXPECTED_TOKEN = "STR2002"
    INVALID_DECLARATION = "STR2004"

    # Type errors (STR3xxx)
    TYPE_MISMATCH = "STR3001"
    NOT_CALLABLE = "STR3002"
    NON_OBJECT_MEMBER = "STR3003"
    DIVISION_BY_ZERO = "STR3004"

    # Scope errors (STR4xxx)
    UNDECLARED_VARIABLE = "STR4001"
    REDECLARATION = "STR4002"
    CONST_ASSIGNMENT = "STR4003"
    INVALID_ASSIGNMENT_TARGET = "STR4004"

    # Internal errors (STR9xxx)
    INTERNAL_ERROR = "STR9001"

@dataclass
class Diagnostic:
    """Everything needed to report one problem"""
    code: str
    severity: Severity
    message: str
    labels: List[LabeledSpan] = field(default_factory=list)
    help: Optional[str] = None

    def __post_init__(self):
        # Exactly one primary label
        if self.labels and not any(label.is_primary for label in self.labels):
            self.labels[0].is_primary = True

    def primary_span(self) -> Optional[Span]:
        for label in self.labels:
            if label.is_primary:
                return label.span
        return None

class StreetError(Exception):
    """Base exception class for all Street errors"""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(self._format_simple_message())

    def _format_simple_message(self) -> str:
        header = f"{self.diagnostic.severity.value.title()} [{self.diagnostic.code}]: {self.diagnostic.message}"
        primary_span = self.diagnostic.primary_span()
        if primary_span is None:
            return header
        try:
            source_file, start, _ = get_source_map().resolve_span(primary_span)
        except ValueError:
            return header
        file_name = source_file.path.split('/')[-1]
        return f"{header} at {file_name}:{start.line}:{start.column}"

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @classmethod
    def from_simple(cls, code: str, message: str, span: Optional[Span] = None,
                    help_text: Optional[str] = None):
        """Create error from simple parameters"""
        labels = [LabeledSpan(span, message, is_primary=True)] if span else []
        return cls(Diagnostic(code, Severity.ERROR, message, labels, help=help_text))

class LexError(StreetError):
    """Lexical analysis errors"""
    position: int = -1
    char: str = ""

    @classmethod
    def unexpected_character(cls, span: Span, char: str):
        error = cls.from_simple(
            ErrorCode.UNEXPECTED_CHARACTER,
            f"unrecognized character {char!r} (code {ord(char)})",
            span,
            "check for typos or unsupported characters",
        )
        error.position = span.start
        error.char = char
        return error

class ParseError(StreetError):
    """Parser errors"""
    token = None

    @classmethod
    def expected_token(cls, token, expected: str, message: str):
        error = cls.from_simple(
            ErrorCode.EXPECTED_TOKEN,
            f"{message} (expected {expected}, found '{token.value}')",
            token.span,
        )
        error.token = token
        return error

    @classmethod
    def unexpected_token(cls, token, message: str = "unexpected token"):
        error = cls.from_simple(
            ErrorCode.UNEXPECTED_TOKEN, f"{message}: '{token.value}'", token.span,
        )
        error.token = token
        return error

    @classmethod
    def invalid_declaration(cls, token, message: str):
        error = cls.from_simple(ErrorCode.INVALID_DECLARATION, message, token.span)
        error.token = token
        return error

class InterpreterError(StreetError):
    """Anything raised while evaluating a program; try/catch recovers from these"""

class UndeclaredVariableError(InterpreterError):

    @classmethod
    def create(cls, name: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.UNDECLARED_VARIABLE,
            f"cannot resolve '{name}' as it does not exist",
            span,
            f"declare it first with 'let {name} = ...;'",
        )

class RedeclarationError(InterpreterError):

    @classmethod
    def create(cls, name: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.REDECLARATION,
            f"cannot declare variable '{name}' as it is already defined",
            span,
        )

class ConstAssignmentError(InterpreterError):

    @classmethod
    def create(cls, name: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.CONST_ASSIGNMENT,
            f"cannot reassign to variable '{name}' as it was declared constant",
            span,
            f"declare '{name}' with 'let' if it needs to change",
        )

class InvalidAssignmentTargetError(InterpreterError):

    @classmethod
    def create(cls, kind: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.INVALID_ASSIGNMENT_TARGET,
            f"invalid assignment target {kind}",
            span,
            "only variables and object members can be assigned to",
        )

class TypeMismatchError(InterpreterError):

    @classmethod
    def invalid_operands(cls, operator: str, left_type: str, right_type: str,
                         span: Optional[Span] = None):
        help_text = f"operator '{operator}' requires numeric operands"
        if operator == "+":
            help_text = "'+' adds two numbers or joins text with a string"
        return cls.from_simple(
            ErrorCode.TYPE_MISMATCH,
            f"cannot use operator '{operator}' with {left_type} and {right_type}",
            span,
            help_text,
        )

    @classmethod
    def expected(cls, what: str, got: str, span: Optional[Span] = None):
        return cls.from_simple(ErrorCode.TYPE_MISMATCH, f"{what} expects a number, got {got}", span)

class NotCallableError(InterpreterError):

    @classmethod
    def create(cls, type_name: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.NOT_CALLABLE, f"cannot call a value of type {type_name}", span,
        )

class NonObjectMemberAccessError(InterpreterError):

    @classmethod
    def create(cls, type_name: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.NON_OBJECT_MEMBER,
            f"cannot access a member of a value of type {type_name}",
            span,
        )

class DivisionByZeroError(InterpreterError):

    @classmethod
    def create(cls, operator: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.DIVISION_BY_ZERO,
            "division by zero" if operator == "/" else "modulo by zero",
            span,
            "ensure the right-hand side is not zero",
        )

class InternalError(StreetError):
    """An evaluator invariant was violated"""

    @classmethod
    def unknown_node(cls, kind: str, span: Optional[Span] = None):
        return cls.from_simple(
            ErrorCode.INTERNAL_ERROR,
            f"this AST node has not yet been setup for interpretation: {kind}",
            span,
        )
