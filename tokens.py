"""
Token definitions for the Street scripting language
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Optional

from source_map import Span

class TokenType(Enum):
    # Literals
    NUMBER = auto()
    IDENTIFIER = auto()
    STRING = auto()

    # Keywords
    LET = auto()
    CONST = auto()
    FN = auto()
    IF = auto()
    ELSE = auto()
    FOR = auto()

    # Operators and punctuation
    BINARY_OPERATOR = auto()     # + - * / %
    EQUALS = auto()              # =
    COMMA = auto()               # ,
    DOT = auto()                 # .
    COLON = auto()               # :
    SEMICOLON = auto()           # ;
    GREATER = auto()             # >
    LESSER = auto()              # <
    EQUALS_COMPARE = auto()      # ==
    NOT_EQUALS_COMPARE = auto()  # !=
    EXCLAMATION = auto()         # !
    AND = auto()                 # &&
    AMPERSAND = auto()           # &
    BAR = auto()                 # |
    OPEN_PAREN = auto()          # (
    CLOSE_PAREN = auto()         # )
    OPEN_BRACE = auto()          # {
    CLOSE_BRACE = auto()         # }
    OPEN_BRACKET = auto()        # [
    CLOSE_BRACKET = auto()       # ]

    EOF = auto()

@dataclass
class Token:
    value: str
    type: TokenType
    span: Optional[Span] = field(default=None, compare=False)

    def __repr__(self):
        return f"Token({self.type.name}, '{self.value}')"

KEYWORDS = {
    'let': TokenType.LET,
    'const': TokenType.CONST,
    'fn': TokenType.FN,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'for': TokenType.FOR,
}

TOKEN_CHARS = {
    '(': TokenType.OPEN_PAREN,
    ')': TokenType.CLOSE_PAREN,
    '{': TokenType.OPEN_BRACE,
    '}': TokenType.CLOSE_BRACE,
    '[': TokenType.OPEN_BRACKET,
    ']': TokenType.CLOSE_BRACKET,
    '+': TokenType.BINARY_OPERATOR,
    '-': TokenType.BINARY_OPERATOR,
    '*': TokenType.BINARY_OPERATOR,
    '%': TokenType.BINARY_OPERATOR,
    '/': TokenType.BINARY_OPERATOR,
    '<': TokenType.LESSER,
    '>': TokenType.GREATER,
    '.': TokenType.DOT,
    ';': TokenType.SEMICOLON,
    ':': TokenType.COLON,
    ',': TokenType.COMMA,
    '|': TokenType.BAR,
    '!': TokenType.EXCLAMATION,
}

EOF_VALUE = "EndOfFile"
