"""
Lexer for the Street scripting language
Converts source code into tokens
"""

from typing import List

from tokens import Token, TokenType, KEYWORDS, TOKEN_CHARS, EOF_VALUE
from errors import LexError
from source_map import get_source_map, Span

WHITESPACE = (' ', '\t', '\r', '\n')

def is_digit(char: str) -> bool:
    return '0' <= char <= '9'

def is_alpha(char: str) -> bool:
    return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char == '_'

class Lexer:
    def __init__(self, source: str, file_path: str = "<string>"):
        self.source = source
        self.file_path = file_path
        self.tokens: List[Token] = []
        self.current = 0
        self.start = 0  # Start of current token

        self.file_id = get_source_map().add_file(file_path, source)

    def tokenize(self) -> List[Token]:
        """Tokenize the source code and return a list of tokens"""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.start = self.current
        self.add_token(TokenType.EOF, EOF_VALUE)
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_token(self):
        """Scan one token (or a skippable character) from the current position"""
        c = self.peek()

        if is_digit(c) or (c == '-' and is_digit(self.peek_next())):
            self.number()
        elif c == '=':
            self.advance()
            if self.match('='):
                self.add_token(TokenType.EQUALS_COMPARE)
            else:
                self.add_token(TokenType.EQUALS)
        elif c == '&':
            self.advance()
            if self.match('&'):
                self.add_token(TokenType.AND)
            else:
                self.add_token(TokenType.AMPERSAND)
        elif c == '!':
            self.advance()
            if self.match('='):
                self.add_token(TokenType.NOT_EQUALS_COMPARE)
            else:
                self.add_token(TokenType.EXCLAMATION)
        elif c == '"':
            self.string()
        elif c in ('+', '-') and self.peek_next() == c:
            self.increment(c)
        elif c in TOKEN_CHARS:
            self.advance()
            self.add_token(TOKEN_CHARS[c])
        elif is_alpha(c):
            self.identifier()
        elif c in WHITESPACE:
            self.advance()
        else:
            self.advance()
            raise LexError.unexpected_character(self.create_span(), c)

    def advance(self) -> str:
        """Consume and return the current character"""
        char = self.source[self.current]
        self.current += 1
        return char

    def match(self, expected: str) -> bool:
        """Consume the current character if it is the expected one"""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return '\0'
        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return '\0'
        return self.source[self.current + 1]

    def number(self):
        """Digits with at most one '.', optionally led by '-'"""
        self.advance()
        period = False
        while True:
            if self.peek() == '.' and not period:
                period = True
                self.advance()
            elif is_digit(self.peek()):
                self.advance()
            else:
                break

        self.add_token(TokenType.NUMBER)

    def string(self):
        """Text up to the next '"' or the end of input, no escapes"""
        self.advance()  # opening quote
        while not self.is_at_end() and self.peek() != '"':
            self.advance()

        value = self.source[self.start + 1:self.current]
        if not self.is_at_end():
            self.advance()  # closing quote
        self.add_token(TokenType.STRING, value)

    def increment(self, operator: str):
        """x++ / x-- expand to the tokens of x = x + 1 / x = x - 1"""
        self.advance()
        self.advance()
        if not self.tokens:
            return

        span = self.create_span()
        previous = self.tokens[-1]
        self.tokens.append(Token("=", TokenType.EQUALS, span))
        self.tokens.append(Token(previous.value, previous.type, previous.span))
        self.tokens.append(Token(operator, TokenType.BINARY_OPERATOR, span))
        self.tokens.append(Token("1", TokenType.NUMBER, span))

    def identifier(self):
        """Identifiers and keywords"""
        while is_alpha(self.peek()) or is_digit(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def add_token(self, token_type: TokenType, value: str = None):
        if value is None:
            value = self.source[self.start:self.current]
        self.tokens.append(Token(value, token_type, self.create_span()))

    def create_span(self) -> Span:
        """Create a span for the current token"""
        return Span(self.file_id, self.start, self.current)

def tokenize(source: str, file_path: str = "<string>") -> List[Token]:
    """Turn source text into tokens, ending with an EOF token"""
    return Lexer(source, file_path).tokenize()
