"""
Recursive descent parser for the Street scripting language

Precedence, lowest first: assignment, object literal / try-catch, logical
(&& and |, one per level), additive and comparison, multiplicative,
call, member access, primary.
"""

from typing import List, Optional

from tokens import Token, TokenType
from ast_nodes import *
from errors import ParseError
from lexer import tokenize
from source_map import Span

ADDITIVE_OPERATORS = ("+", "-", "==", "!=", "<", ">")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")
LOGICAL_OPERATORS = ("&&", "|")

ADDITIVE_TYPES = (
    TokenType.BINARY_OPERATOR,
    TokenType.EQUALS_COMPARE,
    TokenType.NOT_EQUALS_COMPARE,
    TokenType.LESSER,
    TokenType.GREATER,
)

def _join(start: Optional[Span], end: Optional[Span]) -> Optional[Span]:
    if start is None:
        return end
    return start.merge(end)

class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.current = 0

    def parse(self) -> Program:
        """Parse tokens into an AST"""
        body = []
        while not self.is_at_end():
            body.append(self.statement())

        span = _join(body[0].span, body[-1].span) if body else None
        return Program(body, span)

    # Statements
    def statement(self) -> Statement:
        if self.check(TokenType.LET) or self.check(TokenType.CONST):
            return self.var_declaration()
        if self.check(TokenType.FN):
            return self.function_declaration()
        if self.check(TokenType.IF):
            return self.if_statement()
        if self.check(TokenType.FOR):
            return self.for_statement()
        return self.expression_statement()

    def expression_statement(self) -> Expression:
        expr = self.expression()
        self.match(TokenType.SEMICOLON)
        return expr

    def var_declaration(self) -> VarDeclaration:
        """(let | const) IDENT ( ';' | '=' expression ';' )"""
        keyword = self.advance()
        constant = keyword.type == TokenType.CONST
        name = self.consume(
            TokenType.IDENTIFIER, "expected identifier name following let | const keywords"
        )

        if self.check(TokenType.SEMICOLON):
            end = self.advance()
            if constant:
                raise ParseError.invalid_declaration(
                    name, f"must assign value to constant '{name.value}', no value provided"
                )
            return VarDeclaration(name.value, False, None, _join(keyword.span, end.span))

        self.consume(TokenType.EQUALS, "expected equals token following identifier in var declaration")
        value = self.expression()
        end = self.consume(TokenType.SEMICOLON, "variable declaration statement must end with a semicolon")
        return VarDeclaration(name.value, constant, value, _join(keyword.span, end.span))

    def function_declaration(self) -> FunctionDeclaration:
        keyword = self.advance()
        name = self.consume(TokenType.IDENTIFIER, "expected function name following fn keyword")

        parameters = []
        for arg in self.arguments():
            if not isinstance(arg, Identifier):
                raise ParseError.invalid_declaration(
                    name, f"parameters of function '{name.value}' must be plain identifiers"
                )
            parameters.append(arg.symbol)

        body, end = self.block()
        return FunctionDeclaration(name.value, parameters, body, _join(keyword.span, end.span))

    def if_statement(self) -> IfStatement:
        keyword = self.advance()
        self.consume(TokenType.OPEN_PAREN, "opening parenthesis expected following 'if'")
        test = self.expression()
        self.consume(TokenType.CLOSE_PAREN, "closing parenthesis expected following 'if' condition")
        body, end = self.block()

        alternate = []
        if self.match(TokenType.ELSE):
            if self.check(TokenType.IF):
                nested = self.if_statement()
                alternate = [nested]
                end = self.previous()
            else:
                alternate, end = self.block()

        return IfStatement(test, body, alternate, _join(keyword.span, end.span))

    def for_statement(self) -> ForStatement:
        """for ( varDecl test ; update ) { body }"""
        keyword = self.advance()
        self.consume(TokenType.OPEN_PAREN, "opening parenthesis expected following 'for'")
        if not (self.check(TokenType.LET) or self.check(TokenType.CONST)):
            raise ParseError.expected_token(
                self.peek(), "let | const", "'for' loops start with a variable declaration"
            )
        init = self.var_declaration()
        test = self.expression()
        self.consume(TokenType.SEMICOLON, "semicolon expected following the test expression in 'for'")
        update = self.assignment()
        self.consume(TokenType.CLOSE_PAREN, "closing parenthesis expected following the update in 'for'")
        body, end = self.block()
        return ForStatement(init, test, update, body, _join(keyword.span, end.span))

    def block(self):
        """'{' statement* '}' -> (statements, closing brace token)"""
        self.consume(TokenType.OPEN_BRACE, "opening brace expected while parsing code block")
        body = []
        while not self.is_at_end() and not self.check(TokenType.CLOSE_BRACE):
            body.append(self.statement())
        end = self.consume(TokenType.CLOSE_BRACE, "closing brace expected while parsing code block")
        return body, end

    # Expressions
    def expression(self) -> Expression:
        return self.assignment()

    def assignment(self) -> Expression:
        """Right-associative; target legality is checked when evaluating"""
        left = self.object_literal()

        if self.match(TokenType.EQUALS):
            value = self.assignment()
            return AssignmentExpr(left, value, _join(left.span, value.span))

        return left

    def object_literal(self) -> Expression:
        if not self.check(TokenType.OPEN_BRACE):
            return self.try_catch()

        start = self.advance()
        properties = []

        while not self.is_at_end() and not self.check(TokenType.CLOSE_BRACE):
            key = self.consume(TokenType.IDENTIFIER, "object literal key expected")

            # Shorthand: { key, ... } or { key }
            if self.match(TokenType.COMMA):
                properties.append(Property(key.value, None, key.span))
                continue
            if self.check(TokenType.CLOSE_BRACE):
                properties.append(Property(key.value, None, key.span))
                continue

            self.consume(TokenType.COLON, "missing colon following identifier in object literal")
            value = self.expression()
            properties.append(Property(key.value, value, _join(key.span, value.span)))

            if not self.check(TokenType.CLOSE_BRACE):
                self.consume(TokenType.COMMA, "expected comma or closing brace following property")

        end = self.consume(TokenType.CLOSE_BRACE, "object literal missing closing brace")
        return ObjectLiteral(properties, _join(start.span, end.span))

    def try_catch(self) -> Expression:
        """try { ... } catch { ... }; 'try' and 'catch' are plain identifiers"""
        if not (self.check_word("try") and self.peek_next().type == TokenType.OPEN_BRACE):
            return self.logical()

        start = self.advance()
        body, _ = self.block()

        if not self.check_word("catch"):
            raise ParseError.unexpected_token(
                self.peek(), "'try' block must be followed by a 'catch' block"
            )
        self.advance()

        alternate, end = self.block()
        return TryCatchStatement(body, alternate, _join(start.span, end.span))

    def logical(self) -> Expression:
        """At most one && or | per level; a && b && c does not chain"""
        left = self.additive()

        if self.peek().type in (TokenType.AND, TokenType.BAR):
            operator = self.advance().value
            right = self.additive()
            left = BinaryExpr(left, right, operator, _join(left.span, right.span))

        return left

    def additive(self) -> Expression:
        left = self.multiplicative()

        while self.check_operator(ADDITIVE_TYPES, ADDITIVE_OPERATORS):
            operator = self.advance().value
            right = self.multiplicative()
            left = BinaryExpr(left, right, operator, _join(left.span, right.span))

        return left

    def multiplicative(self) -> Expression:
        left = self.call_member()

        while self.check_operator((TokenType.BINARY_OPERATOR,), MULTIPLICATIVE_OPERATORS):
            operator = self.advance().value
            right = self.call_member()
            left = BinaryExpr(left, right, operator, _join(left.span, right.span))

        return left

    def call_member(self) -> Expression:
        expr = self.member()

        while self.check(TokenType.OPEN_PAREN):
            args = self.arguments()
            expr = CallExpr(expr, args, _join(expr.span, self.previous().span))

        return expr

    def arguments(self) -> List[Expression]:
        """'(' (expression (',' expression)*)? ')'"""
        self.consume(TokenType.OPEN_PAREN, "opening parenthesis expected while parsing arguments")

        args = []
        if not self.check(TokenType.CLOSE_PAREN):
            args.append(self.expression())
            while self.match(TokenType.COMMA):
                args.append(self.assignment())

        self.consume(TokenType.CLOSE_PAREN, "closing parenthesis expected while parsing arguments")
        return args

    def member(self) -> Expression:
        obj = self.primary()

        while self.check(TokenType.DOT) or self.check(TokenType.OPEN_BRACKET):
            operator = self.advance()

            if operator.type == TokenType.DOT:
                token = self.peek()
                prop = self.primary()
                if not isinstance(prop, Identifier):
                    raise ParseError.unexpected_token(
                        token, "cannot use dot operator without right hand side being an identifier"
                    )
                obj = MemberExpr(obj, prop, False, _join(obj.span, prop.span))
            else:
                prop = self.expression()
                end = self.consume(TokenType.CLOSE_BRACKET, "missing closing bracket in computed value")
                obj = MemberExpr(obj, prop, True, _join(obj.span, end.span))

        return obj

    def primary(self) -> Expression:
        token = self.peek()

        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return Identifier(token.value, token.span)

        if token.type == TokenType.NUMBER:
            self.advance()
            return NumericLiteral(float(token.value), token.span)

        if token.type == TokenType.STRING:
            self.advance()
            return StringLiteral(token.value, token.span)

        if token.type == TokenType.OPEN_PAREN:
            self.advance()
            value = self.expression()
            self.consume(
                TokenType.CLOSE_PAREN,
                "unexpected token found inside parenthesised expression, expected closing parenthesis",
            )
            return value

        raise ParseError.unexpected_token(token, "unexpected token found during parsing")

    # Utility methods
    def match(self, token_type: TokenType) -> bool:
        """Consume the current token if it has the given type"""
        if self.check(token_type):
            self.advance()
            return True
        return False

    def check(self, token_type: TokenType) -> bool:
        return self.peek().type == token_type

    def check_word(self, word: str) -> bool:
        token = self.peek()
        return token.type == TokenType.IDENTIFIER and token.value == word

    def check_operator(self, types, operators) -> bool:
        token = self.peek()
        return token.type in types and token.value in operators

    def advance(self) -> Token:
        """Consume current token and return it"""
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def peek_next(self) -> Token:
        if self.current + 1 >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.current + 1]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error"""
        if self.check(token_type):
            return self.advance()
        raise ParseError.expected_token(self.peek(), token_type.name.lower(), message)

def parse(source: str, file_path: str = "<string>") -> Program:
    """Tokenize and parse source text into a Program"""
    return Parser(tokenize(source, file_path)).parse()
