import unittest

from errors import LexError
from lexer import tokenize
from source_map import reset_source_map
from tokens import Token, TokenType, EOF_VALUE


def types(source):
    return [token.type for token in tokenize(source)]


class LexerTestCase(unittest.TestCase):

    def setUp(self):
        reset_source_map()

    def test_declaration(self):
        expected = [
            Token("let", TokenType.LET),
            Token("x", TokenType.IDENTIFIER),
            Token("=", TokenType.EQUALS),
            Token("45", TokenType.NUMBER),
            Token(";", TokenType.SEMICOLON),
            Token(EOF_VALUE, TokenType.EOF),
        ]
        self.assertEqual(tokenize("let x = 45;"), expected)

    def test_always_ends_with_eof(self):
        for case in ["", "   \n\t", "x", "\"open string"]:
            tokens = tokenize(case)
            self.assertEqual(tokens[-1].type, TokenType.EOF, case)
            self.assertEqual(tokens[-1].value, "EndOfFile", case)

    def test_keywords_and_identifiers(self):
        self.assertEqual(types("let const fn if else for"), [
            TokenType.LET, TokenType.CONST, TokenType.FN, TokenType.IF,
            TokenType.ELSE, TokenType.FOR, TokenType.EOF,
        ])
        for case in ["lets", "iff", "_fn", "for2", "try", "catch"]:
            self.assertEqual(tokenize(case)[0], Token(case, TokenType.IDENTIFIER), case)

    def test_numbers(self):
        cases = {"42": "42", "3.14": "3.14", "-5": "-5", "-0.5": "-0.5"}
        for case, value in cases.items():
            self.assertEqual(tokenize(case)[0], Token(value, TokenType.NUMBER), case)

        # a second '.' ends the number
        self.assertEqual(tokenize("1.2.3")[:3], [
            Token("1.2", TokenType.NUMBER),
            Token(".", TokenType.DOT),
            Token("3", TokenType.NUMBER),
        ])

    def test_minus_followed_by_space_is_operator(self):
        self.assertEqual(tokenize("a - 5")[:3], [
            Token("a", TokenType.IDENTIFIER),
            Token("-", TokenType.BINARY_OPERATOR),
            Token("5", TokenType.NUMBER),
        ])

    def test_strings(self):
        self.assertEqual(tokenize('"hello there"')[0], Token("hello there", TokenType.STRING))
        self.assertEqual(tokenize('""')[0], Token("", TokenType.STRING))
        # no escape sequences
        self.assertEqual(tokenize('"a\\nb"')[0], Token("a\\nb", TokenType.STRING))
        # an unterminated string runs to the end of input
        self.assertEqual(tokenize('"abc'), [
            Token("abc", TokenType.STRING),
            Token(EOF_VALUE, TokenType.EOF),
        ])

    def test_operators(self):
        cases = {
            "==": TokenType.EQUALS_COMPARE,
            "!=": TokenType.NOT_EQUALS_COMPARE,
            "&&": TokenType.AND,
            "&": TokenType.AMPERSAND,
            "!": TokenType.EXCLAMATION,
            "|": TokenType.BAR,
            "=": TokenType.EQUALS,
            "<": TokenType.LESSER,
            ">": TokenType.GREATER,
            "%": TokenType.BINARY_OPERATOR,
            "[": TokenType.OPEN_BRACKET,
        }
        for case, token_type in cases.items():
            self.assertEqual(tokenize(case)[0], Token(case, token_type), case)

    def test_increment_expands_to_assignment(self):
        self.assertEqual(tokenize("x++"), [
            Token("x", TokenType.IDENTIFIER),
            Token("=", TokenType.EQUALS),
            Token("x", TokenType.IDENTIFIER),
            Token("+", TokenType.BINARY_OPERATOR),
            Token("1", TokenType.NUMBER),
            Token(EOF_VALUE, TokenType.EOF),
        ])
        self.assertEqual(types("y--")[1:5], [
            TokenType.EQUALS, TokenType.IDENTIFIER, TokenType.BINARY_OPERATOR, TokenType.NUMBER,
        ])

    def test_increment_with_nothing_before_is_dropped(self):
        self.assertEqual(types("++"), [TokenType.EOF])

    def test_unknown_character(self):
        with self.assertRaises(LexError) as ctx:
            tokenize("let @")
        self.assertEqual(ctx.exception.position, 4)
        self.assertEqual(ctx.exception.char, "@")
        self.assertEqual(ctx.exception.code, "STR1001")

    def test_spans(self):
        tokens = tokenize("let name = 1;")
        self.assertEqual((tokens[1].span.start, tokens[1].span.end), (4, 8))


if __name__ == '__main__':
    unittest.main()
