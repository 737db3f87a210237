import io
import unittest

from diagnostics import DiagnosticFormatter, ColorMode
from errors import (
    Diagnostic, LabeledSpan, Severity, StreetError, ParseError, UndeclaredVariableError, ErrorCode,
)
from interpreter import Interpreter
from parser import parse
from source_map import reset_source_map, get_source_map, Span


class DiagnosticFormatterTestCase(unittest.TestCase):

    def setUp(self):
        reset_source_map()
        self.formatter = DiagnosticFormatter(ColorMode.NEVER)

    def parse_error(self, source):
        with self.assertRaises(ParseError) as ctx:
            parse(source, "test.street")
        return ctx.exception

    def test_code_frame(self):
        error = self.parse_error("let x = ;")
        text = self.formatter.format_diagnostic(error.diagnostic)

        self.assertTrue(text.startswith("Error [STR2001]: unexpected token found during parsing: ';'"))
        self.assertIn("--> test.street:1:9", text)
        self.assertIn("1 | let x = ;", text)
        self.assertIn("  |         ^\n", text)

    def test_context_line_and_wide_underline(self):
        source = "let a = 1;\nlet b = missing + a;"
        with self.assertRaises(UndeclaredVariableError) as ctx:
            Interpreter(natives={}).run(source, "scope.street")
        text = self.formatter.format_diagnostic(ctx.exception.diagnostic)

        self.assertIn("--> scope.street:2:9", text)
        self.assertIn("1 | let a = 1;", text)
        self.assertIn("2 | let b = missing + a;", text)
        self.assertIn("|         ^^^^^^^\n", text)
        self.assertIn("= help: declare it first with 'let missing = ...;'", text)

    def test_without_span(self):
        error = StreetError.from_simple(ErrorCode.INTERNAL_ERROR, "something broke")
        text = self.formatter.format_diagnostic(error.diagnostic)
        self.assertEqual(text, "Error [STR9001]: something broke\n")

    def test_help_without_span(self):
        diagnostic = Diagnostic(ErrorCode.TYPE_MISMATCH, Severity.ERROR, "careful", help="try this")
        text = self.formatter.format_diagnostic(diagnostic)
        self.assertEqual(text, "Error [STR3001]: careful\n   = help: try this\n")
        self.assertEqual(self.formatter.error_count, 1)

    def test_colors(self):
        error = self.parse_error("let x = ;")
        stream = io.StringIO()

        self.assertNotIn("\033[", DiagnosticFormatter(ColorMode.AUTO).format_diagnostic(error.diagnostic, stream))
        self.assertIn("\033[91m", DiagnosticFormatter(ColorMode.ALWAYS).format_diagnostic(error.diagnostic, stream))

    def test_max_errors(self):
        formatter = DiagnosticFormatter(ColorMode.NEVER, max_errors=1)
        error = self.parse_error(")")
        formatter.format_diagnostic(error.diagnostic)
        self.assertIn("too many errors", formatter.format_diagnostic(error.diagnostic))

    def test_emit_and_summary(self):
        stream = io.StringIO()
        self.formatter.emit_diagnostic(self.parse_error(")").diagnostic, stream)
        self.formatter.print_summary(stream)

        self.assertIn("Error [STR2001]", stream.getvalue())
        self.assertTrue(stream.getvalue().endswith("\n1 error generated\n"))

    def test_summary_is_silent_without_errors(self):
        stream = io.StringIO()
        self.formatter.print_summary(stream)
        self.assertEqual(stream.getvalue(), "")


class StreetErrorTestCase(unittest.TestCase):

    def setUp(self):
        reset_source_map()

    def test_message_includes_location(self):
        with self.assertRaises(ParseError) as ctx:
            parse("let x = 1;\nlet = 2;", "dir/prog.street")
        self.assertIn("at prog.street:2:5", str(ctx.exception))

    def test_first_label_is_primary(self):
        file_id = get_source_map().add_file("labels.street", "abc")
        first, second = Span(file_id, 0, 2), Span(file_id, 2, 3)
        diagnostic = Diagnostic(ErrorCode.TYPE_MISMATCH, Severity.ERROR, "bad",
                                [LabeledSpan(first), LabeledSpan(second)])

        self.assertEqual(diagnostic.primary_span(), first)
        error = StreetError.from_simple(ErrorCode.TYPE_MISMATCH, "bad", second, "fix it")
        self.assertEqual(error.diagnostic.primary_span(), second)
        self.assertEqual(error.diagnostic.help, "fix it")


if __name__ == '__main__':
    unittest.main()
