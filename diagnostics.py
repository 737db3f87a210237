"""
Diagnostic formatting and reporting for the Street scripting language
Pretty-prints errors with a code frame and ANSI colors
"""

import os
import sys
from enum import Enum
from typing import List, TextIO

from errors import Diagnostic
from source_map import get_source_map, SourceFile, Position

class ColorMode(Enum):
    """Color output modes"""
    NEVER = "never"
    ALWAYS = "always"
    AUTO = "auto"

COLORS = {
    'reset': '\033[0m',
    'bright_red': '\033[91m',
    'bright_blue': '\033[94m',
    'cyan': '\033[36m',
}

class DiagnosticFormatter:
    """Formats diagnostics for human-readable output"""

    def __init__(self, color_mode: ColorMode = ColorMode.AUTO, max_errors: int = 20):
        self.color_mode = color_mode
        self.max_errors = max_errors
        self.error_count = 0

    def should_use_colors(self, file: TextIO = sys.stderr) -> bool:
        if self.color_mode == ColorMode.NEVER:
            return False
        if self.color_mode == ColorMode.ALWAYS:
            return True
        return file.isatty() and os.getenv('NO_COLOR') is None

    def colorize(self, text: str, color: str, file: TextIO = sys.stderr) -> str:
        if not self.should_use_colors(file):
            return text
        return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"

    def format_diagnostic(self, diagnostic: Diagnostic, file: TextIO = sys.stderr) -> str:
        """Header, location, code frame, then help"""
        self.error_count += 1
        if self.error_count > self.max_errors:
            return self.colorize("... (too many errors, stopping)\n", 'bright_red', file)

        header = f"{diagnostic.severity.value.title()} [{diagnostic.code}]: {diagnostic.message}"
        lines = [self.colorize(header, 'bright_red', file)]

        span = diagnostic.primary_span()
        if span is not None:
            try:
                source_file, start, end = get_source_map().resolve_span(span)
            except ValueError:
                source_file = None
            if source_file is not None:
                lines.extend(self._format_code_frame(source_file, start, end, file))

        if diagnostic.help:
            lines.append(self.colorize(f"   = help: {diagnostic.help}", 'cyan', file))

        lines.append("")
        return "\n".join(lines)

    def _format_code_frame(self, source_file: SourceFile, start: Position, end: Position,
                           file: TextIO) -> List[str]:
        """The offending line with a caret underline, plus one line of context before it"""
        lines = []
        location = f"  --> {source_file.path}:{start.line}:{start.column}"
        lines.append(self.colorize(location, 'bright_blue', file))

        first_line = max(1, start.line - 1)
        gutter_width = len(str(start.line))
        pipe = self.colorize('|', 'bright_blue', file)
        lines.append(f"{' ' * gutter_width} {pipe}")

        for line_num in range(first_line, start.line + 1):
            gutter = self.colorize(f"{line_num:>{gutter_width}}", 'bright_blue', file)
            lines.append(f"{gutter} {pipe} {source_file.get_line(line_num)}")

        line_text = source_file.get_line(start.line)
        end_column = end.column if end.line == start.line else len(line_text)
        width = max(1, end_column - start.column + 1)
        underline = ' ' * (start.column - 1) + self.colorize('^' * width, 'bright_red', file)
        lines.append(f"{' ' * gutter_width} {pipe} {underline}")
        return lines

    def emit_diagnostic(self, diagnostic: Diagnostic, file: TextIO = None):
        file = file or sys.stderr
        file.write(self.format_diagnostic(diagnostic, file))
        file.flush()

    def print_summary(self, file: TextIO = None):
        """Print the error count, if any"""
        file = file or sys.stderr
        if self.error_count == 0:
            return

        text = f"{self.error_count} error{'s' if self.error_count != 1 else ''}"
        file.write(f"\n{self.colorize(text, 'bright_red', file)} generated\n")
        file.flush()

# Global formatter instance
_formatter = DiagnosticFormatter()

def get_formatter() -> DiagnosticFormatter:
    return _formatter

def set_color_mode(mode: ColorMode):
    _formatter.color_mode = mode

def set_max_errors(max_errors: int):
    _formatter.max_errors = max_errors
