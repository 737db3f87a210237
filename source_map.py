"""
Source mapping for the Street scripting language
Keeps registered source texts and turns byte offsets into line/column positions
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

@dataclass
class Span:
    """A half-open range of character offsets inside one registered source"""
    file_id: int
    start: int  # inclusive
    end: int    # exclusive

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Invalid span: start ({self.start}) > end ({self.end})")

    def merge(self, other: Optional['Span']) -> 'Span':
        """Smallest span covering both spans"""
        if other is None or other.file_id != self.file_id:
            return self
        return Span(self.file_id, min(self.start, other.start), max(self.end, other.end))

@dataclass
class Position:
    """1-indexed line/column"""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

class SourceFile:
    """A registered source text with its line index"""

    def __init__(self, file_id: int, path: str, content: str):
        self.file_id = file_id
        self.path = path
        self.content = content
        self.line_starts: List[int] = [0]
        for i, char in enumerate(content):
            if char == '\n':
                self.line_starts.append(i + 1)

    def offset_to_position(self, offset: int) -> Position:
        if offset < 0 or offset > len(self.content):
            raise ValueError(f"Offset {offset} out of bounds for {self.path}")

        line = 1
        for i, line_start in enumerate(self.line_starts):
            if line_start > offset:
                break
            line = i + 1

        return Position(line, offset - self.line_starts[line - 1] + 1)

    def get_line(self, line_num: int) -> str:
        """Text of a 1-indexed line, without its newline"""
        if line_num < 1 or line_num > len(self.line_starts):
            raise ValueError(f"Line {line_num} out of bounds")

        start = self.line_starts[line_num - 1]
        if line_num < len(self.line_starts):
            end = self.line_starts[line_num] - 1
        else:
            end = len(self.content)
        return self.content[start:end]

class SourceMap:
    """Registry of every source text seen by the lexer in this process"""

    def __init__(self):
        self.files: Dict[int, SourceFile] = {}
        self.next_id = 1

    def add_file(self, path: str, content: str) -> int:
        # Interactive lines share a path, so every registration gets its own id
        file_id = self.next_id
        self.next_id += 1
        self.files[file_id] = SourceFile(file_id, path, content)
        return file_id

    def get_file(self, file_id: int) -> Optional[SourceFile]:
        return self.files.get(file_id)

    def resolve_span(self, span: Span) -> Tuple[SourceFile, Position, Position]:
        source_file = self.get_file(span.file_id)
        if source_file is None:
            raise ValueError(f"Unknown file ID: {span.file_id}")

        start = source_file.offset_to_position(span.start)
        end = source_file.offset_to_position(max(span.start, span.end - 1))
        return source_file, start, end

_source_map = SourceMap()

def get_source_map() -> SourceMap:
    """Get the process-wide source map"""
    return _source_map

def reset_source_map():
    """Drop every registered source (used between runs and in tests)"""
    global _source_map
    _source_map = SourceMap()
