"""
Cursor over immutable source text

Centralizes the bounds checks of the scanner: every lookahead and
lookbehind returns "" past either end of the text instead of raising.
"""

from typing import Optional


class SourceCursor:
    """
    Read position within a document

    Attributes:
        text: Complete document text (never modified)
        pos: Index of the current character
    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def atEnd(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Character at pos + offset, "" outside the text"""
        index = self.pos + offset
        if 0 <= index < len(self.text):
            return self.text[index]
        return ""

    def behind(self) -> str:
        """Character right before pos, "" at the start of the text"""
        return self.peek(-1)

    def startswith(self, prefix: str, offset: int = 0) -> bool:
        return self.text.startswith(prefix, self.pos + offset)

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def seek(self, pos: int) -> None:
        self.pos = min(max(pos, 0), len(self.text))

    def find(self, char: str, start: Optional[int] = None) -> int:
        """Index of the next char at or after start (default pos), -1 if absent"""
        return self.text.find(char, self.pos if start is None else start)

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]

    def line_peek(self) -> str:
        """Rest of the current line, without its newline"""
        end = self.find('\n')
        if end == -1:
            end = len(self.text)
        return self.text[self.pos:end]

    def line_consume(self) -> str:
        """Return the rest of the current line and move past its newline"""
        line = self.line_peek()
        self.advance(len(line) + 1)
        return line

    def lineNumber_get(self) -> int:
        """1-based line number of pos"""
        return self.text.count('\n', 0, self.pos) + 1

    def context_get(self, position: Optional[int] = None, width: int = 40) -> str:
        """
        Source excerpt around a position with a caret under it

        Args:
            position: Index to point at (default pos)
            width: Characters shown on each side

        Returns:
            Two lines: "Context: ...<excerpt>..." and the caret line
        """
        if position is None:
            position = self.pos
        context_start = max(0, position - width)
        context_end = min(len(self.text), position + width)
        context = self.text[context_start:context_end].replace('\n', ' ')

        return (
            f"Context: ...{context}...\n"
            f"         {' ' * (3 + position - context_start)}^"
        )
