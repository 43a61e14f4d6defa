"""
Transducer: single-pass markdown scanner

Walks the document once, character by character, and turns the markdown
subset into roff lines of one dialect.

The scanner tracks three things at once:
1. Position: at the start of a line or inside one
2. Block mode: normal text or inside a fenced code block
3. Inline style: bold and italic flags (document wide, not nested)

Plain text accumulates in a pending buffer that is squeezed and written
whenever a block boundary, list item, header or link is reached.
Everything else is reported as a semantic event and rendered by the
Emitter.

Example:
    >>> lines = Transducer("Some **bold** text\\n", Dialect.MAN).transform()
    >>> lines
    ['Some \\\\fBbold\\\\fP text']
"""

from typing import List, Optional

from ..models.dialect import Dialect
from ..models.events import (
    BlockEvent,
    BoxClose,
    BoxOpen,
    CodeBlockClose,
    CodeBlockOpen,
    CodeLine,
    Event,
    HeaderLevel,
    Hyperlink,
    InlineCode,
    InlineEvent,
    InlineStyle,
    LineBreak,
    ListClose,
    ListItemEnd,
    ListItemOpen,
    ListKind,
    ListOpen,
    ManReference,
    ParagraphEnd,
    SectionHeader,
    StyleClose,
    StyleOpen,
)
from .cursor import SourceCursor
from .emitter import Emitter, text_protect
from .liststack import ListStack
from .log import LOG, WARN
from .squeeze import line_squeeze


# Characters after which an emphasis delimiter opens a span
EMPHASIS_BOUNDARY = "({[,.;`'\" \t\n"

# Backslash escapes; any other escaped character stands for itself
ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
    'f': '\f',
    'b': '\b',
    'a': '\a',
    'e': '\033',
}

FENCE = "```"
SETEXT_RULES = ("===", "---", "***")
BULLETS = ('*', '+', '-')
BLANKS = (' ', '\t')
DIGITS = frozenset("0123456789")


class FatalParseError(Exception):
    """
    Raised when the document cannot be converted

    Attributes:
        line_number: 1-based source line where the problem starts
    """

    def __init__(self, message: str, line_number: int = 0) -> None:
        super().__init__(message)
        self.line_number = line_number


class Transducer:
    """
    Markdown to roff scanner for one document

    Attributes:
        cursor: Read position in the source text
        dialect: Target macro package
        lists: Open lists (reset for every document)
        emitter: Renders events for the dialect
        lines: Completed output lines
        events: Every event raised so far, in order
        pending: Plain text waiting to be squeezed and written
        lineStart: Index into pending where the current source line begins
        atLineStart: Next character is the first of a line
        inCode: Inside a fenced code block
        bold: Bold span open
        italic: Italic span open
    """

    def __init__(
        self,
        source: str,
        dialect: Dialect,
        lists: Optional[ListStack] = None,
    ) -> None:
        self.cursor = SourceCursor(source)
        self.dialect = dialect
        self.lists = lists if lists is not None else ListStack()
        self.emitter = Emitter(dialect, self.lists)
        self.lines: List[str] = []
        self.events: List[Event] = []
        self.pending: List[str] = []
        self.lineStart = 0
        self.atLineStart = True
        self.inCode = False
        self.bold = False
        self.italic = False

    def transform(self) -> List[str]:
        """
        Convert the whole source

        Returns:
            Output lines, without trailing newlines

        Raises:
            FatalParseError: On an inline code span that never closes
        """
        cursor = self.cursor

        while not cursor.atEnd:
            if self.inCode:
                self.codeLine_consume()
                continue

            if cursor.peek() == '\\':
                self.escape_consume()
                continue

            if self.atLineStart:
                self.atLineStart = False
                if self.lineStart_recognize():
                    continue

            self.inline_recognize()

        self.document_finish()
        return self.lines

    # --- output ----------------------------------------------------------

    def event_emit(self, event: BlockEvent) -> None:
        """Record a block event and write its rendering"""
        LOG(f"{event}", level=3)
        self.events.append(event)
        self.lines.extend(self.emitter.render(event))

    def inline_emit(self, event: InlineEvent) -> None:
        """Record an inline event and append its rendering to the pending text"""
        LOG(f"{event}", level=3)
        self.events.append(event)
        self.pending.append(self.emitter.inline_render(event))

    def line_write(self, text: str) -> None:
        """
        Write a text line, protecting a leading control character

        A line starting with '.' or an apostrophe would be read as a request,
        so it gets the zero-width escape in front.
        """
        self.lines.append(text_protect(text))

    def text_write(self, text: str) -> None:
        """Squeeze text and write it unless nothing is left"""
        squeezed = line_squeeze(text)
        if squeezed:
            self.line_write(squeezed)

    def pending_flush(self) -> None:
        """Write out and clear the pending text"""
        if self.pending:
            self.text_write(''.join(self.pending))
        self.pending = []
        self.lineStart = 0

    # --- start of line ---------------------------------------------------

    def lineStart_recognize(self) -> bool:
        """
        Try the block constructs that may only start a line

        Checked in order: blank line, header, bullet item, numbered item,
        code fence.

        Returns:
            True if a construct was consumed, False to scan the character
            as ordinary inline text
        """
        cursor = self.cursor
        char = cursor.peek()

        if char == '\n':
            self.blankLine_consume()
            return True

        if char == '#':
            self.header_consume()
            return True

        if char in BULLETS and cursor.peek(1) in BLANKS:
            cursor.advance(1)
            self.listItem_start(ListKind.UNORDERED)
            return True

        if char in DIGITS:
            return self.orderedItem_consume()

        if cursor.startswith(FENCE):
            self.pending_flush()
            cursor.advance(len(FENCE))
            info = cursor.line_consume().strip()
            self.inCode = True
            self.atLineStart = True
            self.event_emit(CodeBlockOpen(info=info))
            return True

        return False

    def blankLine_consume(self) -> None:
        """
        Blank line: end the paragraph

        Closes the innermost open list, one list per blank line.
        """
        self.pending_flush()
        if not self.lists.empty:
            self.list_close()
        self.event_emit(ParagraphEnd())
        self.cursor.advance(1)
        self.atLineStart = True

    def header_consume(self) -> None:
        """
        '#' header line

        A line that also ends in '#' is a box (title) instead of a section.
        Header text is written as is, without inline formatting.
        """
        self.pending_flush()
        line = self.cursor.line_consume()
        self.atLineStart = True

        if line.endswith('#'):
            self.event_emit(BoxOpen())
            self.event_emit(LineBreak())
            text = line.strip('#').strip()
            if text:
                self.line_write(text)
            self.event_emit(LineBreak())
            self.event_emit(BoxClose())
            return

        hashes = len(line) - len(line.lstrip('#'))
        title = line[hashes:].strip()
        self.event_emit(SectionHeader(level=HeaderLevel.from_hashes(hashes), title=title))

    def orderedItem_consume(self) -> bool:
        """
        Digits followed by '.': numbered list item

        The number of the first item seeds the counter of a new list; later
        items keep counting from there whatever number they carry.

        Returns:
            False (cursor untouched) if the digits are not followed by '.'
        """
        cursor = self.cursor
        length = 0
        while cursor.peek(length) in DIGITS:
            length += 1
        if cursor.peek(length) != '.':
            return False

        number = int(cursor.slice(cursor.pos, cursor.pos + length))
        cursor.advance(length + 1)
        self.listItem_start(ListKind.ORDERED, start=number)
        return True

    def listItem_start(self, kind: ListKind, start: int = 1) -> None:
        """
        Begin a list item, opening a list if none is open

        Args:
            kind: Kind of list to open when none is open yet
            start: First number of a newly opened ordered list
        """
        self.pending_flush()
        if self.lists.empty:
            self.lists.push(kind, start=start)
            self.event_emit(ListOpen(kind=kind))
        else:
            self.event_emit(ListItemEnd())

        self.event_emit(ListItemOpen())
        frame = self.lists.peek()
        if frame is not None and frame.kind is ListKind.ORDERED:
            frame.counter += 1

        while self.cursor.peek() in BLANKS:
            self.cursor.advance(1)

    def list_close(self) -> None:
        """End the current item and the innermost list"""
        self.event_emit(ListItemEnd())
        self.event_emit(ListClose())
        self.lists.pop()

    # --- code blocks -----------------------------------------------------

    def codeLine_consume(self) -> None:
        """Copy one line of a fenced code block, or close the block"""
        cursor = self.cursor
        if cursor.startswith(FENCE):
            cursor.line_consume()
            self.inCode = False
            self.atLineStart = True
            self.event_emit(CodeBlockClose())
            return
        self.event_emit(CodeLine(text=cursor.line_consume()))

    # --- inline ----------------------------------------------------------

    def escape_consume(self) -> None:
        """
        Backslash escape

        The escaped character never starts a block construct, even when it
        is the first character of a line.
        """
        cursor = self.cursor
        escaped = cursor.peek(1)
        if not escaped:
            self.pending.append('\\')
            cursor.advance(1)
        else:
            self.pending.append(ESCAPES.get(escaped, escaped))
            cursor.advance(2)
        self.atLineStart = False

    def inline_recognize(self) -> None:
        """Scan one construct in the middle of a line"""
        cursor = self.cursor
        char = cursor.peek()

        if char == '\n':
            self.newline_consume()
        elif cursor.startswith('**') or cursor.startswith('__'):
            self.emphasis_toggle(InlineStyle.BOLD, 2)
        elif char in ('*', '_'):
            self.emphasis_toggle(InlineStyle.ITALIC, 1)
        elif char == '`':
            self.codeSpan_consume()
        elif char == '[' or (char == '!' and cursor.peek(1) == '['):
            self.link_consume()
        else:
            self.pending.append(char)
            cursor.advance(1)

    def newline_consume(self) -> None:
        """
        End of a text line

        A following '===', '---' or '***' line turns the text line just
        finished into a major section header. Otherwise the line break
        becomes a space.
        """
        cursor = self.cursor
        if any(cursor.startswith(rule, 1) for rule in SETEXT_RULES):
            cursor.advance(1)
            cursor.line_consume()
            self.atLineStart = True
            if not ''.join(self.pending).strip():
                self.pending = []
                self.lineStart = 0
                return
            self.setextHeader_emit()
            return

        self.pending.append(' ')
        self.lineStart = len(self.pending)
        cursor.advance(1)
        self.atLineStart = True

    def setextHeader_emit(self) -> None:
        """Write earlier paragraph text, then the last text line as a header"""
        before = ''.join(self.pending[:self.lineStart])
        title = line_squeeze(''.join(self.pending[self.lineStart:]))
        if not title:
            before, title = '', line_squeeze(before)
        self.pending = []
        self.lineStart = 0

        self.text_write(before)
        self.event_emit(SectionHeader(level=HeaderLevel.MAJOR, title=title))

    def emphasis_toggle(self, style: InlineStyle, width: int) -> None:
        """
        '**'/'__' (bold) or '*'/'_' (italic) delimiter

        Closing always succeeds. Opening needs a boundary character (or the
        start of the document) right before the delimiter; otherwise the
        delimiter is plain text.
        """
        cursor = self.cursor
        active = self.bold if style is InlineStyle.BOLD else self.italic

        if active:
            self.style_set(style, False)
            self.inline_emit(StyleClose(style=style))
        else:
            previous = cursor.behind()
            if not previous or previous in EMPHASIS_BOUNDARY:
                self.style_set(style, True)
                self.inline_emit(StyleOpen(style=style))
            else:
                self.pending.append(cursor.slice(cursor.pos, cursor.pos + width))
        cursor.advance(width)

    def style_set(self, style: InlineStyle, value: bool) -> None:
        if style is InlineStyle.BOLD:
            self.bold = value
        else:
            self.italic = value

    def codeSpan_consume(self) -> None:
        """
        Inline code span, copied verbatim up to the closing backtick

        Raises:
            FatalParseError: If no closing backtick follows
        """
        cursor = self.cursor
        start = cursor.pos + 1
        end = cursor.find('`', start)
        if end == -1:
            self.error("Inline code (`) not closed", cursor.pos)

        self.inline_emit(InlineCode(text=cursor.slice(start, end)))
        cursor.seek(end + 1)

    def link_consume(self) -> None:
        """
        '[label](target)' link, '![label](target)' image or
        '[name section](man)' manual page reference

        Anything that does not close properly is plain text.
        """
        cursor = self.cursor
        image = cursor.peek() == '!'
        bracket = cursor.pos + 1 if image else cursor.pos

        label_end = cursor.find(']', bracket + 1)
        if label_end != -1 and cursor.slice(label_end + 1, label_end + 2) == '(':
            target_end = cursor.find(')', label_end + 2)
            if target_end != -1:
                label = cursor.slice(bracket + 1, label_end)
                target = cursor.slice(label_end + 2, target_end)

                self.pending_flush()
                if target == "man":
                    self.event_emit(ManReference(text=label))
                else:
                    self.event_emit(Hyperlink(
                        title=label, target=target, mailto='@' in target, image=image
                    ))
                cursor.seek(target_end + 1)
                return

        self.pending.append(cursor.peek())
        cursor.advance(1)

    # --- end of input ----------------------------------------------------

    def document_finish(self) -> None:
        """Flush remaining text and close whatever is still open"""
        self.pending_flush()
        if self.inCode:
            WARN("Code block not closed at end of input")
            self.inCode = False
            self.event_emit(CodeBlockClose())
        while not self.lists.empty:
            self.list_close()
        if self.bold or self.italic:
            LOG("Emphasis still open at end of input", level=2)

    def error(self, message: str, position: int) -> None:
        """
        Report a fatal error with source context

        Raises:
            FatalParseError: Always

        Example output:
            Inline code (`) not closed
            Line 3, position 42
            Context: ...see `foo for details...
                           ^
        """
        cursor = SourceCursor(self.cursor.text, position)
        line_number = cursor.lineNumber_get()
        raise FatalParseError(
            f"{message}\n"
            f"Line {line_number}, position {position}\n"
            f"{cursor.context_get()}",
            line_number=line_number,
        )
