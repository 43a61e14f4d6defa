"""
Semantic event models

Each recognized markdown construct is reported by the transducer as one
of the dataclasses below. Block events render to whole output lines;
inline events (styles and code spans) render to a string that is spliced
into the pending text line.

The set is closed: Emitter keeps one handler per class, and anything it
has no handler for renders nothing.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Union


class ListKind(Enum):
    """Kind of an open list"""
    ORDERED = "ordered"
    UNORDERED = "unordered"


class HeaderLevel(Enum):
    """
    Section granularity

    Markdown levels 1-2 map to MAJOR, 3 to MINOR, 4 and deeper to SUB.
    """
    MAJOR = 1
    MINOR = 2
    SUB = 3

    @classmethod
    def from_hashes(cls, count: int) -> "HeaderLevel":
        """Map a run of '#' characters to a section level"""
        if count <= 2:
            return cls.MAJOR
        if count == 3:
            return cls.MINOR
        return cls.SUB


class InlineStyle(Enum):
    """Toggleable inline font styles"""
    BOLD = "bold"
    ITALIC = "italic"


@dataclass
class ListFrame:
    """
    One open list on the list context stack

    Attributes:
        kind: Ordered or unordered
        counter: Number the next ordered item will carry (1-based)
    """
    kind: ListKind
    counter: int = 1


# --- block events ---------------------------------------------------------

@dataclass(frozen=True)
class ParagraphEnd:
    pass


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass(frozen=True)
class CodeBlockOpen:
    """Start of a fenced code block; info is the text after the fence"""
    info: str = ""


@dataclass(frozen=True)
class CodeBlockClose:
    pass


@dataclass(frozen=True)
class CodeLine:
    """One verbatim line inside a fenced code block"""
    text: str


@dataclass(frozen=True)
class ListOpen:
    kind: ListKind


@dataclass(frozen=True)
class ListItemOpen:
    pass


@dataclass(frozen=True)
class ListItemEnd:
    pass


@dataclass(frozen=True)
class ListClose:
    pass


@dataclass(frozen=True)
class SectionHeader:
    level: HeaderLevel
    title: str


@dataclass(frozen=True)
class BoxOpen:
    pass


@dataclass(frozen=True)
class BoxClose:
    pass


@dataclass(frozen=True)
class ManReference:
    """
    Cross reference to a manual page

    Attributes:
        text: "name section" as written in the link label, e.g. "ls 1"
    """
    text: str

    @property
    def name(self) -> str:
        return self.text.split(" ", 1)[0]

    @property
    def section(self) -> str:
        parts = self.text.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""


@dataclass(frozen=True)
class Hyperlink:
    """
    Markdown link or image

    Attributes:
        title: Bracketed label text
        target: Parenthesized link target
        mailto: Target is an e-mail address (contains '@')
        image: Written with a leading '!' (rendered like a plain link)
    """
    title: str
    target: str
    mailto: bool = False
    image: bool = False


# --- inline events --------------------------------------------------------

@dataclass(frozen=True)
class StyleOpen:
    style: InlineStyle


@dataclass(frozen=True)
class StyleClose:
    style: InlineStyle


@dataclass(frozen=True)
class InlineCode:
    text: str


BlockEvent = Union[
    ParagraphEnd, LineBreak, CodeBlockOpen, CodeBlockClose, CodeLine,
    ListOpen, ListItemOpen, ListItemEnd, ListClose, SectionHeader,
    BoxOpen, BoxClose, ManReference, Hyperlink,
]

InlineEvent = Union[StyleOpen, StyleClose, InlineCode]

Event = Union[BlockEvent, InlineEvent]
