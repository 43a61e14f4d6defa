"""
Backend emitter: semantic events to roff markup

Maps each event class to a handler producing the control lines (block
events) or the inline escape string (inline events) of the selected
dialect. Handlers are pure: the only state they look at is the list
context stack, and they never modify it.

Events without a registered handler render nothing.
"""

from typing import Callable, Dict, List, Optional

from ..models.dialect import Dialect
from ..models.events import (
    BlockEvent,
    BoxClose,
    BoxOpen,
    CodeBlockClose,
    CodeBlockOpen,
    CodeLine,
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
from .liststack import ListStack
from .log import LOG


# mom numbers nested ordered lists with alternating styles
MOM_ORDERED_STYLES: Dict[int, str] = {1: "DIGIT", 2: "ALPHA", 3: "DIGIT", 4: "alpha"}

STYLE_OPEN: Dict[InlineStyle, str] = {InlineStyle.BOLD: "\\fB", InlineStyle.ITALIC: "\\fI"}
MOM_STYLE_OPEN: Dict[InlineStyle, str] = {InlineStyle.BOLD: "\\*[BD]", InlineStyle.ITALIC: "\\*[IT]"}

CONTROL_CHARACTERS = ('.', "'")


def text_protect(text: str) -> str:
    """
    Guard a text line against being read as a request

    A line starting with '.' or an apostrophe gets the zero-width escape
    in front.
    """
    if text.startswith(CONTROL_CHARACTERS):
        return "\\&" + text
    return text


class Emitter:
    """
    Dialect-specific renderer for semantic events

    Attributes:
        dialect: Target macro package
        lists: Read-only view of the transducer's list context stack
        indent: Indent used by man/mm code blocks and list items
        blockHandlers: Event class -> handler returning output lines
        inlineHandlers: Event class -> handler returning inline markup
    """

    def __init__(
        self,
        dialect: Dialect,
        lists: Optional[ListStack] = None,
        indent: Optional[int] = None,
    ) -> None:
        if indent is None:
            from ..config import appsettings
            indent = appsettings.indent
        self.dialect = dialect
        self.lists = lists if lists is not None else ListStack()
        self.indent = indent
        self.blockHandlers: Dict[type, Callable[..., List[str]]] = {}
        self.inlineHandlers: Dict[type, Callable[..., str]] = {}
        self.blockHandlers_register()
        self.inlineHandlers_register()

    def render(self, event: BlockEvent) -> List[str]:
        """
        Render a block event to complete output lines

        Args:
            event: Any block event instance

        Returns:
            Output lines without trailing newlines (possibly empty)
        """
        handler = self.blockHandlers.get(type(event))
        if handler is None:
            LOG(f"No {self.dialect.value} rendering for {type(event).__name__}", level=3)
            return []
        return handler(event)

    def inline_render(self, event: InlineEvent) -> str:
        """Render an inline event to the markup spliced into a text line"""
        handler = self.inlineHandlers.get(type(event))
        if handler is None:
            LOG(f"No {self.dialect.value} rendering for {type(event).__name__}", level=3)
            return ""
        return handler(event)

    def blockHandlers_register(self) -> None:
        """Register handlers for block-level events"""
        self.blockHandlers.update({
            ParagraphEnd: self.paragraphEnd_render,
            LineBreak: self.lineBreak_render,
            CodeBlockOpen: self.codeBlockOpen_render,
            CodeBlockClose: self.codeBlockClose_render,
            CodeLine: self.codeLine_render,
            ListOpen: self.listOpen_render,
            ListItemOpen: self.listItemOpen_render,
            ListItemEnd: self.listItemEnd_render,
            ListClose: self.listClose_render,
            SectionHeader: self.sectionHeader_render,
            BoxOpen: self.boxOpen_render,
            BoxClose: self.boxClose_render,
            ManReference: self.manReference_render,
            Hyperlink: self.hyperlink_render,
        })

    def inlineHandlers_register(self) -> None:
        """Register handlers for inline events"""
        self.inlineHandlers.update({
            StyleOpen: self.styleOpen_render,
            StyleClose: self.styleClose_render,
            InlineCode: self.inlineCode_render,
        })

    # --- paragraphs and breaks -------------------------------------------

    def paragraphEnd_render(self, event: ParagraphEnd) -> List[str]:
        if self.dialect is Dialect.MDOC:
            return [".Pp"]
        return [".PP"]

    def lineBreak_render(self, event: LineBreak) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".BR"]
        return [".br"]

    # --- code blocks -----------------------------------------------------

    def codeBlockOpen_render(self, event: CodeBlockOpen) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".CODE"]
        if self.dialect is Dialect.MDOC:
            return [".Bd -literal -offset indent"]
        return [f".RS {self.indent}", ".EX"]

    def codeBlockClose_render(self, event: CodeBlockClose) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".CODE OFF"]
        if self.dialect is Dialect.MDOC:
            return [".Ed"]
        return [".EE", ".RE"]

    def codeLine_render(self, event: CodeLine) -> List[str]:
        """
        Copy a code line verbatim

        A line starting with '.' would be read as a request, so the control
        character is switched to '!' for exactly that line.
        """
        if not event.text.startswith('.'):
            return [event.text]
        if self.dialect is Dialect.MOM:
            return [".ESC_CHAR !", event.text, ".ESC_CHAR ."]
        return [".cc !", event.text, "!cc ."]

    # --- lists -----------------------------------------------------------

    def listOpen_render(self, event: ListOpen) -> List[str]:
        """
        Begin a list; expects the new frame to be on the stack already

        man has no list container, its items are numbered by hand.
        """
        depth = self.lists.depth
        if event.kind is ListKind.ORDERED:
            if self.dialect is Dialect.MOM:
                return [f".LIST {MOM_ORDERED_STYLES.get(depth, 'DIGIT')}"]
            if self.dialect is Dialect.MDOC:
                return [".Bl -enum -offset indent"]
            if self.dialect is Dialect.MM:
                return [".AL"]
            return []

        if self.dialect is Dialect.MOM:
            return [f".LIST {'BULLET' if depth % 2 else 'DASH'}"]
        if self.dialect is Dialect.MDOC:
            return [f".Bl -{'bullet' if depth % 2 else 'dash'} -offset indent"]
        if self.dialect is Dialect.MM:
            return [".BL"]
        return []

    def listItemOpen_render(self, event: ListItemOpen) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".ITEM"]
        if self.dialect is Dialect.MDOC:
            return [".It"]
        if self.dialect is Dialect.MM:
            return [".LI"]

        frame = self.lists.peek()
        if frame is None:
            return []
        if frame.kind is ListKind.UNORDERED:
            return [f".IP \\(bu {self.indent}"]
        return [f".IP {frame.counter}. {self.indent}"]

    def listItemEnd_render(self, event: ListItemEnd) -> List[str]:
        if self.dialect is Dialect.MM:
            return [".LE"]
        return []

    def listClose_render(self, event: ListClose) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".LIST OFF"]
        if self.dialect is Dialect.MDOC:
            return [".El"]
        return []

    # --- headers ---------------------------------------------------------

    def sectionHeader_render(self, event: SectionHeader) -> List[str]:
        """
        Start a new section

        man has no third section level, so deep headers become a bold
        run-in tagged paragraph there.
        """
        title = event.title
        if self.dialect is Dialect.MOM:
            return [f'.HEADING {event.level.value} "{title}"']
        if self.dialect is Dialect.MDOC:
            if event.level is HeaderLevel.MAJOR:
                return [f".Sh {title}"]
            return [f".Ss {title}"]
        if event.level is HeaderLevel.MAJOR:
            return [f".SH {title}"]
        if event.level is HeaderLevel.SUB and self.dialect is Dialect.MAN:
            return [".TP", f"\\fB{title}\\fR"]
        return [f".SS {title}"]

    def boxOpen_render(self, event: BoxOpen) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".DRH"]
        if self.dialect is Dialect.MAN:
            return [".B"]
        return [".FT B"]

    def boxClose_render(self, event: BoxClose) -> List[str]:
        if self.dialect is Dialect.MOM:
            return [".DRH"]
        return [".FT P"]

    # --- references and links --------------------------------------------

    def manReference_render(self, event: ManReference) -> List[str]:
        if self.dialect is Dialect.MDOC:
            return [f".Xr {event.text}"]
        if self.dialect is Dialect.MAN:
            if event.section:
                return [f"\\fB{event.name}\\fP({event.section})"]
            return [f"\\fB{event.text}\\fP"]
        return [text_protect(event.text)]

    def hyperlink_render(self, event: Hyperlink) -> List[str]:
        if self.dialect is Dialect.MAN:
            title = text_protect(event.title)
            if event.mailto:
                return [f".MT {event.target}", title, ".ME"]
            return [f".UR {event.target}", title, ".UE"]
        if self.dialect is Dialect.MDOC:
            if event.mailto:
                return [f".An {event.title} Aq Mt {event.target}"]
            return [f'.Lk {event.target} "{event.title}"']
        if self.dialect is Dialect.MM:
            # mm has no link macro
            return [text_protect(f"{event.title} <{event.target}>")]
        return [text_protect(f"{event.title} \\*[UL]{event.target}\\*[ULX]")]

    # --- inline ----------------------------------------------------------

    def styleOpen_render(self, event: StyleOpen) -> str:
        if self.dialect is Dialect.MOM:
            return MOM_STYLE_OPEN[event.style]
        return STYLE_OPEN[event.style]

    def styleClose_render(self, event: StyleClose) -> str:
        if self.dialect is Dialect.MOM:
            return "\\*[PREV]"
        return "\\fP"

    def inlineCode_render(self, event: InlineCode) -> str:
        if self.dialect is Dialect.MOM:
            return f"`\\*[CODE]{event.text}\\*[CODE OFF]'"
        return f"`\\f[CR]{event.text}\\fP'"
