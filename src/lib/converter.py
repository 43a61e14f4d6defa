"""
Document driver

Converts one Document: writes the dialect preamble, runs the transducer
over the body and returns the finished markup. Output is assembled in
memory, so a document that fails to convert produces nothing.
"""

from datetime import date
from typing import List, Optional, Tuple

from ..models.dialect import Dialect
from ..models.document import Document
from .emitter import text_protect
from .liststack import ListStack
from .log import LOG
from .transducer import Transducer


PREAMBLE_COMMENT = '.\\" x-roff document'


class Converter:
    """
    Converts a markdown Document to roff

    Responsibilities:
    - Emit the comment line, macro package activation and page header
    - Pick up an in-document header line ("# ...") for man and mdoc
    - Run the transducer with a fresh list stack
    - Join the output lines
    """

    def __init__(
        self,
        document: Document,
        dialect: Dialect,
        today: Optional[date] = None,
        lists: Optional[ListStack] = None,
    ) -> None:
        """
        Initialize converter

        Args:
            document: Loaded markdown input
            dialect: Target macro package
            today: Date for synthesized headers (default: the current date)
            lists: List stack to reuse; it is reset before conversion
        """
        from ..config import appsettings

        self.document = document
        self.dialect = dialect
        self.today = today or date.today()
        self.lists = lists if lists is not None else ListStack()
        self.settings = appsettings
        self.transducer: Optional[Transducer] = None

    def convert(self) -> str:
        """
        Convert the whole document

        Returns:
            roff source, one line per output line, newline terminated

        Raises:
            FatalParseError: If the transducer rejects the document
        """
        LOG(f"Converting {self.document.name} to {self.dialect.value}", level=2)

        self.lists.reset()
        header, body = self.headerDirective_split(self.document.text)
        lines = self.preamble_build(header)

        self.transducer = Transducer(body, self.dialect, self.lists)
        lines.extend(self.transducer.transform())

        LOG(f"{self.document.name}: {len(lines)} lines", level=2)
        return '\n'.join(lines) + '\n'

    def headerDirective_split(self, text: str) -> Tuple[Optional[str], str]:
        """
        Separate an explicit page header line from the body

        man and mdoc take a leading "# " line as the arguments of their page
        header. The other dialects keep that line as an ordinary section.

        Returns:
            (header arguments or None, remaining body text)
        """
        if self.dialect not in (Dialect.MAN, Dialect.MDOC):
            return None, text
        if not (text.startswith('# ') or text.startswith('#\t')):
            return None, text

        first, _, rest = text.partition('\n')
        return first[2:].strip(), rest

    def preamble_build(self, header: Optional[str] = None) -> List[str]:
        """
        Build the lines preceding the body

        Args:
            header: Explicit page header arguments, if the document has them

        Returns:
            Comment, package activation and page header lines
        """
        lines = [PREAMBLE_COMMENT, f".do mso {self.dialect.tmac}"]
        name = self.name_quote(self.document.name)
        stamp = self.today.strftime("%Y-%m-%d")
        settings = self.settings

        if self.dialect is Dialect.MAN:
            if header is None:
                header = f"{name} {settings.man_section} {stamp} {settings.man_extra}"
            lines.append(f".TH {header}")
        elif self.dialect is Dialect.MDOC:
            if header is None:
                header = f"{name} {settings.man_section}"
            lines.extend([f".Dd {stamp}", f".Dt {header}", ".Os"])
        elif self.dialect is Dialect.MM:
            lines.extend([".TL", text_protect(self.document.name)])
        elif self.dialect is Dialect.MOM:
            lines.extend([
                f'.TITLE "{self.document.name}"',
                f'.AUTHOR "{settings.mom_author}"',
                f".PAPER {settings.mom_paper}",
                f".PRINTSTYLE {settings.mom_printstyle}",
                ".START",
            ])
        return lines

    @staticmethod
    def name_quote(name: str) -> str:
        """Quote a header argument containing blanks"""
        if ' ' in name or '\t' in name:
            return f'"{name}"'
        return name


def transform(
    document_name: str,
    source: str,
    dialect: Dialect = Dialect.MAN,
    today: Optional[date] = None,
) -> str:
    """
    Convert markdown text to roff in one call

    Args:
        document_name: Name shown in the page header
        source: Markdown text
        dialect: Target macro package
        today: Date for synthesized headers (default: the current date)

    Returns:
        Complete roff document

    Raises:
        FatalParseError: On an unterminated inline code span

    Example:
        >>> print(transform("demo", "Hello *world*\\n", Dialect.MAN, date(2024, 1, 2)))
        .\\" x-roff document
        .do mso man.tmac
        .TH demo 7 2024-01-02 document
        Hello \\fIworld\\fP
        <BLANKLINE>
    """
    return Converter(Document(name=document_name, source=source), dialect, today).convert()
