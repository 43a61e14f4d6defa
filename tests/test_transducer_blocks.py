"""
Transducer block-level tests

Tests paragraphs, headers, lists, code blocks and escapes as recognized
at the start of a line.
"""

import pytest

from md2roff.lib.transducer import Transducer
from md2roff.lib.liststack import ListStack
from md2roff.models import (
    Dialect,
    HeaderLevel,
    ListKind,
    CodeBlockOpen,
    ListOpen,
    ListClose,
    ListItemOpen,
    SectionHeader,
)


def convert(source, dialect=Dialect.MAN):
    """Body lines for source"""
    return Transducer(source, dialect).transform()


class TestParagraphs:
    """Test plain text and paragraph breaks"""

    def test_empty_source(self):
        """Empty string gives no lines"""
        assert convert("") == []

    def test_single_line(self):
        """Plain line passes through"""
        assert convert("Hello world\n") == ["Hello world"]

    def test_no_trailing_newline(self):
        """Last line without newline is written"""
        assert convert("Hello world") == ["Hello world"]

    def test_lines_join_into_one(self):
        """Consecutive text lines form one output line"""
        assert convert("one\ntwo\nthree\n") == ["one two three"]

    def test_blank_line_ends_paragraph(self):
        """Blank line becomes .PP"""
        assert convert("First para\n\nSecond para\n") == [
            "First para", ".PP", "Second para"
        ]

    def test_mdoc_paragraph(self):
        """mdoc paragraph is .Pp"""
        assert convert("a\n\nb\n", Dialect.MDOC) == ["a", ".Pp", "b"]

    def test_leading_control_character_escaped(self):
        """Text lines must not start with '.' or an apostrophe"""
        assert convert(".hidden request\n") == ["\\&.hidden request"]
        assert convert("'quoted'\n") == ["\\&'quoted'"]

    def test_whitespace_only_line_writes_nothing(self):
        """Squeezed-away text writes no line"""
        assert convert("   \t  \n") == []


class TestHashHeaders:
    """Test '#' headers and boxes"""

    @pytest.mark.parametrize("source, expected", [
        ("# Title\n", [".SH Title"]),
        ("## Two\n", [".SH Two"]),
        ("### Three\n", [".SS Three"]),
    ])
    def test_man_levels(self, source, expected):
        """One to three hashes map to SH and SS"""
        assert convert(source) == expected

    def test_deep_header_man_run_in(self):
        """Level 4+ is a bold tagged paragraph in man only"""
        assert convert("#### Four\n") == [".TP", "\\fBFour\\fR"]
        assert convert("###### Six\n") == [".TP", "\\fBSix\\fR"]

    def test_deep_header_other_dialects(self):
        """Level 4+ in mdoc, mm and mom"""
        assert convert("#### Four\n", Dialect.MDOC) == [".Ss Four"]
        assert convert("#### Four\n", Dialect.MM) == [".SS Four"]
        assert convert("#### Four\n", Dialect.MOM) == ['.HEADING 3 "Four"']

    def test_header_event_levels(self):
        """Hash count maps to header level"""
        transducer = Transducer("# A\n### B\n#### C\n", Dialect.MAN)
        transducer.transform()
        levels = [e.level for e in transducer.events if isinstance(e, SectionHeader)]
        assert levels == [HeaderLevel.MAJOR, HeaderLevel.MINOR, HeaderLevel.SUB]

    def test_header_flushes_paragraph(self):
        """Pending text is written before the header"""
        assert convert("text before\n# Head\nafter\n") == [
            "text before", ".SH Head", "after"
        ]

    def test_header_text_not_formatted(self):
        """Header text is copied as written"""
        assert convert("# **Raw** title\n") == [".SH **Raw** title"]

    def test_header_at_end_without_newline(self):
        """Header as last line without newline"""
        assert convert("# Last") == [".SH Last"]

    def test_box_title(self):
        """A header line ending in '#' is a box"""
        assert convert("# Boxed #\n") == [".B", ".br", "Boxed", ".br", ".FT P"]

    def test_box_title_mom(self):
        """mom box uses DRH rules"""
        assert convert("## Boxed ##\n", Dialect.MOM) == [
            ".DRH", ".BR", "Boxed", ".BR", ".DRH"
        ]


class TestSetextHeaders:
    """Test underlined headers"""

    @pytest.mark.parametrize("rule", ["===", "-----", "***"])
    def test_rule_makes_major_header(self, rule):
        """Any of the three rules underlines a title"""
        assert convert(f"Title\n{rule}\nBody\n") == [".SH Title", "Body"]

    def test_only_last_line_is_title(self):
        """Earlier lines of the paragraph stay paragraph text"""
        assert convert("Intro line\nTitle\n---\n") == ["Intro line", ".SH Title"]

    def test_setext_title_is_squeezed(self):
        """Title whitespace is collapsed"""
        assert convert("A   spaced    title\n===\n") == [".SH A spaced title"]

    def test_rule_without_text_is_skipped(self):
        """Nothing pending: the rule is dropped, not a header"""
        transducer = Transducer("[a](b)\n---\nnext\n", Dialect.MAN)
        lines = transducer.transform()

        assert lines == [".UR b", "a", ".UE", "next"]
        assert not any(isinstance(e, SectionHeader) for e in transducer.events)

    def test_rule_at_end_of_input(self):
        """Rule without trailing newline"""
        assert convert("Title\n===") == [".SH Title"]

    def test_mom_setext(self):
        """mom setext title is a level 1 heading"""
        assert convert("Title\n===\n", Dialect.MOM) == ['.HEADING 1 "Title"']


class TestUnorderedLists:
    """Test bullet lists"""

    def test_man_bullets(self):
        """Each bullet is an .IP item"""
        assert convert("- one\n- two\n") == [
            ".IP \\(bu 4", "one", ".IP \\(bu 4", "two"
        ]

    @pytest.mark.parametrize("marker", ["*", "+", "-"])
    def test_all_markers(self, marker):
        """Star, plus and dash all start items"""
        assert convert(f"{marker} item\n") == [".IP \\(bu 4", "item"]

    def test_tab_after_marker(self):
        """Tab separates marker and text"""
        assert convert("-\titem\n") == [".IP \\(bu 4", "item"]

    def test_marker_without_blank_is_text(self):
        """Marker glued to text is not an item"""
        assert convert("-not a list\n") == ["-not a list"]

    def test_mdoc_bullets(self):
        """mdoc bullet list"""
        assert convert("- one\n- two\n", Dialect.MDOC) == [
            ".Bl -bullet -offset indent", ".It", "one", ".It", "two", ".El"
        ]

    def test_mm_bullets(self):
        """mm bullet list"""
        assert convert("- one\n- two\n", Dialect.MM) == [
            ".BL", ".LI", "one", ".LE", ".LI", "two", ".LE"
        ]

    def test_mom_bullets(self):
        """mom bullet list"""
        assert convert("- one\n- two\n", Dialect.MOM) == [
            ".LIST BULLET", ".ITEM", "one", ".ITEM", "two", ".LIST OFF"
        ]

    def test_item_continuation_line(self):
        """A following text line belongs to the same item"""
        assert convert("- one\n  more\n- two\n") == [
            ".IP \\(bu 4", "one more", ".IP \\(bu 4", "two"
        ]


class TestOrderedLists:
    """Test numbered lists and their counters"""

    def test_counter_from_one(self):
        """Consecutive numbers from 1"""
        assert convert("1. first\n2. second\n3. third\n") == [
            ".IP 1. 4", "first", ".IP 2. 4", "second", ".IP 3. 4", "third"
        ]

    def test_first_number_seeds_counter(self):
        """List starts at the first number given"""
        assert convert("3. a\n4. b\n") == [".IP 3. 4", "a", ".IP 4. 4", "b"]

    def test_later_numbers_ignored(self):
        """Once open, the list counts on from its own counter"""
        assert convert("1. first\n5. second\n") == [
            ".IP 1. 4", "first", ".IP 2. 4", "second"
        ]

    def test_counters_are_consecutive(self):
        """Counter runs on from the seed"""
        source = "".join(f"{n}. item\n" for n in (7, 1, 1, 1, 1))
        numbers = [line for line in convert(source) if line.startswith(".IP")]
        assert numbers == [f".IP {n}. 4" for n in range(7, 12)]

    def test_digits_without_dot_are_text(self):
        """A number without a dot is plain text"""
        assert convert("2024 was a year\n") == ["2024 was a year"]

    def test_mdoc_enum(self):
        """mdoc enumerated list"""
        assert convert("1. a\n2. b\n", Dialect.MDOC) == [
            ".Bl -enum -offset indent", ".It", "a", ".It", "b", ".El"
        ]

    def test_mm_auto_list(self):
        """mm automatic list"""
        assert convert("1. a\n", Dialect.MM) == [".AL", ".LI", "a", ".LE"]

    def test_mom_digit_list(self):
        """mom digit list"""
        assert convert("1. a\n", Dialect.MOM) == [".LIST DIGIT", ".ITEM", "a", ".LIST OFF"]


class TestListClosing:
    """Test list open/close pairing"""

    def test_blank_line_closes_list(self):
        """Blank line ends the open list"""
        assert convert("- a\n\nText\n", Dialect.MDOC) == [
            ".Bl -bullet -offset indent", ".It", "a", ".El", ".Pp", "Text"
        ]

    def test_open_and_close_are_paired(self):
        """Every ListOpen has its ListClose"""
        transducer = Transducer("1. a\n2. b\n\n- c\n", Dialect.MOM)
        transducer.transform()
        opens = [e for e in transducer.events if isinstance(e, ListOpen)]
        closes = [e for e in transducer.events if isinstance(e, ListClose)]

        assert len(opens) == 2
        assert len(closes) == 2
        assert transducer.lists.empty

    def test_list_closed_at_end_of_input(self):
        """Open list is closed at end of input"""
        lines = convert("- a", Dialect.MDOC)
        assert lines[-1] == ".El"

    def test_other_marker_continues_open_list(self):
        """A bullet inside a numbered list is the next numbered item"""
        transducer = Transducer("1. a\n- b\n", Dialect.MAN)
        lines = transducer.transform()

        assert lines == [".IP 1. 4", "a", ".IP 2. 4", "b"]
        assert [e.kind for e in transducer.events if isinstance(e, ListOpen)] == [
            ListKind.ORDERED
        ]

    def test_item_events(self):
        """One ListItemOpen per item"""
        transducer = Transducer("- a\n- b\n- c\n", Dialect.MAN)
        transducer.transform()
        assert sum(isinstance(e, ListItemOpen) for e in transducer.events) == 3

    def test_given_stack_is_used(self):
        """Caller's stack is the one used"""
        stack = ListStack()
        Transducer("1. a\n", Dialect.MAN, stack).transform()
        assert stack.empty


class TestCodeBlocks:
    """Test fenced code blocks"""

    def test_man_code_block(self):
        """Example block with a swapped dot line"""
        source = "```\n.TH x\nint a;\n```\nafter\n"
        assert convert(source) == [
            ".RS 4", ".EX", ".cc !", ".TH x", "!cc .", "int a;", ".EE", ".RE", "after"
        ]

    def test_code_lines_verbatim(self):
        """No squeezing and no inline formatting inside a block"""
        source = "```\n  **x**   `y\n```\n"
        assert convert(source) == [".RS 4", ".EX", "  **x**   `y", ".EE", ".RE"]

    def test_info_string_recorded_not_printed(self):
        """Language name kept on the event only"""
        transducer = Transducer("```python\nx = 1\n```\n", Dialect.MDOC)
        lines = transducer.transform()

        assert transducer.events[0] == CodeBlockOpen(info="python")
        assert lines == [".Bd -literal -offset indent", "x = 1", ".Ed"]

    def test_mom_code_block(self):
        """mom CODE block with ESC_CHAR swap"""
        assert convert("```\n.x\n```\n", Dialect.MOM) == [
            ".CODE", ".ESC_CHAR !", ".x", ".ESC_CHAR .", ".CODE OFF"
        ]

    def test_blank_lines_kept(self):
        """Blank lines inside a block stay"""
        assert convert("```\na\n\nb\n```\n") == [".RS 4", ".EX", "a", "", "b", ".EE", ".RE"]

    def test_fence_flushes_paragraph(self):
        """Pending text is written before the block"""
        assert convert("text\n```\ncode\n```\n") == [
            "text", ".RS 4", ".EX", "code", ".EE", ".RE"
        ]

    def test_unclosed_block_closed_at_end(self):
        """Open block is closed at end of input"""
        assert convert("```\ncode\n") == [".RS 4", ".EX", "code", ".EE", ".RE"]


class TestEscapes:
    """Test backslash escapes"""

    def test_escaped_emphasis_is_literal(self):
        """Escaped star is a plain star"""
        assert convert("a\\*b\\*\n") == ["a*b*"]

    def test_escaped_digit_is_not_list(self):
        """Escape keeps a number from starting a list"""
        transducer = Transducer("\\1. not a list\n", Dialect.MAN)
        assert transducer.transform() == ["1. not a list"]
        assert not any(isinstance(e, ListOpen) for e in transducer.events)

    def test_escaped_hash_is_not_header(self):
        """Escape keeps a hash from starting a header"""
        assert convert("\\# not a header\n") == ["# not a header"]

    def test_escaped_tab_squeezed(self):
        """Escaped tab is whitespace"""
        assert convert("a\\tb\n") == ["a b"]

    def test_trailing_backslash_kept(self):
        """Backslash at end of input is literal"""
        assert convert("end\\") == ["end\\"]
