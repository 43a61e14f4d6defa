#!/usr/bin/env python3
"""
md2roff - Markdown to roff converter

Converts markdown documents to roff source for one of four macro
packages, so documentation written once in markdown can be typeset as a
Linux man page, a BSD man page, an mm memorandum or a mom document.

Supported markdown:
    - '#' headers and setext ('===' / '---') headers
    - Paragraphs, bullet and numbered lists
    - **bold**, *italic* and `inline code`
    - Fenced code blocks
    - [links](target), ![images](target) and [page section](man) references

Usage:
    md2roff [options] [file1 .. [fileN]]

    Each input is converted independently and appended to standard
    output. A lone '-' reads standard input.

Examples:
    # man page on stdout
    md2roff README.md > readme.7

    # BSD man page
    md2roff --mdoc tool.md | mandoc -a

    # typeset with mom
    md2roff -o notes.md | groff -mom -Tpdf > notes.pdf

    # from a pipe, with event tracing on stderr
    cat notes.md | md2roff --verbosity --verbosity --verbosity -
"""

import sys
from typing import List, Optional
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter

from .config import appsettings
from .lib import Converter, FatalParseError, ListDepthError, LoadError, source_load
from .lib import __version__, LOG, state_connectToLogger
from .models import Dialect, ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    prog="md2roff",
    description="md2roff - convert markdown documents to man, mdoc, mm or mom markup",
    formatter_class=ArgumentDefaultsHelpFormatter,
    add_help=False,
    allow_abbrev=False,
)

parser.add_argument(
    "-n", "--man", dest="dialect", action="store_const", const=Dialect.MAN,
    help="use man package",
)
parser.add_argument(
    "-d", "--mdoc", dest="dialect", action="store_const", const=Dialect.MDOC,
    help="use mdoc package (BSD man-pages)",
)
parser.add_argument(
    "-m", "--mm", dest="dialect", action="store_const", const=Dialect.MM,
    help="use mm package",
)
parser.add_argument(
    "-o", "--mom", dest="dialect", action="store_const", const=Dialect.MOM,
    help="use mom package",
)
parser.set_defaults(dialect=appsettings.default_dialect)

parser.add_argument(
    "--verbosity",
    action="count",
    default=0,
    help="Increase log output on stderr (can be repeated)",
)

parser.add_argument(
    "-h", "--help", dest="showHelp", action="store_true",
    help="print this screen and continue with the inputs",
)
parser.add_argument(
    "-v", "--version", dest="showVersion", action="store_true",
    help="print version information and continue with the inputs",
)

parser.add_argument(
    "inputs", nargs="*", metavar="file", help="Markdown input ('-' reads standard input)"
)


def options_check(inputstate: ProgramState) -> ProgramState:
    """
    Print requested help or version text and report unrecognized options.

    Neither help, version nor an unknown option ends the run: the inputs
    are converted afterwards all the same.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with optionsOK set
    """
    state = inputstate.copy()

    if state.showHelp:
        sys.stdout.write(parser.format_help())
    if state.showVersion:
        sys.stdout.write(f"{parser.prog}, version {__version__}\n")

    for option in state.unknownOptions:
        print(f"unknown option: [{option}]", file=sys.stderr)

    LOG(f"Dialect: {state.dialect.value}", level=2)
    if not state.inputs:
        LOG("No inputs given", level=1)

    state.optionsOK = True
    return state


def documents_convert(inputstate: ProgramState) -> ProgramState:
    """
    Load, convert and write every input in argument order.

    Each document is converted completely before its output is written,
    so a failing document leaves nothing half-written behind.

    Args:
        inputstate: Program state with inputs and dialect

    Returns:
        ProgramState with added fields:
            - convertedNames: Display names of converted documents
            - linesWritten: Number of lines written to stdout

    Exits:
        1 if an input cannot be read or converted
    """
    state = inputstate.copy()
    state.convertedNames = list(state.convertedNames)

    for path in state.inputs:
        try:
            document = source_load(path)
        except LoadError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        try:
            output = Converter(document, state.dialect).convert()
        except (FatalParseError, ListDepthError) as e:
            print(f"Error: {document.name}: {e}", file=sys.stderr)
            sys.exit(1)

        sys.stdout.write(output)
        sys.stdout.flush()
        state.convertedNames.append(document.name)
        state.linesWritten += output.count('\n')

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run on stderr.

    Args:
        inputstate: Program state after conversion

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    LOG(f"Converted {len(state.convertedNames)} document(s)", level=1)
    for name in state.convertedNames:
        LOG(f"  {name}", level=2)
    LOG(f"Wrote {state.linesWritten} lines", level=2)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - convert markdown inputs to roff on stdout.

    Orchestrates the conversion pipeline:
        1. options_check: Print help/version, report unknown options
        2. documents_convert: Load, convert and write each input
        3. results_report: Log a summary

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Process exit status (0 on success; failures exit from the stage)
    """
    options, unknown = parser.parse_known_intermixed_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, unknown=unknown
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, options_check, documents_convert, results_report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
