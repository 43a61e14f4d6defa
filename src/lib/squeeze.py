"""
Whitespace squeezer

Normalizes one line of accumulated plain text before it is written:
inner whitespace runs collapse to a single space when they border an
alphanumeric character and vanish otherwise, and the line is trimmed.

Only ASCII is considered: a non-ASCII letter is neither whitespace nor
alphanumeric here.
"""

import string

WHITESPACE = frozenset(" \t\n\r\f\v")
ALNUM = frozenset(string.ascii_letters + string.digits)


def line_squeeze(text: str) -> str:
    """
    Squeeze whitespace in a line of text

    A whitespace run becomes one space if the character right before it or
    the first non-whitespace character after it is alphanumeric; otherwise
    the run is dropped. Leading and trailing whitespace never survive.

    Args:
        text: Raw accumulated text

    Returns:
        Squeezed text, "" if text held nothing but whitespace

    Example:
        >>> line_squeeze("  hello    world  ")
        'hello world'
        >>> line_squeeze("( [x] )")
        '([x])'
    """
    result = []
    pos = 0
    length = len(text)

    while pos < length and text[pos] in WHITESPACE:
        pos += 1

    while pos < length:
        char = text[pos]
        if char not in WHITESPACE:
            result.append(char)
            pos += 1
            continue

        run_end = pos
        while run_end < length and text[run_end] in WHITESPACE:
            run_end += 1

        if run_end < length:
            before = text[pos - 1]
            after = text[run_end]
            if before in ALNUM or after in ALNUM:
                result.append(' ')
        pos = run_end

    return ''.join(result)
