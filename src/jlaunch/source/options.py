"""Shell-like splitting of option strings taken from configuration.

Stored defaults such as ``run.java_options`` or a ``//JAVA_OPTIONS`` directive
are single strings; they are turned into discrete launcher arguments here.

Grammar:
    - a run of characters that are neither whitespace nor quotes is a token
    - ``"..."`` is one token holding its interior, quotes stripped
    - ``'...'`` likewise
    - no escapes, no nesting

An opening quote without a matching close is dropped and scanning resumes at
the following character, so malformed input degrades instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import List

# Java's \s character class
WHITESPACE = frozenset(" \t\n\x0b\f\r")
QUOTES = frozenset("\"'")


class _State(Enum):
    UNQUOTED = "unquoted"
    DOUBLE_QUOTED = "double_quoted"
    SINGLE_QUOTED = "single_quoted"


_QUOTE_STATES = {
    '"': _State.DOUBLE_QUOTED,
    "'": _State.SINGLE_QUOTED,
}


def quoted_string_to_list(subject: str) -> List[str]:
    """Split ``subject`` into arguments, honouring single and double quotes.

    Args:
        subject: Arbitrary string, may be empty

    Returns:
        Tokens in order of appearance (empty list for blank input)

    Examples:
        >>> quoted_string_to_list('a "b c" d')
        ['a', 'b c', 'd']
        >>> quoted_string_to_list('"abc')
        ['abc']
    """
    tokens: List[str] = []
    state = _State.UNQUOTED
    current: List[str] = []
    quote_start = -1

    i = 0
    length = len(subject)
    while i < length:
        char = subject[i]

        if state is _State.UNQUOTED:
            if char in WHITESPACE or char in QUOTES:
                if current:
                    tokens.append("".join(current))
                    current = []
                if char in QUOTES:
                    state = _QUOTE_STATES[char]
                    quote_start = i
            else:
                current.append(char)
            i += 1
            continue

        closing = '"' if state is _State.DOUBLE_QUOTED else "'"
        if char == closing:
            tokens.append("".join(current))
            current = []
            state = _State.UNQUOTED
        else:
            current.append(char)
        i += 1

        if i == length and state is not _State.UNQUOTED:
            # Unterminated: forget the opening quote and rescan what followed it
            current = []
            state = _State.UNQUOTED
            i = quote_start + 1

    if current:
        tokens.append("".join(current))

    return tokens
