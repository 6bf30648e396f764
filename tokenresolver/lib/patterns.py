r"""
Regular-expression sources for token segments and replacement keys.

Both the configuration validator and `Grammar.compile` build their regexes
here, so a configuration that validates is one whose composed patterns
compile.
"""

import re


def segment_source(terminators: tuple[str, ...], segment_pattern: str) -> str:
    """Regex source for one maximal segment.

    Args:
        terminators: Strings that end a segment (close plus separators)
        segment_pattern: Fragment matching one segment character

    Returns:
        `(?:(?!terminators)(?:segment_pattern))+`
    """
    # Longest first, so a terminator is never shadowed by its own prefix.
    lookahead: str = "|".join(
        re.escape(t) for t in sorted(terminators, key=len, reverse=True)
    )
    return f"(?:(?!{lookahead})(?:{segment_pattern}))+"


def key_source(separators: tuple[str, ...], segment: str) -> str:
    r"""Regex source for a valid replacement key.

    Boundary `i` only accepts `separators[i]`, and the last separator repeats,
    mirroring how `TokenNode.key` joins segments. For separators `("|", ":")`
    this yields `seg(?:\|seg(?::seg)*)?`.

    Args:
        separators: Ordered separators from the configuration
        segment: Regex source matching one segment

    Returns:
        Regex source to be used with `fullmatch`
    """
    tail: str = f"(?:{re.escape(separators[-1])}{segment})*"
    for separator in reversed(separators[:-1]):
        tail = f"(?:{re.escape(separator)}{segment}{tail})?"
    return f"{segment}{tail}"
