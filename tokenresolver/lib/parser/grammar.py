r"""
Token grammar and matching engine.

A `Grammar` is the pre-compiled matcher derived once from a `TokenConfig`:
the delimiters, the terminator set, the segment regex, the per-boundary
separators and the segment-count bounds. The matching functions below work
against any `Grammar`; nothing is generated per configuration beyond the
compiled regular expressions.

The grammar is an ordered choice applied left to right:

    document := (token | any_char)*
    token    := open segment (separator_at(i) segment){min-1,max-1} close
    segment  := (!terminator segment_char)+

A failed token attempt always falls back to consuming one character as
text, so matching is total: it never fails and always covers every input
character exactly once.

Compiled grammars are expensive relative to a single parse, so they are
cached per configuration value in a lock-protected `GrammarCache`.

Example:
    grammar = grammar_cache.build(TokenConfig())
    list(text_scan(grammar, "Hi {KJ|X}"))
    # [RawMatch(TEXT, "H"), RawMatch(TEXT, "i"), RawMatch(TEXT, " "),
    #  RawMatch(TOKEN, "{KJ|X}", ("KJ", "X"))]
"""

import re
import threading
from dataclasses import dataclass
from typing import Final, Iterator, Self
from tokenresolver.lib.log import LOG
from tokenresolver.lib.patterns import key_source, segment_source
from tokenresolver.models.dataModel import MatchKind, RawMatch, TokenConfig


@dataclass(frozen=True)
class Grammar:
    """Pre-compiled matcher for one token configuration.

    Attributes:
        config: The configuration this grammar was compiled from
        terminators: Strings that end a segment (close plus all separators)
        segment_re: Matches one maximal segment at a given position
        key_re: Full-matches a replacement key the grammar could produce
        min_repeats: Minimum (separator, segment) repetitions
        max_repeats: Maximum repetitions, None for unbounded
    """

    config: TokenConfig
    terminators: tuple[str, ...]
    segment_re: re.Pattern[str]
    key_re: re.Pattern[str]
    min_repeats: int
    max_repeats: int | None

    @classmethod
    def compile(cls, config: TokenConfig) -> Self:
        """Derive the matcher for a configuration.

        Args:
            config: Token configuration

        Returns:
            Grammar ready for `token_match` and `text_scan`
        """
        terminators: tuple[str, ...] = config.terminators
        segment: str = segment_source(terminators, config.segment_pattern)

        return cls(
            config=config,
            terminators=terminators,
            segment_re=re.compile(segment),
            key_re=re.compile(key_source(config.separators, segment)),
            min_repeats=config.min_segments - 1,
            max_repeats=(
                config.max_segments - 1 if config.max_segments is not None else None
            ),
        )


def token_match(grammar: Grammar, text: str, pos: int) -> tuple[list[str], int] | None:
    """Attempt to match one token starting exactly at `pos`.

    Segments are greedy and never give back characters. The attempt fails
    when the open delimiter is absent, a segment is empty, the segment count
    is outside the configured bounds, or the close delimiter is absent.

    Args:
        grammar: Compiled grammar
        text: Input text
        pos: Position to match at

    Returns:
        `(segments, end)` on success, where `end` is the position just past
        the close delimiter, or None when no token starts at `pos`
    """
    config: TokenConfig = grammar.config
    if not text.startswith(config.open, pos):
        return None

    segment: re.Match[str] | None = grammar.segment_re.match(text, pos + len(config.open))
    if segment is None:
        return None

    segments: list[str] = [segment.group()]
    cursor: int = segment.end()

    while grammar.max_repeats is None or len(segments) - 1 < grammar.max_repeats:
        separator: str = config.separator_at(len(segments) - 1)
        if not text.startswith(separator, cursor):
            break
        segment = grammar.segment_re.match(text, cursor + len(separator))
        if segment is None:
            break
        segments.append(segment.group())
        cursor = segment.end()

    if len(segments) - 1 < grammar.min_repeats:
        return None
    if not text.startswith(config.close, cursor):
        return None

    return segments, cursor + len(config.close)


def text_scan(grammar: Grammar, text: str) -> Iterator[RawMatch]:
    """Partition text into raw token and single-character text matches.

    Args:
        grammar: Compiled grammar
        text: Input text

    Yields:
        RawMatch entries in input order; their `text` fields concatenate to
        the input exactly
    """
    pos: int = 0
    length: int = len(text)
    while pos < length:
        found: tuple[list[str], int] | None = token_match(grammar, text, pos)
        if found is not None:
            segments, end = found
            yield RawMatch(MatchKind.TOKEN, text[pos:end], tuple(segments))
            pos = end
        else:
            yield RawMatch(MatchKind.TEXT, text[pos])
            pos += 1


class GrammarCache:
    """Thread-safe cache of compiled grammars keyed by configuration value.

    The first caller for a configuration pays the compile cost; later callers
    with an equal configuration, even a distinct instance, get the same
    `Grammar` object.
    """

    def __init__(self: Self) -> None:
        self._grammars: dict[TokenConfig, Grammar] = {}
        self._lock: threading.Lock = threading.Lock()

    def build(self: Self, config: TokenConfig) -> Grammar:
        """Return the cached grammar for `config`, compiling it on first use.

        Args:
            config: Token configuration

        Returns:
            The shared compiled grammar
        """
        with self._lock:
            grammar: Grammar | None = self._grammars.get(config)
            if grammar is None:
                LOG(f"Compiling grammar for {config!r}")
                grammar = Grammar.compile(config)
                self._grammars[config] = grammar
            return grammar

    def clear(self: Self) -> None:
        """Drop every cached grammar. Mostly useful for test isolation."""
        with self._lock:
            LOG(f"Clearing {len(self._grammars)} cached grammar(s)")
            self._grammars.clear()

    def __len__(self: Self) -> int:
        with self._lock:
            return len(self._grammars)


# Default cache shared by callers that do not supply their own
grammar_cache: Final[GrammarCache] = GrammarCache()
