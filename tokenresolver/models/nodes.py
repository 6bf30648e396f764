"""
Node types produced by parsing.

A parsed document is an ordered sequence of two node kinds:

- `TextNode`: a run of plain text between (or outside of) tokens
- `TokenNode`: a structured token, stored as its ordered segments plus the
  configuration that produced it

Both kinds are frozen dataclasses with value semantics. Concatenating the
`to_text()` of every node in a document reproduces the parsed input.
"""

from dataclasses import dataclass
from typing import Self, TypeAlias
from tokenresolver.models.dataModel import TokenConfig


@dataclass(frozen=True)
class TextNode:
    """Plain text content.

    Attributes:
        content: The literal text
    """

    content: str

    @property
    def is_token(self: Self) -> bool:
        return False

    @property
    def is_text(self: Self) -> bool:
        return True

    def to_text(self: Self) -> str:
        return self.content

    def __str__(self: Self) -> str:
        return self.content


@dataclass(frozen=True)
class TokenNode:
    """A structured token found in the input.

    With the default configuration, `{KJ|GEM_NAME}` has segments
    `("KJ", "GEM_NAME")`, key `"KJ|GEM_NAME"` and prefix `"KJ"`.

    Attributes:
        segments: The ordered, non-empty token segments
        config: The configuration that defined this token's structure

    Raises:
        ValueError: If constructed with no segments
    """

    segments: tuple[str, ...]
    config: TokenConfig

    def __post_init__(self: Self) -> None:
        segments: tuple[str, ...] = tuple(self.segments)
        if not segments:
            raise ValueError("TokenNode requires at least one segment")
        object.__setattr__(self, "segments", segments)

    @property
    def key(self: Self) -> str:
        """Canonical key, suitable for use in a replacement mapping.

        Joins segments with the separator for each boundary. For separators
        `["|", ":"]` and segments `("KJ", "SECTION", "NAME")` this is
        `"KJ|SECTION:NAME"`.
        """
        if len(self.segments) == 1:
            return self.segments[0]

        parts: list[str] = [self.segments[0]]
        for index, segment in enumerate(self.segments[1:]):
            parts.append(self.config.separator_at(index))
            parts.append(segment)
        return "".join(parts)

    @property
    def prefix(self: Self) -> str:
        """First segment, typically a namespace like "KJ"."""
        return self.segments[0]

    @property
    def is_token(self: Self) -> bool:
        return True

    @property
    def is_text(self: Self) -> bool:
        return False

    def to_text(self: Self) -> str:
        """Reconstruct the token string with its delimiters."""
        return f"{self.config.open}{self.key}{self.config.close}"

    def __str__(self: Self) -> str:
        return self.to_text()


Node: TypeAlias = TextNode | TokenNode
