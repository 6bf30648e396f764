"""
dataModel.py

This module defines the data models and schemas used throughout token-resolver.
The token configuration leverages Pydantic for validation, immutability and
value-based hashing.

Features:
- `TokenConfig`: the immutable description of a token's shape.
- Enum classes for raw match kinds and missing-key policies.
- `RawMatch`: one entry of the matching engine's raw match stream.

Usage:
Import these models to describe token shapes and to exchange data between
the matching engine, the tree reducer and the resolution engine.
"""

import re
from functools import cache
from enum import Enum
from typing import Any, NamedTuple, Self
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from tokenresolver.lib.errors import ConfigError
from tokenresolver.lib.patterns import key_source, segment_source


class MatchKind(Enum):
    """
    Enum for the kind of a raw match.
    """

    TEXT = "text"
    TOKEN = "token"


class OnMissing(Enum):
    """Policy applied when a token's key has no replacement.

    Attributes:
        RAISE: Fail the whole resolution with UnresolvedTokenError
        KEEP: Emit the token's canonical text unchanged
        REMOVE: Emit nothing for the token
    """

    RAISE = "raise"
    KEEP = "keep"
    REMOVE = "remove"


class TokenConfig(BaseModel):
    """
    Immutable description of what a token looks like.

    Two configurations with identical fields compare equal and hash equally,
    so a configuration can key the compiled-grammar cache.

    Attributes:
        open (str): Opening delimiter, e.g. "{".
        close (str): Closing delimiter, e.g. "}".
        separators (tuple[str, ...]): Segment separators, used in order;
            the last one repeats for any further boundary.
        min_segments (int): Minimum number of segments in a valid token.
        max_segments (Optional[int]): Maximum number of segments, None for unbounded.
        segment_pattern (str): Regular-expression fragment matching a single
            character allowed inside a segment.

    Example:
        * TokenConfig() recognizes "{KJ|NAME}"
        * TokenConfig(open="<<", close=">>", separators=[":"]) recognizes "<<KJ:NAME>>"
        * TokenConfig(separators=["|", ":"]) recognizes "{KJ|SECTION:NAME}"
    """

    model_config = ConfigDict(frozen=True)

    open: str = Field(default="{", min_length=1, description="Opening delimiter.")
    close: str = Field(default="}", min_length=1, description="Closing delimiter.")
    separators: tuple[str, ...] = Field(
        default=("|",), min_length=1, description="Ordered segment separators."
    )
    min_segments: int = Field(default=2, ge=1, description="Minimum segment count.")
    max_segments: int | None = Field(
        default=None, ge=1, description="Maximum segment count (None is unbounded)."
    )
    segment_pattern: str = Field(
        default=r"\w",
        min_length=1,
        description="Regex fragment for one character allowed in a segment.",
    )

    def __init__(self: Self, **data: Any) -> None:
        """Validate and freeze the configuration.

        Raises:
            ConfigError: If any invariant is violated
        """
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid token configuration: {e}") from e

    @field_validator("separators")
    @classmethod
    def separators_check(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for index, separator in enumerate(value):
            if not separator:
                raise ValueError(f"separators[{index}] must be a non-empty string")
        return value

    @field_validator("segment_pattern")
    @classmethod
    def segment_pattern_check(cls, value: str) -> str:
        try:
            compiled: re.Pattern[str] = re.compile(value)
        except re.error as e:
            raise ValueError(f"segment_pattern does not compile: {e}") from e
        if compiled.fullmatch("") is not None:
            raise ValueError("segment_pattern must not match the empty string")
        return value

    @model_validator(mode="after")
    def bounds_check(self: Self) -> Self:
        if self.max_segments is not None and self.max_segments < self.min_segments:
            raise ValueError(
                f"max_segments ({self.max_segments}) must be >= "
                f"min_segments ({self.min_segments})"
            )
        return self

    @model_validator(mode="after")
    def patterns_check(self: Self) -> Self:
        """The segment pattern must also compile once composed into the
        segment and key regexes (no inline global flags, no named groups)."""
        segment: str = segment_source(self.terminators, self.segment_pattern)
        try:
            re.compile(segment)
            re.compile(key_source(self.separators, segment))
        except re.error as e:
            raise ValueError(
                f"segment_pattern cannot be embedded in a token regex: {e}"
            ) from e
        return self

    @classmethod
    @cache
    def default(cls) -> "TokenConfig":
        """Default configuration, suitable for tokens like {KJ|GEM_NAME}.

        Built once and shared.
        """
        return cls()

    @property
    def terminators(self: Self) -> tuple[str, ...]:
        """Strings that end a segment: close plus all separators, deduplicated."""
        return tuple(dict.fromkeys((self.close, *self.separators)))

    def separator_at(self: Self, index: int) -> str:
        """Separator used at a zero-based segment boundary.

        When there are more boundaries than separators, the last separator
        repeats.

        Args:
            index: Boundary index (between segment `index` and `index + 1`)

        Returns:
            The separator for that boundary
        """
        if index < len(self.separators):
            return self.separators[index]
        return self.separators[-1]


class RawMatch(NamedTuple):
    """One entry of the matching engine's raw match stream.

    Attributes:
        kind: Whether this entry is a token or a single text character
        text: The exact input slice covered by this entry
        segments: Captured segments (empty for text entries)
    """

    kind: MatchKind
    text: str
    segments: tuple[str, ...] = ()
