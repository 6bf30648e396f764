"""
Document orchestrator.

A `Document` parses one input string under one configuration and exposes
the resulting nodes together with a few derived views.

Example:
    doc = Document("Hello {KJ|NAME}!")
    doc.nodes            # (TextNode("Hello "), TokenNode(("KJ", "NAME"), ...), TextNode("!"))
    doc.token_keys       # ["KJ|NAME"]
    doc.to_text()        # "Hello {KJ|NAME}!"
    doc.is_text_only()   # False
"""

from typing import Self
from tokenresolver.lib.log import LOG
from tokenresolver.lib.parser.grammar import (
    Grammar,
    GrammarCache,
    grammar_cache,
    text_scan,
)
from tokenresolver.lib.parser.reducer import matches_reduce
from tokenresolver.models.dataModel import TokenConfig
from tokenresolver.models.nodes import Node, TextNode, TokenNode


class Document:
    """Parsed text: an ordered sequence of text and token nodes.

    Attributes:
        text: The original input
        config: The configuration used for parsing
        nodes: Parsed nodes, in input order
    """

    def __init__(
        self: Self,
        text: str,
        config: TokenConfig | None = None,
        cache: GrammarCache | None = None,
    ) -> None:
        """Parse `text` into nodes.

        Args:
            text: Text to scan for tokens
            config: Token configuration (default: TokenConfig.default())
            cache: Grammar cache to compile through (default: the shared cache)
        """
        self.text: str = text
        self.config: TokenConfig = config if config is not None else TokenConfig.default()
        self._cache: GrammarCache = cache if cache is not None else grammar_cache
        self.nodes: tuple[Node, ...] = tuple(self._parse(text))

    def _parse(self: Self, text: str) -> list[Node]:
        if not text or self.config.open not in text:
            # No open delimiter, no token possible
            LOG("Fast path: input cannot contain a token")
            return [TextNode(text)]

        grammar = self._cache.build(self.config)
        return matches_reduce(text_scan(grammar, text), self.config)

    @property
    def grammar(self: Self) -> Grammar:
        """Compiled grammar for this document's configuration."""
        return self._cache.build(self.config)

    @property
    def tokens(self: Self) -> list[TokenNode]:
        """Only the token nodes, in input order."""
        return [node for node in self.nodes if isinstance(node, TokenNode)]

    @property
    def token_keys(self: Self) -> list[str]:
        """Unique token keys, in first-occurrence order."""
        return list(dict.fromkeys(token.key for token in self.tokens))

    def to_text(self: Self) -> str:
        """Reconstruct the original input from the nodes."""
        return "".join(node.to_text() for node in self.nodes)

    def is_text_only(self: Self) -> bool:
        return not self.tokens

    def __str__(self: Self) -> str:
        return self.to_text()

    def __repr__(self: Self) -> str:
        return f"Document(nodes={len(self.nodes)}, tokens={len(self.tokens)})"
