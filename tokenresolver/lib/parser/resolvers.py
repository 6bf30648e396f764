"""
Token resolver for token-resolver.

Substitutes token nodes with values from a replacement mapping in a single
left-to-right pass:

- Text nodes are emitted verbatim
- Token nodes found in the mapping emit the mapped value verbatim; the value
  is never scanned for tokens again
- Token nodes missing from the mapping follow the `on_missing` policy
  (raise, keep or remove)

When resolving a `Document`, every replacement key is first checked against
the grammar, so a key that no token could ever produce is reported instead
of silently never matching.
"""

from typing import Mapping, Sequence, Self
from tokenresolver.lib.errors import InvalidReplacementKeyError, UnresolvedTokenError
from tokenresolver.lib.log import LOG
from tokenresolver.lib.parser.document import Document
from tokenresolver.lib.parser.grammar import Grammar
from tokenresolver.models.dataModel import OnMissing
from tokenresolver.models.nodes import Node, TextNode, TokenNode


class TokenResolver:
    """Single-pass resolver for parsed documents.

    Attributes:
        on_missing: Policy for tokens without a replacement

    Example:
        resolver = TokenResolver(on_missing="keep")
        resolver.resolve(Document("Hello {KJ|NAME}!"), {})
        # "Hello {KJ|NAME}!"
    """

    def __init__(self: Self, on_missing: OnMissing | str = OnMissing.RAISE) -> None:
        """Initialize resolver with a missing-key policy.

        Args:
            on_missing: OnMissing member or its value ("raise", "keep", "remove")

        Raises:
            ValueError: If on_missing is not a known policy
        """
        try:
            self.on_missing: OnMissing = OnMissing(on_missing)
        except ValueError:
            valid: str = ", ".join(repr(policy.value) for policy in OnMissing)
            raise ValueError(
                f"Invalid on_missing: {on_missing!r}. Must be one of: {valid}"
            ) from None

    def resolve(
        self: Self,
        source: Document | Sequence[Node],
        replacements: Mapping[str, str],
    ) -> str:
        """Resolve tokens in a document or node sequence.

        Args:
            source: A parsed Document, or a list/tuple of nodes
            replacements: Map of token keys to replacement values

        Returns:
            The resolved text

        Raises:
            TypeError: If source is neither a Document nor a node list/tuple
            InvalidReplacementKeyError: If a replacement key cannot match any
                token under the document's configuration
            UnresolvedTokenError: If on_missing is RAISE and a token has no
                replacement
        """
        nodes: Sequence[Node] = self._nodes_extract(source)

        if isinstance(source, Document) and replacements:
            keys_validate(source.grammar, replacements)

        result: list[str] = []
        for node in nodes:
            if isinstance(node, TokenNode):
                if node.key in replacements:
                    result.append(replacements[node.key])
                else:
                    self._missing_handle(node, result)
            else:
                result.append(node.to_text())
        return "".join(result)

    def _nodes_extract(self: Self, source: Document | Sequence[Node]) -> Sequence[Node]:
        if isinstance(source, Document):
            return source.nodes
        if isinstance(source, (list, tuple)):
            for node in source:
                if not isinstance(node, (TextNode, TokenNode)):
                    raise TypeError(
                        f"Expected TextNode or TokenNode, got {type(node).__name__}"
                    )
            return source
        raise TypeError(
            f"Expected Document or sequence of nodes, got {type(source).__name__}"
        )

    def _missing_handle(self: Self, node: TokenNode, result: list[str]) -> None:
        if self.on_missing is OnMissing.RAISE:
            LOG(f"Unresolved token: {node.key}")
            raise UnresolvedTokenError(node.key)
        if self.on_missing is OnMissing.KEEP:
            result.append(node.to_text())
        # REMOVE emits nothing


def keys_validate(grammar: Grammar, replacements: Mapping[str, str]) -> None:
    """Check that every replacement key is one the grammar could produce.

    A valid key is one or more segment characters, optionally followed by
    (separator, segment) pairs using the same per-boundary separators as
    `TokenNode.key`.

    Args:
        grammar: Compiled grammar of the active configuration
        replacements: Replacement mapping to check

    Raises:
        InvalidReplacementKeyError: On the first key that does not match
    """
    config = grammar.config
    for key in replacements:
        if not isinstance(key, str) or grammar.key_re.fullmatch(key) is None:
            msg: str = (
                f"Invalid replacement key: {key!r}. "
                f"Key segments must match {config.segment_pattern!r} "
                f"and be separated by {list(config.separators)!r} in order."
            )
            LOG(msg)
            raise InvalidReplacementKeyError(key, msg)
