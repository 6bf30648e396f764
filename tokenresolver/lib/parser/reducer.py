"""
Tree reducer: raw match stream to node sequence.

The matching engine emits one entry per text character and one per token.
This module converts those entries into nodes, merging every run of
consecutive text entries into a single `TextNode`.
"""

from typing import Iterable
from tokenresolver.models.dataModel import MatchKind, RawMatch, TokenConfig
from tokenresolver.models.nodes import Node, TextNode, TokenNode


def matches_reduce(matches: Iterable[RawMatch], config: TokenConfig) -> list[Node]:
    """Convert raw matches into a coalesced node list.

    Args:
        matches: Raw match stream, in input order
        config: Configuration the matches were produced under

    Returns:
        Nodes in input order; empty when the stream is empty
    """
    nodes: list[Node] = []
    pending: list[str] = []

    for match in matches:
        if match.kind is MatchKind.TEXT:
            pending.append(match.text)
            continue
        if pending:
            nodes.append(TextNode("".join(pending)))
            pending = []
        nodes.append(TokenNode(match.segments, config))

    if pending:
        nodes.append(TextNode("".join(pending)))

    return nodes
