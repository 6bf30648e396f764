"""Tests for the tree reducer."""

from tokenresolver.lib.parser.grammar import Grammar, text_scan
from tokenresolver.lib.parser.reducer import matches_reduce
from tokenresolver.models.dataModel import MatchKind, RawMatch, TokenConfig
from tokenresolver.models.nodes import TextNode, TokenNode

CONFIG = TokenConfig()


def text(char: str) -> RawMatch:
    return RawMatch(MatchKind.TEXT, char)


def token(*segments: str) -> RawMatch:
    return RawMatch(MatchKind.TOKEN, "{" + "|".join(segments) + "}", segments)


def test_empty_stream_yields_no_nodes():
    assert matches_reduce([], CONFIG) == []


def test_consecutive_text_matches_coalesce():
    nodes = matches_reduce([text("H"), text("i"), text("!")], CONFIG)
    assert nodes == [TextNode("Hi!")]


def test_token_match_becomes_token_node():
    nodes = matches_reduce([token("KJ", "NAME")], CONFIG)
    assert nodes == [TokenNode(("KJ", "NAME"), CONFIG)]


def test_text_runs_split_only_by_tokens():
    stream = [text("a"), text("b"), token("KJ", "X"), text("c"), token("KJ", "Y"), token("KJ", "Z")]
    nodes = matches_reduce(stream, CONFIG)
    assert nodes == [
        TextNode("ab"),
        TokenNode(("KJ", "X"), CONFIG),
        TextNode("c"),
        TokenNode(("KJ", "Y"), CONFIG),
        TokenNode(("KJ", "Z"), CONFIG),
    ]


def test_reduce_accepts_a_generator():
    grammar = Grammar.compile(CONFIG)
    nodes = matches_reduce(text_scan(grammar, "Hi {KJ|X}!"), CONFIG)
    assert nodes == [
        TextNode("Hi "),
        TokenNode(("KJ", "X"), CONFIG),
        TextNode("!"),
    ]


def test_token_nodes_carry_the_given_config():
    config = TokenConfig(separators=["|", ":"])
    grammar = Grammar.compile(config)
    nodes = matches_reduce(text_scan(grammar, "{KJ|A:B}"), config)
    assert nodes[0].config is config
    assert nodes[0].key == "KJ|A:B"
