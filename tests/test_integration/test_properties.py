"""
Whole-pipeline property tests.

Tests cover:
- Totality and round trip on pathological, delimiter-heavy input
- Fast path and full engine agreement
- Resolution with every token kept reproduces the input
"""

import random
import pytest
from tokenresolver import Document, TokenConfig, TokenResolver, grammar_cache
from tokenresolver.lib.parser import matches_reduce, text_scan
from tokenresolver.models.nodes import TextNode

CONFIGS = [
    TokenConfig(),
    TokenConfig(min_segments=1),
    TokenConfig(separators=["|", ":"]),
    TokenConfig(open="<<", close=">>", separators=["::", "|"], max_segments=3),
    TokenConfig(open="{{", close="}}", separators=["."], min_segments=1),
    TokenConfig(open="$", close="$", separators=["|"]),
]

ALPHABET = "{}<>|:.$ \nKJab_9é🚀"


@pytest.fixture(autouse=True)
def clear_cache():
    grammar_cache.clear()
    yield
    grammar_cache.clear()


def random_texts(seed: int, count: int = 200) -> list[str]:
    rng = random.Random(seed)
    return [
        "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 40)))
        for _ in range(count)
    ]


@pytest.mark.parametrize("config", CONFIGS)
def test_roundtrip_on_random_input(config):
    for text in random_texts(seed=5):
        doc = Document(text, config)
        assert doc.to_text() == text


@pytest.mark.parametrize("config", CONFIGS)
def test_no_adjacent_text_nodes(config):
    for text in random_texts(seed=7):
        nodes = Document(text, config).nodes
        for left, right in zip(nodes, nodes[1:]):
            assert not (isinstance(left, TextNode) and isinstance(right, TextNode))


@pytest.mark.parametrize("config", CONFIGS)
def test_keep_policy_reproduces_input(config):
    resolver = TokenResolver(on_missing="keep")
    for text in random_texts(seed=11):
        assert resolver.resolve(Document(text, config), {}) == text


@pytest.mark.parametrize("config", CONFIGS)
def test_fast_path_equivalence(config):
    grammar = grammar_cache.build(config)
    for text in random_texts(seed=3):
        text = text.replace(config.open, "")
        if not text:
            continue
        full = tuple(matches_reduce(text_scan(grammar, text), config))
        assert Document(text, config).nodes == full


def test_pathological_repetition_terminates():
    text = "{" * 2000 + "KJ|" * 2000 + "}" * 2000
    doc = Document(text, TokenConfig())
    assert doc.to_text() == text
