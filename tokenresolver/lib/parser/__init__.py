"""
Parser package for token-resolver.

Provides the matching engine, the tree reducer, the document orchestrator
and the single-pass resolver.
"""

from .grammar import Grammar, GrammarCache, grammar_cache, text_scan, token_match
from .reducer import matches_reduce
from .document import Document
from .resolvers import TokenResolver, keys_validate

__all__ = [
    "Grammar",
    "GrammarCache",
    "grammar_cache",
    "text_scan",
    "token_match",
    "matches_reduce",
    "Document",
    "TokenResolver",
    "keys_validate",
]
