"""
token-resolver: configurable parsing and resolution of structured tokens.

Provides the public API for parsing text into documents of text and token
nodes, and for resolving tokens against a replacement mapping.
"""

from .lib.errors import (
    ConfigError,
    InvalidReplacementKeyError,
    TokenResolverError,
    UnresolvedTokenError,
)
from .lib.parser import Document, GrammarCache, TokenResolver, grammar_cache
from .models.dataModel import OnMissing, TokenConfig
from .models.nodes import Node, TextNode, TokenNode
from .tokres import __version__, parse, resolve

__all__ = [
    "ConfigError",
    "InvalidReplacementKeyError",
    "TokenResolverError",
    "UnresolvedTokenError",
    "Document",
    "GrammarCache",
    "TokenResolver",
    "grammar_cache",
    "OnMissing",
    "TokenConfig",
    "Node",
    "TextNode",
    "TokenNode",
    "__version__",
    "parse",
    "resolve",
]
