"""
Error taxonomy for token-resolver.

All failures raised by the library derive from `TokenResolverError`, so a
caller can catch the whole family at once. Configuration and key-format
errors also derive from `ValueError`.
"""


class TokenResolverError(Exception):
    """Base class for all token-resolver errors."""


class ConfigError(TokenResolverError, ValueError):
    """Raised when a token configuration violates one of its invariants."""


class UnresolvedTokenError(TokenResolverError):
    """Raised when a token has no replacement and the policy is `raise`.

    Attributes:
        token_key: The key of the token that could not be resolved
    """

    def __init__(self, token_key: str, message: str | None = None) -> None:
        self.token_key: str = token_key
        super().__init__(message or f"Unresolved token: {token_key}")


class InvalidReplacementKeyError(TokenResolverError, ValueError):
    """Raised when a replacement key could never be produced by the grammar.

    Attributes:
        key: The offending replacement-mapping key
    """

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key: str = key
        super().__init__(message or f"Invalid replacement key: {key!r}")
