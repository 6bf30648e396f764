"""
token-resolver main module.

Configurable parsing and resolution of structured tokens such as
`{KJ|GEM_NAME}` in arbitrary text.

Features:
- `parse`: scan text into a Document of text and token nodes
- `resolve`: parse and substitute tokens in one step
- `tokres` command-line interface for listing and resolving tokens

Examples:
    >>> parse("Hello {KJ|NAME}!").token_keys
    ['KJ|NAME']
    >>> resolve("Hello {KJ|NAME}!", {"KJ|NAME": "World"})
    'Hello World!'

    List tokens in a file:
        $ tokres parse README.md

    Resolve with custom delimiters:
        $ tokres --open '<<' --close '>>' --separator ':' resolve tpl.txt --set KJ:NAME=World
"""

from typing import Final, Mapping
import click
from tokenresolver.commands.base import RichGroup, error_report
from tokenresolver.commands.parse import parse as parse_command
from tokenresolver.commands.resolve import resolve as resolve_command
from tokenresolver.config.settings import appsettings
from tokenresolver.lib.errors import ConfigError
from tokenresolver.lib.log import log_configure
from tokenresolver.lib.parser import Document, GrammarCache, TokenResolver
from tokenresolver.models.dataModel import OnMissing, TokenConfig

__version__: Final[str] = "1.0.0"


def parse(
    text: str, config: TokenConfig | None = None, cache: GrammarCache | None = None
) -> Document:
    """Parse text and return a Document.

    Args:
        text: Text to scan for tokens
        config: Token configuration (default: TokenConfig.default())
        cache: Grammar cache (default: the shared cache)

    Returns:
        Document with text and token nodes
    """
    return Document(text, config, cache)


def resolve(
    text: str,
    replacements: Mapping[str, str],
    config: TokenConfig | None = None,
    on_missing: OnMissing | str = OnMissing.RAISE,
    cache: GrammarCache | None = None,
) -> str:
    """Parse and resolve tokens in one step.

    Args:
        text: Text containing tokens
        replacements: Map of token keys to replacement values
        config: Token configuration (default: TokenConfig.default())
        on_missing: Policy for tokens without a replacement
        cache: Grammar cache (default: the shared cache)

    Returns:
        Resolved text

    Raises:
        UnresolvedTokenError: If on_missing is "raise" and a token is unmapped
        InvalidReplacementKeyError: If a replacement key violates the grammar
        ValueError: If on_missing is not a known policy
    """
    resolver: TokenResolver = TokenResolver(on_missing=on_missing)
    return resolver.resolve(parse(text, config, cache), replacements)


@click.group(
    cls=RichGroup,
    help="""
    Token Resolver

    Find and replace structured tokens like {KJ|NAME} in text.
    """,
)
@click.version_option(__version__, "-V", "--version", prog_name="tokres")
@click.option("--open", "open_", type=str, default=None, help="Opening delimiter.")
@click.option("--close", type=str, default=None, help="Closing delimiter.")
@click.option(
    "--separator",
    "separators",
    multiple=True,
    help="Segment separator; repeat for per-boundary separators.",
)
@click.option("--min-segments", type=int, default=None, help="Minimum segment count.")
@click.option("--max-segments", type=int, default=None, help="Maximum segment count.")
@click.option("--segment-pattern", type=str, default=None, help="Regex for one segment character.")
@click.pass_context
def cli(
    ctx: click.Context,
    open_: str | None,
    close: str | None,
    separators: tuple[str, ...],
    min_segments: int | None,
    max_segments: int | None,
    segment_pattern: str | None,
) -> None:
    """
    Root group: build the token configuration shared by every subcommand.

    Options not given on the command line fall back to settings.
    """
    try:
        ctx.obj = TokenConfig(
            open=open_ if open_ is not None else appsettings.token_open,
            close=close if close is not None else appsettings.token_close,
            separators=separators or appsettings.token_separators,
            min_segments=(
                min_segments if min_segments is not None else appsettings.token_min_segments
            ),
            max_segments=(
                max_segments if max_segments is not None else appsettings.token_max_segments
            ),
            segment_pattern=(
                segment_pattern
                if segment_pattern is not None
                else appsettings.token_segment_pattern
            ),
        )
    except ConfigError as e:
        error_report(e)
        ctx.exit(1)


cli.add_command(parse_command)
cli.add_command(resolve_command)


def main() -> None:
    """Console-script entry point."""
    log_configure()
    cli()


if __name__ == "__main__":
    main()
