"""
Token listing command.

Commands:
- tokres parse [FILE]: Show every token found in FILE (or stdin) in a table.
- tokres parse --keys [FILE]: Print only the unique token keys, one per line.
"""

from collections import Counter
from typing import TextIO
from rich.markup import escape
from rich.table import Table
import click
from tokenresolver.commands.base import RichCommand, rich_help
from tokenresolver.config.settings import console
from tokenresolver.lib.parser import Document
from tokenresolver.models.dataModel import TokenConfig


@click.command(
    name="parse",
    cls=RichCommand,
    short_help="List tokens found in text",
    help=rich_help(
        command="parse",
        description="List the tokens found in a file or stdin.",
        usage="tokres parse [--keys] [FILE]",
        args={
            "[FILE]": "Text to scan; '-' or omitted reads stdin.",
            "--keys": "Print only the unique token keys, one per line.",
        },
    ),
)
@click.argument("source", type=click.File("r"), default="-")
@click.option("--keys", "keys_only", is_flag=True, help="Print only unique token keys.")
@click.pass_obj
def parse(config: TokenConfig, source: TextIO, keys_only: bool) -> None:
    """
    Parse the input and report its tokens.

    :param config: Token configuration built by the root group.
    :param source: Input stream.
    :param keys_only: Print only the unique keys.
    """
    document: Document = Document(source.read(), config)

    if keys_only:
        for key in document.token_keys:
            click.echo(key)
        return

    if document.is_text_only():
        console.print("[bold yellow]No tokens found.[/bold yellow]")
        return

    counts: Counter[str] = Counter(token.key for token in document.tokens)
    table: Table = Table(title="Tokens", border_style="cyan")
    table.add_column("Key", style="green")
    table.add_column("Prefix", style="cyan")
    table.add_column("Segments", justify="right")
    table.add_column("Count", justify="right")

    seen: set[str] = set()
    for token in document.tokens:
        if token.key in seen:
            continue
        seen.add(token.key)
        table.add_row(
            escape(token.key),
            escape(token.prefix),
            str(len(token.segments)),
            str(counts[token.key]),
        )

    console.print(table)
