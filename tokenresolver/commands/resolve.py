"""
Token resolution command.

Commands:
- tokres resolve [FILE] --set KEY=VALUE ... : Replace tokens and write the
  result to stdout (or --output).
- tokres resolve [FILE] --map replacements.json : Load replacements from a
  JSON object of string keys to string values.
"""

import json
from typing import Any, TextIO
import click
from tokenresolver.commands.base import RichCommand, error_report, rich_help
from tokenresolver.config.settings import appsettings
from tokenresolver.lib.errors import TokenResolverError
from tokenresolver.lib.log import LOG
from tokenresolver.lib.parser import Document, TokenResolver
from tokenresolver.models.dataModel import OnMissing, TokenConfig


def replacements_load(mapping_file: TextIO | None, assignments: tuple[str, ...]) -> dict[str, str]:
    """
    Build the replacement mapping from a JSON file and KEY=VALUE pairs.

    Pairs given with --set override entries from the JSON file.

    :param mapping_file: Optional JSON file holding an object of strings.
    :param assignments: KEY=VALUE strings.
    :return: The merged replacement mapping.
    :raises click.BadParameter: If the file or an assignment is malformed.
    """
    replacements: dict[str, str] = {}

    if mapping_file is not None:
        try:
            data: Any = json.load(mapping_file)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint="--map") from e
        if not isinstance(data, dict) or not all(
            isinstance(value, str) for value in data.values()
        ):
            raise click.BadParameter(
                "must hold a JSON object of string values", param_hint="--map"
            )
        replacements.update(data)

    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep:
            raise click.BadParameter(
                f"expected KEY=VALUE, got {assignment!r}", param_hint="--set"
            )
        replacements[key] = value

    return replacements


@click.command(
    name="resolve",
    cls=RichCommand,
    short_help="Replace tokens with values",
    help=rich_help(
        command="resolve",
        description="Replace tokens in a file or stdin with mapped values.",
        usage="tokres resolve [FILE] --set KEY=VALUE --map FILE.json",
        args={
            "[FILE]": "Text to resolve; '-' or omitted reads stdin.",
            "--set": "KEY=VALUE replacement, repeatable.",
            "--map": "JSON object of replacements.",
            "--on-missing": "raise, keep or remove unresolved tokens.",
            "--output": "Write the result here instead of stdout.",
        },
    ),
)
@click.argument("source", type=click.File("r"), default="-")
@click.option("--set", "assignments", multiple=True, help="KEY=VALUE replacement.")
@click.option("--map", "mapping_file", type=click.File("r"), help="JSON replacements file.")
@click.option(
    "--on-missing",
    type=click.Choice([policy.value for policy in OnMissing]),
    default=None,
    help="Policy for tokens without a replacement.",
)
@click.option("--output", type=click.File("w"), default="-", help="Output file.")
@click.pass_context
def resolve(
    ctx: click.Context,
    source: TextIO,
    assignments: tuple[str, ...],
    mapping_file: TextIO | None,
    on_missing: str | None,
    output: TextIO,
) -> None:
    """
    Resolve all tokens in the input.

    :param ctx: Click context; ctx.obj holds the TokenConfig.
    :param source: Input stream.
    :param assignments: KEY=VALUE replacements.
    :param mapping_file: Optional JSON replacements file.
    :param on_missing: Missing-key policy (default from settings).
    :param output: Output stream.
    """
    config: TokenConfig = ctx.obj
    replacements: dict[str, str] = replacements_load(mapping_file, assignments)
    policy: str = on_missing or appsettings.on_missing

    try:
        document: Document = Document(source.read(), config)
        text: str = TokenResolver(on_missing=policy).resolve(document, replacements)
    except TokenResolverError as e:
        LOG(f"Resolution failed: {e}")
        error_report(e)
        ctx.exit(1)

    output.write(text)
