"""
Base classes for Rich-enhanced Click commands and groups.

This module defines:
- `rich_help`: Builds Rich-markup help text for a command.
- `RichGroup`: A custom Click group with Rich-enhanced help rendering.
- `RichCommand`: A custom Click command with Rich-enhanced help rendering.
- `error_report`: Prints a library error in the shared error style.
"""

from rich.markup import escape
from rich.panel import Panel
import click
from tokenresolver.config.settings import console
from tokenresolver.lib.log import LOG


def rich_help(command: str, description: str, usage: str, args: dict[str, str]) -> str:
    """
    Generate Rich-enhanced help text for commands.

    :param command: The command name.
    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of arguments and their descriptions.
    :return: Formatted Rich help string.
    """
    help_text = f"[bold cyan]{description}[/bold cyan]\n\n"
    help_text += f"[bold yellow]Usage:[/bold yellow]\n    [green]{escape(usage)}[/green]\n\n"
    help_text += "[bold yellow]Arguments:[/bold yellow]\n"
    for arg, desc in args.items():
        help_text += f"    [green]{escape(arg)}[/green]: {desc}\n"
    return help_text


def error_report(error: Exception) -> None:
    """
    Print an error to the console in bold red.

    :param error: The exception to report.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")


class RichGroup(click.Group):
    """
    A Click Group that uses Rich for rendering help messages with enhanced colorization.

    Methods:
        format_help(ctx, formatter): Renders the group-level help message with Rich formatting.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the group using Rich with enhanced colorization.

        :param ctx: The Click context for the command group.
        :param formatter: The Click help formatter.
        """
        try:
            info_name: str = ctx.info_name or ""
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]{info_name}[/cyan] "
                f"[magenta]\\[OPTIONS] COMMAND \\[ARGS]...[/magenta]\n"
            )

            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

            if self.commands:
                console.print("[bold green]Available Commands:[/bold green]")
                for name, command in self.commands.items():
                    console.print(
                        f"- [cyan]{name}[/cyan]: [white]{command.short_help or 'No description available.'}[/white]"
                    )
                console.print()

            params = self.get_params(ctx)
            if params:
                console.print("[bold yellow]Options:[/bold yellow]")
                for param in params:
                    help_text: str = getattr(param, "help", None) or "No description"
                    console.print(f"- [cyan]{param.opts[0]}[/cyan]: {escape(help_text)}")
        except Exception as e:
            # Log and notify the user of any help rendering errors
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {escape(str(e))}")


class RichCommand(click.Command):
    """
    A Click Command that uses Rich for rendering help messages.

    Methods:
        format_help(ctx, formatter): Renders the command-level help message with Rich formatting.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """
        Render the help message for the command using Rich.

        :param ctx: The Click context for the command.
        :param formatter: The Click help formatter.
        """
        try:
            help_text = self.help or "No help text available."
            panel_width = max(len(line) for line in help_text.splitlines()) + 10
            panel_width = min(panel_width, 80)  # Cap the width to avoid excessive size
            panel = Panel(
                help_text, expand=False, width=panel_width, border_style="cyan"
            )
            console.print(panel)
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {escape(str(e))}")
