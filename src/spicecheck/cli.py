"""Main spicecheck CLI application."""

import typer
from rich.console import Console

from spicecheck import __version__
from spicecheck.commands import check


console = Console()

app = typer.Typer(
    name="spicecheck",
    help="Check permissions against a SpiceDB instance.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register commands
app.command(name="check")(check.check)


@app.callback(invoke_without_command=True)
def version_callback(
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit."
    ),
) -> None:
    """spicecheck CLI - Check permissions against SpiceDB."""
    if version:
        console.print(f"[bold cyan]spicecheck[/bold cyan] version {__version__}")
        raise typer.Exit()


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
