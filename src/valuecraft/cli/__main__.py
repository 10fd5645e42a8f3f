"""valuecraft CLI entry point.

Registers the element inspection command and the version command.
"""

import logging
import sys

import typer

from .elements import inspect_command

app = typer.Typer(name="valuecraft", help="Inspect encoded element descriptors")

app.command("inspect")(inspect_command)


@app.command("version")
def version():
    """Show version information."""
    from .. import __version__
    typer.echo(f"valuecraft CLI version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log loaded descriptors at INFO level")
):
    """Inspect encoded element descriptors."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        typer.echo("\nError: Missing command.", err=True)
        raise typer.Exit(1)


def cli_main():
    """Entry point for the console script."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nAborted", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
