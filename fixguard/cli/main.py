"""
fixguard CLI main entry point.

The main Typer application that provides all CLI commands.
"""

from typing import Optional

import typer

from fixguard import __version__
from fixguard.cli.commands import resolve
from fixguard.cli.output import Formatter, OutputFormat
from fixguard.config.settings import configure_logging, get_settings

# Create main app
app = typer.Typer(
    name="fixguard",
    help="Detect and resolve conflicts between automated code fixes",
    no_args_is_help=True,
)

app.command("resolve")(resolve.resolve)
app.command("plan")(resolve.plan)


# Global options
@app.callback()
def main(
    ctx: typer.Context,
    output: Optional[OutputFormat] = typer.Option(
        None,
        "--output", "-o",
        help="Output format (human, json)",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
):
    """
    fixguard - decide which proposed fixes can be applied together.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    configure_logging(settings, verbose=verbose)

    output_format = output or OutputFormat(settings.default_output_format)

    ctx.obj["formatter"] = Formatter(
        format=output_format,
        verbose=verbose,
    )
    ctx.obj["verbose"] = verbose


@app.command()
def version():
    """Show fixguard version."""
    typer.echo(f"fixguard v{__version__}")


if __name__ == "__main__":
    app()
