"""tablegraph CLI - Main entry point."""

import logging
import sys
from typing import Annotated

import typer

import tablegraph
from tablegraph.cli.context import CLIContext, get_database_url, get_dialect_name

# Create main Typer app
app = typer.Typer(
    name="tablegraph",
    help="tablegraph - derive ordered relational DDL from entity definitions",
    no_args_is_help=True,
)

# Store CLI context globally (will be set in callback)
state: dict[str, CLIContext] = {}


@app.callback()
def main_callback(
    ctx: typer.Context,
    dialect: Annotated[
        str | None,
        typer.Option(
            "--dialect",
            envvar="TABLEGRAPH_DIALECT",
            help="SQL dialect for generated DDL (mysql, mariadb, postgresql, sqlite)",
        ),
    ] = None,
    database: Annotated[
        str | None,
        typer.Option(
            "--database",
            "-d",
            envvar="TABLEGRAPH_DATABASE_URL",
            help="Database URL used by 'apply'",
        ),
    ] = None,
    echo: Annotated[
        bool,
        typer.Option(
            "--echo",
            "-e",
            help="Echo SQL statements to console",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log pipeline progress to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    cli_ctx = CLIContext(
        dialect=get_dialect_name(dialect),
        database_url=get_database_url(database),
        json_output=json_output,
        echo=echo,
    )

    # Store in Typer context for command access
    ctx.obj = cli_ctx
    state["cli_ctx"] = cli_ctx


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"tablegraph v{tablegraph.__version__}")


# Register commands
from tablegraph.cli.commands import schema

app.command(name="generate")(schema.generate_command)
app.command(name="describe")(schema.describe_command)
app.command(name="apply")(schema.apply_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
