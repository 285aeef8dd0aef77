"""Schema derivation commands."""

from pathlib import Path
from typing import Annotated

import typer

from tablegraph.cli.context import CLIContext
from tablegraph.cli.output import OutputFormatter
from tablegraph.cli.parsing import read_model_file
from tablegraph.schema.engine import DerivedSchema, derive_from_model
from tablegraph.storage.ddl import DDLEmitter

ModelsArgument = Annotated[str, typer.Argument(help="Path to the JSON models file")]
SeedOption = Annotated[
    list[str] | None,
    typer.Option(
        "--seed",
        "-s",
        help="Root entity to derive from. Can be repeated. Defaults to the file's seeds.",
    ),
]


def _derive(models: str, seeds: list[str] | None) -> DerivedSchema:
    model = read_model_file(models)
    return derive_from_model(model, seeds)


def generate_command(
    ctx: typer.Context,
    models: ModelsArgument,
    seed: SeedOption = None,
    dialect: Annotated[
        str | None,
        typer.Option("--dialect", help="SQL dialect (mysql, mariadb, postgresql, sqlite)"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Write the DDL script to a file"),
    ] = None,
) -> None:
    """Generate CREATE statements for the entities in a models file.

    Examples:

        tablegraph generate models.json

        tablegraph generate models.json --seed Order --dialect postgresql -o schema.sql
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        dialect_name = dialect or cli_ctx.dialect
        schema = _derive(models, seed)
        emitter = DDLEmitter(schema)
        statements = emitter.statements(dialect_name)

        if output:
            Path(output).write_text(emitter.render(dialect_name))
            formatter.print_success(
                f"Wrote {len(statements)} statements to {output}",
                {"dialect": dialect_name, "tables": len(schema.table_names())},
            )
        elif cli_ctx.json_output:
            formatter.print_data(
                {
                    "dialect": dialect_name,
                    "order": schema.table_names(),
                    "statements": statements,
                }
            )
        else:
            typer.echo(emitter.render(dialect_name), nl=False)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


def describe_command(
    ctx: typer.Context,
    models: ModelsArgument,
    seed: SeedOption = None,
) -> None:
    """Show the derived tables, keys and creation order."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        schema = _derive(models, seed)
        formatter.print_schema(schema.describe())
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


def apply_command(
    ctx: typer.Context,
    models: ModelsArgument,
    seed: SeedOption = None,
    database: Annotated[
        str | None,
        typer.Option("--database", "-d", help="Database URL (overrides the global option)"),
    ] = None,
    checkfirst: Annotated[
        bool,
        typer.Option("--checkfirst", help="Skip tables that already exist"),
    ] = False,
) -> None:
    """Create the derived tables on the configured database.

    Example:

        tablegraph apply models.json --database sqlite:///shop.db
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    if database:
        cli_ctx.database_url = database

    try:
        schema = _derive(models, seed)
        created = DDLEmitter(schema).create_tables(cli_ctx.get_engine(), checkfirst=checkfirst)
        formatter.print_success(
            f"Created {len(created)} tables",
            {"tables": created},
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
