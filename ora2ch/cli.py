"""Command line entry point.

Usage:
    ora2ch convert --dump-file all_tab_columns.txt --source-dsn oracle_prod
    ora2ch convert --catalog-dsn dbhost:1521/ORCL --output clickhouse.sql
    ora2ch types

Environment:
    Loads .env file from current directory if present; options override it.
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ora2ch.config import load_settings
from ora2ch.errors import ConfigError, Ora2ChError
from ora2ch.logging_config import configure_logging
from ora2ch.pipeline import convert_and_save, run_conversion
from ora2ch.table_catalog import TableIdentity
from ora2ch.type_mapping import TypeMapping, UnmappedTypePolicy

app = typer.Typer(
    name="ora2ch",
    help="Generate ClickHouse ODBC-table DDL from an Oracle column catalog.",
    no_args_is_help=True,
)

console = Console(stderr=True)


def exit_code_for(err):
    return 1 if isinstance(err, ConfigError) else 2


@app.command()
def convert(
    dump_file: Annotated[
        Optional[Path],
        typer.Option("--dump-file", "-f", help="Bordered ASCII dump of ALL_TAB_COLUMNS"),
    ] = None,
    catalog_dsn: Annotated[
        Optional[str],
        typer.Option("--catalog-dsn", "-c", help="Oracle connect string to read ALL_TAB_COLUMNS from"),
    ] = None,
    source_dsn: Annotated[
        Optional[str],
        typer.Option("--source-dsn", "-d", help="ODBC DSN used in the ENGINE clause"),
    ] = None,
    prefix: Annotated[
        Optional[str],
        typer.Option("--prefix", "-p", help="Prefix for generated ClickHouse table names"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="File the DDL is appended to"),
    ] = None,
    owner: Annotated[
        Optional[str],
        typer.Option("--owner", help="Only emit tables owned by this schema"),
    ] = None,
    unmapped_policy: Annotated[
        Optional[UnmappedTypePolicy],
        typer.Option("--unmapped-policy", help="What to do with Oracle types that have no mapping"),
    ] = None,
    table_identity: Annotated[
        Optional[TableIdentity],
        typer.Option("--table-identity", help="Identify tables by name or by owner and name"),
    ] = None,
    stdout: Annotated[
        bool,
        typer.Option("--stdout", help="Print the DDL instead of writing it to the output file"),
    ] = False,
    debug: Annotated[
        Optional[bool],
        typer.Option("--debug/--no-debug", help="Debug logging"),
    ] = None,
) -> None:
    """Convert an Oracle column catalog into ClickHouse DDL."""
    try:
        settings = load_settings(
            dump_file=str(dump_file) if dump_file else None,
            catalog_dsn=catalog_dsn,
            source_dsn=source_dsn,
            table_prefix=prefix,
            output_file=str(output) if output else None,
            owner_filter=owner,
            unmapped_policy=unmapped_policy,
            table_identity=table_identity,
            debug=debug,
        )
        configure_logging(settings.debug)
        if stdout:
            typer.echo(run_conversion(settings), nl=False)
        else:
            convert_and_save(settings)
    except Ora2ChError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(exit_code_for(e)) from e


@app.command()
def types() -> None:
    """List the registered Oracle -> ClickHouse type mappings."""
    mapping = TypeMapping.default()
    table = Table(title="Oracle -> ClickHouse")
    table.add_column("Oracle")
    table.add_column("ClickHouse")
    for source, target in mapping.items():
        table.add_row(source, target)
    table.add_row("(anything else)", mapping.fallback)
    Console().print(table)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
