"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tablegraph.core.types import SchemaInfo, TableInfo
from tablegraph.exceptions import TableGraphError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_schema(self, schema: SchemaInfo) -> None:
        """Print a derived schema: creation order, then every table.

        Args:
            schema: Derived schema to display
        """
        if self.json_mode:
            print(json.dumps(schema.model_dump(), default=str, indent=2))
            return

        order = Table(
            title=f"Creation order ({schema.total_tables} tables)",
            show_header=True,
            header_style="bold magenta",
        )
        order.add_column("#")
        order.add_column("Table")
        order.add_column("Bridge of")
        for position, table in enumerate(schema.tables, 1):
            order.add_row(str(position), table.name, table.aux_of or "")
        console.print(order)

        for table in schema.tables:
            self.print_table_info(table)

    def print_table_info(self, table: TableInfo) -> None:
        """Print one table with its columns, keys and foreign keys.

        Args:
            table: Table information to display
        """
        console.print(f"\n[bold]Table:[/bold] {table.name}")
        if table.known_parent:
            console.print(f"Parent: {table.known_parent}")
        if table.aux_of:
            console.print(f"Bridge of: {table.aux_of}")

        columns_table = Table(show_header=True, header_style="bold cyan")
        columns_table.add_column("Name")
        columns_table.add_column("Type")
        columns_table.add_column("Nullable")
        columns_table.add_column("Primary")
        columns_table.add_column("Auto")
        for column in table.columns:
            columns_table.add_row(
                column.name,
                column.type,
                "✓" if column.nullable else "",
                "✓" if column.name in table.primary_keys else "",
                "✓" if column.auto_increment else "",
            )
        console.print(columns_table)

        for group, names in table.unique_keys.items():
            console.print(f"Unique {group}: {', '.join(names)}", style="dim")
        for group, names in table.composite_keys.items():
            console.print(f"Key {group}: {', '.join(names)}", style="dim")

        if table.foreign_keys:
            console.print(f"\n[bold]Foreign keys ({len(table.foreign_keys)}):[/bold]")
            fk_table = Table(show_header=True, header_style="bold cyan")
            fk_table.add_column("Columns")
            fk_table.add_column("References")
            fk_table.add_column("On update")
            fk_table.add_column("On delete")
            for fk in table.foreign_keys:
                fk_table.add_row(
                    ", ".join(fk.source_columns),
                    f"{fk.ref_table}({', '.join(fk.ref_columns)})",
                    fk.on_update,
                    fk.on_delete,
                )
            console.print(fk_table)

        if table.edges:
            console.print(f"\n[bold]Edges ({len(table.edges)}):[/bold]")
            edge_table = Table(show_header=True, header_style="bold cyan")
            edge_table.add_column("Name")
            edge_table.add_column("Peer")
            edge_table.add_column("Type")
            for edge in table.edges:
                edge_table.add_row(edge.name, edge.peer, edge.type)
            console.print(edge_table)

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message.

        Args:
            message: Success message
            details: Optional details to display
        """
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, TableGraphError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            if isinstance(error, TableGraphError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.).

        Args:
            data: Data to print
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            console.print(data)
