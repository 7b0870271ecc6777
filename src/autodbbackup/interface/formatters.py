"""
CLI result formatters.

Renders service responses with rich, keeping display logic out of the
command functions.
"""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from autodbbackup.domain.messages import BackupResultItem, ServerInfo


def filter_databases(databases: List[str], text: str | None) -> List[str]:
    """Case-insensitive substring filter, order preserved."""
    if not text:
        return list(databases)
    needle = text.lower()
    return [db for db in databases if needle in db.lower()]


class ResultFormatter:
    """Formats connection, catalog and backup results for the terminal."""

    def __init__(self, console: Console):
        self.console = console

    def server_info(self, server: str, info: ServerInfo) -> None:
        year = f"SQL Server {info.year}" if info.year else "SQL Server (unknown release)"
        body = (
            f"[bold]{year}[/bold]\n"
            f"Version: {escape(info.product_version)}\n"
            f"Level:   {escape(info.product_level)}\n"
            f"Edition: {escape(info.edition)}"
        )
        self.console.print(Panel(body, title=f"✅ Connected to {escape(server)}", border_style="green"))

    def database_table(self, server: str, databases: List[str]) -> None:
        table = Table(title=f"🗄️ Databases on {escape(server)}")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Database", style="cyan")
        for idx, name in enumerate(databases, start=1):
            table.add_row(str(idx), escape(name))
        self.console.print(table)
        self.console.print(f"[blue]📊 {len(databases)} database(s)[/blue]")

    def backup_results(self, results: List[BackupResultItem]) -> None:
        table = Table(title="💾 Backup Results")
        table.add_column("Database", style="cyan", no_wrap=True)
        table.add_column("Status")
        table.add_column("File / Error", overflow="fold")

        succeeded = 0
        for item in results:
            if item.ok:
                succeeded += 1
                table.add_row(escape(item.db), "[green]✅ OK[/green]", escape(item.file or ""))
            else:
                table.add_row(escape(item.db), "[red]❌ Failed[/red]", f"[red]{escape(item.error or '')}[/red]")

        self.console.print(table)
        color = "green" if succeeded == len(results) else "yellow"
        self.console.print(f"[{color}]📊 Summary: {succeeded}/{len(results)} database(s) backed up[/{color}]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]❌ Error:[/red] {escape(message)}", highlight=False)
