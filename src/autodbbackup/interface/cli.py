"""
AutoDBBackup CLI entry point.

Commands:
    test       Check connectivity and show the server version
    databases  List online user databases
    backup     Back up selected databases to a folder on the server
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from autodbbackup.application.backup_service import BackupService
from autodbbackup.domain.messages import BackupRequest, ConnectionRequest
from autodbbackup.infrastructure.config_loader import ConfigError, ConfigLoader
from autodbbackup.infrastructure.logging_config import setup_logging
from autodbbackup.interface.folder_picker import ConsoleFolderPicker
from autodbbackup.interface.formatters import ResultFormatter, filter_databases

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    name="autodbbackup",
    help="🗄️ SQL Server Backup Tool",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _server_option():
    return typer.Option(..., "--server", "-S", help="SQL Server address: HOST or HOST\\INSTANCE.")


def _user_option():
    return typer.Option(..., "--user", "-U", help="SQL login name.")


def _password_option():
    return typer.Option(..., "--password", "-P", prompt=True, hide_input=True, help="SQL login password.")


def _service(ctx: typer.Context) -> BackupService:
    if not isinstance(ctx.obj, BackupService):
        ctx.obj = BackupService(folder_picker=ConsoleFolderPicker(console))
    return ctx.obj


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write logs to file."),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Settings file (default: config/backup_settings.json)."
    ),
):
    """
    🗄️ AutoDBBackup - server-side full backups for SQL Server

    🔧 **Quick Start:**
    1. Check the connection: `autodbbackup test -S SQL01 -U sa`
    2. See what can be backed up: `autodbbackup databases -S SQL01 -U sa`
    3. Back up: `autodbbackup backup -S SQL01 -U sa -d Sales -f "D:\\Backups"`
    """
    try:
        settings = ConfigLoader().load_settings(config)
    except ConfigError as e:
        ResultFormatter(console).error(str(e))
        raise typer.Exit(1)

    setup_logging(
        level=logging.DEBUG if verbose else settings.log_level_value,
        log_file=log_file or settings.log_file,
    )
    if ctx.obj is None:
        ctx.obj = BackupService(
            driver=settings.odbc_driver,
            folder_picker=ConsoleFolderPicker(console),
        )


@app.command("test")
def test_command(
    ctx: typer.Context,
    server: str = _server_option(),
    user: str = _user_option(),
    password: str = _password_option(),
):
    """Test the connection and show the SQL Server version."""
    formatter = ResultFormatter(console)
    request = ConnectionRequest(server=server, user=user, password=password)
    with console.status(f"Connecting to {server}..."):
        response = asyncio.run(_service(ctx).test_connection(request))

    if not response.ok:
        formatter.error(response.error or "Connection failed")
        raise typer.Exit(1)
    formatter.server_info(server, response.info)


@app.command("databases")
def databases_command(
    ctx: typer.Context,
    server: str = _server_option(),
    user: str = _user_option(),
    password: str = _password_option(),
    filter_text: Optional[str] = typer.Option(
        None, "--filter", help="Only show databases whose name contains this text (case-insensitive)."
    ),
):
    """List online user databases that can be backed up."""
    formatter = ResultFormatter(console)
    request = ConnectionRequest(server=server, user=user, password=password)
    with console.status(f"Listing databases on {server}..."):
        response = asyncio.run(_service(ctx).list_databases(request))

    if not response.ok:
        formatter.error(response.error or "Could not list databases")
        raise typer.Exit(1)
    formatter.database_table(server, filter_databases(response.databases or [], filter_text))


@app.command("backup")
def backup_command(  # pylint: disable=too-many-arguments
    ctx: typer.Context,
    server: str = _server_option(),
    user: str = _user_option(),
    password: str = _password_option(),
    databases: Optional[List[str]] = typer.Option(
        None, "--database", "-d", help="Database to back up; repeat for several (run in this order)."
    ),
    all_databases: bool = typer.Option(
        False, "--all", help="Back up every online user database."
    ),
    filter_text: Optional[str] = typer.Option(
        None, "--filter", help="With --all, only databases whose name contains this text."
    ),
    folder: Optional[str] = typer.Option(
        None, "--folder", "-f", help="Destination folder on the SQL Server host (prompted if omitted)."
    ),
):
    """
    Back up databases to a folder on the server.

    Each database is written to <folder>/<database>_<YYYYMMDD_HHMMSS>.bak by the
    SQL Server service account. A failing database does not stop the others.
    """
    formatter = ResultFormatter(console)
    service = _service(ctx)
    credentials = ConnectionRequest(server=server, user=user, password=password)

    if all_databases:
        listing = asyncio.run(service.list_databases(credentials))
        if not listing.ok:
            formatter.error(listing.error or "Could not list databases")
            raise typer.Exit(1)
        selected = filter_databases(listing.databases or [], filter_text)
    else:
        selected = list(databases or [])

    if not selected:
        formatter.error("No databases selected. Use --database NAME or --all.")
        raise typer.Exit(1)
    logger.debug("Selected %d database(s) for backup: %s", len(selected), ", ".join(selected))

    if not folder:
        picked = asyncio.run(service.select_folder())
        if not picked.ok:
            formatter.error("No backup folder selected.")
            raise typer.Exit(1)
        folder = picked.folder

    try:
        request = BackupRequest(
            server=server, user=user, password=password, databases=selected, folder=folder
        )
    except ValidationError as e:
        formatter.error(f"Invalid backup request: {e.errors()[0].get('msg')}")
        raise typer.Exit(1)

    with console.status(f"Backing up {len(selected)} database(s) on {server}..."):
        response = asyncio.run(service.backup_databases(request))

    if not response.ok:
        formatter.error(response.error or "Backup failed")
        raise typer.Exit(1)

    results = response.results or []
    formatter.backup_results(results)
    if not all(item.ok for item in results):
        raise typer.Exit(1)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
