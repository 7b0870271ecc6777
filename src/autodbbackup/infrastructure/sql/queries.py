"""
T-SQL used by the probe, the catalog enumerator and the backup batch.

Database names cannot be bound as parameters in BACKUP DATABASE, so they
are bracket-quoted into the statement text. Names containing ']' are not
escaped; the destination path is always a bound parameter.
"""

import logging

logger = logging.getLogger(__name__)

SYSTEM_DATABASES = ("master", "model", "msdb")

SERVER_IDENTITY_QUERY = """
    SELECT
        CAST(SERVERPROPERTY('ProductVersion') AS NVARCHAR(128)) AS ProductVersion,
        CAST(SERVERPROPERTY('ProductLevel') AS NVARCHAR(128)) AS ProductLevel,
        CAST(SERVERPROPERTY('Edition') AS NVARCHAR(256)) AS Edition
"""

# state = 0 is ONLINE
ONLINE_USER_DATABASES_QUERY = f"""
    SELECT name
    FROM sys.databases
    WHERE state = 0
      AND name NOT IN ({", ".join(f"'{db}'" for db in SYSTEM_DATABASES)})
    ORDER BY name
"""


def quote_identifier(name: str) -> str:
    """Wrap an identifier in brackets."""
    if "]" in name:
        logger.warning("Database name %r contains ']' and may alter the issued command", name)
    return f"[{name}]"


def backup_database_statement(database_name: str) -> str:
    """Full backup of one database to the bound disk path, overwriting any existing media."""
    return f"BACKUP DATABASE {quote_identifier(database_name)} TO DISK = ? WITH INIT"
