"""
Connection Configurator.

Turns a resolved target plus a SQL login into a ConnectionProfile with the
fixed connection policy:

- always connect to ``master``; the database to back up is named in the
  BACKUP statement, not the connection
- encryption off and server certificate trusted (compatibility default for
  internal networks; weakens transport security on untrusted networks)
- 60 s login timeout, 10 min per-statement timeout sized for BACKUP
- named instances get no port (SQL Server Browser resolves it over UDP 1434),
  default instances get 1433; an empty instance name (``SQL01\\``) counts as
  a default instance
"""

from autodbbackup.domain.models import ConnectionProfile, ConnectionTarget

SYSTEM_CATALOG = "master"
DEFAULT_PORT = 1433
CONNECT_TIMEOUT_MS = 60_000
OPERATION_TIMEOUT_MS = 600_000


def build_profile(target: ConnectionTarget, user: str, password: str) -> ConnectionProfile:
    """Build the connection profile for one logical operation."""
    return ConnectionProfile(
        host=target.host,
        instance_name=target.instance_name or None,
        port=None if target.is_named_instance else DEFAULT_PORT,
        user=user,
        password=password,
        default_catalog=SYSTEM_CATALOG,
        encrypt=False,
        trust_server_certificate=True,
        connect_timeout_ms=CONNECT_TIMEOUT_MS,
        operation_timeout_ms=OPERATION_TIMEOUT_MS,
    )
