"""
Request and response messages for the backup service boundary.

The presentation layer talks to the core only through these messages.
Responses serialize with camelCase aliases (``productVersion``) and omit
absent fields, so a response is either ``{"ok": true, ...payload}`` or
``{"ok": false, "error": "..."}``.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from autodbbackup.domain.models import BackupOutcome, ServerIdentity


# ============================================================================
# Requests
# ============================================================================

class ConnectionRequest(BaseModel):
    """Server address and SQL login."""

    model_config = ConfigDict(extra="ignore")

    server: str = Field(..., description="HOST or HOST\\INSTANCE")
    user: str = Field(..., description="SQL login name")
    password: SecretStr = Field(..., description="SQL login password")

    def get_password(self) -> str:
        """Get the plain text password."""
        return self.password.get_secret_value()  # pylint: disable=no-member


class BackupRequest(ConnectionRequest):
    """Databases to back up and the server-side destination folder."""

    databases: List[str] = Field(..., min_length=1, description="Databases in backup order")
    folder: str = Field(..., min_length=1, description="Destination directory on the server")

    @field_validator('databases')
    @classmethod
    def validate_databases(cls, v: List[str]) -> List[str]:
        """Reject blank database names."""
        if any(not name or not name.strip() for name in v):
            raise ValueError("Database names cannot be empty")
        return v

    @field_validator('folder')
    @classmethod
    def validate_folder(cls, v: str) -> str:
        """Validate folder is not blank."""
        if not v.strip():
            raise ValueError("Backup folder cannot be empty")
        return v


# ============================================================================
# Responses
# ============================================================================

class _Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        """Wire form: camelCase keys, absent fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ServerInfo(_Response):
    """Server identity as shown to the operator."""

    product_version: str = Field(..., alias="productVersion")
    product_level: str = Field(..., alias="productLevel")
    edition: str
    year: Optional[str] = None

    @classmethod
    def from_identity(cls, identity: ServerIdentity) -> "ServerInfo":
        return cls(
            product_version=identity.raw_version_string,
            product_level=identity.product_level,
            edition=identity.edition,
            year=identity.product_generation_label,
        )


class ConnectionTestResponse(_Response):
    ok: bool
    info: Optional[ServerInfo] = None
    error: Optional[str] = None


class ListDatabasesResponse(_Response):
    ok: bool
    databases: Optional[List[str]] = None
    error: Optional[str] = None


class BackupResultItem(_Response):
    """One database's backup result."""

    db: str
    ok: bool
    file: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: BackupOutcome) -> "BackupResultItem":
        return cls(
            db=outcome.database_name,
            ok=outcome.ok,
            file=outcome.file_path,
            error=outcome.error_detail,
        )


class BackupDatabasesResponse(_Response):
    """``ok`` reflects only the batch connection; per-database results are in ``results``."""

    ok: bool
    results: Optional[List[BackupResultItem]] = None
    error: Optional[str] = None


class SelectFolderResponse(_Response):
    ok: bool
    folder: Optional[str] = None
