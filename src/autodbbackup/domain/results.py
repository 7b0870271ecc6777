"""
Railway-oriented result types for backup operations.
Following Railway programming patterns with Success/Failure variants.
"""

from __future__ import annotations

from typing import Generic, TypeVar, Optional
from dataclasses import dataclass
from datetime import datetime

T = TypeVar('T')
E = TypeVar('E')

@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful operation result."""
    value: T
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp is None:
            object.__setattr__(self, 'timestamp', datetime.now())

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class Failure(Generic[E]):
    """Failed operation result."""
    error: E
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        if self.timestamp is None:
            object.__setattr__(self, 'timestamp', datetime.now())

    @property
    def ok(self) -> bool:
        return False

# Type alias for Railway Result
Result = Success[T] | Failure[E]

@dataclass(frozen=True)
class ConnectionFailure:
    """Connection or query failure reported by the ODBC driver."""
    server: str
    message: str
    sqlstate: str | None = None

    def __str__(self) -> str:
        return self.message
