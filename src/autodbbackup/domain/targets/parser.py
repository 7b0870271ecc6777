"""
Target Parser micro-component.
Parses a raw server address into hostname and named-instance components.
"""

from __future__ import annotations

from dataclasses import dataclass

from autodbbackup.domain.models import ConnectionTarget

INSTANCE_SEPARATOR = "\\"


@dataclass(frozen=True)
class TargetParser:
    """
    Parses server addresses into connection targets.

    Supports formats: "hostname" (default instance) or "hostname\\instance".
    Parsing never fails; malformed input surfaces later as a connection error.
    """

    def parse(self, raw_address: str) -> ConnectionTarget:
        """
        Split on the first backslash.

        Everything after the first separator is the instance name verbatim,
        including any further backslashes.
        """
        hostname, sep, instance_name = raw_address.partition(INSTANCE_SEPARATOR)
        if not sep:
            return ConnectionTarget(host=raw_address)
        return ConnectionTarget(host=hostname, instance_name=instance_name)


def resolve_target(raw_address: str) -> ConnectionTarget:
    """Resolve a raw server address into a ConnectionTarget."""
    return TargetParser().parse(raw_address)
