"""
SQL Server version mapping.

Maps the major component of SERVERPROPERTY('ProductVersion') to the
release year operators know the product by:

    8 = 2000, 9 = 2005, 10 = 2008, 11 = 2012, 12 = 2014,
    13 = 2016, 14 = 2017, 15 = 2019, 16 = 2022
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class SqlVersion(Enum):
    """SQL Server major version identifiers."""
    SQL_2000 = 8
    SQL_2005 = 9
    SQL_2008 = 10
    SQL_2012 = 11
    SQL_2014 = 12
    SQL_2016 = 13
    SQL_2017 = 14
    SQL_2019 = 15
    SQL_2022 = 16


GENERATION_LABELS: Mapping[int, str] = MappingProxyType({
    version.value: version.name.removeprefix("SQL_") for version in SqlVersion
})


def map_generation(version_major: int) -> str | None:
    """Return the release year label for a major version, or None if unknown."""
    return GENERATION_LABELS.get(version_major)


def parse_major_version(version: str) -> int | None:
    """
    Extract the leading integer of a dotted version string.

    "15.0.2000.5" -> 15. Returns None when the leading component is not a number.
    """
    head = (version or "").split(".", 1)[0].strip()
    if not head.isdigit():
        return None
    return int(head)


def generation_label_for(version: str) -> str | None:
    """Release year label for a raw ProductVersion string."""
    major = parse_major_version(version)
    if major is None:
        return None
    return map_generation(major)
