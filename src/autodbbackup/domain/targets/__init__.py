"""
Domain Targets Package.
Server address parsing components.
"""

from autodbbackup.domain.targets.parser import TargetParser, resolve_target

__all__ = ["TargetParser", "resolve_target"]
