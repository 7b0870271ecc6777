"""
Interface layer package.

Command-line presentation of the backup service.
"""
