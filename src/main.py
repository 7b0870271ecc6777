"""
AutoDBBackup - SQL Server Backup Tool

Run from a source checkout: python src/main.py backup --help
"""

from autodbbackup.interface.cli import main


if __name__ == "__main__":
    main()
