"""Command-line interface for licensekit.

Provides CLI commands for listing, inspecting and running license tasks.

Example Usage
-------------
    # From command line:
    licensekit --help
    licensekit --build build.yaml tasks
    licensekit config --task licenseMain
    licensekit run check --dry-run
"""

from .main import cli, main

__all__ = [
    "cli",
    "main",
]
