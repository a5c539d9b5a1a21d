"""
cli - Command Line Interface for Batch Renaming Tool
"""

from .cli_entry import main, create_parser

__all__ = ["main", "create_parser"]
