"""
safety_checks.py - Safety Check Module

Provides the checks run before any file is staged
"""

from pathlib import Path
from typing import Tuple, Optional
import os


def check_destination_writable(directory: Path) -> Tuple[bool, Optional[str]]:
    """
    Check that files can be created in the destination directory

    Args:
        directory: Destination directory

    Returns:
        (is_writable, error_reason)
    """
    directory = Path(directory)
    if not directory.exists():
        return False, f"Destination folder does not exist: {directory}"
    if not directory.is_dir():
        return False, f"Destination is not a folder: {directory}"
    if not os.access(directory, os.W_OK | os.X_OK):
        return False, f"Destination folder is not writable: {directory}"
    return True, None


def check_source_readable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check that a source is an existing, readable regular file

    Args:
        path: Source path

    Returns:
        (is_readable, error_reason)
    """
    path = Path(path)
    if not path.exists():
        return False, f"Source file does not exist: {path}"
    if not path.is_file():
        return False, f"Source path is not a file: {path}"
    if not os.access(path, os.R_OK):
        return False, f"Source file is not readable: {path}"
    return True, None


def is_same_file(path1: Path, path2: Path) -> bool:
    """
    Check whether two paths name the same location

    Paths are made absolute and normalized lexically. Symlinks are not
    followed, so a link pointing at the source is a different file.
    """
    return os.path.normpath(os.path.abspath(path1)) == os.path.normpath(os.path.abspath(path2))
