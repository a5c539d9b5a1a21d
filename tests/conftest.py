"""
Module: conftest.py

Global pytest configuration and fixtures for the batch rename test suite.
"""

import os
import sys

# Add project root to sys.path so 'core', 'cli' and 'gui' can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest


@pytest.fixture
def make_file(tmp_path):
    """Create a file under tmp_path (or a given folder) and return its path"""

    def _make(name: str, content: str = "data", folder=None):
        directory = folder if folder is not None else tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(content, encoding="utf-8")
        return path

    return _make


@pytest.fixture
def src_dir(tmp_path):
    path = tmp_path / "src"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path):
    path = tmp_path / "dest"
    path.mkdir()
    return path
