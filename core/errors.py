"""
errors.py - Exception Types

Exceptions raised by the core package. Per-file problems are never raised out of
a batch; they are recorded as ProcessingError entries instead.
"""

from typing import Optional


class RenameToolError(Exception):
    """Base class for all core errors"""


class ResolutionError(RenameToolError):
    """A source reference could not be turned into a readable file"""

    def __init__(self, message: str, stale: bool = False, reference: Optional[object] = None):
        super().__init__(message)
        self.stale = stale
        self.reference = reference


class StepDecodeError(RenameToolError, ValueError):
    """Serialized step data is malformed or names an unknown step kind"""
