"""
sources.py - Source Resolution

A resolver turns the caller's file reference into a readable path. Resolution
may fail, or succeed but report the reference as stale (the host must have it
re-authorized before it is trusted); both become per-file errors in a batch.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, Union

from .errors import ResolutionError
from .logger_helper import get_logger
from .safety_checks import check_source_readable

logger = get_logger(__name__)


@dataclass
class ResolvedSource:
    """A usable source handle; release() when done with it"""
    path: Path
    is_stale: bool = False
    on_release: Optional[Callable[[], None]] = field(default=None, repr=False)
    released: bool = field(default=False, init=False)

    def release(self) -> None:
        """Give the handle back; safe to call more than once"""
        if self.released:
            return
        self.released = True
        if self.on_release is not None:
            self.on_release()

    def __enter__(self) -> "ResolvedSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()


class SourceResolver(Protocol):
    """Anything that can resolve a file reference"""

    def resolve(self, reference: Any) -> ResolvedSource:
        """
        Raises:
            ResolutionError: Reference cannot be turned into a readable file
        """
        ...


class PathResolver:
    """Resolver for plain filesystem paths (no sandbox, never stale)"""

    def resolve(self, reference: Union[str, Path]) -> ResolvedSource:
        try:
            path = Path(reference).expanduser()
        except TypeError as e:
            raise ResolutionError(f"Not a path: {reference!r}", reference=reference) from e

        readable, reason = check_source_readable(path)
        if not readable:
            raise ResolutionError(reason or f"Cannot read {path}", reference=reference)

        logger.debug(f"Resolved {reference} -> {path}")
        return ResolvedSource(path=path)


def reference_name(reference: Any) -> str:
    """Best display name for a reference (its basename when it is path-like)"""
    name = getattr(reference, "name", None)
    if isinstance(name, str):
        return name
    if isinstance(reference, (str, Path)):
        return Path(reference).name
    return str(reference)
