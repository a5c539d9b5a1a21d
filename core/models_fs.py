"""
models_fs.py - Core Data Structure Definitions

Contains:
- FileItem: Source file information (for ordering a batch)
- ProcessingItem: (source, destination name) pair handed to the processing service
- ProcessingError / ProcessingResult: Aggregated batch outcome
- ProcessingOptions: Processing options configuration
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


class SortKey(Enum):
    """Sort key enumeration (decides batch indices)"""
    NAME = "name"        # Filename
    MTIME = "mtime"      # Modification time
    SIZE = "size"        # File size


class Operation(Enum):
    """What happens to the source file"""
    COPY = "copy"        # Keep the original
    MOVE = "move"        # Remove the original after commit


class CollisionStrategy(Enum):
    """How an existing destination file is handled"""
    OVERWRITE = "overwrite"        # Replace the existing file
    UNIQUE_NAME = "unique_name"    # Add _1, _2, _3...


class ErrorKind(Enum):
    """Category of a per-file error"""
    FILE_SYSTEM_ERROR = "file_system_error"
    RESOLUTION_FAILED = "resolution_failed"
    STALE_RESOLUTION = "stale_resolution"      # Needs re-authorization by the user
    PERMISSION_DENIED = "permission_denied"    # Destination folder not usable
    CANCELLED = "cancelled"


class Outcome(Enum):
    """Summary classification of a batch"""
    ALL_SUCCESS = "all_success"
    PARTIAL = "partial"
    ALL_FAILED = "all_failed"


class ItemState(Enum):
    """Per-item processing state"""
    PENDING = "pending"
    SANITIZED = "sanitized"
    TARGET_RESOLVED = "target_resolved"
    SHORT_CIRCUIT_SUCCESS = "short_circuit_success"
    STAGED = "staged"
    COLLISION_CLEARED = "collision_cleared"
    COMMITTED = "committed"
    ORIGINAL_REMOVED = "original_removed"
    ORIGINAL_REMOVAL_SKIPPED = "original_removal_skipped"
    FAILED = "failed"


@dataclass
class FileItem:
    """File information data class"""
    path: Path                      # Full path
    name: str                       # Filename (with extension)
    size: int                       # File size (bytes)
    mtime: float                    # Modification time (timestamp)

    @classmethod
    def from_path(cls, p: Path) -> "FileItem":
        """Create FileItem from Path object"""
        stat = p.stat()
        return cls(
            path=p,
            name=p.name,
            size=stat.st_size,
            mtime=stat.st_mtime,
        )


@dataclass(frozen=True)
class ProcessingItem:
    """One file to commit"""
    source: Path                    # Readable source file
    destination_name: str           # Computed name (sanitized again before use)
    label: Optional[str] = None     # Name reported in errors, defaults to source name
    file_id: Optional[str] = None   # Caller's identifier, echoed back in errors

    @property
    def display_name(self) -> str:
        return self.label if self.label is not None else Path(self.source).name


@dataclass(frozen=True)
class ProcessingError:
    """A single per-file failure"""
    file_name: str
    message: str
    kind: ErrorKind = ErrorKind.FILE_SYSTEM_ERROR
    file_id: Optional[str] = None


@dataclass(frozen=True)
class ProcessingResult:
    """Batch processing result"""
    success_count: int = 0
    errors: Tuple[ProcessingError, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def total_count(self) -> int:
        return self.success_count + self.error_count

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    @property
    def outcome(self) -> Outcome:
        if self.error_count == 0:
            return Outcome.ALL_SUCCESS
        if self.success_count > 0:
            return Outcome.PARTIAL
        return Outcome.ALL_FAILED

    @property
    def summary_message(self) -> str:
        outcome = self.outcome
        if outcome is Outcome.ALL_SUCCESS:
            return f"All {self.success_count} files processed successfully!"
        if outcome is Outcome.PARTIAL:
            return f"{self.success_count} files processed, {self.error_count} failed"
        return "Failed to process files"

    @property
    def stale_file_ids(self) -> List[str]:
        """Ids of files whose source needs re-authorization"""
        return [
            e.file_id for e in self.errors
            if e.kind is ErrorKind.STALE_RESOLUTION and e.file_id is not None
        ]

    @property
    def first_stale_file_id(self) -> Optional[str]:
        stale = self.stale_file_ids
        return stale[0] if stale else None

    def merge(self, extra_errors: Iterable[ProcessingError]) -> "ProcessingResult":
        """Return a new result with extra errors appended"""
        return replace(self, errors=self.errors + tuple(extra_errors))

    def summary(self) -> str:
        """Generate multi-line summary"""
        lines = [
            f"Processing Result:",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.error_count}",
        ]
        if self.errors:
            lines.append("Failure Details:")
            for error in self.errors[:10]:  # Show at most 10
                lines.append(f"  - {error.file_name}: {error.message}")
            if len(self.errors) > 10:
                lines.append(f"  ... and {len(self.errors) - 10} more failures")
        return "\n".join(lines)


@dataclass
class ProcessingOptions:
    """Processing options configuration"""
    operation: Operation = Operation.COPY
    collision: CollisionStrategy = CollisionStrategy.UNIQUE_NAME

    # Staging files are created in the destination as <marker><uuid>_<name>
    temp_marker: str = ".scrub_tmp_"

    # Used when a computed name sanitizes to nothing
    fallback_name: str = "file"

    # Safety limit for _1, _2, ... probing
    max_unique_attempts: int = 10000

    # Write a JSON result log here after each batch
    log_dir: Optional[Path] = None

    # Sort order used by callers that build a batch from a directory
    sort_by: SortKey = SortKey.NAME
    ignore_names: List[str] = field(default_factory=lambda: [".DS_Store", "Thumbs.db"])
