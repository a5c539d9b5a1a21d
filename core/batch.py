"""
batch.py - Batch Orchestration

Resolve sources -> compute names (one regex compilation per batch) -> process.
Batch indices are positions in the full input list, so a file that fails to
resolve still uses up its number.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .errors import ResolutionError
from .file_processing import CancelCheck, FileProcessingService, ProgressCallback
from .logger_helper import get_logger
from .models_fs import (
    CollisionStrategy,
    ErrorKind,
    Operation,
    ProcessingError,
    ProcessingItem,
    ProcessingOptions,
    ProcessingResult,
)
from .regex_steps import compile_steps
from .rename_engine import compute_name
from .sources import PathResolver, ResolvedSource, SourceResolver, reference_name
from .steps import RenamingStep

logger = get_logger(__name__)


@dataclass(frozen=True)
class SourceEntry:
    """A file reference plus the name it is renamed from"""
    reference: Any
    file_name: Optional[str] = None
    file_id: Optional[str] = None

    @property
    def name(self) -> str:
        return self.file_name if self.file_name is not None else reference_name(self.reference)


def _as_entry(value: Any) -> SourceEntry:
    if isinstance(value, SourceEntry):
        return value
    return SourceEntry(reference=value)


def resolve_sources(
    entries: Sequence[SourceEntry],
    steps: Sequence[RenamingStep],
    resolver: SourceResolver,
    handles: Optional[List[ResolvedSource]] = None,
) -> Tuple[List[ProcessingItem], List[ResolvedSource], List[ProcessingError]]:
    """
    Resolve every entry and compute its destination name

    Any exception from the resolver becomes a per-file error; only a
    ResolutionError flagged stale is reported as STALE_RESOLUTION.

    Args:
        entries: Sources in batch order
        steps: Renaming steps
        resolver: Source resolver
        handles: List to collect acquired handles in, so a caller can release
            them even if this function does not return

    Returns:
        (items to process, handles to release, resolution errors)
    """
    regex_cache = compile_steps(steps)
    items: List[ProcessingItem] = []
    if handles is None:
        handles = []
    errors: List[ProcessingError] = []

    for index, entry in enumerate(entries):
        try:
            resolved = resolver.resolve(entry.reference)
        except Exception as e:
            stale = isinstance(e, ResolutionError) and e.stale
            kind = ErrorKind.STALE_RESOLUTION if stale else ErrorKind.RESOLUTION_FAILED
            logger.warning(f"Could not resolve {entry.name}: {e}")
            errors.append(ProcessingError(
                file_name=entry.name,
                message=f"Could not resolve file: {e}",
                kind=kind,
                file_id=entry.file_id,
            ))
            continue

        if resolved.is_stale:
            logger.warning(f"Source for {entry.name} is stale and needs to be re-authorized")
            errors.append(ProcessingError(
                file_name=entry.name,
                message="Source access is stale and needs to be refreshed",
                kind=ErrorKind.STALE_RESOLUTION,
                file_id=entry.file_id,
            ))
            resolved.release()
            continue

        handles.append(resolved)
        items.append(ProcessingItem(
            source=resolved.path,
            destination_name=compute_name(entry.name, index, steps, regex_cache),
            label=entry.name,
            file_id=entry.file_id,
        ))

    return items, handles, errors


def run_batch(
    sources: Iterable[Any],
    steps: Sequence[RenamingStep],
    destination_dir: Path,
    operation: Optional[Operation] = None,
    collision: Optional[CollisionStrategy] = None,
    resolver: Optional[SourceResolver] = None,
    options: Optional[ProcessingOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
) -> ProcessingResult:
    """
    Rename a batch of files into destination_dir

    Args:
        sources: File references (paths by default) or SourceEntry objects
        steps: Renaming steps
        destination_dir: Target directory
        operation: Copy or move (defaults to options.operation)
        collision: Collision strategy (defaults to options.collision)
        resolver: Source resolver (defaults to PathResolver)
        options: Processing options
        progress_callback: Progress callback (current, total, message)
        should_cancel: Checked between items

    Returns:
        Result covering every input. Errors are not in input order: processing
        errors come first, then resolution errors.
    """
    entries = [_as_entry(s) for s in sources]
    resolver = resolver or PathResolver()
    service = FileProcessingService(options)

    failure = service.check_destination(destination_dir)
    if failure is not None:
        return failure

    handles: List[ResolvedSource] = []
    try:
        items, _, resolution_errors = resolve_sources(entries, steps, resolver, handles)
        result = service.process(
            items,
            destination_dir,
            operation=operation,
            collision=collision,
            progress_callback=progress_callback,
            should_cancel=should_cancel,
        )
    finally:
        for handle in handles:
            handle.release()

    if resolution_errors:
        result = result.merge(resolution_errors)
    return result
