"""
file_processing.py - Copy/Move Execution Module

Responsibilities:
- Sanitize destination names and resolve collisions against the live filesystem
- Stage every file through a temporary copy in the destination, then commit
- Isolate failures per file and aggregate a ProcessingResult
- Result log and stale staging file cleanup
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional
from datetime import datetime
import json
import os
import shutil
import uuid

from .logger_helper import get_logger
from .models_fs import (
    CollisionStrategy,
    ErrorKind,
    ItemState,
    Operation,
    ProcessingError,
    ProcessingItem,
    ProcessingOptions,
    ProcessingResult,
)
from .safety_checks import check_destination_writable, is_same_file
from .text_match import join_extension, sanitize_filename, split_extension

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]
CancelCheck = Callable[[], bool]

DESTINATION_LABEL = "destination folder"

# Most filesystems cap a single path component at 255 characters
MAX_NAME_LENGTH = 255


def sanitize_destination_name(name: str, fallback: str = "file") -> str:
    """Reduce a computed name to one safe path component"""
    return sanitize_filename(name, fallback=fallback)


def unique_destination_path(name: str, directory: Path, max_attempts: int = 10000) -> Path:
    """
    Find a path in directory that does not exist yet

    Tries name, then base_1.ext, base_2.ext, ... against the current state of
    the filesystem.

    Args:
        name: Desired filename
        directory: Destination directory
        max_attempts: Safety limit

    Returns:
        Unused path

    Raises:
        OSError: No free name within max_attempts
    """
    candidate = directory / name
    if not os.path.lexists(candidate):
        return candidate

    base, extension = split_extension(name)
    for n in range(1, max_attempts + 1):
        candidate = directory / join_extension(f"{base}_{n}", extension)
        if not os.path.lexists(candidate):
            return candidate

    raise OSError(f"Cannot find available name for {name} (tried over {max_attempts} times)")


def _generate_temp_path(directory: Path, name: str, marker: str) -> Path:
    """Generate staging path inside the destination, never longer than MAX_NAME_LENGTH"""
    unique_id = uuid.uuid4().hex[:8]
    temp_name = f"{marker}{unique_id}_{name}"
    return directory / temp_name[:MAX_NAME_LENGTH]


def _remove_quietly(path: Path) -> None:
    """Remove a leftover staging file, logging instead of raising"""
    try:
        if os.path.lexists(path):
            os.remove(path)
    except OSError as e:
        logger.warning(f"Could not remove staging file {path}: {e}")


class FileProcessingService:
    """
    Commits computed names to the filesystem

    Items are processed one after another so that unique-name probing sees the
    files created by earlier items of the same batch.
    """

    def __init__(self, options: Optional[ProcessingOptions] = None):
        self.options = options or ProcessingOptions()

    def process(
        self,
        items: Iterable[ProcessingItem],
        destination_dir: Path,
        operation: Optional[Operation] = None,
        collision: Optional[CollisionStrategy] = None,
        progress_callback: Optional[ProgressCallback] = None,
        should_cancel: Optional[CancelCheck] = None,
    ) -> ProcessingResult:
        """
        Copy or move every item into destination_dir

        Args:
            items: (source, destination name) pairs
            destination_dir: Target directory
            operation: Copy or move (defaults to options.operation)
            collision: Overwrite or unique name (defaults to options.collision)
            progress_callback: Progress callback (current, total, message)
            should_cancel: Checked before each item; remaining items are
                recorded as cancelled once it returns True

        Returns:
            Aggregated result; every item is either a success or an error
        """
        operation = operation or self.options.operation
        collision = collision or self.options.collision
        destination_dir = Path(destination_dir)
        items = list(items)
        total = len(items)

        failure = self.check_destination(destination_dir)
        if failure is not None:
            return failure

        success_count = 0
        errors: List[ProcessingError] = []

        for i, item in enumerate(items):
            if should_cancel is not None and should_cancel():
                logger.info(f"Batch cancelled, {total - i} items not processed")
                errors.extend(
                    ProcessingError(
                        file_name=rest.display_name,
                        message="Cancelled before processing",
                        kind=ErrorKind.CANCELLED,
                        file_id=rest.file_id,
                    )
                    for rest in items[i:]
                )
                break

            if progress_callback:
                progress_callback(i + 1, total, f"{item.display_name} -> {item.destination_name}")

            error = self._process_item(item, destination_dir, operation, collision)
            if error is None:
                success_count += 1
            else:
                errors.append(error)

        result = ProcessingResult(success_count=success_count, errors=tuple(errors))
        logger.info(
            f"Processed {total} files into {destination_dir}: "
            f"{result.success_count} succeeded, {result.error_count} failed"
        )
        self._write_log(result)
        return result

    def check_destination(self, destination_dir: Path) -> Optional[ProcessingResult]:
        """
        Check the destination once for the whole batch

        Returns:
            None if files can be staged there, otherwise a result holding the
            single aggregated permission error
        """
        writable, reason = check_destination_writable(Path(destination_dir))
        if writable:
            return None

        logger.error(f"Cannot process batch: {reason}")
        result = ProcessingResult(
            success_count=0,
            errors=(ProcessingError(
                file_name=DESTINATION_LABEL,
                message=reason or "Could not access folder permissions",
                kind=ErrorKind.PERMISSION_DENIED,
            ),),
        )
        self._write_log(result)
        return result

    def _process_item(
        self,
        item: ProcessingItem,
        destination_dir: Path,
        operation: Operation,
        collision: CollisionStrategy,
    ) -> Optional[ProcessingError]:
        """Run one item through the staging state machine"""
        source = Path(item.source)
        state = ItemState.PENDING

        name = sanitize_destination_name(item.destination_name, self.options.fallback_name)
        state = self._advance(item, state, ItemState.SANITIZED, name)

        temp_path = _generate_temp_path(destination_dir, name, self.options.temp_marker)

        try:
            if collision is CollisionStrategy.OVERWRITE:
                target = destination_dir / name
            else:
                target = unique_destination_path(
                    name, destination_dir, self.options.max_unique_attempts
                )
            state = self._advance(item, state, ItemState.TARGET_RESOLVED, target)

            same_file = is_same_file(source, target)
            if same_file:
                self._advance(item, state, ItemState.SHORT_CIRCUIT_SUCCESS, target)
                return None

            shutil.copy2(source, temp_path)
            state = self._advance(item, state, ItemState.STAGED, temp_path)

            if collision is CollisionStrategy.OVERWRITE and os.path.lexists(target):
                os.remove(target)
            state = self._advance(item, state, ItemState.COLLISION_CLEARED, target)

            os.replace(temp_path, target)
            state = self._advance(item, state, ItemState.COMMITTED, target)
            logger.info(f"{operation.value}: {source.name} -> {target.name}")

        except Exception as e:
            # Bad names surface as ValueError/UnicodeEncodeError, not only OSError
            self._advance(item, state, ItemState.FAILED, e)
            logger.warning(f"Failed to process {item.display_name}: {e}")
            _remove_quietly(temp_path)
            return ProcessingError(
                file_name=item.display_name,
                message=str(e),
                kind=ErrorKind.FILE_SYSTEM_ERROR,
                file_id=item.file_id,
            )

        if operation is Operation.MOVE:
            try:
                os.remove(source)
                self._advance(item, state, ItemState.ORIGINAL_REMOVED, source)
            except Exception as e:
                # The file already exists at its new name, so the item still succeeds
                logger.warning(f"Copied {source.name} but could not remove the original: {e}")
                self._advance(item, state, ItemState.ORIGINAL_REMOVAL_SKIPPED, source)
        else:
            self._advance(item, state, ItemState.ORIGINAL_REMOVAL_SKIPPED, source)

        return None

    @staticmethod
    def _advance(item: ProcessingItem, old: ItemState, new: ItemState, detail: object) -> ItemState:
        logger.debug(f"[{item.display_name}] {old.value} -> {new.value}: {detail}")
        return new

    def _write_log(self, result: ProcessingResult) -> None:
        if self.options.log_dir is None:
            return
        try:
            save_result_log(result, self.options.log_dir)
        except OSError as e:
            logger.warning(f"Could not write result log: {e}")


def process_files(
    items: Iterable[ProcessingItem],
    destination_dir: Path,
    operation: Operation = Operation.COPY,
    collision: CollisionStrategy = CollisionStrategy.UNIQUE_NAME,
    options: Optional[ProcessingOptions] = None,
    progress_callback: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
) -> ProcessingResult:
    """Function form of FileProcessingService.process"""
    service = FileProcessingService(options)
    return service.process(
        items,
        destination_dir,
        operation=operation,
        collision=collision,
        progress_callback=progress_callback,
        should_cancel=should_cancel,
    )


def save_result_log(result: ProcessingResult, log_dir: Path) -> Path:
    """Save processing result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    log_file = log_dir / f"process_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "success_count": result.success_count,
        "error_count": result.error_count,
        "outcome": result.outcome.value,
        "errors": [
            {
                "file_name": error.file_name,
                "message": error.message,
                "kind": error.kind.value,
                "file_id": error.file_id,
            }
            for error in result.errors
        ],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return log_file


def _is_temp_name(name: str, marker: str) -> bool:
    """Check if it's a staging filename"""
    return name.startswith(marker)


def cleanup_temp_files(directory: Path, temp_marker: str = ProcessingOptions.temp_marker) -> int:
    """
    Remove staging files left behind by an interrupted batch

    Args:
        directory: Destination directory
        temp_marker: Staging filename prefix

    Returns:
        Number of removed files
    """
    count = 0
    for item in Path(directory).iterdir():
        if item.is_file() and _is_temp_name(item.name, temp_marker):
            try:
                os.remove(item)
                count += 1
            except OSError as e:
                logger.warning(f"Could not remove staging file {item}: {e}")
    return count
