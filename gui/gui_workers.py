"""
gui_workers.py - GUI Worker Threads

Runs a batch off the UI thread; cancellation is honoured between files
"""

from pathlib import Path
from typing import Any, List, Optional, Sequence

from PySide6.QtCore import QThread, Signal, QObject

from core import (
    CollisionStrategy,
    Operation,
    ProcessingOptions,
    RenamingStep,
    SourceResolver,
    get_logger,
    plan_names,
    run_batch,
)

logger = get_logger(__name__)


class ProcessWorker(QThread):
    """Batch processing worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # ProcessingResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        sources: Sequence[Any],
        steps: Sequence[RenamingStep],
        destination_dir: Path,
        operation: Operation = Operation.COPY,
        collision: CollisionStrategy = CollisionStrategy.UNIQUE_NAME,
        resolver: Optional[SourceResolver] = None,
        options: Optional[ProcessingOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.sources = list(sources)
        self.steps = list(steps)
        self.destination_dir = Path(destination_dir)
        self.operation = operation
        self.collision = collision
        self.resolver = resolver
        self.options = options

    def cancel(self):
        """Stop after the file currently being processed"""
        self.requestInterruption()

    def run(self):
        try:
            def progress_callback(current: int, total: int, msg: str):
                self.progress.emit(current, total, msg)

            result = run_batch(
                self.sources,
                self.steps,
                self.destination_dir,
                operation=self.operation,
                collision=self.collision,
                resolver=self.resolver,
                options=self.options,
                progress_callback=progress_callback,
                should_cancel=self.isInterruptionRequested,
            )

            self.finished.emit(result)
        except Exception as e:
            logger.exception("Batch processing failed")
            self.error.emit(str(e))


class PreviewWorker(QThread):
    """Computes new names for a large selection without blocking the UI"""

    # Signals
    finished = Signal(list)             # New names, same order as input
    error = Signal(str)                 # Error message

    def __init__(
        self,
        names: Sequence[str],
        steps: Sequence[RenamingStep],
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.names: List[str] = list(names)
        self.steps = list(steps)

    def run(self):
        try:
            self.finished.emit(plan_names(self.names, self.steps))
        except Exception as e:
            logger.exception("Preview failed")
            self.error.emit(str(e))
