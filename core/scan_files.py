"""
scan_files.py - File Collection Module

Collects source files for a batch and puts them in a stable order; the order
decides each file's batch index (used by sequential numbering).
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .logger_helper import get_logger
from .models_fs import FileItem, SortKey

logger = get_logger(__name__)


def collect_files(
    paths: Iterable[Path],
    include_hidden: bool = False,
    ignore_names: Optional[List[str]] = None,
) -> List[FileItem]:
    """
    Expand the given paths into a flat file list

    Files are taken as-is, directories contribute their direct children
    (non-recursive). Duplicates are dropped, first occurrence wins.

    Args:
        paths: Files and/or directories
        include_hidden: Whether to include hidden files found in directories
        ignore_names: Filenames that are never collected

    Returns:
        File list in discovery order
    """
    if ignore_names is None:
        ignore_names = [".DS_Store", "Thumbs.db"]

    results: List[FileItem] = []
    seen = set()

    def add(p: Path) -> None:
        key = p.resolve()
        if key in seen:
            return
        try:
            item = FileItem.from_path(p)
        except OSError as e:
            logger.warning(f"Cannot access {p}: {e}")
            return
        seen.add(key)
        results.append(item)

    for raw in paths:
        path = Path(raw).expanduser()
        if path.is_dir():
            for child in sorted(path.iterdir()):
                if not child.is_file() or child.name in ignore_names:
                    continue
                if not include_hidden and child.name.startswith('.'):
                    continue
                add(child)
        else:
            # Missing files are kept so the batch reports them as per-file errors
            if path.name in ignore_names:
                continue
            if path.exists():
                add(path)
            else:
                results.append(FileItem(path=path, name=path.name, size=0, mtime=0.0))

    return results


def get_sort_key(sort_by: SortKey) -> Callable[[FileItem], tuple]:
    """Sort key function, ties broken by lowercase name"""
    if sort_by == SortKey.MTIME:
        return lambda f: (f.mtime, f.name.lower())
    elif sort_by == SortKey.SIZE:
        return lambda f: (f.size, f.name.lower())
    return lambda f: (f.name.lower(), f.name)


def sort_files(
    files: List[FileItem],
    sort_by: SortKey = SortKey.NAME,
    reverse: bool = False,
) -> List[FileItem]:
    """
    Sort file list

    Args:
        files: File list
        sort_by: Sorting method
        reverse: Whether to sort in reverse

    Returns:
        Sorted file list (new list)
    """
    return sorted(files, key=get_sort_key(sort_by), reverse=reverse)
