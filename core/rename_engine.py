"""
rename_engine.py - Filename Computation

Responsibilities:
- Apply an ordered step list to one filename (compute_name)
- Batch helper that compiles regex steps once (plan_names)

compute_name is pure: same (name, index, steps) always gives the same result,
and malformed patterns or templates never raise, they just leave the name alone.
"""

from typing import List, Optional, Sequence, assert_never

from .logger_helper import get_logger
from .regex_steps import (
    CompiledRegexCache,
    apply_regex_replacement,
    compile_pattern,
    compile_steps,
)
from .steps import (
    FileFormat,
    FindReplace,
    FormatMode,
    NumberPosition,
    Prefix,
    RenamingStep,
    ReplaceFilenameWith,
    SequentialNumbering,
    Suffix,
)
from .text_match import (
    camel_cased,
    hyphenated,
    join_extension,
    replace_text,
    snake_cased,
    split_extension,
)

logger = get_logger(__name__)


def format_number(number: int, min_digits: int) -> str:
    """Zero pad to at least min_digits, never truncating"""
    return str(number).zfill(max(min_digits, 0))


def _apply_find_replace(
    base: str,
    step: FindReplace,
    regex_cache: Optional[CompiledRegexCache],
) -> str:
    if not step.find:
        return base

    if not step.is_regex:
        return replace_text(base, step.find, step.replace)

    if regex_cache is not None:
        compiled = regex_cache.get(step.id)
    else:
        compiled = compile_pattern(step.find)

    if compiled is None:
        logger.debug(f"Skipping regex step {step.id}: pattern {step.find!r} unavailable")
        return base

    return apply_regex_replacement(base, compiled, step.replace)


def _apply_format(base: str, mode: FormatMode) -> str:
    if mode is FormatMode.HYPHENATED:
        return hyphenated(base)
    if mode is FormatMode.CAMEL_CASED:
        return camel_cased(base)
    if mode is FormatMode.SNAKE_CASE:
        return snake_cased(base)
    if mode is FormatMode.NONE:
        return base
    assert_never(mode)


def apply_step(
    base: str,
    step: RenamingStep,
    index: int,
    regex_cache: Optional[CompiledRegexCache] = None,
) -> str:
    """
    Apply one step to a base name (extension already removed)

    Args:
        base: Current base name
        step: Step to apply
        index: Zero-based batch index
        regex_cache: Compiled regex cache for the batch, if any

    Returns:
        New base name
    """
    if isinstance(step, FindReplace):
        return _apply_find_replace(base, step, regex_cache)
    if isinstance(step, Prefix):
        return step.value + base
    if isinstance(step, Suffix):
        return base + step.value
    if isinstance(step, ReplaceFilenameWith):
        return step.value
    if isinstance(step, FileFormat):
        return _apply_format(base, step.mode)
    if isinstance(step, SequentialNumbering):
        number = format_number(step.start + index, step.min_digits)
        if step.position is NumberPosition.PREFIX:
            return number + base
        return base + number
    assert_never(step)


def compute_name(
    original: str,
    index: int,
    steps: Sequence[RenamingStep],
    regex_cache: Optional[CompiledRegexCache] = None,
) -> str:
    """
    Compute the new filename for one file

    The extension is split off first, every step transforms the base name in
    order, and the extension is re-attached at the end.

    Args:
        original: Original filename
        index: Zero-based position of the file in the batch
        steps: Steps to apply, in order
        regex_cache: Result of compile_steps(steps); compiled on demand if None

    Returns:
        New filename
    """
    base, extension = split_extension(original)

    for step in steps:
        base = apply_step(base, step, index, regex_cache)

    return join_extension(base, extension)


def plan_names(
    names: Sequence[str],
    steps: Sequence[RenamingStep],
    regex_cache: Optional[CompiledRegexCache] = None,
) -> List[str]:
    """
    Compute new names for a whole batch

    Regex steps are compiled once for the batch; batch indices are list positions.

    Args:
        names: Original filenames in batch order
        steps: Steps to apply
        regex_cache: Pre-built cache, built here if None

    Returns:
        New filenames, same order as names
    """
    if regex_cache is None:
        regex_cache = compile_steps(steps)

    return [compute_name(name, i, steps, regex_cache) for i, name in enumerate(names)]
