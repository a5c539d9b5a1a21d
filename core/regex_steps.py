"""
regex_steps.py - Regex Find/Replace Support

Responsibilities:
- Compile regex find/replace steps once per batch (CompiledRegexCache)
- Validate "$n" replacement templates against the pattern's group count
- Expand templates for each match

Patterns are compiled case-insensitively. Templates use "$0".."$N" for groups
(multi-digit, greedy) and "\\" to escape the next character.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Pattern, Tuple, Union
import re

from .logger_helper import get_logger
from .steps import FindReplace, RenamingStep

logger = get_logger(__name__)

_DIGITS = "0123456789"

TemplatePart = Union[str, int]


@dataclass(frozen=True)
class CompiledRegex:
    """Compiled pattern plus its capture group count"""
    pattern: Pattern[str]
    group_count: int


CompiledRegexCache = Dict[str, CompiledRegex]


def compile_pattern(find: str) -> Optional[CompiledRegex]:
    """
    Compile a find pattern case-insensitively

    Returns:
        CompiledRegex, or None if the pattern is invalid
    """
    try:
        pattern = re.compile(find, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as e:
        logger.debug(f"Invalid regex {find!r}: {e}")
        return None
    return CompiledRegex(pattern=pattern, group_count=pattern.groups)


def validate_pattern(find: str) -> Tuple[bool, Optional[str]]:
    """
    Check whether a find pattern compiles

    Args:
        find: Regex pattern

    Returns:
        (is_valid, error_reason)
    """
    if not find:
        return False, "Pattern cannot be empty"
    try:
        re.compile(find, re.IGNORECASE)
    except (re.error, OverflowError, RecursionError) as e:
        return False, f"Invalid pattern: {e}"
    return True, None


def compile_steps(steps: Iterable[RenamingStep]) -> CompiledRegexCache:
    """
    Build the regex cache for a batch

    Only regex find/replace steps with a non-empty pattern are compiled; steps
    whose pattern is invalid are left out, which makes the engine skip them.

    Args:
        steps: Step list shared by the whole batch

    Returns:
        Mapping of step id -> CompiledRegex
    """
    cache: CompiledRegexCache = {}
    for step in steps:
        if not isinstance(step, FindReplace) or not step.is_regex or not step.find:
            continue
        compiled = compile_pattern(step.find)
        if compiled is not None:
            cache[step.id] = compiled
    return cache


def parse_template(template: str) -> List[TemplatePart]:
    """
    Split a replacement template into literal text and group references

    Args:
        template: Replacement template

    Returns:
        List of literal strings and group numbers

    Raises:
        ValueError: "$" not followed by a digit, or trailing unescaped backslash
    """
    parts: List[TemplatePart] = []
    literal: List[str] = []
    i = 0
    n = len(template)

    while i < n:
        char = template[i]
        if char == "\\":
            if i + 1 >= n:
                raise ValueError("Trailing backslash in template")
            literal.append(template[i + 1])
            i += 2
        elif char == "$":
            j = i + 1
            while j < n and template[j] in _DIGITS:
                j += 1
            if j == i + 1:
                raise ValueError(f"'$' at position {i} is not followed by a group number")
            if literal:
                parts.append("".join(literal))
                literal = []
            parts.append(int(template[i + 1:j]))
            i = j
        else:
            literal.append(char)
            i += 1

    if literal:
        parts.append("".join(literal))
    return parts


def validate_template(template: str, group_count: int) -> bool:
    """
    Check a replacement template against a pattern

    Args:
        template: Replacement template
        group_count: Number of capture groups in the pattern

    Returns:
        True if every reference exists ($0 always does) and the syntax is valid
    """
    try:
        parts = parse_template(template)
    except ValueError:
        return False
    return all(part <= group_count for part in parts if isinstance(part, int))


def apply_regex_replacement(text: str, compiled: CompiledRegex, template: str) -> str:
    """
    Replace every match of a compiled pattern using a "$n" template

    Args:
        text: Input text
        compiled: Compiled pattern
        template: Replacement template

    Returns:
        Replaced text, or the input unchanged if the template is invalid
    """
    if not validate_template(template, compiled.group_count):
        logger.debug(f"Invalid replacement template {template!r} for {compiled.pattern.pattern!r}")
        return text

    parts = parse_template(template)

    def expand(match: "re.Match[str]") -> str:
        pieces = []
        for part in parts:
            if isinstance(part, int):
                pieces.append(match.group(part) or "")
            else:
                pieces.append(part)
        return "".join(pieces)

    return compiled.pattern.sub(expand, text)
