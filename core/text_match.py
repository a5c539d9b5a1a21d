"""
text_match.py - Text Matching Tools

Provides extension splitting, literal replacement, word splitting and case
conversion for filename base names, plus destination name sanitizing.
"""

from typing import List, Tuple
import re

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WORD_SEPARATORS = re.compile(r"[._()\-]")
_NON_WORD_CHARS = re.compile(r"[^a-zA-Z0-9 ]")
_WHITESPACE_RUN = re.compile(r"\s+")

# Path separators that must never survive into a destination name
PATH_SEPARATORS = "/\\:"
FALLBACK_NAME = "file"


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split filename into base and extension at the last dot

    Leading dots do not start an extension (".bashrc" has none) and a trailing
    dot yields an empty extension, so rejoining always gives back the input.

    Args:
        name: Filename (no directory part)

    Returns:
        (base, extension) - extension without the dot, possibly empty
    """
    stripped = name.lstrip(".")
    leading = len(name) - len(stripped)

    idx = stripped.rfind(".")
    if idx <= 0 or idx == len(stripped) - 1:
        return name, ""

    return name[:leading + idx], stripped[idx + 1:]


def join_extension(base: str, extension: str) -> str:
    """Inverse of split_extension"""
    if extension:
        return f"{base}.{extension}"
    return base


def replace_text(text: str, old: str, new: str) -> str:
    """
    Case-insensitive literal replacement of every occurrence

    Args:
        text: Original text
        old: String to replace (empty means no-op)
        new: Replacement string, inserted verbatim

    Returns:
        Replaced text
    """
    if not old:
        return text

    pattern = re.compile(re.escape(old), re.IGNORECASE)
    return pattern.sub(lambda _m: new, text)


def cleaned_words(text: str) -> List[str]:
    """
    Split text into words

    camelCase boundaries, dots, underscores, hyphens and parentheses separate
    words; anything else that is not an ASCII letter, digit or space is dropped.
    Letter case inside each word is preserved.
    """
    modified = _CAMEL_BOUNDARY.sub(r"\1 \2", text)
    modified = _WORD_SEPARATORS.sub(" ", modified)
    modified = _NON_WORD_CHARS.sub("", modified)
    modified = _WHITESPACE_RUN.sub(" ", modified).strip()
    return modified.split()


def hyphenated(text: str) -> str:
    """Lowercase words joined by hyphens: My File -> my-file"""
    return "-".join(cleaned_words(text)).lower()


def camel_cased(text: str) -> str:
    """Lower first word, capitalize the rest: my file name -> myFileName"""
    words = cleaned_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def snake_cased(text: str) -> str:
    """Lowercase words joined by underscores: My File -> my_file"""
    return "_".join(cleaned_words(text)).lower()


def sanitize_filename(name: str, replacement: str = "_", fallback: str = FALLBACK_NAME) -> str:
    """
    Reduce a computed name to a single safe path component

    Every path separator character becomes one replacement character (so "a//b"
    gives "a__b"), then leading and trailing dots are trimmed.

    Args:
        name: Computed destination name
        replacement: Replacement character
        fallback: Name used when nothing is left

    Returns:
        Sanitized filename
    """
    for char in PATH_SEPARATORS:
        name = name.replace(char, replacement)

    name = name.strip(".")

    if not name:
        name = fallback

    return name
