"""
steps.py - Renaming Step Definitions

Contains:
- FindReplace, Prefix, Suffix, ReplaceFilenameWith, FileFormat, SequentialNumbering
- RenamingStep: union of all step variants
- JSON-friendly (de)serialization of steps

Each step carries an opaque id. The id is only used as the key for compiled regex
artifacts; order is always the position in the enclosing list.
"""

import json
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Union

from .errors import StepDecodeError


def _new_id() -> str:
    return uuid.uuid4().hex


class FormatMode(Enum):
    """Case/separator conversion applied by a FileFormat step"""
    NONE = "none"
    HYPHENATED = "hyphenated"                # my-file-name
    CAMEL_CASED = "camelCased"               # myFileName
    SNAKE_CASE = "lowercaseUnderscored"      # my_file_name


class NumberPosition(Enum):
    """Where a sequential number is attached to the base name"""
    PREFIX = "prefix"
    SUFFIX = "suffix"


@dataclass(frozen=True)
class FindReplace:
    """Replace all occurrences of `find` (literal or regex, case-insensitive)"""
    find: str
    replace: str = ""
    is_regex: bool = False
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class Prefix:
    value: str
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class Suffix:
    value: str
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class ReplaceFilenameWith:
    """Discard the current base name; the extension is kept"""
    value: str
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class FileFormat:
    mode: FormatMode = FormatMode.NONE
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class SequentialNumbering:
    """Attach start + batch index, zero padded to at least min_digits"""
    start: int = 1
    min_digits: int = 1
    position: NumberPosition = NumberPosition.PREFIX
    id: str = field(default_factory=_new_id)


RenamingStep = Union[
    FindReplace,
    Prefix,
    Suffix,
    ReplaceFilenameWith,
    FileFormat,
    SequentialNumbering,
]


# Serialized kind names
KIND_FIND_REPLACE = "findReplace"
KIND_PREFIX = "prefix"
KIND_SUFFIX = "suffix"
KIND_REPLACE_FILENAME = "replaceFilenameWith"
KIND_FILE_FORMAT = "fileFormat"
KIND_SEQUENTIAL = "sequentialNumbering"


def step_to_dict(step: RenamingStep) -> Dict[str, Any]:
    """
    Serialize a step to a JSON-compatible dict

    Layout: {"id": ..., "type": {"kind": ..., <payload fields>}}
    """
    if isinstance(step, FindReplace):
        payload = {
            "kind": KIND_FIND_REPLACE,
            "find": step.find,
            "replace": step.replace,
            "isRegex": step.is_regex,
        }
    elif isinstance(step, Prefix):
        payload = {"kind": KIND_PREFIX, "value": step.value}
    elif isinstance(step, Suffix):
        payload = {"kind": KIND_SUFFIX, "value": step.value}
    elif isinstance(step, ReplaceFilenameWith):
        payload = {"kind": KIND_REPLACE_FILENAME, "value": step.value}
    elif isinstance(step, FileFormat):
        payload = {"kind": KIND_FILE_FORMAT, "format": step.mode.value}
    elif isinstance(step, SequentialNumbering):
        payload = {
            "kind": KIND_SEQUENTIAL,
            "start": step.start,
            "minDigits": step.min_digits,
            "position": step.position.value,
        }
    else:
        raise TypeError(f"Not a renaming step: {step!r}")

    return {"id": step.id, "type": payload}


def _require(data: Dict[str, Any], key: str, expected: type) -> Any:
    if key not in data:
        raise StepDecodeError(f"Missing field '{key}'")
    value = data[key]
    # bool is a subclass of int; do not accept it where a number is expected
    if expected is int and isinstance(value, bool):
        raise StepDecodeError(f"Field '{key}' must be int, got bool")
    if not isinstance(value, expected):
        raise StepDecodeError(
            f"Field '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def step_from_dict(data: Dict[str, Any]) -> RenamingStep:
    """
    Deserialize a step produced by step_to_dict

    Raises:
        StepDecodeError: Unknown kind, missing or mistyped field
    """
    if not isinstance(data, dict):
        raise StepDecodeError(f"Step must be an object, got {type(data).__name__}")

    step_id = data.get("id") or _new_id()
    if not isinstance(step_id, str):
        step_id = str(step_id)

    payload = data.get("type")
    if not isinstance(payload, dict):
        raise StepDecodeError("Missing step 'type' object")

    kind = payload.get("kind")

    if kind == KIND_FIND_REPLACE:
        is_regex = payload.get("isRegex", False)
        if not isinstance(is_regex, bool):
            raise StepDecodeError("Field 'isRegex' must be bool")
        return FindReplace(
            find=_require(payload, "find", str),
            replace=_require(payload, "replace", str),
            is_regex=is_regex,
            id=step_id,
        )
    if kind == KIND_PREFIX:
        return Prefix(_require(payload, "value", str), id=step_id)
    if kind == KIND_SUFFIX:
        return Suffix(_require(payload, "value", str), id=step_id)
    if kind == KIND_REPLACE_FILENAME:
        return ReplaceFilenameWith(_require(payload, "value", str), id=step_id)
    if kind == KIND_FILE_FORMAT:
        raw = _require(payload, "format", str)
        try:
            mode = FormatMode(raw)
        except ValueError:
            raise StepDecodeError(f"Unknown file format: {raw}") from None
        return FileFormat(mode, id=step_id)
    if kind == KIND_SEQUENTIAL:
        raw_position = _require(payload, "position", str)
        try:
            position = NumberPosition(raw_position)
        except ValueError:
            raise StepDecodeError(f"Unknown number position: {raw_position}") from None
        return SequentialNumbering(
            start=_require(payload, "start", int),
            min_digits=_require(payload, "minDigits", int),
            position=position,
            id=step_id,
        )

    raise StepDecodeError(f"Unknown step kind: {kind!r}")


def steps_to_json(steps: Iterable[RenamingStep], indent: int = 2) -> str:
    """Serialize a step list to a JSON string"""
    return json.dumps([step_to_dict(s) for s in steps], ensure_ascii=False, indent=indent)


def steps_from_json(text: str) -> List[RenamingStep]:
    """
    Deserialize a JSON step list

    Raises:
        StepDecodeError: Invalid JSON or invalid step entry
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StepDecodeError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise StepDecodeError("Step list must be a JSON array")

    return [step_from_dict(item) for item in data]
