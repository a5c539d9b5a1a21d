"""
core - Batch Rename Core Module

Provides the renaming engine (pure name computation), the file processing
service (staged copy/move with collision handling) and batch orchestration.
"""

from .errors import (
    RenameToolError,
    ResolutionError,
    StepDecodeError,
)

from .steps import (
    RenamingStep,
    FindReplace,
    Prefix,
    Suffix,
    ReplaceFilenameWith,
    FileFormat,
    FormatMode,
    SequentialNumbering,
    NumberPosition,
    step_to_dict,
    step_from_dict,
    steps_to_json,
    steps_from_json,
)

from .models_fs import (
    FileItem,
    SortKey,
    Operation,
    CollisionStrategy,
    ErrorKind,
    Outcome,
    ItemState,
    ProcessingItem,
    ProcessingError,
    ProcessingResult,
    ProcessingOptions,
)

from .text_match import (
    split_extension,
    cleaned_words,
    hyphenated,
    camel_cased,
    snake_cased,
    sanitize_filename,
)

from .regex_steps import (
    CompiledRegex,
    CompiledRegexCache,
    compile_steps,
    validate_pattern,
    validate_template,
)

from .rename_engine import (
    compute_name,
    plan_names,
)

from .file_processing import (
    FileProcessingService,
    process_files,
    sanitize_destination_name,
    unique_destination_path,
    save_result_log,
    cleanup_temp_files,
)

from .sources import (
    SourceResolver,
    ResolvedSource,
    PathResolver,
)

from .batch import (
    SourceEntry,
    run_batch,
)

from .scan_files import (
    collect_files,
    sort_files,
)

from .safety_checks import (
    check_destination_writable,
    check_source_readable,
)

from .logger_helper import (
    get_logger,
    setup_logging,
)

__all__ = [
    # Errors
    "RenameToolError",
    "ResolutionError",
    "StepDecodeError",

    # Steps
    "RenamingStep",
    "FindReplace",
    "Prefix",
    "Suffix",
    "ReplaceFilenameWith",
    "FileFormat",
    "FormatMode",
    "SequentialNumbering",
    "NumberPosition",
    "step_to_dict",
    "step_from_dict",
    "steps_to_json",
    "steps_from_json",

    # Data models
    "FileItem",
    "SortKey",
    "Operation",
    "CollisionStrategy",
    "ErrorKind",
    "Outcome",
    "ItemState",
    "ProcessingItem",
    "ProcessingError",
    "ProcessingResult",
    "ProcessingOptions",

    # Text processing
    "split_extension",
    "cleaned_words",
    "hyphenated",
    "camel_cased",
    "snake_cased",
    "sanitize_filename",

    # Regex
    "CompiledRegex",
    "CompiledRegexCache",
    "compile_steps",
    "validate_pattern",
    "validate_template",

    # Engine
    "compute_name",
    "plan_names",

    # Processing
    "FileProcessingService",
    "process_files",
    "sanitize_destination_name",
    "unique_destination_path",
    "save_result_log",
    "cleanup_temp_files",

    # Sources and batches
    "SourceResolver",
    "ResolvedSource",
    "PathResolver",
    "SourceEntry",
    "run_batch",

    # Collection
    "collect_files",
    "sort_files",

    # Safety checks
    "check_destination_writable",
    "check_source_readable",

    # Logging
    "get_logger",
    "setup_logging",
]
