"""
cli_entry.py - CLI Entry Point

Subcommands:
- preview: Show computed names without touching files
- process: Copy or move files into a destination folder under their new names
- cleanup: Remove staging files left by an interrupted run

Step options are applied in the order they appear on the command line.
"""

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core import (
    CollisionStrategy,
    FileFormat,
    FindReplace,
    FormatMode,
    NumberPosition,
    Operation,
    Prefix,
    ProcessingOptions,
    ReplaceFilenameWith,
    SequentialNumbering,
    SortKey,
    SourceEntry,
    StepDecodeError,
    Suffix,
    cleanup_temp_files,
    collect_files,
    get_logger,
    plan_names,
    run_batch,
    setup_logging,
    sort_files,
    steps_from_json,
    validate_pattern,
)

FORMAT_CHOICES = {
    "hyphenated": FormatMode.HYPHENATED,
    "camel": FormatMode.CAMEL_CASED,
    "snake": FormatMode.SNAKE_CASE,
    "none": FormatMode.NONE,
}

SORT_CHOICES = {
    "name": SortKey.NAME,
    "mtime": SortKey.MTIME,
    "size": SortKey.SIZE,
}

PREVIEW_LIMIT = 20

logger = get_logger(__name__)


def parse_number_spec(value: str) -> SequentialNumbering:
    """Parse START:DIGITS[:prefix|suffix]"""
    parts = value.split(":")
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Expected START:DIGITS[:prefix|suffix], got {value!r}")
    try:
        start = int(parts[0])
        digits = int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"START and DIGITS must be integers: {value!r}") from None
    if digits < 0:
        raise argparse.ArgumentTypeError("DIGITS cannot be negative")

    position = NumberPosition.PREFIX
    if len(parts) == 3:
        try:
            position = NumberPosition(parts[2].lower())
        except ValueError:
            raise argparse.ArgumentTypeError(f"Position must be prefix or suffix: {parts[2]!r}") from None

    return SequentialNumbering(start=start, min_digits=digits, position=position)


class StepAction(argparse.Action):
    """Append a renaming step to namespace.steps, keeping command-line order"""

    def __call__(self, parser, namespace, values, option_string=None):
        steps = list(getattr(namespace, self.dest, None) or [])

        if option_string in ("--find", "-f"):
            steps.append(FindReplace(find=values))
        elif option_string in ("--regex-find", "-x"):
            valid, error = validate_pattern(values)
            if not valid:
                print(f"Warning: {error}; the regex step will be skipped", file=sys.stderr)
            steps.append(FindReplace(find=values, is_regex=True))
        elif option_string in ("--replace", "-r"):
            if not steps or not isinstance(steps[-1], FindReplace):
                parser.error(f"{option_string} must follow --find or --regex-find")
            steps[-1] = dataclasses.replace(steps[-1], replace=values)
        elif option_string == "--prefix":
            steps.append(Prefix(values))
        elif option_string == "--suffix":
            steps.append(Suffix(values))
        elif option_string == "--rename-to":
            steps.append(ReplaceFilenameWith(values))
        elif option_string == "--format":
            steps.append(FileFormat(FORMAT_CHOICES[values]))
        elif option_string == "--number":
            steps.append(values)
        elif option_string == "--steps":
            try:
                steps.extend(steps_from_json(Path(values).read_text(encoding="utf-8")))
            except OSError as e:
                parser.error(f"Cannot read steps file {values}: {e}")
            except StepDecodeError as e:
                parser.error(f"Invalid steps file {values}: {e}")
        else:
            parser.error(f"Unknown step option {option_string}")

        setattr(namespace, self.dest, steps)


def add_step_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by preview and process"""
    group = parser.add_argument_group("renaming steps (applied in the given order)")
    group.add_argument("--find", "-f", action=StepAction, dest="steps", metavar="TEXT",
                       help="Find text (case-insensitive), use with --replace")
    group.add_argument("--regex-find", "-x", action=StepAction, dest="steps", metavar="PATTERN",
                       help="Find regex (case-insensitive), use with --replace ($1, $2... for groups)")
    group.add_argument("--replace", "-r", action=StepAction, dest="steps", metavar="TEXT",
                       help="Replacement for the preceding find")
    group.add_argument("--prefix", action=StepAction, dest="steps", metavar="TEXT", help="Add prefix")
    group.add_argument("--suffix", action=StepAction, dest="steps", metavar="TEXT",
                       help="Add suffix (before the extension)")
    group.add_argument("--rename-to", action=StepAction, dest="steps", metavar="TEXT",
                       help="Replace the whole name (extension kept)")
    group.add_argument("--format", action=StepAction, dest="steps", choices=sorted(FORMAT_CHOICES),
                       help="Convert name format")
    group.add_argument("--number", action=StepAction, dest="steps", type=parse_number_spec,
                       metavar="START:DIGITS[:POS]", help="Sequential number, POS is prefix (default) or suffix")
    group.add_argument("--steps", action=StepAction, dest="steps", metavar="FILE.json",
                       help="Load steps from a JSON file")

    parser.add_argument("--sort", type=str, default="name", choices=sorted(SORT_CHOICES),
                        help="Order that decides numbering")
    parser.add_argument("--reverse", action="store_true", help="Reverse sort")
    parser.add_argument("--include-hidden", action="store_true", help="Include hidden files from folders")
    parser.set_defaults(steps=None)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="filescrub",
        description="Batch Rename Tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview names
  filescrub preview ./photos --format hyphenated --number 1:3

  # Copy renamed files into another folder
  filescrub process ./photos --dest ./out --find "IMG_" --replace "" --prefix "2024_"

  # Swap two words with a regex, move instead of copy
  filescrub process a-b.txt --dest ./out --move -x "(\\w+)-(\\w+)" -r "$2_$1"
"""
    )
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="More log output (-v info, -vv debug)")

    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    preview_parser = subparsers.add_parser("preview", help="Preview new names")
    preview_parser.add_argument("files", nargs="+", help="Files or folders")
    add_step_arguments(preview_parser)

    process_parser = subparsers.add_parser("process", help="Copy or move files under new names")
    process_parser.add_argument("files", nargs="+", help="Files or folders")
    process_parser.add_argument("--dest", "-d", type=str, required=True, help="Destination folder")
    process_parser.add_argument("--move", action="store_true", help="Move instead of copy")
    process_parser.add_argument("--overwrite", action="store_true",
                                help="Replace existing files instead of adding _1, _2...")
    process_parser.add_argument("--log-dir", type=str, help="Save a JSON result log here")
    process_parser.add_argument("--dry-run", action="store_true", help="Preview only, do not execute")
    process_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    add_step_arguments(process_parser)

    cleanup_parser = subparsers.add_parser("cleanup", help="Remove leftover staging files")
    cleanup_parser.add_argument("directory", type=str, help="Destination folder")

    return parser


def _gather(args) -> List:
    files = collect_files(args.files, include_hidden=args.include_hidden)
    return sort_files(files, SORT_CHOICES[args.sort], reverse=args.reverse)


def _print_preview(names: List[str], new_names: List[str]) -> None:
    print("-" * 80)
    for old, new in list(zip(names, new_names))[:PREVIEW_LIMIT]:
        print(f"  {old:<40} -> {new}")
    if len(names) > PREVIEW_LIMIT:
        print(f"  ... and {len(names) - PREVIEW_LIMIT} more files")
    print("-" * 80)


def cmd_preview(args) -> int:
    """Handle preview command"""
    files = _gather(args)
    if not files:
        print("No matching files found")
        return 0

    steps = args.steps or []
    names = [f.name for f in files]
    _print_preview(names, plan_names(names, steps))
    return 0


def cmd_process(args) -> int:
    """Handle process command"""
    destination = Path(args.dest).expanduser().resolve()

    files = _gather(args)
    if not files:
        print("No matching files found")
        return 0

    steps = args.steps or []
    names = [f.name for f in files]
    operation = Operation.MOVE if args.move else Operation.COPY
    collision = CollisionStrategy.OVERWRITE if args.overwrite else CollisionStrategy.UNIQUE_NAME

    print(f"Destination: {destination}")
    print(f"Will {operation.value} {len(files)} files ({collision.value.replace('_', ' ')} on collision):")
    _print_preview(names, plan_names(names, steps))

    if args.dry_run:
        print("\n[Preview mode] Will not actually execute")
        return 0

    if not args.yes:
        confirm = input("\nConfirm execution? (y/N): ").strip().lower()
        if confirm != 'y':
            print("Cancelled")
            return 0

    options = ProcessingOptions(
        operation=operation,
        collision=collision,
        log_dir=Path(args.log_dir) if args.log_dir else None,
    )

    def progress_callback(current: int, total: int, msg: str):
        logger.info(f"[{current}/{total}] {msg}")

    print("\nExecuting...")
    result = run_batch(
        [SourceEntry(reference=f.path, file_name=f.name) for f in files],
        steps,
        destination,
        options=options,
        progress_callback=progress_callback,
    )
    print(result.summary())
    print(result.summary_message)

    return 0 if not result.has_errors else 1


def cmd_cleanup(args) -> int:
    """Handle cleanup command"""
    directory = Path(args.directory).expanduser().resolve()
    if not directory.is_dir():
        print(f"Error: Directory does not exist: {directory}")
        return 1

    count = cleanup_temp_files(directory)
    print(f"Removed {count} staging files")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    setup_logging(level)

    if args.command == "preview":
        return cmd_preview(args)
    elif args.command == "process":
        return cmd_process(args)
    elif args.command == "cleanup":
        return cmd_cleanup(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
