"""
Command line entry point.

Usage:
    word new FILE      create new database
    word add FILE      add words to database
    word export FILE   export database (writes to stdout)
    word import FILE   import database (reads from stdin)
    word FILE          study

Exit status: 0 on success (including "done for today" and end of input),
1 for a usage error, 2 for a store error.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from wordbox import transfer
from wordbox.config import SchedulePolicy, load_policy
from wordbox.constants import EXIT_OK, EXIT_STORE_ERROR, EXIT_USAGE
from wordbox.database import StoreError, WordStore
from wordbox.line import LineInterface
from wordbox.study import add_words, study

USAGE = """\
Usage:
  word new FILE      create new database
  word add FILE      add words to database
  word export FILE   export database (writes to stdout)
  word import FILE   import database (reads from stdin)
  word FILE          study
"""

COMMANDS = ("new", "add", "export", "import")


class UsageError(Exception):
    """Bad command line."""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports errors as UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="word",
        usage="%(prog)s [--fail-delay DAYS] [--new-delay DAYS] [new|add|export|import] FILE",
        description="Leitner-box vocabulary trainer",
        epilog=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True
    )
    parser.add_argument(
        "command",
        help="new, add, export, import, or the database FILE to study"
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Database file"
    )
    parser.add_argument(
        "--fail-delay",
        type=int,
        metavar="DAYS",
        help="Days until a failed card is due again (default: $WORD_FAIL_DELAY_DAYS or 0)"
    )
    parser.add_argument(
        "--new-delay",
        type=int,
        metavar="DAYS",
        help="Days until a new card is first due (default: $WORD_NEW_DELAY_DAYS or 0)"
    )
    return parser


def run_command(
    command: str,
    path: str,
    policy: SchedulePolicy,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO
) -> int:
    """Run one command against the store at `path`. StoreError propagates."""
    line = LineInterface(stdin, stdout)

    if command == "new":
        with WordStore.create(path, policy=policy):
            pass
        return EXIT_OK

    with WordStore.open(path, policy=policy) as store:
        if command == "add":
            add_words(store, line)
        elif command == "export":
            transfer.export_cards(store, stdout)
        elif command == "import":
            reconfigure = getattr(stdin, "reconfigure", None)
            if reconfigure is not None:
                reconfigure(errors="replace")
            result = transfer.import_cards(store, stdin, errors=stderr)
            marker = "✓" if result.skipped == 0 else "⚠"
            print(f"{marker} Imported {result.imported} words, skipped {result.skipped}", file=stderr)
        else:
            summary = study(store, line)
            if summary.reviewed:
                print(f"✓ Reviewed {summary.reviewed} words, {summary.correct} correct", file=stdout)

    return EXIT_OK


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None
) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    try:
        args = build_parser().parse_args(argv)
        if args.file is None:
            if args.command in COMMANDS:
                raise UsageError(f"missing FILE for {args.command}")
            command, path = "study", args.command
        elif args.command in COMMANDS:
            command, path = args.command, args.file
        else:
            raise UsageError(f"unknown command: {args.command}")

        policy = load_policy(fail_delay_days=args.fail_delay, new_delay_days=args.new_delay)
    except (UsageError, ValueError) as e:
        print(USAGE, end="", file=stderr)
        print(f"error: {e}", file=stderr)
        return EXIT_USAGE

    try:
        return run_command(command, path, policy, stdin, stdout, stderr)
    except StoreError as e:
        print(f"error: {e}", file=stderr)
        return EXIT_STORE_ERROR

