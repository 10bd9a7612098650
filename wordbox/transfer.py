"""
Bulk transfer - CSV export/import of the whole card set.

Record layout (no header row):

    front,back,box,due

Import is partial-failure: a bad record (wrong field count, bad box or date,
broken quoting) is reported with its line number and skipped, the rest of
the file is still imported. Input that is not valid text stops the import;
the command line decodes stdin with replacement characters to avoid that.
"""

from __future__ import annotations

import csv
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from wordbox.card import InvalidRecord, parse_record
from wordbox.database import WordStore


@dataclass
class ImportResult:
    imported: int = 0
    skipped: int = 0


def export_cards(store: WordStore, stream: TextIO) -> int:
    """
    Write every card as CSV, in creation order, values unchanged.

    Returns:
        Number of records written
    """
    writer = csv.writer(stream, lineterminator="\n")
    written = 0
    for card in store.all_cards():
        writer.writerow(card.as_record())
        written += 1
    return written


def import_cards(
    store: WordStore,
    stream: TextIO,
    errors: Optional[TextIO] = None
) -> ImportResult:
    """
    Read CSV records and insert them with their exact box and due date.

    Args:
        store: Target store
        stream: CSV input
        errors: Where diagnostics go (default: stderr)

    Returns:
        ImportResult with imported/skipped counts
    """
    errors = errors if errors is not None else sys.stderr
    result = ImportResult()

    reader = csv.reader(stream, strict=True)
    while True:
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            # The reader starts a fresh record on the next call
            print(f"invalid record on line {reader.line_num}: {e}", file=errors)
            result.skipped += 1
            continue
        except UnicodeDecodeError as e:
            # Undecodable bytes leave the stream position unknown
            print(f"cannot decode input after line {reader.line_num}: {e}", file=errors)
            result.skipped += 1
            break

        if not fields:
            continue

        try:
            record = parse_record(fields)
        except InvalidRecord as e:
            print(f"invalid record on line {reader.line_num}: {e}", file=errors)
            result.skipped += 1
            continue

        store.insert(record.front, record.back, record.box, record.due)
        result.imported += 1

    return result
