"""
wordbox - Leitner-box vocabulary trainer

Stores front/back word pairs in SQLite and schedules reviews with a fixed
exponential box model: every correct answer moves a card up one box and
doubles its interval, every wrong answer sends it back to box 0.

Quick start:
    from wordbox import WordStore, LineInterface, study

    with WordStore.create("words.db") as store:
        store.add("huis", "house")

    with WordStore.open("words.db") as store:
        study(store, LineInterface())
"""

# Scheduling rules (no I/O)
from wordbox.scheduler import (
    Review,
    check_answer,
    due_after,
    first_due,
    next_box,
    review,
    select_due,
)

# Data and configuration
from wordbox.card import Card, InvalidRecord, TransferRecord, parse_record
from wordbox.config import IMMEDIATE_POLICY, NEXT_DAY_POLICY, SchedulePolicy, load_policy
from wordbox.constants import Outcome

# Store, transfer and operator I/O
from wordbox.database import StoreError, WordStore
from wordbox.transfer import ImportResult, export_cards, import_cards
from wordbox.line import LineInterface
from wordbox.study import SessionSummary, add_words, determine_outcome, study


__all__ = [
    # Core algorithm
    "Review",
    "check_answer",
    "due_after",
    "first_due",
    "next_box",
    "review",
    "select_due",

    # Data
    "Card",
    "InvalidRecord",
    "TransferRecord",
    "parse_record",
    "Outcome",

    # Configuration
    "SchedulePolicy",
    "IMMEDIATE_POLICY",
    "NEXT_DAY_POLICY",
    "load_policy",

    # Store and transfer
    "StoreError",
    "WordStore",
    "ImportResult",
    "export_cards",
    "import_cards",

    # Operator
    "LineInterface",
    "SessionSummary",
    "add_words",
    "determine_outcome",
    "study",
]
