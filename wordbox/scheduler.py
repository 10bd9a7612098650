"""
Scheduler - Leitner Box Logic

Pure scheduling rules (no database calls, no prompts).

Main workflow (driven by the study loop):
1. Pick the next due card (store query, same policy as select_due)
2. Judge the answer (check_answer, plus an optional manual override)
3. Compute the new box and due date (review)
4. Write box and due back together (caller's responsibility)

Box model:
- success: box + 1, next review after 2 ** (box + 1) days (2, 4, 8, 16, ...)
- failure: box 0, next review after policy.fail_delay_days days
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

from wordbox.card import Card
from wordbox.config import IMMEDIATE_POLICY, SchedulePolicy
from wordbox.constants import FIRST_BOX, INTERVAL_BASE, MAX_BOX, Outcome

# Longest interval that still fits in a calendar date; larger ones end at date.max
MAX_INTERVAL_DAYS = (date.max - date.min).days


@dataclass(frozen=True)
class Review:
    """New scheduling state for a card after one review."""
    box: int
    due: date
    interval_days: int


def check_answer(expected: str, got: str) -> bool:
    """Exact, case-sensitive match. No trimming or normalisation."""
    return got == expected


def next_box(
    box: int,
    correct: bool,
    policy: SchedulePolicy = IMMEDIATE_POLICY
) -> Tuple[int, int]:
    """
    Apply the box update rule.

    The box is incremented before the interval is taken, so a success from
    box 0 lands in box 1 with a 2-day interval. From box 22 on, 2 ** box
    days no longer fits a calendar date and the interval is capped at
    MAX_INTERVAL_DAYS (the due date becomes date.max).

    Args:
        box: Current box (>= 0)
        correct: Review outcome
        policy: Supplies the failure interval

    Returns:
        Tuple of (new_box, interval_days)
    """
    if box < FIRST_BOX:
        raise ValueError(f"box must be >= {FIRST_BOX}, got {box}")

    if correct:
        new_box = min(box + 1, MAX_BOX)
        if new_box >= MAX_INTERVAL_DAYS.bit_length():
            return new_box, MAX_INTERVAL_DAYS
        return new_box, INTERVAL_BASE ** new_box

    return FIRST_BOX, policy.fail_delay_days


def due_after(today: date, interval_days: int) -> date:
    """Calendar-date arithmetic, no time of day. Clamped to date.max."""
    try:
        return today + timedelta(days=interval_days)
    except OverflowError:
        return date.max


def review(
    card: Card,
    outcome: Outcome | bool,
    today: date,
    policy: SchedulePolicy = IMMEDIATE_POLICY
) -> Review:
    """
    Compute a card's next state.

    `today` must be the same date that was used to select the card,
    otherwise cards can be skipped or shown twice around midnight.

    Args:
        card: The reviewed card (not modified)
        outcome: Outcome or plain bool
        today: Anchor date for the new due date
        policy: Scheduling policy

    Returns:
        Review with the new box, due date and interval
    """
    box, interval = next_box(card.box, bool(outcome), policy)
    return Review(box=box, due=due_after(today, interval), interval_days=interval)


def first_due(today: date, policy: SchedulePolicy = IMMEDIATE_POLICY) -> date:
    """Due date for a card added today."""
    return due_after(today, policy.new_delay_days)


def select_due(cards: Iterable[Card], today: date) -> Optional[Card]:
    """
    Pick the next card to review from an in-memory pool.

    Same order as WordStore.next_due: lowest id among due cards.

    Returns:
        The card, or None when nothing is due ("done for today")
    """
    due = [card for card in cards if card.is_due(today)]
    if not due:
        return None
    return min(due, key=lambda c: c.id)
