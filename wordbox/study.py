"""
Study loop.

Repeatedly:
1. Ask the store for the next due card (anchored on the store's today)
2. Show the front and read the answer
3. Judge it (exact match, or the learner's own override)
4. Move the card to its new box/due date in one write

Ends when nothing is due or the operator closes input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from wordbox import scheduler
from wordbox.card import Card
from wordbox.constants import Outcome
from wordbox.database import WordStore
from wordbox.line import LineInterface

DONE_MESSAGE = "Done for today!"


@dataclass
class SessionSummary:
    reviewed: int = 0
    correct: int = 0
    finished: bool = False  # True when no card was left due


def determine_outcome(card: Card, line: LineInterface) -> Optional[Outcome]:
    """
    Present a card and turn the learner's response into an Outcome.

    An exact answer is correct with no further question. Otherwise the
    expected answer is shown and the learner decides whether to advance
    anyway (default: no).

    Returns:
        Outcome, or None if input ended
    """
    got = line.read(card.front)
    if got is None:
        return None

    if scheduler.check_answer(card.back, got):
        line.say("Correct!")
        return Outcome.CORRECT

    line.say(f"Wanted: {card.back}")
    advance = line.confirm("Advance", False)
    if advance is None:
        return None
    return Outcome.CORRECT if advance else Outcome.WRONG


def study(store: WordStore, line: LineInterface) -> SessionSummary:
    """
    Run a review session until nothing is due or input ends.

    Args:
        store: Open word store (its policy supplies the failure interval)
        line: Operator interface

    Returns:
        SessionSummary
    """
    summary = SessionSummary()

    while True:
        today = store.today()
        card = store.next_due(today)
        if card is None:
            line.say(DONE_MESSAGE)
            summary.finished = True
            return summary

        outcome = determine_outcome(card, line)
        if outcome is None:
            return summary

        result = scheduler.review(card, outcome, today, store.policy)
        store.update(card.id, result.box, result.due)

        summary.reviewed += 1
        if outcome is Outcome.CORRECT:
            summary.correct += 1


def add_words(store: WordStore, line: LineInterface) -> int:
    """
    Prompt for front/back pairs until input ends.

    Returns:
        Number of words added
    """
    added = 0
    while True:
        front = line.read("Front")
        if front is None:
            return added
        back = line.read("Back")
        if back is None:
            return added
        store.add(front, back)
        added += 1
