"""
Card - the unit of study.

A card is (front, back) plus the scheduling state (box, due).
Only the current state is kept; there is no review history.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from pydantic import BaseModel, Field, ValidationError, field_validator

from wordbox.constants import MAX_BOX, TRANSFER_FIELDS

_INTEGER = re.compile(r"[+-]?[0-9]+")
_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass
class Card:
    """
    A stored word pair and its Leitner state.

    box and due are only ever changed together (see WordStore.update).
    """
    id: int
    front: str
    back: str
    box: int
    due: date

    def is_due(self, today: date) -> bool:
        """A card is due on its due date and every day after it."""
        return self.due <= today

    def as_record(self) -> tuple[str, str, str, str]:
        """Flat transfer record: front, back, box, due."""
        return (self.front, self.back, str(self.box), self.due.isoformat())


# ---- Transfer Records ----

class InvalidRecord(ValueError):
    """A bulk transfer record that cannot be turned into a card."""


class TransferRecord(BaseModel):
    """One validated export/import record."""
    front: str
    back: str
    box: int = Field(..., ge=0, le=MAX_BOX, description="Leitner box, 0 for new cards")
    due: date = Field(..., description="Due date, YYYY-MM-DD")

    @field_validator("box", mode="before")
    @classmethod
    def _parse_box(cls, value):
        if isinstance(value, str):
            if not _INTEGER.fullmatch(value):
                raise ValueError("not a number")
            return int(value)
        return value

    @field_validator("due", mode="before")
    @classmethod
    def _parse_due(cls, value):
        if isinstance(value, str):
            if not _ISO_DATE.fullmatch(value):
                raise ValueError("invalid date")
            return date.fromisoformat(value)
        return value


_REASONS = {
    "box": "not a number",
    "due": "invalid date",
}


def parse_record(fields: Sequence[str]) -> TransferRecord:
    """
    Validate a raw CSV record.

    Args:
        fields: The record's fields, exactly front, back, box, due

    Returns:
        TransferRecord

    Raises:
        InvalidRecord: Wrong field count, bad box or bad date
    """
    if len(fields) != len(TRANSFER_FIELDS):
        raise InvalidRecord(f"expected {len(TRANSFER_FIELDS)} fields, got {len(fields)}")

    try:
        return TransferRecord(**dict(zip(TRANSFER_FIELDS, fields)))
    except ValidationError as e:
        error = e.errors()[0]
        field = error["loc"][0] if error["loc"] else ""
        value = error.get("input")
        if error["type"] == "greater_than_equal":
            reason = "negative box"
        elif error["type"] == "less_than_equal":
            reason = "box too large"
        else:
            reason = _REASONS.get(field, error["msg"])
        raise InvalidRecord(f"{reason}: {value!r}") from None
