"""
Constants and Defaults

All fixed values for the Leitner scheduler and the command line in one place.
"""

from enum import IntEnum


# ---- Review Outcome ----

class Outcome(IntEnum):
    """Result of a single review."""
    WRONG = 0    # Reset to box 0
    CORRECT = 1  # Advance one box


# ---- Scheduling Defaults ----

FIRST_BOX = 0            # Box assigned to new cards and after a failed review
INTERVAL_BASE = 2        # Interval after success = INTERVAL_BASE ** new_box days
FAIL_DELAY_DAYS = 0      # Days until a failed card is due again (0 = today)
NEW_DELAY_DAYS = 0       # Days until a new card is first due (0 = today)
MAX_BOX = 2 ** 63 - 1    # Largest value a SQLite INTEGER column can hold


# ---- Environment Variables ----

ENV_FAIL_DELAY = "WORD_FAIL_DELAY_DAYS"
ENV_NEW_DELAY = "WORD_NEW_DELAY_DAYS"


# ---- Transfer Format ----

TRANSFER_FIELDS = ("front", "back", "box", "due")


# ---- Exit Codes ----

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_STORE_ERROR = 2
