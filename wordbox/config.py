"""
Configuration - scheduling policy.

The tool has two historical behaviours that differ in two offsets:

- how many days a failed card waits before it is due again
- how many days a freshly added card waits before its first review

Both are explicit settings here. The default is the immediate policy (0/0);
``NEXT_DAY_POLICY`` reproduces the older next-day variant.

Values are read from the environment (a ``.env`` file is honoured through
python-dotenv) and may be overridden by command line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from wordbox.constants import (
    ENV_FAIL_DELAY,
    ENV_NEW_DELAY,
    FAIL_DELAY_DAYS,
    NEW_DELAY_DAYS,
)


@dataclass(frozen=True)
class SchedulePolicy:
    """Offsets (in days) that are not fixed by the box model."""
    fail_delay_days: int = FAIL_DELAY_DAYS
    new_delay_days: int = NEW_DELAY_DAYS

    def __post_init__(self):
        for name in ("fail_delay_days", "new_delay_days"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")


IMMEDIATE_POLICY = SchedulePolicy()
NEXT_DAY_POLICY = SchedulePolicy(fail_delay_days=1, new_delay_days=1)


def _days_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer number of days, got {raw!r}") from None


def load_policy(
    fail_delay_days: Optional[int] = None,
    new_delay_days: Optional[int] = None,
    use_dotenv: bool = True
) -> SchedulePolicy:
    """
    Build the scheduling policy.

    Precedence: explicit arguments (command line flags), then environment
    variables, then the built-in defaults.

    Args:
        fail_delay_days: Override for the failure interval
        new_delay_days: Override for the creation offset
        use_dotenv: If True, load a .env file before reading the environment

    Returns:
        SchedulePolicy

    Raises:
        ValueError: If a value is not a non-negative integer
    """
    if use_dotenv:
        load_dotenv()

    policy = SchedulePolicy(
        fail_delay_days=_days_from_env(ENV_FAIL_DELAY, FAIL_DELAY_DAYS),
        new_delay_days=_days_from_env(ENV_NEW_DELAY, NEW_DELAY_DAYS),
    )

    if fail_delay_days is not None:
        policy = replace(policy, fail_delay_days=fail_delay_days)
    if new_delay_days is not None:
        policy = replace(policy, new_delay_days=new_delay_days)

    return policy
