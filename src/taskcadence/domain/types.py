"""Rule kinds and their single-letter tokens."""

from __future__ import annotations

from enum import StrEnum


class RuleKind(StrEnum):
    """First token of a recurrence rule."""

    INTERVAL = "d"
    YEARLY = "y"
    WEEKLY = "w"
    MONTHLY = "m"
