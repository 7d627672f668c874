from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass


def default_gap_penalty(length: int) -> int:
    return 3 if length == 1 else max(0, length + 3)


DEFAULT_MATCH = 16
DEFAULT_MISMATCH = 0
DEFAULT_BOUNDARY_BONUS = DEFAULT_MATCH // 2
DEFAULT_CAMEL_CASE_BONUS = DEFAULT_BOUNDARY_BONUS - 1
DEFAULT_FIRST_CHAR_BONUS_MULTIPLIER = 2
DEFAULT_CONSECUTIVE_BONUS = default_gap_penalty(8)


@dataclass(frozen=True)
class ScoringPolicy:
    """Weights used when aligning a query against a candidate.

    ``gap_penalty`` maps the length of a skipped run of candidate characters to
    its cost. It is expected to be non-decreasing; this is not checked.
    """

    match: int = DEFAULT_MATCH
    mismatch: int = DEFAULT_MISMATCH
    gap_penalty: Callable[[int], int] = default_gap_penalty
    boundary_bonus: int = DEFAULT_BOUNDARY_BONUS
    camel_case_bonus: int = DEFAULT_CAMEL_CASE_BONUS
    first_char_bonus_multiplier: int = DEFAULT_FIRST_CHAR_BONUS_MULTIPLIER
    consecutive_bonus: int = DEFAULT_CONSECUTIVE_BONUS

    def with_overrides(self, **overrides: int | None) -> ScoringPolicy:
        """Return a copy with every non-``None`` override applied."""
        changes = {
            name: value for name, value in overrides.items() if value is not None
        }
        if not changes:
            return self
        return dataclasses.replace(self, **changes)
