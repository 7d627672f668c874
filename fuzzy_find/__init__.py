from __future__ import annotations

from fuzzy_find.matching import align, best_match, fuzzy_find, match_all, search
from fuzzy_find.models import Alignment, FuzzyResult, Segment
from fuzzy_find.score import ScoringPolicy, default_gap_penalty

__version__ = "0.1.0"

__all__ = [
    "Alignment",
    "FuzzyResult",
    "ScoringPolicy",
    "Segment",
    "__version__",
    "align",
    "best_match",
    "default_gap_penalty",
    "fuzzy_find",
    "match_all",
    "search",
]
