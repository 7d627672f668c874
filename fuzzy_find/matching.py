"""Fuzzy alignment of query patterns against candidate strings.

Matching is a constrained local alignment (Smith-Waterman family) over the
characters of the query and the candidate. Characters compare equal
case-insensitively. The score prefers, in order of weight:

1. contiguous runs of query characters,
2. characters at the beginning of words,
3. characters at camel-case humps,
4. the first query character landing on one of the above.

All else being equal, matches later in the candidate are preferred.

Computing the score table costs ``O(m * n**2)`` for a query of length ``m`` and a
candidate of length ``n``, which is fine for the short strings of interactive
pickers but not for long documents.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from fuzzy_find.models import Alignment, FuzzyResult, Segment
from fuzzy_find.score import ScoringPolicy

logger = logging.getLogger(__name__)

DEFAULT_POLICY = ScoringPolicy()


def _is_alnum(char: str) -> bool:
    return char.isalnum()


def _similarity(a: str, b: str, policy: ScoringPolicy) -> int:
    return policy.match if a.lower() == b.lower() else policy.mismatch


def _bonus_table(query: str, candidate: str, policy: ScoringPolicy) -> list[list[int]]:
    m = len(query)
    n = len(candidate)
    matches = [
        [_similarity(q, c, policy) > 0 for c in candidate] for q in query
    ]
    bonuses = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if not matches[i - 1][j - 1]:
                continue
            char = candidate[j - 1]
            previous = candidate[j - 2] if j > 1 else ""
            boundary = (
                policy.boundary_bonus
                if j == 1 or (_is_alnum(char) and not _is_alnum(previous))
                else 0
            )
            camel = (
                policy.camel_case_bonus
                if j > 1 and previous.islower() and char.isupper()
                else 0
            )
            multiplier = policy.first_char_bonus_multiplier if i == 1 else 1
            after_match = i > 1 and j > 1 and matches[i - 2][j - 2]
            before_match = i < m and j < n and matches[i][j]
            consecutive = policy.consecutive_bonus if after_match or before_match else 0
            bonuses[i][j] = multiplier * (boundary + camel + consecutive)
    return bonuses


def _score_table(
    query: str,
    candidate: str,
    policy: ScoringPolicy,
    bonuses: list[list[int]],
) -> list[list[int]]:
    m = len(query)
    n = len(candidate)
    penalties = [0] + [policy.gap_penalty(length) for length in range(1, n + 1)]
    scores = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row = scores[i]
        above = scores[i - 1]
        for j in range(1, n + 1):
            extend = (
                above[j - 1]
                + _similarity(query[i - 1], candidate[j - 1], policy)
                + bonuses[i][j]
            )
            gap = max(row[j - length] - penalties[length] for length in range(1, j + 1))
            row[j] = max(extend, gap, 0)
    return scores


def _traceback(
    query: str, candidate: str, end: int, policy: ScoringPolicy
) -> FuzzyResult | None:
    i = len(query)
    j = end
    reversed_segments: list[Segment] = []
    while True:
        if i == 0:
            reversed_segments.append(Segment("gap", candidate[:j]))
            break
        if j == 0:
            return None
        char = candidate[j - 1]
        if _similarity(query[i - 1], char, policy) > 0:
            reversed_segments.append(Segment("match", char))
            i -= 1
        else:
            reversed_segments.append(Segment("gap", char))
        j -= 1

    reversed_segments.reverse()
    reversed_segments.append(Segment("gap", candidate[end:]))
    return FuzzyResult.from_segments(reversed_segments)


def best_match(
    query: str,
    candidate: str,
    policy: ScoringPolicy | None = None,
) -> Alignment | None:
    """Find the best alignment of ``query`` inside ``candidate``.

    Returns ``None`` when the characters of ``query`` cannot be found, in order
    and ignoring case, inside ``candidate``. Otherwise the alignment's result
    covers the whole candidate: matched characters in order of the query, and
    gaps for everything else.
    """
    policy = policy or DEFAULT_POLICY
    m = len(query)
    n = len(candidate)
    if n == 0:
        return Alignment.empty() if m == 0 else None

    bonuses = _bonus_table(query, candidate, policy)
    scores = _score_table(query, candidate, policy, bonuses)

    def total(j: int) -> int:
        return scores[m][j] + bonuses[m][j]

    end = 1
    for j in range(2, n + 1):
        if total(j) >= total(end):
            end = j

    result = _traceback(query, candidate, end, policy)
    if result is None:
        return None
    return Alignment(score=total(end), result=result)


align = best_match


def match_all(
    queries: Iterable[str],
    candidate: str,
    policy: ScoringPolicy | None = None,
) -> Alignment | None:
    """Align every query against ``candidate`` and combine the results.

    All queries must match. Scores are summed and a character is matched in the
    combined result if any query matched it.
    """
    combined = Alignment.empty()
    for query in queries:
        alignment = best_match(query, candidate, policy)
        if alignment is None:
            return None
        combined = combined.combine(alignment)
    return combined


def fuzzy_find(
    queries: Sequence[str],
    candidates: Iterable[str],
    policy: ScoringPolicy | None = None,
) -> list[Alignment]:
    """Return an alignment for every candidate matching all ``queries``.

    Results are sorted by descending score.
    """
    total_candidates = 0
    alignments: list[Alignment] = []
    for candidate in candidates:
        total_candidates += 1
        alignment = match_all(queries, candidate, policy)
        if alignment is not None:
            alignments.append(alignment)

    logger.debug(
        "Matched %d of %d candidates for queries %r",
        len(alignments),
        total_candidates,
        queries,
    )
    return sorted(alignments, key=lambda alignment: alignment.score, reverse=True)


search = fuzzy_find
