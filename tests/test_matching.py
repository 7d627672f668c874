import logging

import pytest

from fuzzy_find import align, best_match, fuzzy_find, match_all, search
from fuzzy_find.models import Alignment, FuzzyResult, Segment
from fuzzy_find.score import ScoringPolicy


def _matched_text(alignment: Alignment) -> str:
    return "".join(
        segment.text for segment in alignment.result.segments if segment.is_match
    )


def test_best_match_finds_characters_case_insensitively() -> None:
    actual = best_match("ff", "FuzzyFind")

    assert actual == Alignment(
        score=55,
        result=FuzzyResult(
            segments=(
                Segment("match", "F"),
                Segment("gap", "uzzy"),
                Segment("match", "F"),
                Segment("gap", "ind"),
            )
        ),
    )
    assert actual.result.highlighted_ranges() == [(0, 1), (5, 6)]


def test_align_is_best_match() -> None:
    assert align is best_match
    assert search is fuzzy_find


def test_contiguous_characters_have_higher_score() -> None:
    a1 = best_match("pp", "pickled pepper")
    a2 = best_match("pp", "Pied Piper")

    assert a1 is not None and a2 is not None
    assert a1.score > a2.score


def test_characters_at_beginning_of_words_have_higher_score() -> None:
    a1 = best_match("pp", "Pied Piper")
    a2 = best_match("pp", "porcupine")

    assert a1 is not None and a2 is not None
    assert a1.score > a2.score


def test_camel_case_humps_have_higher_score() -> None:
    a1 = best_match("bm", "BatMan")
    a2 = best_match("bm", "Batman")

    assert a1 is not None and a2 is not None
    assert a1.score > a2.score


def test_first_letters_of_words_have_higher_score() -> None:
    a1 = best_match("bm", "Bat man")
    a2 = best_match("bm", "Batman")

    assert a1 is not None and a2 is not None
    assert a1.score > a2.score


def test_camel_case_preference_follows_policy() -> None:
    policy = ScoringPolicy(camel_case_bonus=0)

    a1 = best_match("bm", "BatMan", policy)
    a2 = best_match("bm", "Batman", policy)

    assert a1 is not None and a2 is not None
    assert a1.score == a2.score == 43


def test_best_match_returns_none_when_query_is_missing() -> None:
    assert best_match("xyz", "abc") is None
    assert best_match("ba", "ab") is None
    assert best_match("a", "") is None


def test_best_match_prefers_later_end_position_on_ties() -> None:
    actual = best_match("a", "x-a-a")

    assert actual is not None
    assert actual.score == 48
    assert actual.result.segments == (
        Segment("gap", "x-a-"),
        Segment("match", "a"),
    )


def test_empty_query_matches_as_single_gap() -> None:
    actual = best_match("", "anything")

    assert actual == Alignment(score=0, result=FuzzyResult.gaps("anything"))
    assert best_match("", "") == Alignment.empty()


@pytest.mark.parametrize(
    ("query", "candidate"),
    [
        ("ff", "FuzzyFind"),
        ("pp", "pickled pepper"),
        ("pp", "Pied Piper"),
        ("bm", "Bat man"),
        ("src", "fuzzy_find/__main__.py/src"),
        ("abc", "a-b_c abc ABC"),
        ("mtch", "fuzzy_find/matching.py"),
    ],
)
def test_result_reconstructs_candidate_and_keeps_query_order(
    query: str, candidate: str
) -> None:
    actual = best_match(query, candidate)

    assert actual is not None
    assert actual.result.text == candidate
    assert _matched_text(actual).lower() == query.lower()
    kinds = [segment.kind for segment in actual.result.segments]
    assert all(left != right for left, right in zip(kinds, kinds[1:]))
    assert all(segment.text for segment in actual.result.segments)


def test_match_all_sums_scores_and_merges_results() -> None:
    bat = best_match("bat", "BatMan")
    man = best_match("man", "BatMan")
    assert bat is not None and man is not None

    actual = match_all(["bat", "man"], "BatMan")

    assert actual is not None
    assert actual.score == bat.score + man.score
    assert actual.result.segments == (Segment("match", "BatMan"),)


def test_match_all_fails_when_any_query_is_missing() -> None:
    assert match_all(["bat", "xyz"], "BatMan") is None


def test_match_all_without_queries_is_empty_alignment() -> None:
    assert match_all([], "BatMan") == Alignment.empty()


def test_fuzzy_find_drops_non_matches_and_sorts_by_score() -> None:
    candidates = ["porcupine", "Pied Piper", "xyz", "pickled pepper"]

    results = fuzzy_find(["pp"], candidates)

    assert [result.text for result in results] == [
        "pickled pepper",
        "Pied Piper",
        "porcupine",
    ]
    assert "xyz" not in {result.text for result in results}
    scores = [result.score for result in results]
    assert scores == sorted(scores, reverse=True)


def test_fuzzy_find_requires_every_query() -> None:
    candidates = ["fuzzy_find/matching.py", "fuzzy_find/models.py", "README.md"]

    results = fuzzy_find(["fz", "mat"], candidates)

    assert [result.text for result in results] == ["fuzzy_find/matching.py"]
    for result in results:
        for query in ["fz", "mat"]:
            assert best_match(query, result.text) is not None


def test_fuzzy_find_logs_queries_as_given(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="fuzzy_find.matching")

    fuzzy_find(("pp",), ["Pied Piper", "xyz"])

    assert "Matched 1 of 2 candidates for queries ('pp',)" in caplog.text
