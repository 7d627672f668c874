from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

SegmentKind = Literal["gap", "match"]


@dataclass(frozen=True)
class Segment:
    kind: SegmentKind
    text: str

    def __len__(self) -> int:
        return len(self.text)

    @property
    def is_match(self) -> bool:
        return self.kind == "match"

    @property
    def markers(self) -> str:
        return ("*" if self.is_match else " ") * len(self.text)


def _coalesce(segments: Iterable[Segment]) -> tuple[Segment, ...]:
    coalesced: list[Segment] = []
    for segment in segments:
        if not segment.text:
            continue
        if coalesced and coalesced[-1].kind == segment.kind:
            coalesced[-1] = Segment(segment.kind, coalesced[-1].text + segment.text)
        else:
            coalesced.append(segment)
    return tuple(coalesced)


def _drop(runs: deque[Segment], count: int) -> None:
    while count > 0 and runs:
        head = runs.popleft()
        if count < len(head):
            runs.appendleft(Segment(head.kind, head.text[count:]))
            return
        count -= len(head)


@dataclass(frozen=True)
class FuzzyResult:
    """Partition of a candidate string into alternating gap and match runs."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> FuzzyResult:
        return cls(_coalesce(segments))

    @classmethod
    def gaps(cls, text: str) -> FuzzyResult:
        return cls.from_segments([Segment("gap", text)])

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)

    @property
    def markers(self) -> str:
        return "".join(segment.markers for segment in self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def combine(self, other: FuzzyResult) -> FuzzyResult:
        return FuzzyResult.from_segments(self.segments + other.segments)

    def merge(self, other: FuzzyResult) -> FuzzyResult:
        """Merge two classifications of the same string.

        A character is matched in the merged result when it is matched in at
        least one of the inputs. Both sides are consumed run by run, so the
        cost is proportional to the number of segments.
        """
        if not self.segments:
            return other
        if not other.segments:
            return self

        left = deque(self.segments)
        right = deque(other.segments)
        merged: list[Segment] = []
        while left and right:
            head_left = left[0]
            head_right = right[0]
            # Gaps keep the shorter run, matches keep the longer one.
            if head_left.kind != head_right.kind:
                take_left = head_left.is_match
            elif head_left.is_match:
                take_left = len(head_left) >= len(head_right)
            else:
                take_left = len(head_left) <= len(head_right)

            if take_left:
                merged.append(left.popleft())
                _drop(right, len(merged[-1]))
            else:
                merged.append(right.popleft())
                _drop(left, len(merged[-1]))

        merged.extend(left)
        merged.extend(right)
        return FuzzyResult.from_segments(merged)

    def highlighted_ranges(self) -> list[tuple[int, int]]:
        """Return half-open ``(start, end)`` offsets of every matched run."""
        ranges: list[tuple[int, int]] = []
        offset = 0
        for segment in self.segments:
            end = offset + len(segment)
            if segment.is_match:
                ranges.append((offset, end))
            offset = end
        return ranges


@dataclass(frozen=True)
class Alignment:
    score: int
    result: FuzzyResult

    @classmethod
    def empty(cls) -> Alignment:
        return cls(score=0, result=FuzzyResult())

    @property
    def text(self) -> str:
        return self.result.text

    def combine(self, other: Alignment) -> Alignment:
        return Alignment(
            score=self.score + other.score,
            result=self.result.merge(other.result),
        )

    def highlight(self) -> str:
        return f"{self.result.text}\n{self.result.markers}"
