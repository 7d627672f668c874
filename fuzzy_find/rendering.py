from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text

from fuzzy_find.models import Alignment

MATCH_STYLE = "bold red"
SCORE_STYLE = "dim"


def highlight_alignment(alignment: Alignment, *, style: str = MATCH_STYLE) -> Text:
    text = Text(alignment.text)
    for start, end in alignment.result.highlighted_ranges():
        text.stylize(style, start, end)
    return text


def format_result_line(
    alignment: Alignment,
    *,
    show_score: bool = False,
    score_width: int = 5,
    style: str = MATCH_STYLE,
) -> Text:
    line = highlight_alignment(alignment, style=style)
    if not show_score:
        return line
    return Text.assemble((f"{alignment.score:>{score_width}}", SCORE_STYLE), " ", line)


def render_results(
    alignments: Iterable[Alignment],
    *,
    limit: int | None = None,
    show_score: bool = False,
) -> list[Text]:
    rendered: list[Text] = []
    alignments = list(alignments)
    if limit is not None:
        alignments = alignments[: max(0, limit)]
    if not alignments:
        return rendered

    score_width = max(len(str(alignment.score)) for alignment in alignments)
    for alignment in alignments:
        rendered.append(
            format_result_line(
                alignment, show_score=show_score, score_width=score_width
            )
        )
    return rendered
