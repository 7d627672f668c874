from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from fuzzy_find import __version__
from fuzzy_find.matching import fuzzy_find
from fuzzy_find.rendering import render_results
from fuzzy_find.score import ScoringPolicy
from fuzzy_find.tui import FuzzyFindTui

__all__ = [
    "FuzzyFindTui",
    "cli",
    "run",
]

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"fuzzy-find {__version__}")
    raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def read_candidates(input_file: Path | None) -> list[str]:
    if input_file is None:
        lines = sys.stdin.read().splitlines()
    else:
        lines = input_file.read_text(encoding="utf-8").splitlines()
    return [line for line in lines if line.strip()]


cli = typer.Typer(
    add_completion=False,
    help="Rank lines of text by how well they fuzzy-match the given queries.",
)


@cli.command()
def run(
    queries: list[str] | None = typer.Argument(
        None,
        help="Query terms. Every term must match a candidate for it to be listed.",
        show_default=False,
    ),
    input_file: Path | None = typer.Option(
        None,
        "--input",
        "-f",
        help="Read candidates from this file instead of standard input.",
        dir_okay=False,
    ),
    limit: int | None = typer.Option(
        None,
        "--limit",
        "-n",
        min=0,
        help="Print at most this many results.",
    ),
    show_scores: bool = typer.Option(
        False,
        "--scores",
        "-s",
        help="Prefix every result with its score.",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Pick a candidate in an interactive fuzzy finder.",
    ),
    match: int | None = typer.Option(
        None,
        "--match",
        envvar="FUZZY_FIND_MATCH",
        help="Score for a matching character.",
    ),
    mismatch: int | None = typer.Option(
        None,
        "--mismatch",
        envvar="FUZZY_FIND_MISMATCH",
        help="Score for a mismatching character.",
    ),
    boundary_bonus: int | None = typer.Option(
        None,
        "--boundary-bonus",
        envvar="FUZZY_FIND_BOUNDARY_BONUS",
        help="Bonus for a match at the start of a word.",
    ),
    camel_case_bonus: int | None = typer.Option(
        None,
        "--camel-case-bonus",
        envvar="FUZZY_FIND_CAMEL_CASE_BONUS",
        help="Bonus for a match at a camel-case hump.",
    ),
    first_char_bonus_multiplier: int | None = typer.Option(
        None,
        "--first-char-multiplier",
        envvar="FUZZY_FIND_FIRST_CHAR_MULTIPLIER",
        help="Multiplier applied to the bonus of the first query character.",
    ),
    consecutive_bonus: int | None = typer.Option(
        None,
        "--consecutive-bonus",
        envvar="FUZZY_FIND_CONSECUTIVE_BONUS",
        help="Bonus for consecutive matching characters.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to standard error.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _configure_logging(verbose)
    queries = queries or []
    if not queries and not interactive:
        typer.echo("Provide at least one query, or use --interactive.", err=True)
        raise typer.Exit(code=1)
    if interactive and input_file is None:
        # The picker needs standard input for the terminal.
        typer.echo("--interactive reads candidates from --input.", err=True)
        raise typer.Exit(code=1)

    policy = ScoringPolicy().with_overrides(
        match=match,
        mismatch=mismatch,
        boundary_bonus=boundary_bonus,
        camel_case_bonus=camel_case_bonus,
        first_char_bonus_multiplier=first_char_bonus_multiplier,
        consecutive_bonus=consecutive_bonus,
    )
    logger.debug("Using scoring policy %s", policy)

    try:
        candidates = read_candidates(input_file)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Failed to read candidates: {exc!s}", err=True)
        raise typer.Exit(code=1) from exc

    if not candidates:
        typer.echo("No candidates to search.", err=True)
        raise typer.Exit(code=1)

    if interactive:
        selected = FuzzyFindTui(
            candidates,
            query=" ".join(queries),
            policy=policy,
        ).run()
        if selected is None:
            raise typer.Exit(code=1)
        typer.echo(selected)
        return

    alignments = fuzzy_find(queries, candidates, policy)
    if not alignments:
        raise typer.Exit(code=1)

    console = Console(highlight=False)
    for line in render_results(alignments, limit=limit, show_score=show_scores):
        console.print(line, soft_wrap=True)


if __name__ == "__main__":
    cli()
