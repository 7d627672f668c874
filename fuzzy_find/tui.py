from __future__ import annotations

from collections.abc import Iterable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.events import Key, Paste
from textual.widgets import OptionList, Static

from fuzzy_find.matching import fuzzy_find
from fuzzy_find.models import Alignment, FuzzyResult
from fuzzy_find.rendering import highlight_alignment
from fuzzy_find.score import ScoringPolicy


class FuzzyFindTui(App[str | None]):
    CSS_PATH = "picker.tcss"
    ENABLE_COMMAND_PALETTE = False
    BINDINGS = [
        Binding("escape", "escape", "Clear / Cancel"),
        Binding("ctrl+c", "quit", show=False),
    ]

    def __init__(
        self,
        candidates: Iterable[str],
        *,
        query: str = "",
        policy: ScoringPolicy | None = None,
    ) -> None:
        super().__init__()
        self.theme = "rose-pine"
        self._all_candidates: list[str] = list(candidates)
        self._policy = policy
        self._search_query = query
        self._visible_alignments: list[Alignment] = []
        self._rank_candidates()

    def compose(self) -> ComposeResult:
        with Vertical(id="picker"):
            yield OptionList(id="candidate-list")
            yield Static("", id="status")

    def on_mount(self) -> None:
        self.query_one("#candidate-list", OptionList).focus()
        self._refresh_view()

    @property
    def query_terms(self) -> list[str]:
        return self._search_query.split()

    def _rank_candidates(self) -> None:
        terms = self.query_terms
        if not terms:
            self._visible_alignments = [
                Alignment(score=0, result=FuzzyResult.gaps(candidate))
                for candidate in self._all_candidates
            ]
            return
        self._visible_alignments = fuzzy_find(
            terms, self._all_candidates, self._policy
        )

    def _filter_candidates(self) -> None:
        self._rank_candidates()
        self._refresh_view()

    def _refresh_view(self) -> None:
        self._render_candidate_options()
        self._update_status()
        self._update_query_indicator()

    def _render_candidate_options(self) -> None:
        candidate_list = self.query_one("#candidate-list", OptionList)
        candidate_list.clear_options()
        if self._visible_alignments:
            candidate_list.add_options(
                highlight_alignment(alignment)
                for alignment in self._visible_alignments
            )
            candidate_list.action_first()
            return
        candidate_list.add_option("No candidates match")

    def _status_text(self) -> str:
        return (
            f"{len(self._visible_alignments)} of "
            f"{len(self._all_candidates)} candidates"
        )

    def _update_status(self) -> None:
        self.query_one("#status", Static).update(self._status_text())

    def _query_indicator_text(self) -> Text:
        indicator = Text()
        indicator.append(">", style="bold red")
        indicator.append(f" {self._search_query}_", style="bold white")
        return indicator

    def _update_query_indicator(self) -> None:
        picker = self.query_one("#picker", Vertical)
        picker.border_title = self._query_indicator_text()

    def _append_query_text(self, text: str) -> None:
        self._search_query += text
        self._filter_candidates()

    def _delete_query_char(self) -> None:
        if not self._search_query:
            return
        self._search_query = self._search_query[:-1]
        self._filter_candidates()

    def _selected_candidate(self, option_index: int) -> str | None:
        if option_index < 0 or option_index >= len(self._visible_alignments):
            return None
        return self._visible_alignments[option_index].text

    def action_escape(self) -> None:
        if self._search_query:
            self._search_query = ""
            self._filter_candidates()
            return
        self.exit(None)

    def on_key(self, event: Key) -> None:
        if event.key == "backspace":
            self._delete_query_char()
            event.stop()
            return

        if event.key == "space":
            self._append_query_text(" ")
            event.stop()
            return

        if event.character and event.character.isprintable():
            self._append_query_text(event.character)
            event.stop()

    def on_paste(self, event: Paste) -> None:
        sanitized = event.text.replace("\r", "").replace("\n", "")
        if not sanitized:
            return
        self._append_query_text(sanitized)
        event.stop()

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "candidate-list":
            return
        selected = self._selected_candidate(event.option_index)
        if selected is None:
            return
        self.exit(selected)
