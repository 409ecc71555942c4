"""Full-screen chooser built on Textual, filtering as the user types."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from repofind.choosers.base import MAX_PROSPECTS, filter_candidates

logger = logging.getLogger(__name__)


class ChooserApp(App[Optional[str]]):
    """Input line on top, matching files below. Exits with the chosen label."""

    CSS = """
    #prompt {
        height: 1;
        color: $accent;
    }

    #matches {
        height: 1fr;
        border: solid $primary;
    }

    #status {
        height: 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", priority=True),
        Binding("down", "cursor_down", "Next", show=False),
        Binding("up", "cursor_up", "Previous", show=False),
    ]

    def __init__(self, candidates: Sequence[str], prompt: str):
        super().__init__()
        self.candidates = list(candidates)
        self.prompt_text = prompt
        self._matches: List[str] = []

    def compose(self) -> ComposeResult:
        yield Static(Text(self.prompt_text), id="prompt")
        yield Input(placeholder="type to filter", id="query")
        yield OptionList(id="matches")
        yield Static(id="status")

    def on_mount(self) -> None:
        self.query_one(Input).focus()
        self._refresh_matches("")

    def _refresh_matches(self, query: str) -> None:
        self._matches = filter_candidates(query, self.candidates)
        option_list = self.query_one(OptionList)
        option_list.clear_options()
        option_list.add_options(Option(Text(label)) for label in self._matches[:MAX_PROSPECTS])
        if self._matches:
            option_list.highlighted = 0

        shown = min(len(self._matches), MAX_PROSPECTS)
        status = f"{len(self._matches)}/{len(self.candidates)}"
        if shown < len(self._matches):
            status += f" (showing {shown})"
        self.query_one("#status", Static).update(status)

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refresh_matches(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        highlighted = self.query_one(OptionList).highlighted
        if highlighted is None or highlighted >= len(self._matches):
            self.bell()
            return
        self.exit(self._matches[highlighted])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(self._matches[event.option_index])

    def action_cursor_down(self) -> None:
        self.query_one(OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one(OptionList).action_cursor_up()

    def action_cancel(self) -> None:
        self.exit(None)


class TextualChooser:
    """Chooser that runs :class:`ChooserApp` and returns its result."""

    def choose(self, candidates: Sequence[str], prompt: str) -> Optional[str]:
        if not candidates:
            logger.info("No files to choose from")
            return None
        return ChooserApp(candidates, prompt).run()
