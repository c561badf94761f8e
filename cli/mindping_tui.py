#!/usr/bin/env python3
"""Mind Ping TUI: answer today's question in the terminal, powered by Textual."""

from __future__ import annotations

import logging
import sys

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.reactive import reactive
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Label,
    Static,
    TextArea,
)

from mindping import JournalApp, log_path, workspace_root

logger = logging.getLogger("mindping.cli")

EMOJI_ROW = [
    "\U0001F600",  # grinning
    "\U0001F60A",  # blush
    "\U0001F60D",  # heart eyes
    "\U0001F60E",  # sunglasses
    "\U0001F622",  # crying
    "\U0001F621",  # angry
    "\U0001F634",  # sleeping
    "\U0001F914",  # thinking
]


CSS = """
Screen {
    background: $surface;
}

#question {
    padding: 1 2;
    text-style: bold;
    color: $accent;
}

#emoji-row {
    height: 3;
    padding: 0 1;
}

#emoji-row Button {
    min-width: 6;
    margin-right: 1;
}

#emoji-row Button.selected {
    background: $primary;
}

#reflection-area {
    height: 1fr;
    margin: 0 1;
}

#status-line {
    padding: 0 2;
    color: $text-muted;
}

.section-title {
    padding: 1 1 0 1;
    text-style: bold;
}

.overlay-screen {
    height: 1fr;
    padding: 0 1;
}
"""


class HistoryScreen(VerticalScroll):
    """All reflections, newest first."""

    def __init__(self, journal: JournalApp, **kwargs) -> None:
        super().__init__(**kwargs)
        self.journal = journal

    def compose(self) -> ComposeResult:
        yield Label("History", classes="section-title")
        yield DataTable(id="history-table")

    def on_mount(self) -> None:
        table: DataTable = self.query_one("#history-table", DataTable)
        table.add_columns("Date", "Emoji", "Question", "Text")
        for r in self.journal.all_reflections_sorted:
            preview = r.text if len(r.text) <= 60 else r.text[:57] + "..."
            table.add_row(r.day.isoformat(), " ".join(r.emojis), r.question, preview)


class AchievementsScreen(VerticalScroll):
    """Stats card and the achievement list."""

    def __init__(self, journal: JournalApp, **kwargs) -> None:
        super().__init__(**kwargs)
        self.journal = journal

    def compose(self) -> ComposeResult:
        yield Label("Achievements", classes="section-title")
        yield Static(id="stats")
        yield DataTable(id="achievements-table")

    def on_mount(self) -> None:
        summary = self.journal.summary()
        lines = [
            f"{self.journal.preferences.username}  {self.journal.reflecting_since}",
            f"Reflections: {summary.total_reflections}   Day streak: {summary.longest_streak}",
            f"Progress: {summary.longest_streak} / {summary.streak_goal} days ({summary.progress_percent}%)",
        ]
        self.query_one("#stats", Static).update("\n".join(lines))

        table: DataTable = self.query_one("#achievements-table", DataTable)
        table.add_columns("", "Title", "Description")
        for a in self.journal.achievements:
            table.add_row("x" if a.is_unlocked else " ", a.title, a.description)


class MindPingApp(App):
    """Mind Ping: one question a day."""

    TITLE = "Mind Ping"
    CSS = CSS
    AUTO_FOCUS = "#reflection-area"

    BINDINGS = [
        Binding("ctrl+s", "save_today", "Save"),
        Binding("f2", "show_history", "History"),
        Binding("f3", "show_achievements", "Achievements"),
        Binding("escape", "show_reflect", "Back"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive("reflect")

    def __init__(self, journal: JournalApp) -> None:
        super().__init__()
        self.journal = journal

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Static(self.journal.today_question, id="question"),
            Horizontal(
                *[
                    Button(e, id=f"emoji-{i}", classes="selected" if e in self.journal.selected_emojis else "")
                    for i, e in enumerate(EMOJI_ROW)
                ],
                id="emoji-row",
            ),
            TextArea(self.journal.text_input, id="reflection-area"),
            Static(id="status-line"),
            id="reflect-pane",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._update_status()

    def _update_status(self, message: str = "") -> None:
        if not message:
            saved = self.journal.saved_today
            message = "Saved for today." if saved is not None else "Not saved yet today."
        self.query_one("#status-line", Static).update(message)

    @on(Button.Pressed, "#emoji-row Button")
    def _on_emoji(self, event: Button.Pressed) -> None:
        index = int((event.button.id or "emoji-0").split("-")[1])
        emoji = EMOJI_ROW[index]
        self.journal.toggle_emoji(emoji)
        event.button.set_class(emoji in self.journal.selected_emojis, "selected")

    @on(TextArea.Changed, "#reflection-area")
    def _on_text_change(self, event: TextArea.Changed) -> None:
        self.journal.text_input = event.text_area.text

    def action_save_today(self) -> None:
        if not self.journal.can_save:
            self._update_status("Write something or pick an emoji first.")
            return
        self.query_one("#question", Static).update(self.journal.refresh_today())
        _reflection, errors = self.journal.save_today()
        if errors:
            self.notify("; ".join(errors), severity="error", timeout=8)
            self._update_status("Saved in memory only, see log.")
        else:
            self._update_status("Saved for today.")

    def action_show_history(self) -> None:
        self._switch_to("history")
        errors = self.journal.mark_history_viewed()
        if errors:
            self.notify("; ".join(errors), severity="error", timeout=8)

    def action_show_achievements(self) -> None:
        self._switch_to("achievements")

    def action_show_reflect(self) -> None:
        self._switch_to("reflect")

    def _switch_to(self, view: str) -> None:
        if view == self.current_view:
            return
        for overlay in self.query(".overlay-screen"):
            overlay.remove()
        self.query_one("#reflect-pane").display = view == "reflect"
        if view == "history":
            self.mount(HistoryScreen(self.journal, classes="overlay-screen"), before="Footer")
        elif view == "achievements":
            self.mount(AchievementsScreen(self.journal, classes="overlay-screen"), before="Footer")
        self.current_view = view


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Cannot create workspace {root}: {e}")
        print("Set MINDPING_ROOT to a writable directory.")
        sys.exit(1)

    logging.basicConfig(
        filename=str(log_path(root)),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Mind Ping in %s", root)

    journal = JournalApp(root)
    MindPingApp(journal).run()


if __name__ == "__main__":
    main()
