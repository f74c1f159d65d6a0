"""Textual applications that host dialog orchestrators."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, RichLog, Static

from core.provider import use_confirm, use_confirm_modal, use_input_dialog
from core.requests import ConfirmOptions, InputFormOptions, InputResult


class ResultLog(RichLog):
    """Shows how each dialog was answered."""

    def log_result(self, label: str, outcome: Any, ok: bool = True) -> None:
        style = "green" if ok else "yellow"
        self.write(Text(f"{label}: {outcome}", style=style))


class DialogDemoApp(App):
    """Buttons that open each dialog flavour and log the answers.

    Run inside a ComponentContextProvider bound to a TextualHost for this
    app; the orchestrators are looked up through the provider accessors.
    """

    TITLE = "Dialogs"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("c", "open_confirm", "Confirm"),
        Binding("m", "open_modal", "Modal"),
        Binding("f", "open_form", "Form"),
    ]

    DEFAULT_CSS = """
    #demo_buttons {
        height: auto;
        padding: 1 2;
    }
    #demo_buttons Button {
        margin-right: 2;
    }
    #demo_log {
        border: round $primary;
    }
    """

    def __init__(self, *, title: Optional[str] = None, logger=None) -> None:
        super().__init__()
        if title:
            self.title = title
        self._dialog_logger = logger
        self.results: Optional[ResultLog] = None

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("Open a dialog with the buttons or key bindings below.", id="demo_intro")
            with Horizontal(id="demo_buttons"):
                yield Button("Confirm dialog", id="open_confirm")
                yield Button("Confirm modal", id="open_modal", variant="warning")
                yield Button("Input form", id="open_form", variant="primary")
            self.results = ResultLog(id="demo_log", markup=False)
            yield self.results
        yield Footer()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        action = event.button.id or ""
        handler = getattr(self, f"action_{action}", None)
        if handler is not None:
            handler()

    # Each request waits in a worker so the app keeps processing events
    def action_open_confirm(self) -> None:
        self.run_worker(self._confirm(modal=False), exclusive=True, group="dialogs")

    def action_open_modal(self) -> None:
        self.run_worker(self._confirm(modal=True), exclusive=True, group="dialogs")

    def action_open_form(self) -> None:
        self.run_worker(self._collect(), exclusive=True, group="dialogs")

    async def _confirm(self, *, modal: bool) -> None:
        ask = use_confirm_modal() if modal else use_confirm()
        options = ConfirmOptions(
            title="Delete item" if not modal else "Unsaved changes",
            message="Delete this item permanently?" if not modal else "Discard your unsaved changes?",
        )
        answer = await ask(options)
        self._record("modal" if modal else "dialog", answer, answer)

    async def _collect(self) -> None:
        options = InputFormOptions(
            title="New account",
            description="Fields marked * are required.",
            fields=[
                {"name": "username", "label": "Username", "required": True},
                {
                    "name": "email",
                    "label": "Email",
                    "type": "email",
                    "required": True,
                    "validate": lambda v: None if "@" in str(v) else "Enter a valid email address",
                },
                {"name": "age", "label": "Age", "type": "number"},
                {"name": "role", "label": "Role", "type": "select", "options": ["admin", "editor", "viewer"]},
                {"name": "bio", "label": "Bio", "type": "textarea"},
                {"name": "terms", "label": "Accept the terms", "type": "checkbox"},
            ],
        )
        result: InputResult = await use_input_dialog().collect(options)
        self._record("form", result.values if result.submitted else "cancelled", result.submitted)

    def _record(self, label: str, outcome: Any, ok: bool) -> None:
        if self.results is not None:
            self.results.log_result(label, outcome, ok)
        if self._dialog_logger is not None:
            try:
                self._dialog_logger.tui_event('demo_result', {'kind': label, 'ok': bool(ok)}, component='tui.app')
            except Exception:
                pass


class PromptApp(App):
    """Runs exactly one dialog request and exits with its result.

    ``request`` is ``('confirm' | 'modal' | 'input', options)``.
    """

    def __init__(self, request: tuple, *, title: Optional[str] = None) -> None:
        super().__init__()
        self.kind, self.options = request
        if title:
            self.title = title

    def compose(self) -> ComposeResult:
        yield Static("")

    def on_mount(self) -> None:
        self.run_worker(self._run(), exclusive=True)

    async def _run(self) -> None:
        if self.kind == "input":
            result: Any = await use_input_dialog().collect(self.options)
        elif self.kind == "modal":
            result = await use_confirm_modal()(self.options)
        else:
            result = await use_confirm()(self.options)
        self.exit(result)
