"""Built-in confirmation surface for both the dialog and modal variants."""

from __future__ import annotations

from rich.text import Text

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

from tui.widgets.primitives import DialogButton
from ui.base import ConfirmationProps


class DialogFrame(Vertical):
    """Dialog body; clicks inside never reach the backdrop."""

    def on_click(self, event: events.Click) -> None:
        event.stop()


class SurfaceScreen(ModalScreen[None]):
    """ModalScreen that can be updated and closed by an orchestrator.

    A close() request that arrives while another screen sits on top is held
    until this screen is current again.
    """

    BINDINGS = [Binding("escape", "backdrop", "Close")]

    def __init__(self, props) -> None:
        classes = "-blur" if props.blur_background else None
        super().__init__(classes=classes)
        self.props = props
        self._close_requested = False

    def update(self, props) -> None:
        self.props = props

    def close(self) -> None:
        if not self.is_attached:
            return
        if self.is_current:
            self.dismiss(None)
        else:
            self._close_requested = True

    def on_screen_resume(self) -> None:
        if self._close_requested:
            self._close_requested = False
            self.dismiss(None)

    def on_click(self, event: events.Click) -> None:
        # Only clicks outside the DialogFrame get here
        self.action_backdrop()

    def action_backdrop(self) -> None:
        if self.props.closable:
            self.props.on_cancel()


class ConfirmationModal(SurfaceScreen):
    """Yes/no box. Backdrop click and Escape cancel only when closable."""

    DEFAULT_CSS = """
    ConfirmationModal {
        align: center middle;
        background: $background 50%;
    }
    ConfirmationModal.-blur {
        background: $background 85%;
    }
    ConfirmationModal #confirmation_dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round $primary;
        background: $surface;
    }
    ConfirmationModal #confirmation_title {
        text-style: bold;
        margin-bottom: 1;
    }
    ConfirmationModal #confirmation_buttons {
        height: auto;
        margin-top: 1;
        align-horizontal: right;
    }
    ConfirmationModal #confirmation_buttons Button {
        margin-left: 1;
    }
    """

    props: ConfirmationProps

    def compose(self) -> ComposeResult:
        button = self.props.renderers.button or DialogButton
        with DialogFrame(id="confirmation_dialog"):
            if self.props.title:
                yield Static(Text(self.props.title), id="confirmation_title")
            yield Static(Text(self.props.message), id="confirmation_message")
            if not self.props.closable:
                yield Static(Text("Choose an option to continue", style="dim"), id="confirmation_hint")
            with Horizontal(id="confirmation_buttons"):
                yield button(self.props.cancel_label, id="cancel", variant="default")
                yield button(self.props.confirm_label, id="confirm", variant="primary")

    async def on_mount(self) -> None:
        self.set_focus(self.query_one("#confirm"))

    def on_button_pressed(self, event: DialogButton.Pressed) -> None:
        event.stop()
        if event.button.id == "confirm":
            self.props.on_confirm()
        elif event.button.id == "cancel":
            self.props.on_cancel()
