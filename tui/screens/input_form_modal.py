"""Built-in input-form surface."""

from __future__ import annotations

from typing import Any, Callable

from rich.text import Text

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Input, Static

from core.fields import FieldKind, FieldSpec
from tui.screens.confirmation_modal import DialogFrame, SurfaceScreen
from tui.widgets.primitives import FIELD_WIDGETS, DialogButton, FieldValueChanged
from ui.base import InputFormProps


class InputFormModal(SurfaceScreen):
    """Form with one row per field, an inline error under each and submit/cancel buttons.

    Enter in a single-line input or Ctrl+S submits; Escape and backdrop
    clicks cancel when the request is closable.
    """

    BINDINGS = [
        Binding("ctrl+s", "submit", "Submit", show=False, priority=True),
    ]

    DEFAULT_CSS = """
    InputFormModal {
        align: center middle;
        background: $background 50%;
    }
    InputFormModal.-blur {
        background: $background 85%;
    }
    InputFormModal #input_form {
        width: 70;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        border: round $primary;
        background: $surface;
        overflow-y: auto;
    }
    InputFormModal #input_form_title {
        text-style: bold;
    }
    InputFormModal #input_form_description {
        color: $text 70%;
        margin-bottom: 1;
    }
    InputFormModal .input_form_field {
        height: auto;
        margin-bottom: 1;
    }
    InputFormModal .field_error {
        display: none;
    }
    InputFormModal .field_error.-visible {
        display: block;
    }
    InputFormModal #input_form_buttons {
        height: auto;
        align-horizontal: right;
    }
    InputFormModal #input_form_buttons Button {
        margin-left: 1;
    }
    """

    props: InputFormProps

    def compose(self) -> ComposeResult:
        props = self.props
        button = props.renderers.button or DialogButton
        with DialogFrame(id="input_form"):
            if props.title:
                yield Static(Text(props.title), id="input_form_title")
            if props.description:
                yield Static(Text(props.description), id="input_form_description")
            for index, field in enumerate(props.fields):
                with Vertical(classes="input_form_field"):
                    if field.kind is not FieldKind.CHECKBOX and field.label:
                        yield Static(self._label_text(field), classes="field_label")
                    widget = self._factory(field)
                    yield widget(field, props.values.get(field.name), id=f"field_{index}")
                    yield Static("", classes="field_error", id=f"error_{index}")
            with Horizontal(id="input_form_buttons"):
                yield button(props.cancel_label, id="cancel", variant="default")
                yield button(props.confirm_label, id="submit", variant="primary")

    async def on_mount(self) -> None:
        self._render_errors()
        if self.props.fields:
            self.set_focus(self.query_one("#field_0"))

    def update(self, props) -> None:
        super().update(props)
        if self.is_mounted:
            self._render_errors()

    def _factory(self, field: FieldSpec) -> Callable[..., Any]:
        return self.props.renderers.get(field.slot) or FIELD_WIDGETS[field.slot]

    @staticmethod
    def _label_text(field: FieldSpec) -> Text:
        text = Text(field.display_name)
        if field.required:
            text.append(" *", style="bold red")
        return text

    def _render_errors(self) -> None:
        for index, field in enumerate(self.props.fields):
            message = self.props.errors.get(field.name)
            target = self.query_one(f"#error_{index}", Static)
            target.update(Text(message or "", style="red"))
            target.set_class(bool(message), "-visible")

    def on_field_value_changed(self, event: FieldValueChanged) -> None:
        event.stop()
        self.props.on_field_change(event.field_name, event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.props.on_submit()

    def on_button_pressed(self, event: DialogButton.Pressed) -> None:
        event.stop()
        if event.button.id == "submit":
            self.props.on_submit()
        elif event.button.id == "cancel":
            self.props.on_cancel()

    def action_submit(self) -> None:
        self.props.on_submit()
