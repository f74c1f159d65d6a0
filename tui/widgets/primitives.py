"""Built-in widgets behind the Renderer Set slots.

Field widgets take ``(field, value, *, id=None)`` and report every edit as a
``FieldValueChanged`` message, which is all an input-form surface listens
to. Replacement widgets only need to follow the same two rules.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from textual.message import Message
from textual.widgets import Button, Checkbox, Input, Select, TextArea

from core.fields import FieldKind, FieldSpec


class FieldValueChanged(Message):
    """A form field got a new value."""

    BUBBLE = True

    def __init__(self, field_name: str, value: Any) -> None:
        super().__init__()
        self.field_name = field_name
        self.value = value


class DialogButton(Button):
    """Action button used by the built-in surfaces."""

    def __init__(self, label: str, *, id: Optional[str] = None, variant: str = "default") -> None:
        super().__init__(label, variant=variant, id=id)


def _coerce_number(raw: str) -> Any:
    text = raw.strip()
    if not text:
        return ""
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        # Half-typed numbers ("-", "1e") stay as text until they parse
        return raw


class TextField(Input):
    """Single-line input for text, email, password, number, tel and url kinds."""

    def __init__(self, field: FieldSpec, value: Any = "", *, id: Optional[str] = None) -> None:
        kind = field.kind
        super().__init__(
            value="" if value is None else str(value),
            placeholder=field.placeholder or "",
            password=kind is FieldKind.PASSWORD,
            type="number" if kind is FieldKind.NUMBER else "text",
            id=id,
        )
        self.field = field

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        value: Any = event.value
        if self.field.kind is FieldKind.NUMBER:
            value = _coerce_number(event.value)
        self.post_message(FieldValueChanged(self.field.name, value))


class TextAreaField(TextArea):
    """Multi-line input for the textarea kind."""

    def __init__(self, field: FieldSpec, value: Any = "", *, id: Optional[str] = None) -> None:
        super().__init__("" if value is None else str(value), soft_wrap=True, id=id)
        self.field = field

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self.post_message(FieldValueChanged(self.field.name, self.text))


class SelectField(Select):
    """Drop-down for the select kind; the blank choice maps to an empty string."""

    def __init__(self, field: FieldSpec, value: Any = "", *, id: Optional[str] = None) -> None:
        options = [(opt.label, opt.value) for opt in field.options]
        kwargs: Dict[str, Any] = {}
        if value not in (None, "") and any(v == value for _, v in options):
            kwargs["value"] = value
        super().__init__(options, prompt=field.placeholder or "Select...", allow_blank=True, id=id, **kwargs)
        self.field = field

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        value = event.value if isinstance(event.value, str) else ""
        self.post_message(FieldValueChanged(self.field.name, value))


class CheckboxField(Checkbox):
    """Checkbox with its label drawn inline."""

    def __init__(self, field: FieldSpec, value: Any = False, *, id: Optional[str] = None) -> None:
        super().__init__(field.display_name, value=bool(value), id=id)
        self.field = field

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.post_message(FieldValueChanged(self.field.name, bool(event.value)))


# Fallbacks for surfaces handed an incomplete Renderer Set
FIELD_WIDGETS = {
    'text_input': TextField,
    'text_area': TextAreaField,
    'select': SelectField,
    'checkbox': CheckboxField,
}
