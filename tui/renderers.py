"""Built-in Renderer Set backed by Textual widgets."""

from __future__ import annotations

from core.overrides import RendererSet
from tui.screens.confirmation_modal import ConfirmationModal
from tui.screens.input_form_modal import InputFormModal
from tui.widgets.primitives import (
    CheckboxField,
    DialogButton,
    SelectField,
    TextAreaField,
    TextField,
)


DEFAULT_RENDERERS = RendererSet(
    button=DialogButton,
    text_input=TextField,
    text_area=TextAreaField,
    select=SelectField,
    checkbox=CheckboxField,
    confirmation=ConfirmationModal,
    input_form=InputFormModal,
)
