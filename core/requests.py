"""Request records and caller-facing option types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from core.fields import FieldSpec, coerce_fields
from core.form_state import FormState
from core.overrides import RendererSet
from core.settle import SettleHandle
from core.validation import DEFAULT_REQUIRED_MESSAGE


@dataclass(frozen=True)
class DialogDefaults:
    """Label and variant defaults, normally loaded from the [DIALOGS] section."""

    confirm_label: str = 'Confirm'
    cancel_label: str = 'Cancel'
    submit_label: str = 'Submit'
    dialog_closable: bool = True
    dialog_blur: bool = False
    modal_closable: bool = False
    modal_blur: bool = True
    input_closable: bool = True
    input_blur: bool = False
    required_message: str = DEFAULT_REQUIRED_MESSAGE

    @classmethod
    def from_config(cls, config) -> 'DialogDefaults':
        if config is None:
            return cls()
        base = cls()
        kwargs: Dict[str, Any] = {}
        for name in cls.__dataclass_fields__:
            if isinstance(getattr(base, name), bool):
                raw = config.get_option('DIALOGS', name, fallback=None)
                if raw is not None:
                    kwargs[name] = raw if isinstance(raw, bool) else str(raw).strip().lower() in ('true', 'yes', '1', 'on')
            else:
                # Labels like "Yes"/"No" would come back as bools from get_option
                text = config.get_raw('DIALOGS', name, fallback=None)
                if text is not None:
                    text = text.strip()
                    if len(text) >= 2 and text[0] == text[-1] and text[0] in '"\'':
                        text = text[1:-1]
                    kwargs[name] = text
        return cls(**kwargs)


@dataclass(frozen=True)
class ConfirmOptions:
    message: str
    title: Optional[str] = None
    confirm_label: Optional[str] = None
    cancel_label: Optional[str] = None
    closable: Optional[bool] = None
    blur_background: Optional[bool] = None
    renderer_override: Optional[Union[RendererSet, Dict[str, Any]]] = None

    def __post_init__(self) -> None:
        if not self.message:
            raise ValueError("ConfirmOptions.message is required")


@dataclass(frozen=True)
class InputFormOptions:
    fields: Tuple[FieldSpec, ...] = ()
    title: Optional[str] = None
    description: Optional[str] = None
    confirm_label: Optional[str] = None
    cancel_label: Optional[str] = None
    closable: Optional[bool] = None
    blur_background: Optional[bool] = None
    renderer_override: Optional[Union[RendererSet, Dict[str, Any]]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, 'fields', coerce_fields(self.fields))


@dataclass(frozen=True)
class InputResult:
    submitted: bool
    values: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def cancelled(cls) -> 'InputResult':
        return cls(submitted=False, values={})


@dataclass
class DialogRequest:
    """A pending yes/no request. Lives until ``settle`` fires."""

    message: str
    title: Optional[str]
    confirm_label: str
    cancel_label: str
    closable: bool
    blur_background: bool
    renderers: RendererSet
    settle: SettleHandle[bool]
    variant: str = 'dialog'
    presentation: Any = None


@dataclass
class InputFormRequest:
    """A pending structured-input request and its form state."""

    fields: Sequence[FieldSpec]
    title: Optional[str]
    description: Optional[str]
    confirm_label: str
    cancel_label: str
    closable: bool
    blur_background: bool
    renderers: RendererSet
    settle: SettleHandle[InputResult]
    state: FormState
    presentation: Any = None
