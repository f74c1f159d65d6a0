"""Declarative description of input-form fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union


class FieldKind(str, Enum):
    TEXT = 'text'
    EMAIL = 'email'
    PASSWORD = 'password'
    NUMBER = 'number'
    TEL = 'tel'
    URL = 'url'
    TEXTAREA = 'textarea'
    SELECT = 'select'
    CHECKBOX = 'checkbox'


# Renderer Set slot that draws each kind
_KIND_SLOTS: Dict[FieldKind, str] = {
    FieldKind.TEXT: 'text_input',
    FieldKind.EMAIL: 'text_input',
    FieldKind.PASSWORD: 'text_input',
    FieldKind.NUMBER: 'text_input',
    FieldKind.TEL: 'text_input',
    FieldKind.URL: 'text_input',
    FieldKind.TEXTAREA: 'text_area',
    FieldKind.SELECT: 'select',
    FieldKind.CHECKBOX: 'checkbox',
}

_missing = set(FieldKind) - set(_KIND_SLOTS)
if _missing:  # pragma: no cover - guards edits to FieldKind
    raise RuntimeError(f"No renderer slot for field kinds: {sorted(k.value for k in _missing)}")


def slot_for_kind(kind: Union[FieldKind, str]) -> str:
    """Return the Renderer Set slot name responsible for a field kind."""
    return _KIND_SLOTS[FieldKind(kind)]


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


OptionInput = Union[str, SelectOption, Dict[str, Any], Tuple[str, str]]
FieldValue = Union[str, int, float, bool]


def normalize_options(options: Optional[Sequence[OptionInput]]) -> Tuple[SelectOption, ...]:
    """Accept plain strings, {label, value} dicts, (label, value) pairs or SelectOption."""
    out: List[SelectOption] = []
    for opt in options or ():
        if isinstance(opt, SelectOption):
            out.append(opt)
        elif isinstance(opt, dict):
            value = opt.get('value', opt.get('label'))
            label = opt.get('label', value)
            out.append(SelectOption(label=str(label), value=str(value)))
        elif isinstance(opt, tuple) and len(opt) == 2:
            out.append(SelectOption(label=str(opt[0]), value=str(opt[1])))
        else:
            out.append(SelectOption(label=str(opt), value=str(opt)))
    return tuple(out)


@dataclass(frozen=True)
class FieldSpec:
    """One input-form field.

    ``name`` must be unique within a request. ``on_change`` is advisory and
    runs on every edit; ``validate`` returns an error message or None.
    """

    name: str
    label: Optional[str] = None
    kind: FieldKind = FieldKind.TEXT
    placeholder: Optional[str] = None
    required: bool = False
    default_value: Optional[FieldValue] = None
    options: Tuple[SelectOption, ...] = ()
    on_change: Optional[Callable[[Any], Any]] = None
    validate: Optional[Callable[[Any], Optional[str]]] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FieldSpec.name must be a non-empty string")
        object.__setattr__(self, 'kind', FieldKind(self.kind))
        object.__setattr__(self, 'options', normalize_options(self.options))

    @property
    def display_name(self) -> str:
        return self.label or self.name

    @property
    def slot(self) -> str:
        return slot_for_kind(self.kind)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FieldSpec':
        """Build from a loose mapping; accepts ``type`` for kind and ``validation`` for validate."""
        return cls(
            name=data['name'],
            label=data.get('label'),
            kind=data.get('kind') or data.get('type') or FieldKind.TEXT,
            placeholder=data.get('placeholder'),
            required=bool(data.get('required', False)),
            default_value=data.get('default_value', data.get('defaultValue')),
            options=tuple(data.get('options') or ()),
            on_change=data.get('on_change') or data.get('onChange'),
            validate=data.get('validate') or data.get('validation'),
        )


def initial_value(field: FieldSpec) -> FieldValue:
    if field.default_value is not None:
        return field.default_value
    return False if field.kind is FieldKind.CHECKBOX else ''


def coerce_fields(fields: Sequence[Union[FieldSpec, Dict[str, Any]]]) -> Tuple[FieldSpec, ...]:
    """Normalise a field list and reject duplicate names."""
    specs = tuple(f if isinstance(f, FieldSpec) else FieldSpec.from_dict(f) for f in fields or ())
    seen = set()
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"Duplicate field name: {spec.name!r}")
        seen.add(spec.name)
    return specs
