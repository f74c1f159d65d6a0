"""Layered lookup of the widgets used to draw dialogs.

A Renderer Set is a bundle of named slots. Layers are merged per slot with
the most specific layer winning: call-site override, then the provider's
global set, then the built-in defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional


SLOTS = (
    'button',
    'text_input',
    'text_area',
    'select',
    'checkbox',
    'confirmation',
    'input_form',
)


@dataclass(frozen=True)
class RendererSet:
    """Widget factories for each slot; None means "not set in this layer"."""

    button: Optional[Callable[..., Any]] = None
    text_input: Optional[Callable[..., Any]] = None
    text_area: Optional[Callable[..., Any]] = None
    select: Optional[Callable[..., Any]] = None
    checkbox: Optional[Callable[..., Any]] = None
    confirmation: Optional[Callable[..., Any]] = None
    input_form: Optional[Callable[..., Any]] = None

    def get(self, slot: str) -> Optional[Callable[..., Any]]:
        if slot not in SLOTS:
            raise KeyError(f"Unknown renderer slot: {slot}")
        return getattr(self, slot)

    def is_complete(self) -> bool:
        return all(getattr(self, slot) is not None for slot in SLOTS)

    def as_dict(self) -> Dict[str, Callable[..., Any]]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @classmethod
    def from_mapping(cls, mapping: Optional[Dict[str, Any]]) -> 'RendererSet':
        """Build from a mapping; keys may use the PascalCase widget names (Button, TextInput, ...)."""
        if not mapping:
            return cls()
        kwargs: Dict[str, Any] = {}
        for key, value in mapping.items():
            slot = _ALIASES.get(key, key)
            if slot not in SLOTS:
                raise KeyError(f"Unknown renderer slot: {key}")
            kwargs[slot] = value
        return cls(**kwargs)


_ALIASES = {
    'Button': 'button',
    'TextInput': 'text_input',
    'Input': 'text_input',
    'TextArea': 'text_area',
    'Textarea': 'text_area',
    'Select': 'select',
    'Checkbox': 'checkbox',
    'Confirmation': 'confirmation',
    'InputForm': 'input_form',
}


def as_renderer_set(layer: Any) -> RendererSet:
    if layer is None:
        return RendererSet()
    if isinstance(layer, RendererSet):
        return layer
    return RendererSet.from_mapping(dict(layer))


def merge(*layers: Any) -> RendererSet:
    """Merge layers left to right; later layers win per slot."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(as_renderer_set(layer).as_dict())
    return RendererSet(**merged)


def default_renderers() -> RendererSet:
    # Deferred so the core stays importable without a UI toolkit loaded
    from tui.renderers import DEFAULT_RENDERERS
    return DEFAULT_RENDERERS


def resolve(global_layer: Any = None, per_call: Any = None, defaults: Optional[RendererSet] = None) -> RendererSet:
    """Effective Renderer Set: per-call slot, else global slot, else built-in default."""
    base = defaults if defaults is not None else default_renderers()
    return merge(base, global_layer, per_call)


def with_slot(renderers: RendererSet, slot: str, factory: Optional[Callable[..., Any]]) -> RendererSet:
    if slot not in SLOTS:
        raise KeyError(f"Unknown renderer slot: {slot}")
    if factory is None:
        return renderers
    return replace(renderers, **{slot: factory})
