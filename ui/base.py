from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Sequence, runtime_checkable

from core.fields import FieldSpec
from core.overrides import RendererSet


@dataclass(frozen=True)
class ConfirmationProps:
    """Everything a confirmation surface needs to draw itself.

    A surface must call exactly one of ``on_confirm``/``on_cancel`` per user
    action, and ``on_cancel`` on backdrop dismissal when ``closable``.
    """

    message: str
    title: Optional[str]
    confirm_label: str
    cancel_label: str
    closable: bool
    blur_background: bool
    renderers: RendererSet
    on_confirm: Callable[[], Any]
    on_cancel: Callable[[], Any]
    variant: str = 'dialog'


@dataclass(frozen=True)
class InputFormProps:
    """Everything an input-form surface needs to draw itself.

    ``on_field_change(name, value)`` on every edit; exactly one of
    ``on_submit``/``on_cancel`` per terminal action.
    """

    fields: Sequence[FieldSpec]
    values: Dict[str, Any]
    errors: Dict[str, str]
    title: Optional[str]
    description: Optional[str]
    confirm_label: str
    cancel_label: str
    closable: bool
    blur_background: bool
    renderers: RendererSet
    on_field_change: Callable[[str, Any], Any]
    on_submit: Callable[[], Any]
    on_cancel: Callable[[], Any]


@runtime_checkable
class Presentation(Protocol):
    """A surface that is currently on screen."""

    def update(self, props: Any) -> None:
        ...

    def close(self) -> None:
        ...


class SurfaceHost:
    """Abstract placement of surfaces.

    Orchestrators never build widgets themselves; they pick a surface from
    the resolved Renderer Set and ask the host to show it.
    """

    def show(self, surface: Callable[[Any], Any], props: Any) -> Presentation:
        raise NotImplementedError
