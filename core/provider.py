"""Provider scopes that make orchestrators reachable from calling code.

A provider binds one orchestrator to a ContextVar for the length of a
``with`` block. Accessors such as ``use_confirm()`` read that binding and
fail loudly outside of it. ``RendererScope`` layers global widget
overrides the same way.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from typing import Any, Callable, Optional

from base_classes import DialogScopeError
from core.confirmation import ConfirmationOrchestrator
from core.input_form import InputFormOrchestrator
from core.overrides import RendererSet, merge
from core.requests import DialogDefaults
from core.settle import SettleHandle
from ui.base import SurfaceHost


_CONFIRMATION: ContextVar[Optional[ConfirmationOrchestrator]] = ContextVar('dialogs_confirmation', default=None)
_INPUT_FORM: ContextVar[Optional[InputFormOrchestrator]] = ContextVar('dialogs_input_form', default=None)
_RENDERERS: ContextVar[Optional[RendererSet]] = ContextVar('dialogs_renderer_overrides', default=None)


def use_renderer_overrides() -> RendererSet:
    """Global overrides of the innermost RendererScope; empty outside any scope."""
    return _RENDERERS.get() or RendererSet()


class RendererScope:
    """Layer global renderer overrides; nested scopes win per slot."""

    def __init__(self, renderers: Any) -> None:
        self.renderers = renderers
        self._token: Optional[Token] = None

    def __enter__(self) -> RendererSet:
        effective = merge(_RENDERERS.get(), self.renderers)
        self._token = _RENDERERS.set(effective)
        return effective

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._token is not None:
            _RENDERERS.reset(self._token)
            self._token = None


class _Provider:
    var: ContextVar
    orchestrator_class: type

    def __init__(
        self,
        host: SurfaceHost,
        *,
        surface: Optional[Callable[..., Any]] = None,
        renderers: Any = None,
        defaults: Optional[DialogDefaults] = None,
        base_renderers: Optional[RendererSet] = None,
        logger=None,
    ) -> None:
        self.orchestrator = self.orchestrator_class(
            host,
            surface=surface,
            renderers=merge(renderers) if renderers is not None else None,
            defaults=defaults,
            base_renderers=base_renderers,
            global_renderers=use_renderer_overrides,
            logger=logger,
        )
        self._tokens: list = []

    def __enter__(self):
        self._tokens.append(self.var.set(self.orchestrator))
        return self.orchestrator

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._tokens:
            self.var.reset(self._tokens.pop())


class DialogProvider(_Provider):
    """Scope for confirmation requests (``use_confirm``/``use_confirm_modal``/``use_dialog``)."""

    var = _CONFIRMATION
    orchestrator_class = ConfirmationOrchestrator


class InputProvider(_Provider):
    """Scope for input-form requests (``use_input_dialog``)."""

    var = _INPUT_FORM
    orchestrator_class = InputFormOrchestrator


class ComponentContextProvider:
    """Enter a DialogProvider and an InputProvider sharing one host."""

    def __init__(
        self,
        host: SurfaceHost,
        *,
        renderers: Any = None,
        defaults: Optional[DialogDefaults] = None,
        confirmation_surface: Optional[Callable[..., Any]] = None,
        input_form_surface: Optional[Callable[..., Any]] = None,
        base_renderers: Optional[RendererSet] = None,
        logger=None,
    ) -> None:
        self.dialogs = DialogProvider(
            host, surface=confirmation_surface, renderers=renderers,
            defaults=defaults, base_renderers=base_renderers, logger=logger,
        )
        self.inputs = InputProvider(
            host, surface=input_form_surface, renderers=renderers,
            defaults=defaults, base_renderers=base_renderers, logger=logger,
        )

    def __enter__(self) -> 'ComponentContextProvider':
        self.dialogs.__enter__()
        try:
            self.inputs.__enter__()
        except BaseException:
            self.dialogs.__exit__(None, None, None)
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.inputs.__exit__(exc_type, exc, tb)
        self.dialogs.__exit__(exc_type, exc, tb)


# Accessors ---------------------------------------------------------------
def use_dialog() -> ConfirmationOrchestrator:
    orchestrator = _CONFIRMATION.get()
    if orchestrator is None:
        raise DialogScopeError('use_dialog', 'DialogProvider')
    return orchestrator


def use_confirm() -> Callable[..., SettleHandle[bool]]:
    orchestrator = _CONFIRMATION.get()
    if orchestrator is None:
        raise DialogScopeError('use_confirm', 'DialogProvider')
    return orchestrator.ask


def use_confirm_modal() -> Callable[..., SettleHandle[bool]]:
    orchestrator = _CONFIRMATION.get()
    if orchestrator is None:
        raise DialogScopeError('use_confirm_modal', 'DialogProvider')
    return orchestrator.ask_modal


def use_input_dialog() -> InputFormOrchestrator:
    orchestrator = _INPUT_FORM.get()
    if orchestrator is None:
        raise DialogScopeError('use_input_dialog', 'InputProvider')
    return orchestrator
