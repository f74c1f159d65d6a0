"""Yes/no confirmation requests with at most one pending at a time."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional

from base_classes import PendingRequestError
from core.orchestrator import OrchestratorBase
from core.requests import ConfirmOptions, DialogRequest
from core.settle import SettleHandle
from ui.base import ConfirmationProps


class ConfirmationOrchestrator(OrchestratorBase):
    """Turns a confirmation surface's callbacks into one awaitable boolean.

    ``ask`` opens the closable "dialog" variant, ``ask_modal`` the
    non-closable "modal" variant; both share the single pending slot.
    A second request while one is pending raises PendingRequestError and
    leaves the first one in place.
    """

    component = 'core.confirmation'
    aspect_event = 'dialog_event'

    def __init__(self, host, **kwargs) -> None:
        super().__init__(host, **kwargs)
        self._pending: Optional[DialogRequest] = None

    @property
    def pending(self) -> Optional[DialogRequest]:
        return self._pending

    # Requests -----------------------------------------------------------
    def ask(self, options: Optional[ConfirmOptions] = None, **kwargs) -> SettleHandle[bool]:
        return self._open('dialog', options, kwargs)

    def ask_modal(self, options: Optional[ConfirmOptions] = None, **kwargs) -> SettleHandle[bool]:
        return self._open('modal', options, kwargs)

    # Completion entry points --------------------------------------------
    def confirm(self) -> bool:
        return self._settle(True, 'confirm')

    def cancel(self) -> bool:
        return self._settle(False, 'cancel')

    def dismiss(self) -> bool:
        """Backdrop dismissal: cancels only a closable request."""
        request = self._pending
        if request is None or not request.closable:
            return False
        return self._settle(False, 'dismiss')

    # Internals ----------------------------------------------------------
    def _open(self, variant: str, options: Optional[ConfirmOptions], kwargs: dict) -> SettleHandle[bool]:
        opts = replace(options, **kwargs) if options is not None else ConfirmOptions(**kwargs)
        if self._pending is not None:
            self._log('rejected', {'variant': variant, 'pending_title': self._pending.title}, method='dialog_warning')
            raise PendingRequestError('confirmation', self._pending.title or self._pending.message)

        d = self.defaults
        if variant == 'modal':
            closable, blur = d.modal_closable, d.modal_blur
        else:
            closable, blur = d.dialog_closable, d.dialog_blur

        renderers = self._resolve_renderers(opts.renderer_override)
        handle: SettleHandle[bool] = SettleHandle('confirmation', logger=self._logger)
        request = DialogRequest(
            message=opts.message,
            title=opts.title,
            confirm_label=opts.confirm_label or d.confirm_label,
            cancel_label=opts.cancel_label or d.cancel_label,
            closable=closable if opts.closable is None else bool(opts.closable),
            blur_background=blur if opts.blur_background is None else bool(opts.blur_background),
            renderers=renderers,
            settle=handle,
            variant=variant,
        )
        self._pending = request
        self._log('ask', {'variant': variant, 'title': request.title, 'closable': request.closable})

        props = ConfirmationProps(
            message=request.message,
            title=request.title,
            confirm_label=request.confirm_label,
            cancel_label=request.cancel_label,
            closable=request.closable,
            blur_background=request.blur_background,
            renderers=renderers,
            on_confirm=self._bound(request, True, 'confirm'),
            on_cancel=self._bound(request, False, 'cancel'),
            variant=variant,
        )
        surface = self._pick_surface('confirmation', opts.renderer_override, renderers)
        try:
            presentation = self.host.show(surface, props)
        except Exception:
            # Nothing is on screen, so nobody could ever settle it
            if self._pending is request:
                self._pending = None
            raise
        request.presentation = presentation
        if handle.done():
            # Settled while being shown
            self._close(presentation)
        return handle

    def _bound(self, request: DialogRequest, value: bool, how: str) -> Callable[[], bool]:
        # Callbacks stay tied to their own request even after a newer one opens
        def _callback() -> bool:
            if self._pending is not request:
                return False
            return self._settle(value, how)
        return _callback

    def _settle(self, value: bool, how: str) -> bool:
        request = self._pending
        if request is None:
            return False
        self._pending = None
        settled = request.settle.settle(value)
        self._log('settle', {'variant': request.variant, 'how': how, 'value': value})
        self._close(request.presentation)
        return settled
