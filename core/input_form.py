"""Structured-input requests: form state, validation and a single awaitable result."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Optional

from base_classes import PendingRequestError
from core.fields import FieldSpec
from core.form_state import FormState
from core.orchestrator import OrchestratorBase
from core.requests import InputFormOptions, InputFormRequest, InputResult
from core.settle import SettleHandle
from core.validation import validate_all
from ui.base import InputFormProps


class InputFormOrchestrator(OrchestratorBase):
    """Owns the pending input form and resolves it with an InputResult.

    Submitting runs validation over every field. Errors keep the request
    open and are pushed to the surface; a clean pass settles with the
    submitted values. Cancelling settles with ``submitted=False``.
    """

    component = 'core.input_form'
    aspect_event = 'form_event'

    def __init__(self, host, **kwargs) -> None:
        super().__init__(host, **kwargs)
        self._pending: Optional[InputFormRequest] = None

    @property
    def pending(self) -> Optional[InputFormRequest]:
        return self._pending

    @property
    def state(self) -> Optional[FormState]:
        return self._pending.state if self._pending is not None else None

    def collect(self, options: Optional[InputFormOptions] = None, **kwargs) -> SettleHandle[InputResult]:
        opts = replace(options, **kwargs) if options is not None else InputFormOptions(**kwargs)
        if self._pending is not None:
            self._log('rejected', {'pending_title': self._pending.title}, method='dialog_warning')
            raise PendingRequestError('input form', self._pending.title)

        d = self.defaults
        renderers = self._resolve_renderers(opts.renderer_override)
        handle: SettleHandle[InputResult] = SettleHandle('input_form', logger=self._logger)
        request = InputFormRequest(
            fields=opts.fields,
            title=opts.title,
            description=opts.description,
            confirm_label=opts.confirm_label or d.submit_label,
            cancel_label=opts.cancel_label or d.cancel_label,
            closable=d.input_closable if opts.closable is None else bool(opts.closable),
            blur_background=d.input_blur if opts.blur_background is None else bool(opts.blur_background),
            renderers=renderers,
            settle=handle,
            state=FormState(opts.fields),
        )
        self._pending = request
        self._log('collect', {'title': request.title, 'fields': [f.name for f in request.fields]})

        surface = self._pick_surface('input_form', opts.renderer_override, renderers)
        try:
            presentation = self.host.show(surface, self._props(request))
        except Exception:
            if self._pending is request:
                self._pending = None
            raise
        request.presentation = presentation
        if handle.done():
            self._close(presentation)
        return handle

    # Entry points -------------------------------------------------------
    def set_field_value(self, name: str, value: Any) -> bool:
        request = self._pending
        if request is None:
            return False
        if not request.state.set_value(name, value, on_callback_error=self._on_callback_error):
            self._log('unknown_field', {'name': name}, method='dialog_warning')
            return False
        self._log('field_change', {'name': name}, method='form_detail')
        self._refresh(request)
        return True

    def submit(self) -> bool:
        request = self._pending
        if request is None:
            return False
        errors = validate_all(
            request.fields,
            request.state.values,
            required_message=self.defaults.required_message,
            on_validator_error=self._on_callback_error,
        )
        if errors:
            request.state.set_errors(errors)
            self._log('invalid', {'errors': sorted(errors)})
            self._refresh(request)
            return False
        return self._settle(InputResult(submitted=True, values=request.state.snapshot()), 'submit')

    def cancel(self) -> bool:
        return self._settle(InputResult.cancelled(), 'cancel')

    def dismiss(self) -> bool:
        """Backdrop dismissal: cancels only a closable request."""
        request = self._pending
        if request is None or not request.closable:
            return False
        return self._settle(InputResult.cancelled(), 'dismiss')

    # Internals ----------------------------------------------------------
    def _props(self, request: InputFormRequest) -> InputFormProps:
        return InputFormProps(
            fields=request.fields,
            values=dict(request.state.values),
            errors=dict(request.state.errors),
            title=request.title,
            description=request.description,
            confirm_label=request.confirm_label,
            cancel_label=request.cancel_label,
            closable=request.closable,
            blur_background=request.blur_background,
            renderers=request.renderers,
            on_field_change=self._bound(request, self.set_field_value),
            on_submit=self._bound(request, self.submit),
            on_cancel=self._bound(request, self.cancel),
        )

    def _bound(self, request: InputFormRequest, fn: Callable[..., bool]) -> Callable[..., bool]:
        # Stale surfaces must not drive a newer request
        def _callback(*args: Any) -> bool:
            if self._pending is not request:
                return False
            return fn(*args)
        return _callback

    def _refresh(self, request: InputFormRequest) -> None:
        presentation = request.presentation
        if presentation is None:
            return
        try:
            presentation.update(self._props(request))
        except Exception as exc:
            self._log_error(f'{self.component}.update', exc)

    def _settle(self, result: InputResult, how: str) -> bool:
        request = self._pending
        if request is None:
            return False
        self._pending = None
        settled = request.settle.settle(result)
        self._log('settle', {'how': how, 'submitted': result.submitted})
        self._close(request.presentation)
        return settled

    def _on_callback_error(self, field: FieldSpec, exc: Exception) -> None:
        self._log_error(f'{self.component}.field.{field.name}', exc)
