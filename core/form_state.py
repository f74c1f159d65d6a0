from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from core.fields import FieldSpec, initial_value


class FormState:
    """Current values and errors for one active input-form request.

    ``values`` always holds exactly one entry per field. ``errors`` only
    holds fields with a non-empty message, and a field's error is dropped as
    soon as that field is edited again.
    """

    def __init__(self, fields: Sequence[FieldSpec]) -> None:
        self._fields: Dict[str, FieldSpec] = {f.name: f for f in fields}
        self.values: Dict[str, Any] = {f.name: initial_value(f) for f in fields}
        self.errors: Dict[str, str] = {}

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def set_value(
        self,
        name: str,
        value: Any,
        *,
        on_callback_error: Optional[Callable[[FieldSpec, Exception], None]] = None,
    ) -> bool:
        """Store a new value for ``name``; returns False for unknown fields.

        The field's on_change callback runs after the state update. If it
        raises, the state stays updated and the failure goes to
        ``on_callback_error``.
        """
        field = self._fields.get(name)
        if field is None:
            return False
        self.values[name] = value
        self.errors.pop(name, None)
        if field.on_change is not None:
            try:
                field.on_change(value)
            except Exception as exc:
                if on_callback_error is not None:
                    on_callback_error(field, exc)
        return True

    def set_errors(self, errors: Dict[str, str]) -> None:
        self.errors = {k: v for k, v in errors.items() if k in self._fields and v}

    def snapshot(self) -> Dict[str, Any]:
        return dict(self.values)
