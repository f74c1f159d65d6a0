"""Field validation for input forms.

Pure functions: they never touch orchestrator state, so they can be used on
their own.

A value counts as *present* unless it is ``None`` or the empty string.
``0`` and ``False`` are answers the user gave and are therefore present.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from core.fields import FieldSpec


DEFAULT_REQUIRED_MESSAGE = '{label} is required'
VALIDATOR_FAILED_MESSAGE = '{label} could not be validated'


def is_present(value: Any) -> bool:
    return value is not None and value != ''


def is_required_violation(field: FieldSpec, value: Any) -> bool:
    return bool(field.required) and not is_present(value)


def run_custom_validator(field: FieldSpec, value: Any) -> Optional[str]:
    """Return the field validator's message verbatim, or None.

    The validator only sees present values. Exceptions propagate; see
    validate_all() for the isolating variant.
    """
    if field.validate is None or not is_present(value):
        return None
    return field.validate(value)


def validate_all(
    fields: Sequence[FieldSpec],
    values: Mapping[str, Any],
    *,
    required_message: str = DEFAULT_REQUIRED_MESSAGE,
    on_validator_error: Optional[Callable[[FieldSpec, Exception], None]] = None,
) -> Dict[str, str]:
    """Check every field in declaration order and collect error messages.

    A required violation wins over the custom validator for the same field.
    A validator that raises gets a generic message for its field and is
    reported through ``on_validator_error``.
    """
    errors: Dict[str, str] = {}
    for field in fields:
        value = values.get(field.name)
        if is_required_violation(field, value):
            errors[field.name] = required_message.format(label=field.display_name, name=field.name)
            continue
        try:
            message = run_custom_validator(field, value)
        except Exception as exc:
            errors[field.name] = VALIDATOR_FAILED_MESSAGE.format(label=field.display_name, name=field.name)
            if on_validator_error is not None:
                on_validator_error(field, exc)
            continue
        if message:
            errors[field.name] = str(message)
    return errors
