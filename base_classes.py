"""
Shared base classes and exceptions for the dialog orchestration layer.

Orchestrators, providers and renderer hosts raise these so callers can tell
usage errors (wrong scope, overlapping requests) apart from ordinary flow.
"""

from __future__ import annotations
from typing import Any, Dict, Optional


class DialogError(Exception):
    """Root of all dialog-layer errors."""

    def __init__(self, message: str, *, debug_info: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.debug_info = debug_info or {}


class DialogScopeError(DialogError):
    """Raised when an accessor is used outside of an active provider scope."""

    def __init__(self, accessor: str, provider: str):
        super().__init__(f"{accessor} must be used inside a {provider} scope")
        self.accessor = accessor
        self.provider = provider


class PendingRequestError(DialogError):
    """Raised when a new request arrives while one is still pending.

    The request that was already pending is left untouched so its awaiting
    caller still gets an answer.
    """

    def __init__(self, kind: str, pending_title: Optional[str] = None):
        label = f" ({pending_title})" if pending_title else ""
        super().__init__(
            f"A {kind} request{label} is already pending; settle it before opening another",
            debug_info={'kind': kind, 'pending_title': pending_title},
        )
        self.kind = kind


class PendingResultError(DialogError):
    """Raised when reading the result of a handle that has not settled yet."""

    def __init__(self, label: str = 'request'):
        super().__init__(f"{label} has not been settled yet")
