from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ui.base import SurfaceHost


@dataclass
class RecordedPresentation:
    """In-memory stand-in for an on-screen surface."""

    surface: Callable[[Any], Any]
    props: Any
    updates: List[Any] = field(default_factory=list)
    closed: bool = False

    def update(self, props: Any) -> None:
        self.props = props
        self.updates.append(props)

    def close(self) -> None:
        self.closed = True


class NullHost(SurfaceHost):
    """A non-interactive host for tests and headless runs.

    - Does not draw anything; keeps every shown surface for inspection.
    - Callers drive the interaction through ``current.props`` callbacks.
    """

    def __init__(self) -> None:
        self.shown: List[RecordedPresentation] = []

    def show(self, surface: Callable[[Any], Any], props: Any) -> RecordedPresentation:
        presentation = RecordedPresentation(surface=surface, props=props)
        self.shown.append(presentation)
        return presentation

    @property
    def current(self) -> Optional[RecordedPresentation]:
        for presentation in reversed(self.shown):
            if not presentation.closed:
                return presentation
        return None
