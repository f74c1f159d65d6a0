from __future__ import annotations

from typing import Any, Callable

from textual.app import App
from textual.screen import Screen

from ui.base import Presentation, SurfaceHost


class ScreenPresentation:
    """Wraps a plain Screen returned by a custom surface factory."""

    def __init__(self, screen: Screen) -> None:
        self.screen = screen

    def update(self, props: Any) -> None:
        # Plain screens have no way to take new props
        pass

    def close(self) -> None:
        if self.screen.is_attached and self.screen.is_current:
            self.screen.dismiss(None)


class TextualHost(SurfaceHost):
    """Shows dialog surfaces as screens pushed on a Textual app.

    All orchestrator calls must run on the app's event loop; from a thread,
    go through ``app.call_from_thread``.
    """

    def __init__(self, app: App) -> None:
        self.app = app

    def show(self, surface: Callable[[Any], Any], props: Any) -> Presentation:
        screen = surface(props)
        self.app.push_screen(screen)
        if isinstance(screen, Presentation):
            return screen
        return ScreenPresentation(screen)
