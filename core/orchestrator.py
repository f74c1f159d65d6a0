from __future__ import annotations

from typing import Any, Callable, Optional

from core.overrides import RendererSet, as_renderer_set, merge, resolve
from core.requests import DialogDefaults
from ui.base import SurfaceHost


class OrchestratorBase:
    """Shared wiring for the confirmation and input-form orchestrators.

    Renderer layers, lowest to highest priority: built-in defaults (or
    ``base_renderers``), the active RendererScope (``global_renderers``),
    the provider's ``renderers``, then the call-site override.
    """

    component = 'core.orchestrator'
    aspect_event = 'dialog_event'

    def __init__(
        self,
        host: SurfaceHost,
        *,
        surface: Optional[Callable[..., Any]] = None,
        renderers: Optional[RendererSet] = None,
        defaults: Optional[DialogDefaults] = None,
        base_renderers: Optional[RendererSet] = None,
        global_renderers: Optional[Callable[[], Optional[RendererSet]]] = None,
        logger=None,
    ) -> None:
        self.host = host
        self.surface = surface
        self.renderers = renderers
        self.defaults = defaults or DialogDefaults()
        self._base_renderers = base_renderers
        self._global_renderers = global_renderers
        self._logger = logger

    def _resolve_renderers(self, per_call: Any) -> RendererSet:
        global_layer = self._global_renderers() if self._global_renderers else None
        return resolve(merge(global_layer, self.renderers), per_call, self._base_renderers)

    def _pick_surface(self, slot: str, per_call: Any, renderers: RendererSet) -> Callable[..., Any]:
        # A call-site surface beats the provider's surface, which beats the resolved slot
        explicit = as_renderer_set(per_call).get(slot)
        return explicit or self.surface or renderers.get(slot)

    def _close(self, presentation: Any) -> None:
        if presentation is None:
            return
        try:
            presentation.close()
        except Exception as exc:
            self._log_error(f'{self.component}.close', exc)

    # Logging ------------------------------------------------------------
    def _log(self, kind: str, details: dict, *, method: Optional[str] = None) -> None:
        if self._logger is None:
            return
        try:
            getattr(self._logger, method or self.aspect_event)(kind, details, component=self.component)
        except Exception:
            pass

    def _log_error(self, where: str, exc: BaseException) -> None:
        if self._logger is None:
            return
        try:
            self._logger.error(where, exc)
        except Exception:
            pass
