from __future__ import annotations

import asyncio
from typing import Any, Callable, Generic, List, Optional, TypeVar

from base_classes import PendingResultError


T = TypeVar('T')


class SettleHandle(Generic[T]):
    """Single-use result channel for one dialog request.

    - settle(value) stores the value the first time and wakes every awaiter.
    - Later settle() calls are no-ops and return False.
    - Awaitable from a coroutine on the running loop; done()/result() and
      add_done_callback() work without a loop for synchronous hosts.
    """

    def __init__(self, label: str = 'request', *, logger=None) -> None:
        self.label = label
        self._logger = logger
        self._settled = False
        self._value: Optional[T] = None
        self._waiters: List[asyncio.Future] = []
        self._callbacks: List[Callable[[T], Any]] = []

    def done(self) -> bool:
        return self._settled

    def result(self) -> T:
        if not self._settled:
            raise PendingResultError(self.label)
        return self._value  # type: ignore[return-value]

    def settle(self, value: T) -> bool:
        if self._settled:
            return False
        self._settled = True
        self._value = value
        for fut in self._waiters:
            if not fut.done():
                fut.set_result(value)
        self._waiters.clear()
        callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            self._run_callback(fn)
        return True

    def add_done_callback(self, fn: Callable[[T], Any]) -> None:
        # If already settled, run immediately
        if self._settled:
            self._run_callback(fn)
            return
        self._callbacks.append(fn)

    def _run_callback(self, fn: Callable[[T], Any]) -> None:
        try:
            fn(self._value)  # type: ignore[arg-type]
        except Exception as exc:
            if self._logger is not None:
                try:
                    self._logger.error(f'core.settle.{self.label}', exc)
                except Exception:
                    pass

    def __await__(self):
        if not self._settled:
            fut = asyncio.get_running_loop().create_future()
            self._waiters.append(fut)
            yield from fut.__await__()
        return self._value

    def __repr__(self) -> str:
        state = f'settled={self._value!r}' if self._settled else 'pending'
        return f'<SettleHandle {self.label} {state}>'
